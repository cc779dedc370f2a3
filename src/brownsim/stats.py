r"""
brownsim.stats
==============

Descriptive statistics of a batch of generated paths.

:func:`summarize_paths` reports the distribution of terminal values
:math:`V_n^{(1)}, \dots, V_n^{(N)}` (mean, sample standard deviation,
percentiles, skewness and excess kurtosis) together with the per-step mean path
and the overall value range.

For a lognormal walk with per-step mean :math:`m` and volatility :math:`s`,

.. math::

   \mathbb{E}[V_n] = V_0 \exp\left(n\left(m + \tfrac{1}{2}s^2\right)\right),

which the sample :attr:`PathSummary.mean` estimates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np
from scipy.stats import kurtosis as sp_kurtosis
from scipy.stats import skew as sp_skew

from .params import InvalidArgument

__all__ = ["PathSummary", "summarize_paths", "expected_terminal_value"]

_PCTS = (5, 25, 50, 75, 95)  # default percentiles


@dataclass(frozen=True)
class PathSummary:
    r"""
    Summary of a batch of equal-length paths.

    Attributes
    ----------
    n_paths : int
        Number of paths summarized.
    n_steps : int
        Increments per path (length minus one).
    mean : float
        Sample mean of the terminal values.
    std : float
        Sample standard deviation (``ddof=1``) of the terminal values; ``0.0``
        for a single path.
    percentiles : dict[int, float]
        Terminal-value percentiles.
    skew : float
        Sample skewness of the terminal values; ``0.0`` when undefined.
    kurtosis : float
        Excess kurtosis of the terminal values; ``0.0`` when undefined.
    mean_path : ndarray
        Mean across paths at every step, shape ``(n_steps + 1,)``.
    min, max : float
        Smallest and largest value over all paths and steps.
    """

    n_paths: int
    n_steps: int
    mean: float
    std: float
    percentiles: dict[int, float]
    skew: float
    kurtosis: float
    mean_path: np.ndarray = field(repr=False)
    min: float
    max: float

    def to_string(self) -> str:
        """Multiline, human-readable summary."""
        lines = [
            f"Paths: {self.n_paths}   Steps: {self.n_steps}",
            f"  Terminal mean: {self.mean:.5f}",
            f"  Terminal std (sample): {self.std:.5f}",
            f"  Skew: {self.skew:.5f}   Excess kurtosis: {self.kurtosis:.5f}",
            f"  Range: [{self.min:.5f}, {self.max:.5f}]",
            "  Percentiles:",
        ]
        for p in sorted(self.percentiles):
            lines.append(f"    {p}th: {self.percentiles[p]:.5f}")
        return "\n".join(lines)


def expected_terminal_value(initial_value: float, step_mean: float, step_volatility: float, num_steps: int) -> float:
    r"""Closed-form :math:`\mathbb{E}[V_n]` of the lognormal walk."""
    return float(initial_value * np.exp(num_steps * (step_mean + 0.5 * step_volatility**2)))


def summarize_paths(paths: Sequence[Sequence[float]], percentiles: Iterable[int] = _PCTS) -> PathSummary:
    r"""
    Summarize ``paths``.

    Parameters
    ----------
    paths : sequence of sequences of float
        Equal-length paths, e.g. the output of
        :func:`~brownsim.generator.generate_paths`.
    percentiles : iterable of int, default ``(5, 25, 50, 75, 95)``
        Percentiles of the terminal values to report, each in ``[0, 100]``.

    Returns
    -------
    PathSummary

    Raises
    ------
    InvalidArgument
        If ``paths`` is empty, ragged, shorter than two values, or a percentile
        is out of range.
    """
    if len(paths) == 0:
        raise InvalidArgument("paths must not be empty")
    lengths = {len(p) for p in paths}
    if len(lengths) != 1:
        raise InvalidArgument(f"paths must have equal lengths, got {sorted(lengths)}")
    arr = np.asarray(paths, dtype=np.float64)
    if arr.shape[1] < 2:
        raise InvalidArgument("paths must have at least two values")
    pcts = tuple(int(p) for p in percentiles)
    if any(p < 0 or p > 100 for p in pcts):
        raise InvalidArgument("percentiles must be in [0,100]")

    terminal = arr[:, -1]
    n = terminal.size
    std = float(np.std(terminal, ddof=1)) if n > 1 else 0.0
    # scipy returns NaN for fewer than 3 samples or zero dispersion
    shape_defined = n > 2 and std > 0
    return PathSummary(
        n_paths=n,
        n_steps=arr.shape[1] - 1,
        mean=float(np.mean(terminal)),
        std=std,
        percentiles={p: float(np.percentile(terminal, p)) for p in pcts},
        skew=float(sp_skew(terminal, bias=False)) if shape_defined else 0.0,
        kurtosis=float(sp_kurtosis(terminal, fisher=True, bias=False)) if n > 3 and std > 0 else 0.0,
        mean_path=arr.mean(axis=0),
        min=float(arr.min()),
        max=float(arr.max()),
    )
