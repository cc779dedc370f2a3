r"""
brownsim.generator
==================

Sample paths of a discretized lognormal random walk.

Each path starts at :math:`V_0` and evolves as

.. math::

   V_t = V_{t-1} \exp\left(m + s\,Z_t\right), \qquad Z_t \sim \mathcal{N}(0, 1)
   \text{ i.i.d.},

for :math:`t = 1, \dots, n`, where :math:`m` and :math:`s` are the per-step mean
and volatility of :class:`~brownsim.params.SimulationRequest`. Because every
factor is a positive exponential, paths never touch zero.

Reproducibility
---------------

The random source is injected. Passing an integer seed or a
:class:`numpy.random.SeedSequence` builds a fresh generator for the call, so
identical inputs give identical paths. Passing ``None`` builds a fresh,
OS-seeded generator. A shared :class:`numpy.random.Generator` may also be
passed, but it is then the caller's job not to use it from several threads.
"""

from __future__ import annotations

import logging
from typing import Union

import numpy as np
from numpy.random import Generator, SeedSequence

from .params import InvalidArgument, SimulationRequest

__all__ = [
    "PathSeries",
    "RandomSource",
    "make_rng",
    "generate_paths",
    "simulate_log_increments",
]

logger = logging.getLogger(__name__)

PathSeries = np.ndarray  # read-only, float64, shape (num_steps + 1,)
RandomSource = Union[Generator, SeedSequence, int, None]


def make_rng(rng: RandomSource = None) -> Generator:
    r"""
    Return a :class:`numpy.random.Generator` for ``rng``.

    Parameters
    ----------
    rng : Generator, SeedSequence, int or None
        A generator is returned unchanged; a seed or seed sequence builds a new
        one; ``None`` builds an OS-seeded one.

    Returns
    -------
    numpy.random.Generator

    Raises
    ------
    InvalidArgument
        If ``rng`` is none of the accepted types.
    """
    if isinstance(rng, Generator):
        return rng
    if rng is None or isinstance(rng, SeedSequence):
        return np.random.default_rng(rng)
    if isinstance(rng, (int, np.integer)) and not isinstance(rng, bool):
        if rng < 0:
            raise InvalidArgument(f"seed must be non-negative, got {rng}")
        return np.random.default_rng(int(rng))
    raise InvalidArgument(f"rng must be a Generator, SeedSequence, int or None, got {type(rng).__name__}")


def simulate_log_increments(request: SimulationRequest, rng: Generator) -> np.ndarray:
    r"""
    Draw the log increments :math:`m + s Z` for every path and step.

    Returns
    -------
    numpy.ndarray
        Array of shape ``(num_paths, num_steps)``.
    """
    z = rng.standard_normal((request.num_paths, request.num_steps))
    return request.step_mean + request.step_volatility * z


def generate_paths(request: SimulationRequest, rng: RandomSource = None) -> tuple[PathSeries, ...]:
    r"""
    Generate ``request.num_paths`` independent lognormal sample paths.

    Parameters
    ----------
    request : SimulationRequest
        Validated per-step parameters.
    rng : Generator, SeedSequence, int or None, optional
        Random source, see :func:`make_rng`.

    Returns
    -------
    tuple of numpy.ndarray
        ``num_paths`` read-only arrays of length ``num_steps + 1``; element 0 of
        each is exactly ``initial_value``.

    Raises
    ------
    InvalidArgument
        If ``request`` is not a :class:`SimulationRequest` or ``rng`` is invalid.

    Examples
    --------
    >>> req = SimulationRequest(100.0, 0.0, 0.0, num_steps=5, num_paths=1)
    >>> generate_paths(req, rng=0)[0].tolist()
    [100.0, 100.0, 100.0, 100.0, 100.0, 100.0]
    """
    if not isinstance(request, SimulationRequest):
        raise InvalidArgument(f"request must be a SimulationRequest, got {type(request).__name__}")
    gen = make_rng(rng)
    logger.debug(
        f"Generating {request.num_paths} path(s) of {request.num_steps} steps "
        f"(mean={request.step_mean:.6g}, vol={request.step_volatility:.6g})"
    )

    log_returns = simulate_log_increments(request, gen)
    paths = np.empty((request.num_paths, request.num_steps + 1), dtype=np.float64)
    paths[:, 0] = request.initial_value
    paths[:, 1:] = request.initial_value * np.exp(np.cumsum(log_returns, axis=1))
    paths.flags.writeable = False
    # Rows of a read-only array are read-only views.
    return tuple(paths[i] for i in range(request.num_paths))
