r"""
brownsim.params
===============

Value types describing *what* to simulate.

This module provides:

* :class:`InvalidArgument` – the precondition-failure error raised by the package.
* :class:`SimulationRequest` – per-step parameters consumed by
  :func:`~brownsim.generator.generate_paths`.
* :class:`UserParameters` – the raw, user-facing parameter set (percent and
  annualized toggles, styling choices) together with the caller-side clamping
  and de-annualization that turn it into a :class:`SimulationRequest`.

Parameter derivation
--------------------

Given user inputs :math:`\mu` and :math:`\sigma`, percent mode divides both by
100. In annualized mode, with :math:`\Delta t = 1/252`,

.. math::

   m = \left(\mu - \tfrac{1}{2}\sigma^2\right)\Delta t, \qquad
   s = \sigma\sqrt{\Delta t},

otherwise :math:`m = \mu` and :math:`s = \sigma` are taken as already per-step.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from .palettes import LineStyle, Palette, palette_colors

if TYPE_CHECKING:
    from .transform import ChartRequest, Rect

__all__ = [
    "InvalidArgument",
    "SimulationRequest",
    "UserParameters",
    "TRADING_DAYS",
]

TRADING_DAYS = 252  # steps per year in annualized mode


class InvalidArgument(ValueError):
    """Raised when a request violates a documented precondition."""


def _is_count(value) -> bool:
    # Integral types only; 3.0 and True are not step or path counts.
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class SimulationRequest:
    r"""
    Per-step parameters for a lognormal random walk.

    Attributes
    ----------
    initial_value : float
        Level :math:`V_0 > 0` at index 0 of every path.
    step_mean : float
        Drift of the log increment per step.
    step_volatility : float
        Scale of the standard normal shock per step.
    num_steps : int
        Number of increments; every path has ``num_steps + 1`` values.
    num_paths : int
        Number of independent paths.

    Raises
    ------
    InvalidArgument
        On construction, if any precondition is violated. Values are never
        repaired here; see :meth:`UserParameters.clamped` for that.
    """

    initial_value: float
    step_mean: float
    step_volatility: float
    num_steps: int
    num_paths: int = 1

    def __post_init__(self) -> None:
        if not (self.initial_value > 0) or math.isinf(self.initial_value):
            raise InvalidArgument(f"initial_value must be positive and finite, got {self.initial_value}")
        if not _is_count(self.num_steps) or self.num_steps < 2:
            raise InvalidArgument(f"num_steps must be an integer >= 2, got {self.num_steps!r}")
        if not _is_count(self.num_paths) or self.num_paths < 1:
            raise InvalidArgument(f"num_paths must be an integer >= 1, got {self.num_paths!r}")


@dataclass(frozen=True, slots=True)
class UserParameters:
    r"""
    Raw parameters as a user enters them.

    Attributes
    ----------
    initial_price : float, default 100.0
        Starting level of every path.
    volatility : float, default 2.0
        Volatility input; a percentage when :attr:`use_percent_inputs` is set.
    mean_return : float, default 0.05
        Drift input; a percentage when :attr:`use_percent_inputs` is set.
    duration_days : int, default 252
        Number of simulated steps.
    use_percent_inputs : bool, default True
        Interpret :attr:`volatility` and :attr:`mean_return` as percentages.
    annualized : bool, default False
        Interpret the inputs as annual figures and scale them to one trading day.
    simulations : int, default 3
        Number of independent paths.
    show_grid, show_legend, currency_axis : bool
        Chart toggles forwarded to :class:`~brownsim.transform.ChartRequest`.
    line_thickness : float, default 2.0
        Stroke width of the series lines.
    line_style : LineStyle, default ``LineStyle.solid``
    palette : Palette, default ``Palette.vibrant``

    Notes
    -----
    Instances are immutable; use :meth:`with_overrides` for modified copies.
    """

    initial_price: float = 100.0
    volatility: float = 2.0
    mean_return: float = 0.05
    duration_days: int = 252
    use_percent_inputs: bool = True
    annualized: bool = False
    simulations: int = 3
    show_grid: bool = True
    show_legend: bool = True
    currency_axis: bool = False
    line_thickness: float = 2.0
    line_style: LineStyle = LineStyle.solid
    palette: Palette = Palette.vibrant

    def with_overrides(self, **changes) -> "UserParameters":
        """Return a copy with selected fields replaced."""
        return replace(self, **changes)

    def clamped(self) -> "UserParameters":
        r"""
        Repair out-of-range inputs the way the form does before simulating.

        ``duration_days < 2`` becomes 2, ``initial_price <= 0`` becomes 1,
        ``simulations < 1`` becomes 1 and a non-positive ``line_thickness``
        becomes 1.

        Returns
        -------
        UserParameters
        """
        return replace(
            self,
            duration_days=max(2, int(self.duration_days)),
            initial_price=self.initial_price if self.initial_price > 0 else 1.0,
            simulations=max(1, int(self.simulations)),
            line_thickness=self.line_thickness if self.line_thickness > 0 else 1.0,
            line_style=LineStyle.parse(self.line_style),
            palette=Palette.parse(self.palette),
        )

    def step_parameters(self) -> tuple[float, float]:
        r"""
        Convert the user inputs to per-step ``(mean, volatility)``.

        Returns
        -------
        tuple of float
            ``(step_mean, step_volatility)``.
        """
        mu = float(self.mean_return)
        sig = float(self.volatility)
        if self.use_percent_inputs:
            mu /= 100.0
            sig /= 100.0
        if self.annualized:
            dt = 1.0 / TRADING_DAYS
            return (mu - 0.5 * sig * sig) * dt, sig * math.sqrt(dt)
        return mu, sig

    def to_request(self) -> SimulationRequest:
        """Clamp, derive per-step parameters and build a :class:`SimulationRequest`."""
        p = self.clamped()
        step_mean, step_volatility = p.step_parameters()
        return SimulationRequest(
            initial_value=float(p.initial_price),
            step_mean=step_mean,
            step_volatility=step_volatility,
            num_steps=p.duration_days,
            num_paths=p.simulations,
        )

    def to_chart_request(
        self,
        series: Sequence[Optional[Sequence[float]]],
        plot_area: "Rect",
        empty_message: Optional[str] = None,
    ) -> "ChartRequest":
        r"""
        Wrap generated series with this parameter set's styling choices.

        Parameters
        ----------
        series : sequence of sequences of float
            Series to chart, in draw order.
        plot_area : Rect
            Pixel rectangle reserved for data geometry.
        empty_message : str, optional
            Placeholder shown when there is nothing to draw.

        Returns
        -------
        ChartRequest
        """
        from .transform import DEFAULT_EMPTY_MESSAGE, ChartRequest  # pylint: disable=import-outside-toplevel

        p = self.clamped()
        return ChartRequest(
            series=tuple(series),
            colors=palette_colors(p.palette, len(series)),
            show_grid=p.show_grid,
            show_legend=p.show_legend,
            use_currency_format=p.currency_axis,
            stroke_width=float(p.line_thickness),
            line_style=p.line_style,
            plot_area=plot_area,
            empty_message=empty_message or DEFAULT_EMPTY_MESSAGE,
        )
