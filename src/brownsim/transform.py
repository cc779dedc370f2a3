r"""
brownsim.transform
==================

Data-to-pixel transform for multi-series line charts.

:func:`build_render_plan` turns a :class:`ChartRequest` (numeric series plus
styling options) into a :class:`RenderPlan`: a complete, renderer-agnostic list
of what to draw. A rendering surface only needs to clear a background, stroke
polylines (optionally dashed), stroke line segments and place aligned text.

Coordinate mapping
------------------

With :math:`L` the longest series, step index :math:`i` and value :math:`v`
map to

.. math::

   x(i) = \text{left} + \frac{i}{L - 1}\,\text{width}, \qquad
   y(v) = \text{bottom} - \frac{v - y_{\min}}{y_{\max} - y_{\min}}\,\text{height},

so larger values sit higher on screen. The value range is widened to one unit
when flat and padded by 6% on each side.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Optional, Sequence

import numpy as np

from .palettes import Color, LineStyle, Palette, palette_colors

__all__ = [
    "DEFAULT_EMPTY_MESSAGE",
    "DEFAULT_LAYOUT",
    "ChartLayout",
    "ChartRequest",
    "LegendEntry",
    "LineSegment",
    "Rect",
    "RenderPlan",
    "SeriesPath",
    "TextAlign",
    "XTick",
    "YTick",
    "build_render_plan",
    "compute_extents",
    "format_value",
    "x_to_px",
    "y_to_px",
]

logger = logging.getLogger(__name__)

DEFAULT_EMPTY_MESSAGE = "Click Simulate to see results"

Point = tuple[float, float]


class TextAlign(str, Enum):
    """Horizontal alignment of a label relative to its anchor."""

    left = "left"
    center = "center"
    right = "right"


@dataclass(frozen=True, slots=True)
class Rect:
    r"""
    Axis-aligned pixel rectangle.

    Attributes
    ----------
    left, top, width, height : float
    """

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def center(self) -> Point:
        return (self.left + self.width / 2.0, self.top + self.height / 2.0)

    def clamped(self, min_size: float) -> "Rect":
        """Return a copy whose width and height are at least ``min_size``."""
        return replace(self, width=max(min_size, self.width), height=max(min_size, self.height))


@dataclass(frozen=True, slots=True)
class ChartLayout:
    r"""
    Layout constants of the chart, in plot units.

    Attributes
    ----------
    margin_left, margin_right, margin_top, margin_bottom : float
        Space reserved around the plot area for ticks and labels
        (see :meth:`plot_area_for`).
    min_plot_size : float, default 20
        Smallest width/height a plot area is clamped to.
    tick_intervals : int, default 5
        Intervals per axis; each axis gets ``tick_intervals + 1`` ticks.
    padding_fraction : float, default 0.06
        Fraction of the value range added below and above the data.
    flat_range_epsilon : float, default 1e-9
        Ranges narrower than this are widened to one unit.
    tick_length : float, default 4
    label_gap : float, default 6
        Distance between the plot edge and tick labels.
    grid_dash : tuple of float, default ``(3, 3)``
    legend_item_width, legend_item_height, legend_padding : float
        Legend cell geometry.
    legend_inset_right, legend_inset_top : float
        Offset of the legend block from the plot's top-right corner.
    legend_swatch_length, legend_label_offset : float
        Length of the colored swatch and x offset of the label in a cell.
    """

    margin_left: float = 64.0
    margin_right: float = 20.0
    margin_top: float = 20.0
    margin_bottom: float = 44.0
    min_plot_size: float = 20.0
    tick_intervals: int = 5
    padding_fraction: float = 0.06
    flat_range_epsilon: float = 1e-9
    tick_length: float = 4.0
    label_gap: float = 6.0
    grid_dash: tuple[float, float] = (3.0, 3.0)
    legend_item_width: float = 60.0
    legend_item_height: float = 16.0
    legend_padding: float = 6.0
    legend_inset_right: float = 10.0
    legend_inset_top: float = 6.0
    legend_swatch_length: float = 24.0
    legend_label_offset: float = 30.0

    def with_overrides(self, **changes) -> "ChartLayout":
        """Return a copy with selected fields replaced."""
        return replace(self, **changes)

    def plot_area_for(self, canvas: Rect) -> Rect:
        """Reserve the margins inside ``canvas`` and return the plot area."""
        return Rect(
            canvas.left + self.margin_left,
            canvas.top + self.margin_top,
            max(self.min_plot_size, canvas.width - (self.margin_left + self.margin_right)),
            max(self.min_plot_size, canvas.height - (self.margin_top + self.margin_bottom)),
        )


DEFAULT_LAYOUT = ChartLayout()


@dataclass(frozen=True, slots=True)
class ChartRequest:
    r"""
    Series plus styling options.

    Attributes
    ----------
    series : sequence of sequences of float
        Series in draw order; position ``i`` also fixes color ``i`` and legend
        entry ``i``. ``None`` entries count as empty series.
    plot_area : Rect
        Pixel rectangle reserved for data geometry.
    colors : sequence of str, optional
        Palette, cycled when shorter than ``series``. Empty means the default
        palette. A single color string applies to every series.
    show_grid, show_legend : bool, default True
    use_currency_format : bool, default False
        Format Y labels as currency instead of plain numbers.
    stroke_width : float, default 2.0
    line_style : LineStyle, default ``LineStyle.solid``
    empty_message : str
        Placeholder returned when there is nothing to draw.
    """

    series: Sequence[Optional[Sequence[float]]]
    plot_area: Rect
    colors: Sequence[Color] = ()
    show_grid: bool = True
    show_legend: bool = True
    use_currency_format: bool = False
    stroke_width: float = 2.0
    line_style: LineStyle = LineStyle.solid
    empty_message: str = DEFAULT_EMPTY_MESSAGE


@dataclass(frozen=True, slots=True)
class LineSegment:
    x1: float
    y1: float
    x2: float
    y2: float
    dash_pattern: Optional[tuple[float, float]] = None


@dataclass(frozen=True, slots=True)
class YTick:
    """Y-axis tick; the label is right-aligned at ``anchor``."""

    pixel_y: float
    value: float
    label: str
    anchor: Point
    align: TextAlign = TextAlign.right


@dataclass(frozen=True, slots=True)
class XTick:
    """X-axis tick; the label is centered at ``anchor``."""

    pixel_x: float
    step_index: int
    label: str
    anchor: Point
    align: TextAlign = TextAlign.center


@dataclass(frozen=True, slots=True)
class SeriesPath:
    series_index: int
    color: Color
    dash_pattern: Optional[tuple[float, float]]
    stroke_width: float
    vertices: tuple[Point, ...]


@dataclass(frozen=True, slots=True)
class LegendEntry:
    """Legend cell whose top-left corner is ``(pixel_x, pixel_y)``."""

    series_index: int
    color: Color
    label: str
    pixel_x: float
    pixel_y: float
    swatch: LineSegment
    anchor: Point
    align: TextAlign = TextAlign.left


@dataclass(frozen=True, slots=True)
class RenderPlan:
    r"""
    Everything a surface has to paint, in plot units.

    Attributes
    ----------
    plot_area : Rect
        Clamped plot area the geometry was laid out in.
    y_ticks : tuple of YTick
        Bottom to top.
    x_ticks : tuple of XTick
        Left to right.
    grid_lines : tuple of LineSegment
        Interior grid lines, horizontal ones first. Empty unless ``show_grid``.
    series_paths : tuple of SeriesPath
        One polyline per non-empty series, in input order.
    legend_entries : tuple of LegendEntry
        Empty unless ``show_legend``.
    axis_lines : tuple of LineSegment
        X axis then Y axis.
    tick_marks : tuple of LineSegment
        Y tick marks then X tick marks.
    empty_message : str or None
        Set only for an empty plan, which has no geometry at all.
    """

    plot_area: Rect
    y_ticks: tuple[YTick, ...] = ()
    x_ticks: tuple[XTick, ...] = ()
    grid_lines: tuple[LineSegment, ...] = ()
    series_paths: tuple[SeriesPath, ...] = ()
    legend_entries: tuple[LegendEntry, ...] = ()
    axis_lines: tuple[LineSegment, ...] = ()
    tick_marks: tuple[LineSegment, ...] = ()
    empty_message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.empty_message is not None

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe nested dict of the plan."""
        return asdict(self, dict_factory=_json_dict)


def _json_dict(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in items}


def format_value(value: float, currency: bool = False) -> str:
    r"""
    Format an axis value with two decimals and thousands separators.

    Examples
    --------
    >>> format_value(1234.5)
    '1,234.50'
    >>> format_value(-3.2, currency=True)
    '-$3.20'
    """
    value = round(float(value), 2)
    if value == 0:
        value = 0.0  # no "-0.00"
    if not currency:
        return f"{value:,.2f}"
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def x_to_px(index, max_len: int, rect: Rect):
    """Map a step index (or an array of them) to a horizontal pixel position."""
    if max_len <= 1:
        return np.full(np.shape(index), rect.left) if np.ndim(index) else rect.left
    return rect.left + (index / (max_len - 1)) * rect.width


def y_to_px(value, min_y: float, max_y: float, rect: Rect):
    """Map a value (or an array of them) to a vertical pixel position; larger values are higher."""
    t = (value - min_y) / (max_y - min_y)
    return rect.bottom - t * rect.height


def _as_arrays(series: Sequence[Optional[Sequence[float]]]) -> list[np.ndarray]:
    return [
        np.empty(0) if s is None else np.asarray(s, dtype=np.float64).ravel()
        for s in series
    ]


def _is_empty_input(arrays: list[np.ndarray]) -> bool:
    return len(arrays) == 0 or (len(arrays) == 1 and arrays[0].size == 0)


def compute_extents(
    series: Sequence[Optional[Sequence[float]]],
    layout: ChartLayout = DEFAULT_LAYOUT,
) -> tuple[int, float, float]:
    r"""
    Domain extents of ``series``: ``(max_len, min_y, max_y)`` after padding.

    Non-finite values are ignored. With no finite values at all the range is
    ``[0, 1]`` before padding.
    """
    arrays = _as_arrays(series)
    max_len = max((a.size for a in arrays), default=0)
    finite = [a[np.isfinite(a)] for a in arrays]
    values = np.concatenate(finite) if finite else np.empty(0)
    if values.size:
        min_y, max_y = float(values.min()), float(values.max())
    else:
        min_y, max_y = 0.0, 1.0
    if abs(max_y - min_y) < layout.flat_range_epsilon:
        max_y = min_y + 1.0
    pad = (max_y - min_y) * layout.padding_fraction
    return max_len, min_y - pad, max_y + pad


def _axes(r: Rect) -> tuple[LineSegment, ...]:
    return (
        LineSegment(r.left, r.bottom, r.right, r.bottom),
        LineSegment(r.left, r.top, r.left, r.bottom),
    )


def _y_ticks(r: Rect, min_y: float, max_y: float, currency: bool, layout: ChartLayout) -> tuple[YTick, ...]:
    n = layout.tick_intervals
    ticks = []
    for i in range(n + 1):
        y = r.bottom - (i / n) * r.height
        val = min_y + (i / n) * (max_y - min_y)
        ticks.append(YTick(y, val, format_value(val, currency), (r.left - layout.label_gap, y)))
    return tuple(ticks)


def _x_ticks(r: Rect, max_len: int, layout: ChartLayout) -> tuple[XTick, ...]:
    n = layout.tick_intervals
    ticks = []
    for i in range(n + 1):
        x = r.left + (i / n) * r.width
        step = 0 if max_len <= 1 else int(round(i / n * (max_len - 1)))
        ticks.append(XTick(x, step, f"D{step}", (x, r.bottom + layout.label_gap)))
    return tuple(ticks)


def _grid(r: Rect, y_ticks, x_ticks, layout: ChartLayout) -> tuple[LineSegment, ...]:
    # Boundary ticks coincide with the axes and plot edges.
    dash = layout.grid_dash
    lines = [LineSegment(r.left, t.pixel_y, r.right, t.pixel_y, dash) for t in y_ticks[1:-1]]
    lines += [LineSegment(t.pixel_x, r.top, t.pixel_x, r.bottom, dash) for t in x_ticks[1:-1]]
    return tuple(lines)


def _tick_marks(r: Rect, y_ticks, x_ticks, layout: ChartLayout) -> tuple[LineSegment, ...]:
    k = layout.tick_length
    marks = [LineSegment(r.left - k, t.pixel_y, r.left, t.pixel_y) for t in y_ticks]
    marks += [LineSegment(t.pixel_x, r.bottom, t.pixel_x, r.bottom + k) for t in x_ticks]
    return tuple(marks)


def _legend(r: Rect, colors: Sequence[Color], n_series: int, layout: ChartLayout) -> tuple[LegendEntry, ...]:
    cell_w = layout.legend_item_width + layout.legend_padding
    cell_h = layout.legend_item_height + layout.legend_padding
    cols = max(1, int(r.width / cell_w))
    x0 = r.right - min(n_series, cols) * cell_w - layout.legend_inset_right
    y0 = r.top + layout.legend_inset_top

    entries = []
    for i in range(n_series):
        x = x0 + (i % cols) * cell_w
        y = y0 + (i // cols) * cell_h
        mid = y + layout.legend_item_height / 2.0
        entries.append(
            LegendEntry(
                series_index=i,
                color=colors[i % len(colors)],
                label=f"Series {i + 1}",
                pixel_x=x,
                pixel_y=y,
                swatch=LineSegment(x, mid, x + layout.legend_swatch_length, mid),
                anchor=(x + layout.legend_label_offset, y + 1.0),
            )
        )
    return tuple(entries)


def build_render_plan(request: ChartRequest, layout: ChartLayout = DEFAULT_LAYOUT) -> RenderPlan:
    r"""
    Lay out axes, ticks, grid, series polylines and legend for ``request``.

    Parameters
    ----------
    request : ChartRequest
        Series and styling options.
    layout : ChartLayout, optional
        Layout constants; :data:`DEFAULT_LAYOUT` by default.

    Returns
    -------
    RenderPlan
        An empty plan carrying only ``request.empty_message`` when there is no
        series or a single empty one; otherwise the full geometry.

    Notes
    -----
    No input raises. Undersized plot areas are clamped to
    ``layout.min_plot_size``, a non-positive stroke width becomes 1, and an
    empty color list falls back to :attr:`Palette.vibrant`.
    """
    area = request.plot_area.clamped(layout.min_plot_size)
    arrays = _as_arrays(request.series)
    if _is_empty_input(arrays):
        logger.debug("No data to chart, returning empty plan")
        return RenderPlan(plot_area=area, empty_message=request.empty_message)

    n_series = len(arrays)
    colors = (request.colors,) if isinstance(request.colors, str) else tuple(request.colors)
    colors = colors or palette_colors(Palette.vibrant, n_series)
    stroke = request.stroke_width if request.stroke_width > 0 else 1.0
    style = LineStyle.parse(request.line_style)

    max_len, min_y, max_y = compute_extents(arrays, layout)
    y_ticks = _y_ticks(area, min_y, max_y, request.use_currency_format, layout)
    x_ticks = _x_ticks(area, max_len, layout)

    paths = []
    for i, arr in enumerate(arrays):
        # Non-finite samples are dropped; a series with none left gets no path.
        idx = np.flatnonzero(np.isfinite(arr))
        if idx.size == 0:
            continue
        xs = np.asarray(x_to_px(idx, max_len, area), dtype=np.float64)
        ys = np.asarray(y_to_px(arr[idx], min_y, max_y, area), dtype=np.float64)
        paths.append(
            SeriesPath(
                series_index=i,
                color=colors[i % len(colors)],
                dash_pattern=style.dash_pattern,
                stroke_width=float(stroke),
                vertices=tuple(zip(xs.tolist(), ys.tolist())),
            )
        )

    plan = RenderPlan(
        plot_area=area,
        y_ticks=y_ticks,
        x_ticks=x_ticks,
        grid_lines=_grid(area, y_ticks, x_ticks, layout) if request.show_grid else (),
        series_paths=tuple(paths),
        legend_entries=_legend(area, colors, n_series, layout) if request.show_legend else (),
        axis_lines=_axes(area),
        tick_marks=_tick_marks(area, y_ticks, x_ticks, layout),
    )
    logger.debug(
        f"Built render plan: {len(plan.series_paths)} path(s), max_len={max_len}, "
        f"y=[{min_y:.6g}, {max_y:.6g}]"
    )
    return plan
