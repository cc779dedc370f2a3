"""brownsim package public API."""

import logging

from .generator import PathSeries, generate_paths, make_rng
from .palettes import PALETTES, LineStyle, Palette, palette_colors
from .params import InvalidArgument, SimulationRequest, UserParameters
from .stats import PathSummary, summarize_paths
from .transform import (
    DEFAULT_LAYOUT,
    ChartLayout,
    ChartRequest,
    Rect,
    RenderPlan,
    build_render_plan,
)

logger = logging.getLogger(__name__)  # pragma: no cover
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

__all__ = [
    "SimulationRequest",
    "UserParameters",
    "InvalidArgument",
    "PathSeries",
    "generate_paths",
    "make_rng",
    "Palette",
    "LineStyle",
    "PALETTES",
    "palette_colors",
    "ChartLayout",
    "ChartRequest",
    "Rect",
    "RenderPlan",
    "DEFAULT_LAYOUT",
    "build_render_plan",
    "PathSummary",
    "summarize_paths",
]

__version__ = "0.1.0"
