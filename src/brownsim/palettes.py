r"""
brownsim.palettes
=================

Named color palettes and stroke styles for chart series.

Palettes are keyed by the :class:`Palette` enumeration rather than by free
text. :meth:`Palette.parse` maps anything it does not recognize to
:attr:`Palette.vibrant`, and :meth:`LineStyle.parse` likewise falls back to
:attr:`LineStyle.solid`.

Colors are ``"#rrggbb"`` strings.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Union

__all__ = [
    "Color",
    "Palette",
    "LineStyle",
    "PALETTES",
    "palette_colors",
]

logger = logging.getLogger(__name__)

Color = str


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "_").replace(" ", "_")


class Palette(str, Enum):
    r"""
    Named series palettes.

    Attributes
    ----------
    vibrant : str
        Saturated, high-contrast colors. The default.
    pastel : str
        Light, low-saturation colors.
    mono_blue : str
        Shades of blue.
    mono_green : str
        Shades of green.
    rainbow : str
        The seven spectral colors.
    """

    vibrant = "vibrant"
    pastel = "pastel"
    mono_blue = "mono_blue"
    mono_green = "mono_green"
    rainbow = "rainbow"

    @classmethod
    def parse(cls, name: Union["Palette", str, None]) -> "Palette":
        r"""
        Resolve a palette from an enum member, its value, or its display label.

        Unknown or empty names resolve to :attr:`vibrant`.

        Examples
        --------
        >>> Palette.parse("Mono Blue")
        <Palette.mono_blue: 'mono_blue'>
        >>> Palette.parse("sepia")
        <Palette.vibrant: 'vibrant'>
        """
        if isinstance(name, cls):
            return name
        key = _normalize(str(name or ""))
        for member in cls:
            if key in (member.value, _normalize(member.label)):
                return member
        logger.debug(f"Unknown palette {name!r}, using {cls.vibrant.value}")
        return cls.vibrant

    @property
    def label(self) -> str:
        """Human-readable name."""
        return _LABELS[self]

    @property
    def colors(self) -> tuple[Color, ...]:
        """Base color list of the palette."""
        return PALETTES[self]


_LABELS = {
    Palette.vibrant: "Vibrant",
    Palette.pastel: "Pastel",
    Palette.mono_blue: "Monochrome Blue",
    Palette.mono_green: "Monochrome Green",
    Palette.rainbow: "Rainbow",
}

PALETTES: dict[Palette, tuple[Color, ...]] = {
    Palette.vibrant: (
        "#1e90ff", "#ff4500", "#3cb371", "#ba55d3", "#daa520",
        "#5f9ea0", "#ff6347", "#008080", "#6495ed", "#cd5c5c",
    ),
    Palette.pastel: (
        "#8ec5fc", "#ffc3a0", "#b8e1ff", "#d4e157", "#ffab91",
        "#f8bbd0", "#c5e1a5", "#b39ddb", "#ffe082", "#80deea",
    ),
    Palette.mono_blue: (
        "#1e88e5", "#1976d2", "#1565c0", "#0d47a1", "#42a5f5", "#90caf9",
    ),
    Palette.mono_green: (
        "#2e7d32", "#1b5e20", "#43a047", "#66bb6a", "#81c784", "#a5d6a7",
    ),
    Palette.rainbow: (
        "#ff0000", "#ffa500", "#ffff00", "#008000", "#0000ff", "#4b0082", "#ee82ee",
    ),
}


def palette_colors(palette: Union[Palette, str, None], n: int) -> tuple[Color, ...]:
    r"""
    Return ``n`` colors from ``palette``, cycling its base list.

    Parameters
    ----------
    palette : Palette or str or None
        Palette, resolved with :meth:`Palette.parse`.
    n : int
        Number of colors wanted. Non-positive values yield an empty tuple.

    Returns
    -------
    tuple of str

    Examples
    --------
    >>> palette_colors(Palette.rainbow, 8)[-1]
    '#ff0000'
    """
    base = PALETTES[Palette.parse(palette)]
    return tuple(base[i % len(base)] for i in range(max(0, int(n))))


class LineStyle(str, Enum):
    r"""
    Stroke styles for series lines.

    Attributes
    ----------
    solid : str
        Continuous stroke.
    dashed : str
        8 units on, 5 off.
    dotted : str
        2 units on, 4 off.
    """

    solid = "solid"
    dashed = "dashed"
    dotted = "dotted"

    @classmethod
    def parse(cls, name: Union["LineStyle", str, None]) -> "LineStyle":
        """Resolve a style by member or value; unknown names resolve to :attr:`solid`."""
        if isinstance(name, cls):
            return name
        key = _normalize(str(name or ""))
        for member in cls:
            if key == member.value:
                return member
        logger.debug(f"Unknown line style {name!r}, using {cls.solid.value}")
        return cls.solid

    @property
    def dash_pattern(self) -> Optional[tuple[float, float]]:
        """On/off lengths in plot units, or ``None`` for a continuous stroke."""
        return _DASH_PATTERNS[self]


_DASH_PATTERNS = {
    LineStyle.solid: None,
    LineStyle.dashed: (8.0, 5.0),
    LineStyle.dotted: (2.0, 4.0),
}
