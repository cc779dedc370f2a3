import pytest

from brownsim.palettes import PALETTES, LineStyle, Palette, palette_colors


class TestPalette:
    """Test palette lookup"""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("vibrant", Palette.vibrant),
            ("PASTEL", Palette.pastel),
            ("mono-blue", Palette.mono_blue),
            ("Monochrome Green", Palette.mono_green),
            (Palette.rainbow, Palette.rainbow),
        ],
    )
    def test_parse_known(self, name, expected):
        """Test known names resolve"""
        assert Palette.parse(name) is expected

    @pytest.mark.parametrize("name", ["sepia", "", None, "  "])
    def test_parse_unknown_falls_back(self, name):
        """Test unknown names resolve to the default palette"""
        assert Palette.parse(name) is Palette.vibrant

    def test_every_palette_has_colors(self):
        """Test each palette defines hex colors"""
        for palette in Palette:
            colors = palette.colors
            assert colors
            assert all(c.startswith("#") and len(c) == 7 for c in colors)
        assert set(PALETTES) == set(Palette)

    def test_palette_colors_cycle(self):
        """Test colors cycle past the base list"""
        base = PALETTES[Palette.mono_green]
        colors = palette_colors(Palette.mono_green, len(base) + 2)
        assert colors[len(base)] == base[0]
        assert colors[len(base) + 1] == base[1]

    def test_palette_colors_unknown_name(self):
        """Test unknown palette names use the vibrant colors"""
        assert palette_colors("nope", 3) == PALETTES[Palette.vibrant][:3]

    def test_palette_colors_zero(self):
        """Test no colors requested"""
        assert palette_colors(Palette.pastel, 0) == ()


class TestLineStyle:
    """Test line styles"""

    @pytest.mark.parametrize(
        ("style", "pattern"),
        [
            (LineStyle.solid, None),
            (LineStyle.dashed, (8.0, 5.0)),
            (LineStyle.dotted, (2.0, 4.0)),
        ],
    )
    def test_dash_patterns(self, style, pattern):
        """Test dash pattern per style"""
        assert style.dash_pattern == pattern

    def test_parse(self):
        """Test parsing with fallback"""
        assert LineStyle.parse("Dashed") is LineStyle.dashed
        assert LineStyle.parse("wavy") is LineStyle.solid
