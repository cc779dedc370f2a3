import json

import pytest

from brownsim.cli import build_parser, main, params_from_args
from brownsim.palettes import LineStyle, Palette


class TestParser:
    """Test argument parsing"""

    def test_defaults_match_user_parameters(self):
        """Test parser defaults mirror UserParameters"""
        params = params_from_args(build_parser().parse_args([]))
        assert params.initial_price == 100.0
        assert params.duration_days == 252
        assert params.simulations == 3
        assert params.use_percent_inputs is True
        assert params.show_grid is True

    def test_flags(self):
        """Test toggles and enumerated choices"""
        args = build_parser().parse_args(
            ["--no-percent", "--annualized", "--no-grid", "--currency", "--palette", "pastel", "--line-style", "dashed"]
        )
        params = params_from_args(args)
        assert params.use_percent_inputs is False
        assert params.annualized is True
        assert params.show_grid is False
        assert params.currency_axis is True
        assert params.palette is Palette.pastel
        assert params.line_style is LineStyle.dashed

    def test_rejects_unknown_palette(self):
        """Test argparse rejects palettes outside the enumeration"""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--palette", "sepia"])


class TestMain:
    """Test the command entry point"""

    def test_summary_output(self, capsys):
        """Test the default run prints a summary"""
        assert main(["--paths", "4", "--days", "20", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert "Paths: 4   Steps: 20" in out

    def test_plan_output_is_json(self, capsys):
        """Test --plan prints the render plan as JSON"""
        assert main(["--paths", "2", "--days", "10", "--seed", "3", "--plan", "--line-style", "dotted"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data["series_paths"]) == 2
        assert data["series_paths"][0]["dash_pattern"] == [2.0, 4.0]
        assert [e["label"] for e in data["legend_entries"]] == ["Series 1", "Series 2"]
        assert data["plot_area"] == {"left": 64.0, "top": 20.0, "width": 716.0, "height": 416.0}

    def test_seed_is_reproducible(self, capsys):
        """Test equal seeds give equal output"""
        main(["--seed", "9", "--days", "5"])
        first = capsys.readouterr().out
        main(["--seed", "9", "--days", "5"])
        assert capsys.readouterr().out == first

    def test_clamps_bad_inputs(self, capsys):
        """Test out-of-range inputs are repaired, not rejected"""
        assert main(["--paths", "0", "--days", "1", "--initial-price", "-4", "--seed", "0"]) == 0
        assert "Paths: 1   Steps: 2" in capsys.readouterr().out

    def test_infinite_price_exits(self):
        """Test a non-finite initial price surfaces as a usage error"""
        with pytest.raises(SystemExit) as exc:
            main(["--initial-price", "inf"])
        assert exc.value.code == 2
