"""
Command-line front end for brownsim.

Parses raw user parameters, clamps and converts them, generates the paths,
prints a summary and optionally dumps the chart's render plan as JSON.

Usage:
    brownsim --paths 5 --days 252 --seed 42
    brownsim --volatility 20 --mean 7 --annualized --plan > plan.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .generator import generate_paths
from .palettes import LineStyle, Palette
from .params import InvalidArgument, UserParameters
from .stats import summarize_paths
from .transform import DEFAULT_LAYOUT, Rect, build_render_plan

logger = logging.getLogger(__name__)

_DEFAULTS = UserParameters()


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the ``brownsim`` command."""
    parser = argparse.ArgumentParser(
        prog="brownsim",
        description="Simulate lognormal price paths and lay out their line chart",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  brownsim --paths 5 --seed 42
  brownsim --volatility 20 --mean 7 --annualized --currency --plan
        """,
    )
    parser.add_argument('--initial-price', type=float, default=_DEFAULTS.initial_price,
                        help=f'Starting price (default: {_DEFAULTS.initial_price})')
    parser.add_argument('--volatility', type=float, default=_DEFAULTS.volatility,
                        help=f'Volatility input (default: {_DEFAULTS.volatility})')
    parser.add_argument('--mean', type=float, default=_DEFAULTS.mean_return,
                        help=f'Mean return input (default: {_DEFAULTS.mean_return})')
    parser.add_argument('--days', type=int, default=_DEFAULTS.duration_days,
                        help=f'Number of simulated steps (default: {_DEFAULTS.duration_days})')
    parser.add_argument('--paths', type=int, default=_DEFAULTS.simulations,
                        help=f'Number of independent paths (default: {_DEFAULTS.simulations})')
    parser.add_argument('--percent', action=argparse.BooleanOptionalAction,
                        default=_DEFAULTS.use_percent_inputs,
                        help='Treat volatility and mean as percentages (default: on)')
    parser.add_argument('--annualized', action='store_true',
                        help='Treat volatility and mean as annual figures (252 steps per year)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')
    parser.add_argument('--palette', choices=[p.value for p in Palette], default=_DEFAULTS.palette.value)
    parser.add_argument('--line-style', choices=[s.value for s in LineStyle], default=_DEFAULTS.line_style.value)
    parser.add_argument('--no-grid', action='store_true', help='Hide grid lines')
    parser.add_argument('--no-legend', action='store_true', help='Hide the legend')
    parser.add_argument('--currency', action='store_true', help='Format Y labels as currency')
    parser.add_argument('--thickness', type=float, default=_DEFAULTS.line_thickness,
                        help=f'Line thickness (default: {_DEFAULTS.line_thickness})')
    parser.add_argument('--width', type=float, default=800.0, help='Canvas width (default: 800)')
    parser.add_argument('--height', type=float, default=480.0, help='Canvas height (default: 480)')
    parser.add_argument('--plan', action='store_true', help='Print the render plan as JSON')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    return parser


def params_from_args(args: argparse.Namespace) -> UserParameters:
    """Map parsed arguments onto :class:`UserParameters`."""
    return UserParameters(
        initial_price=args.initial_price,
        volatility=args.volatility,
        mean_return=args.mean,
        duration_days=args.days,
        use_percent_inputs=args.percent,
        annualized=args.annualized,
        simulations=args.paths,
        show_grid=not args.no_grid,
        show_legend=not args.no_legend,
        currency_axis=args.currency,
        line_thickness=args.thickness,
        line_style=LineStyle.parse(args.line_style),
        palette=Palette.parse(args.palette),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point of the ``brownsim`` console script."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.getLogger("brownsim").setLevel(logging.DEBUG)

    params = params_from_args(args)
    try:
        request = params.to_request()
        paths = generate_paths(request, rng=args.seed)
    except InvalidArgument as e:
        parser.error(str(e))

    logger.info(f"Generated {request.num_paths} path(s) of {request.num_steps} steps")
    if args.plan:
        canvas = Rect(0.0, 0.0, args.width, args.height)
        chart = params.to_chart_request(paths, DEFAULT_LAYOUT.plot_area_for(canvas))
        plan = build_render_plan(chart)
        json.dump(plan.to_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        print(summarize_paths(paths).to_string())
    return 0


if __name__ == "__main__":
    sys.exit(main())
