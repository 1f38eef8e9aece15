#!/usr/bin/env python
"""Price a vanilla option on a CRR binomial lattice and export the tree.

Typical usage:
    python -m binomial_lattice.apps.price_tree --config config/price_tree.yml
    python -m binomial_lattice.apps.price_tree --spot 100 --strike 110 --put --american --steps 3
    binomial-tree-price --steps 12 --formats csv png --theme midnight

Config precedence: CLI > YAML > defaults.
"""

from __future__ import annotations

import argparse
import json
import logging
import math
from dataclasses import asdict
from pathlib import Path
from typing import Any, Mapping

from binomial_lattice.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    parse_module_levels,
    resolve_path,
    setup_logging_from_config,
)
from binomial_lattice.options import (
    MarketParams,
    PricingResult,
    bs_price,
    normalize_exercise_style,
    normalize_option_type,
    price_lattice,
)
from binomial_lattice.reporting import (
    DEFAULT_REPORT_ROOT,
    DEFAULT_THEME,
    plan_report_artifacts,
    write_report_bundle,
)


MIN_STEPS = 1
MAX_STEPS = 20

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "market": {
        "spot": 100.0,
        "strike": 100.0,
        "rate": 0.05,
        "volatility": 0.20,
        "maturity": 1.0,
        "steps": 3,
        "option_type": "call",
        "exercise": "european",
        "crr_mode": "standard",
        "custom_up": 1.1,
        "custom_down": 0.9,
    },
    "export": {
        "output_root": DEFAULT_REPORT_ROOT,
        "formats": ["csv", "png"],
        "theme": DEFAULT_THEME,
        "run_name": None,
    },
}

_MARKET_FLAGS = (
    "spot",
    "strike",
    "rate",
    "volatility",
    "maturity",
    "steps",
    "custom_up",
    "custom_down",
)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Price an option on a CRR binomial lattice and export the tree."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print merged config and resolved market inputs (JSON), then exit.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Price and log results, list the planned exports, write nothing.",
    )

    parser.add_argument("--spot", type=float, default=None, help="Spot price S.")
    parser.add_argument("--strike", type=float, default=None, help="Strike K.")
    parser.add_argument(
        "--rate",
        type=float,
        default=None,
        help="Continuously-compounded risk-free rate (decimal).",
    )
    parser.add_argument(
        "--volatility",
        type=float,
        default=None,
        help="Annualized volatility (decimal).",
    )
    parser.add_argument(
        "--maturity",
        type=float,
        default=None,
        help="Time to maturity in years.",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help=f"Lattice steps N (clamped to [{MIN_STEPS}, {MAX_STEPS}]).",
    )

    side = parser.add_mutually_exclusive_group()
    side.add_argument(
        "--call",
        dest="option_type",
        action="store_const",
        const="call",
        help="Price a call.",
    )
    side.add_argument(
        "--put",
        dest="option_type",
        action="store_const",
        const="put",
        help="Price a put.",
    )

    style = parser.add_mutually_exclusive_group()
    style.add_argument(
        "--european",
        dest="exercise",
        action="store_const",
        const="european",
        help="Exercise at maturity only.",
    )
    style.add_argument(
        "--american",
        dest="exercise",
        action="store_const",
        const="american",
        help="Allow early exercise.",
    )

    parser.add_argument(
        "--crr-mode",
        choices=["standard", "custom"],
        default=None,
        help="Derive u/d from volatility (standard) or use --custom-up/--custom-down.",
    )
    parser.add_argument(
        "--custom-up", type=float, default=None, help="Custom up factor u."
    )
    parser.add_argument(
        "--custom-down", type=float, default=None, help="Custom down factor d."
    )

    parser.add_argument(
        "--output-root",
        type=str,
        default=None,
        help="Directory receiving export runs.",
    )
    parser.add_argument(
        "--formats",
        nargs="+",
        default=None,
        help="Export formats among csv, json, png (space-separated).",
    )
    parser.add_argument(
        "--theme", type=str, default=None, help="Colour theme for the PNG export."
    )
    parser.add_argument(
        "--run-name",
        type=str,
        default=None,
        help="Run sub-directory name (defaults to a UTC timestamp).",
    )

    return parser.parse_args(argv)


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}

    market: dict[str, Any] = {}
    for key in _MARKET_FLAGS:
        value = getattr(args, key)
        if value is not None:
            market[key] = value
    if args.option_type is not None:
        market["option_type"] = args.option_type
    if args.exercise is not None:
        market["exercise"] = args.exercise
    if args.crr_mode is not None:
        market["crr_mode"] = args.crr_mode
    elif args.custom_up is not None or args.custom_down is not None:
        market["crr_mode"] = "custom"
    if market:
        overrides["market"] = market

    export: dict[str, Any] = {}
    if args.output_root:
        export["output_root"] = args.output_root
    if args.formats is not None:
        export["formats"] = args.formats
    if args.theme:
        export["theme"] = args.theme
    if args.run_name:
        export["run_name"] = args.run_name
    if export:
        overrides["export"] = export

    logging_overrides = _logging_overrides(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides

    return overrides


def _logging_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    if args.log_level:
        overrides["level"] = args.log_level
    if args.log_file:
        overrides["file"] = args.log_file
    if args.log_format:
        overrides["format"] = args.log_format
    if args.log_color is not None:
        overrides["color"] = args.log_color
    modules = parse_module_levels(args.log_modules)
    if modules:
        overrides["modules"] = modules
    return overrides


def _export_formats(value: Any) -> list[str]:
    """Accept a single format string or a list from YAML/CLI."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def clamp_steps(steps: int) -> int:
    """Clamp the lattice step count to the interactive range."""
    return min(max(int(steps), MIN_STEPS), MAX_STEPS)


def market_params_from_config(market: Mapping[str, Any]) -> MarketParams:
    """Validate the `market` config section and build `MarketParams`."""
    spot = float(market["spot"])
    strike = float(market["strike"])
    maturity = float(market["maturity"])
    for name, value in (("spot", spot), ("strike", strike), ("maturity", maturity)):
        if not value > 0:
            raise ValueError(f"{name} must be > 0")

    crr_mode = str(market.get("crr_mode", "standard")).strip().lower()
    if crr_mode not in ("standard", "custom"):
        raise ValueError("crr_mode must be 'standard' or 'custom'")

    custom_up = custom_down = None
    if crr_mode == "custom":
        if market.get("custom_up") is None or market.get("custom_down") is None:
            raise ValueError("crr_mode='custom' requires custom_up and custom_down")
        custom_up = float(market["custom_up"])
        custom_down = float(market["custom_down"])

    return MarketParams(
        spot=spot,
        strike=strike,
        rate=float(market["rate"]),
        volatility=float(market["volatility"]),
        maturity=maturity,
        steps=clamp_steps(market["steps"]),
        option_type=normalize_option_type(market["option_type"]),
        exercise=normalize_exercise_style(market["exercise"]),
        custom_up=custom_up,
        custom_down=custom_down,
    )


def _log_result(
    logger: logging.Logger, params: MarketParams, result: PricingResult
) -> None:
    crr = result.crr
    logger.info(
        "CRR: u=%.6f d=%.6f p=%.6f dt=%.6f discount=%.6f",
        crr.u,
        crr.d,
        crr.p,
        crr.dt,
        crr.discount,
    )
    if not crr.is_arbitrage_free:
        logger.warning(
            "Risk-neutral probability p=%s is outside [0, 1]; prices are not "
            "arbitrage-free for these inputs.",
            crr.p,
        )

    logger.info("Option price:         %.4f", result.price)
    logger.info("Delta:                %.4f", result.delta)
    logger.info("Gamma:                %.6f", result.gamma)

    has_reference = (
        not params.is_american
        and params.volatility > 0
        and not params.uses_custom_factors
    )
    if has_reference:
        reference = bs_price(
            S=params.spot,
            K=params.strike,
            T=params.maturity,
            sigma=params.volatility,
            r=params.rate,
            option_type=params.option_type,
        )
        logger.info("Black-Scholes price:  %.4f", reference)

    if params.is_american:
        if result.early_exercise_nodes:
            logger.info("Early exercise nodes: %d", len(result.early_exercise_nodes))
            for node in result.early_exercise_nodes:
                logger.info(
                    "  Step %d, State %d: S=%.2f, V=%.2f",
                    node.step,
                    node.state,
                    node.stock_price,
                    node.option_value,
                )
        else:
            logger.info("Early exercise nodes: none")




def _print_config(config: Mapping[str, Any], params: MarketParams) -> None:
    """Print the merged config plus the market inputs after clamping/coercion."""
    payload = {**config, "resolved": {"market": asdict(params)}}
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))


def _log_planned_exports(
    logger: logging.Logger, plan: Mapping[str, Path]
) -> None:
    if not plan:
        logger.info("DRY RUN: no export formats requested")
        return
    for fmt, path in plan.items():
        logger.info("DRY RUN: would write %-8s %s", fmt, path)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    overrides = _build_overrides(args)
    config = build_config(
        DEFAULT_CONFIG,
        args.config,
        overrides,
        sections=("logging", "market", "export"),
    )

    requested_steps = config["market"]["steps"]
    params = market_params_from_config(config["market"])

    if args.print_config:
        _print_config(config, params)
        return

    setup_logging_from_config(config.get("logging"))
    logger = logging.getLogger(__name__)

    if params.steps != int(requested_steps):
        logger.warning(
            "Steps %s clamped to %d (allowed range [%d, %d])",
            requested_steps,
            params.steps,
            MIN_STEPS,
            MAX_STEPS,
        )

    logger.info("Spot / Strike:        %s / %s", params.spot, params.strike)
    logger.info("Rate / Volatility:    %s / %s", params.rate, params.volatility)
    logger.info("Maturity / Steps:     %s / %d", params.maturity, params.steps)
    logger.info("Contract:             %s %s", params.exercise, params.option_type)
    if params.uses_custom_factors:
        logger.info(
            "Custom factors:       u=%s d=%s", params.custom_up, params.custom_down
        )

    result = price_lattice(params)
    _log_result(logger, params, result)

    if not math.isfinite(result.price):
        logger.warning("Root price is not finite; check the CRR inputs.")

    export_cfg = config["export"]
    formats = _export_formats(export_cfg.get("formats"))
    output_root = resolve_path(export_cfg.get("output_root"))
    if formats and output_root is None:
        raise ValueError("export.output_root must be set.")

    if args.dry_run:
        plan: dict[str, Path] = {}
        if formats:
            plan = plan_report_artifacts(
                output_root=output_root,
                run_name=export_cfg.get("run_name"),
                formats=formats,
            )
        _log_planned_exports(logger, plan)
        return
    if not formats:
        logger.info("No export formats requested.")
        return

    run_dir = write_report_bundle(
        params,
        result,
        output_root=output_root,
        run_name=export_cfg.get("run_name"),
        formats=formats,
        theme=export_cfg.get("theme") or DEFAULT_THEME,
    )
    logger.info("Exports written to %s", run_dir)


if __name__ == "__main__":
    main()
