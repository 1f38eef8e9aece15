#!/usr/bin/env python
"""
Price the reference American put and export CSV/JSON/PNG artifacts.

This script is a thin wrapper around:
    binomial_lattice.options.price_lattice
    binomial_lattice.reporting.write_report_bundle
"""

import logging

from binomial_lattice.config.paths import TREE_EXPORTS_ROOT
from binomial_lattice.options import ExerciseStyle, MarketParams, OptionType, price_lattice
from binomial_lattice.reporting import write_report_bundle
from binomial_lattice.utils import setup_logging


OUTPUT_ROOT = TREE_EXPORTS_ROOT
RUN_NAME = "american_put"
FORMATS = ("csv", "json", "png")
THEME = "bloomberg"

PARAMS = MarketParams(
    spot=100.0,
    strike=110.0,
    rate=0.05,
    volatility=0.30,
    maturity=1.0,
    steps=3,
    option_type=OptionType.PUT,
    exercise=ExerciseStyle.AMERICAN,
)

LOG_LEVEL = "INFO"
LOG_FMT_CONSOLE = "%(asctime)s %(levelname)s %(shortname)s - %(message)s"
LOG_FILE = None
LOG_COLORED = True


def main() -> None:
    setup_logging(
        LOG_LEVEL,
        fmt_console=LOG_FMT_CONSOLE,
        log_file=LOG_FILE,
        colored=LOG_COLORED,
    )
    logger = logging.getLogger(__name__)

    logger.info("Output root: %s", OUTPUT_ROOT)
    logger.info("Params:      %s", PARAMS)

    result = price_lattice(PARAMS)
    logger.info("Price=%.4f delta=%.4f gamma=%.6f", result.price, result.delta, result.gamma)

    write_report_bundle(
        PARAMS,
        result,
        output_root=OUTPUT_ROOT,
        run_name=RUN_NAME,
        formats=FORMATS,
        theme=THEME,
    )


if __name__ == "__main__":
    main()
