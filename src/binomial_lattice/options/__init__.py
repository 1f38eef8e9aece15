"""Binomial-lattice option pricing: models and shared types."""

from .models import (
    build_stock_tree,
    bs_delta,
    bs_gamma,
    bs_price,
    crr_parameters,
    early_exercise_nodes,
    lattice_delta,
    lattice_gamma,
    payoff,
    price_american,
    price_european,
    price_lattice,
)
from .types import (
    CRRParameters,
    EarlyExerciseRecord,
    ExerciseStyle,
    MarketParams,
    OptionType,
    PricingResult,
    normalize_exercise_style,
    normalize_option_type,
)

__all__ = [
    "OptionType",
    "ExerciseStyle",
    "MarketParams",
    "CRRParameters",
    "EarlyExerciseRecord",
    "PricingResult",
    "normalize_option_type",
    "normalize_exercise_style",
    "crr_parameters",
    "build_stock_tree",
    "payoff",
    "price_european",
    "price_american",
    "lattice_delta",
    "lattice_gamma",
    "early_exercise_nodes",
    "price_lattice",
    "bs_price",
    "bs_delta",
    "bs_gamma",
]
