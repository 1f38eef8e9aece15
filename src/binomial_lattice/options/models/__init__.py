"""Lattice and closed-form option-pricing models."""

from .binomial_tree import (
    build_stock_tree,
    crr_parameters,
    early_exercise_nodes,
    lattice_delta,
    lattice_gamma,
    payoff,
    price_american,
    price_european,
    price_lattice,
)
from .black_scholes import bs_d1_d2, bs_delta, bs_gamma, bs_price

__all__ = [
    "crr_parameters",
    "build_stock_tree",
    "payoff",
    "price_european",
    "price_american",
    "lattice_delta",
    "lattice_gamma",
    "early_exercise_nodes",
    "price_lattice",
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "bs_gamma",
]
