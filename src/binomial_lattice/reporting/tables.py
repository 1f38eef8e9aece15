"""Tabular views of a lattice pricing result."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

import pandas as pd

from binomial_lattice.options.types import MarketParams, PricingResult

from .constants import TREE_COLUMNS


def build_tree_table(result: PricingResult) -> pd.DataFrame:
    """One row per lattice node, ordered by step then state."""
    rows = [
        (i, j, float(stock[j]), float(value[j]), bool(flags[j]))
        for i, (stock, value, flags) in enumerate(
            zip(result.stock_tree, result.option_tree, result.early_exercise)
        )
        for j in range(len(stock))
    ]
    return pd.DataFrame(rows, columns=TREE_COLUMNS)


def build_settings_summary(
    params: MarketParams, result: PricingResult
) -> dict[str, Any]:
    """Inputs, CRR parameters, headline results and early-exercise nodes."""
    return {
        "settings": {
            "spot": params.spot,
            "strike": params.strike,
            "rate": params.rate,
            "volatility": params.volatility,
            "maturity": params.maturity,
            "steps": params.steps,
            "option_type": str(params.option_type),
            "exercise": str(params.exercise),
            "custom_factors": params.uses_custom_factors,
        },
        "crr": asdict(result.crr),
        "results": {
            "price": result.price,
            "delta": result.delta,
            "gamma": result.gamma,
        },
        "early_exercise_nodes": [asdict(n) for n in result.early_exercise_nodes],
    }
