"""Shared lattice-pricing dataclasses and aliases."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, TypeAlias

import numpy as np


class OptionType(StrEnum):
    """Canonical option side labels used across pricing code."""

    CALL = "call"
    PUT = "put"


class ExerciseStyle(StrEnum):
    """When the holder may exercise the contract."""

    EUROPEAN = "european"
    AMERICAN = "american"


# Tolerant input types accepted at system boundaries (config files/CLI/tests).
OptionTypeInput: TypeAlias = OptionType | Literal["call", "put", "C", "P"]
ExerciseStyleInput: TypeAlias = (
    ExerciseStyle | Literal["european", "american", "E", "A"]
)

# One numpy array per lattice level; level i holds i + 1 nodes.
Lattice: TypeAlias = list[np.ndarray]


def normalize_option_type(option_type: OptionTypeInput | str) -> OptionType:
    """Normalize option type labels to `OptionType`."""
    label = str(option_type).strip()
    if label.lower() in ("call", "c"):
        return OptionType.CALL
    if label.lower() in ("put", "p"):
        return OptionType.PUT
    raise ValueError("option_type must be one of {'call', 'put', 'C', 'P'}")


def normalize_exercise_style(style: ExerciseStyleInput | str) -> ExerciseStyle:
    """Normalize exercise style labels to `ExerciseStyle`."""
    label = str(style).strip().lower()
    if label in ("european", "e"):
        return ExerciseStyle.EUROPEAN
    if label in ("american", "a"):
        return ExerciseStyle.AMERICAN
    raise ValueError(
        "exercise must be one of {'european', 'american', 'E', 'A'}"
    )


@dataclass(frozen=True, slots=True)
class MarketParams:
    """Inputs for one lattice pricing request.

    `custom_up`/`custom_down` replace the volatility-derived CRR factors, but
    only when both are given. No range checks happen here: clamping the step
    count or rejecting degenerate inputs is the caller's job.
    """

    spot: float
    strike: float
    rate: float
    volatility: float
    maturity: float
    steps: int
    option_type: OptionType = OptionType.CALL
    exercise: ExerciseStyle = ExerciseStyle.EUROPEAN
    custom_up: float | None = None
    custom_down: float | None = None

    @property
    def is_call(self) -> bool:
        return self.option_type == OptionType.CALL

    @property
    def is_american(self) -> bool:
        return self.exercise == ExerciseStyle.AMERICAN

    @property
    def uses_custom_factors(self) -> bool:
        return self.custom_up is not None and self.custom_down is not None


@dataclass(frozen=True, slots=True)
class CRRParameters:
    """Per-step lattice parameters.

    `p` is not range-checked; values outside [0, 1] (or NaN/inf when u == d)
    are returned as-is.
    """

    dt: float
    u: float
    d: float
    p: float
    discount: float

    @property
    def is_arbitrage_free(self) -> bool:
        """True when the risk-neutral probability lies in [0, 1]."""
        return bool(0.0 <= self.p <= 1.0)


@dataclass(frozen=True, slots=True)
class EarlyExerciseRecord:
    """One interior node where immediate exercise beat holding."""

    step: int
    state: int
    stock_price: float
    option_value: float


@dataclass(frozen=True, eq=False)
class PricingResult:
    """Full output of one lattice pricing call.

    `stock_tree[i][j]`, `option_tree[i][j]` and `early_exercise[i][j]` refer to
    the node reached after `i` steps with `j` up-moves.
    """

    crr: CRRParameters
    stock_tree: Lattice
    option_tree: Lattice
    early_exercise: Lattice
    price: float
    delta: float
    gamma: float
    early_exercise_nodes: tuple[EarlyExerciseRecord, ...] = ()

    @property
    def steps(self) -> int:
        return len(self.stock_tree) - 1

    @property
    def node_count(self) -> int:
        return sum(len(level) for level in self.stock_tree)
