"""CRR binomial-lattice pricing for vanilla options.

The lattice is stored as a list of numpy arrays, one per time step. Level `i`
holds `i + 1` nodes indexed by the number of up-moves `j`, so every path that
reaches `(i, j)` shares a single stored value.

Nothing here validates inputs. Degenerate parameters (zero volatility, custom
factors with `u == d`, zero steps) produce NaN/inf or trivial lattices instead
of raising, and numpy floating-point warnings for those cases are silenced.
"""

from __future__ import annotations

import numpy as np

from binomial_lattice.options.types import (
    CRRParameters,
    EarlyExerciseRecord,
    Lattice,
    MarketParams,
    OptionType,
    PricingResult,
)


def crr_parameters(
    T: float,
    N: int,
    sigma: float,
    r: float,
    custom_up: float | None = None,
    custom_down: float | None = None,
) -> CRRParameters:
    """Derive per-step CRR factors, risk-neutral probability and discount.

    Custom factors are used only when both are given; otherwise
    `u = exp(sigma * sqrt(dt))` and `d = 1 / u`.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        dt = np.float64(T) / N

        if custom_up is not None and custom_down is not None:
            u = np.float64(custom_up)
            d = np.float64(custom_down)
        else:
            u = np.exp(sigma * np.sqrt(dt))
            d = 1.0 / u

        p = (np.exp(r * dt) - d) / (u - d)
        discount = np.exp(-r * dt)

    return CRRParameters(
        dt=float(dt),
        u=float(u),
        d=float(d),
        p=float(p),
        discount=float(discount),
    )


def build_stock_tree(S: float, u: float, d: float, N: int) -> Lattice:
    """Return the stock-price lattice `S * u**j * d**(i - j)`.

    Each node is computed directly from the spot rather than from its
    neighbours, so recombining paths hold bit-identical prices.
    """
    tree: Lattice = []
    with np.errstate(over="ignore", invalid="ignore"):
        for i in range(N + 1):
            j = np.arange(i + 1)
            tree.append(S * np.power(u, j) * np.power(d, i - j))
    return tree


def payoff(
    spot: np.ndarray | float, strike: float, option_type: OptionType
) -> np.ndarray:
    """Intrinsic value `max(S - K, 0)` for calls, `max(K - S, 0)` for puts."""
    if option_type == OptionType.CALL:
        return np.maximum(np.asarray(spot, dtype=float) - strike, 0.0)
    return np.maximum(strike - np.asarray(spot, dtype=float), 0.0)


def _terminal_level(
    stock_tree: Lattice, K: float, option_type: OptionType, N: int
) -> tuple[Lattice, Lattice]:
    option_tree: Lattice = [np.empty(i + 1) for i in range(N + 1)]
    early_exercise: Lattice = [np.zeros(i + 1, dtype=bool) for i in range(N + 1)]
    option_tree[N] = payoff(stock_tree[N], K, option_type)
    return option_tree, early_exercise


def _hold_values(next_level: np.ndarray, p: float, discount: float) -> np.ndarray:
    # next_level[1:] are the up-children (j + 1), next_level[:-1] the down ones.
    return discount * (p * next_level[1:] + (1.0 - p) * next_level[:-1])


def price_european(
    stock_tree: Lattice,
    K: float,
    p: float,
    discount: float,
    option_type: OptionType,
    N: int,
) -> tuple[Lattice, Lattice]:
    """Backward induction without early exercise.

    Returns the option-value lattice and an all-False exercise-flag lattice.
    """
    option_tree, early_exercise = _terminal_level(stock_tree, K, option_type, N)

    with np.errstate(invalid="ignore", over="ignore"):
        for i in range(N - 1, -1, -1):
            option_tree[i] = _hold_values(option_tree[i + 1], p, discount)

    return option_tree, early_exercise


def price_american(
    stock_tree: Lattice,
    K: float,
    p: float,
    discount: float,
    option_type: OptionType,
    N: int,
) -> tuple[Lattice, Lattice]:
    """Backward induction with an early-exercise check at every interior node.

    A node is exercised only when the immediate payoff is strictly greater
    than the hold value; ties keep the hold value. Terminal nodes are never
    flagged.
    """
    option_tree, early_exercise = _terminal_level(stock_tree, K, option_type, N)

    with np.errstate(invalid="ignore", over="ignore"):
        for i in range(N - 1, -1, -1):
            hold = _hold_values(option_tree[i + 1], p, discount)
            exercise = payoff(stock_tree[i], K, option_type)
            exercised = exercise > hold
            option_tree[i] = np.where(exercised, exercise, hold)
            early_exercise[i] = exercised

    return option_tree, early_exercise


def lattice_delta(stock_tree: Lattice, option_tree: Lattice) -> float:
    """Delta from the two step-1 nodes; 0 when the lattice has no step 1."""
    if len(stock_tree) < 2:
        return 0.0

    S_up, S_down = stock_tree[1][1], stock_tree[1][0]
    V_up, V_down = option_tree[1][1], option_tree[1][0]

    with np.errstate(divide="ignore", invalid="ignore"):
        return float((V_up - V_down) / (S_up - S_down))


def lattice_gamma(stock_tree: Lattice, option_tree: Lattice) -> float:
    """Gamma from the three step-2 nodes; 0 when the lattice has no step 2."""
    if len(stock_tree) < 3:
        return 0.0

    S_uu, S_ud, S_dd = stock_tree[2][2], stock_tree[2][1], stock_tree[2][0]
    V_uu, V_ud, V_dd = option_tree[2][2], option_tree[2][1], option_tree[2][0]

    with np.errstate(divide="ignore", invalid="ignore"):
        delta_up = (V_uu - V_ud) / (S_uu - S_ud)
        delta_down = (V_ud - V_dd) / (S_ud - S_dd)
        h = 0.5 * (S_uu - S_dd)
        return float((delta_up - delta_down) / h)


def early_exercise_nodes(
    stock_tree: Lattice,
    option_tree: Lattice,
    early_exercise: Lattice,
    N: int,
) -> tuple[EarlyExerciseRecord, ...]:
    """Collect flagged nodes before maturity, ordered by step then state."""
    records: list[EarlyExerciseRecord] = []
    for i in range(N):
        for j in np.flatnonzero(early_exercise[i]):
            records.append(
                EarlyExerciseRecord(
                    step=i,
                    state=int(j),
                    stock_price=float(stock_tree[i][j]),
                    option_value=float(option_tree[i][j]),
                )
            )
    return tuple(records)


def price_lattice(params: MarketParams) -> PricingResult:
    """Price one contract on a CRR lattice and return every intermediate.

    Args:
        params: Market inputs, contract terms and optional custom u/d.

    Returns:
        PricingResult with CRR parameters, stock/option/flag lattices, root
        price, lattice Delta and Gamma and, for American contracts, the
        early-exercise records.
    """
    N = params.steps
    crr = crr_parameters(
        T=params.maturity,
        N=N,
        sigma=params.volatility,
        r=params.rate,
        custom_up=params.custom_up,
        custom_down=params.custom_down,
    )

    stock_tree = build_stock_tree(params.spot, crr.u, crr.d, N)

    induction = price_american if params.is_american else price_european
    option_tree, early_exercise = induction(
        stock_tree, params.strike, crr.p, crr.discount, params.option_type, N
    )

    nodes: tuple[EarlyExerciseRecord, ...] = ()
    if params.is_american:
        nodes = early_exercise_nodes(stock_tree, option_tree, early_exercise, N)

    return PricingResult(
        crr=crr,
        stock_tree=stock_tree,
        option_tree=option_tree,
        early_exercise=early_exercise,
        price=float(option_tree[0][0]),
        delta=lattice_delta(stock_tree, option_tree),
        gamma=lattice_gamma(stock_tree, option_tree),
        early_exercise_nodes=nodes,
    )
