import math

import pytest

from binomial_lattice.options import (
    ExerciseStyle,
    MarketParams,
    OptionType,
    bs_delta,
    bs_gamma,
    bs_price,
    normalize_exercise_style,
    normalize_option_type,
    price_lattice,
)


@pytest.mark.parametrize("option_type", [OptionType.CALL, OptionType.PUT])
def test_european_lattice_converges_to_black_scholes(option_type):
    params = MarketParams(
        spot=100.0,
        strike=100.0,
        rate=0.05,
        volatility=0.2,
        maturity=1.0,
        steps=500,
        option_type=option_type,
        exercise=ExerciseStyle.EUROPEAN,
    )

    tree = price_lattice(params).price
    bs = bs_price(S=100.0, K=100.0, T=1.0, sigma=0.2, r=0.05, option_type=option_type)

    assert tree == pytest.approx(bs, abs=1e-2)


def test_lattice_greeks_are_close_to_black_scholes():
    params = MarketParams(
        spot=102.0,
        strike=100.0,
        rate=0.03,
        volatility=0.25,
        maturity=0.5,
        steps=400,
    )
    result = price_lattice(params)

    assert result.delta == pytest.approx(
        bs_delta(S=102.0, K=100.0, T=0.5, sigma=0.25, r=0.03), abs=1e-2
    )
    assert result.gamma == pytest.approx(
        bs_gamma(S=102.0, K=100.0, T=0.5, sigma=0.25, r=0.03), rel=5e-2
    )


def test_black_scholes_put_call_parity():
    call = bs_price(S=95.0, K=100.0, T=0.75, sigma=0.3, r=0.02, option_type="call")
    put = bs_price(S=95.0, K=100.0, T=0.75, sigma=0.3, r=0.02, option_type="P")

    assert call - put == pytest.approx(95.0 - 100.0 * math.exp(-0.015), abs=1e-9)


def test_black_scholes_rejects_degenerate_inputs():
    with pytest.raises(ValueError, match="T and sigma must be positive"):
        bs_price(S=100.0, K=100.0, T=0.0, sigma=0.2)
    assert bs_delta(S=100.0, K=100.0, T=1.0, sigma=0.0) == 0.0


@pytest.mark.parametrize(
    ("label", "expected"),
    [("call", OptionType.CALL), ("C", OptionType.CALL), ("Put", OptionType.PUT)],
)
def test_normalize_option_type(label, expected):
    assert normalize_option_type(label) is expected


def test_normalize_labels_reject_unknown_values():
    with pytest.raises(ValueError, match="option_type"):
        normalize_option_type("straddle")
    with pytest.raises(ValueError, match="exercise"):
        normalize_exercise_style("bermudan")
    assert normalize_exercise_style("A") is ExerciseStyle.AMERICAN
