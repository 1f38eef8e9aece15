"""Black-Scholes reference prices for European options.

Used as the continuous-time limit the CRR lattice converges to.
"""

from __future__ import annotations

import numpy as np
from scipy.stats import norm

from binomial_lattice.options.types import OptionTypeInput, normalize_option_type


def bs_d1_d2(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> tuple[float, float]:
    """Compute d1 and d2 for Black-Scholes without dividends."""
    if T <= 0 or sigma <= 0:
        raise ValueError("T and sigma must be positive")
    d1 = (np.log(S / K) + (r + 0.5 * sigma**2) * T) / (sigma * np.sqrt(T))
    d2 = d1 - sigma * np.sqrt(T)
    return d1, d2


def bs_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes price of a European option."""
    opt_type = normalize_option_type(option_type)
    d1, d2 = bs_d1_d2(S, K, T, sigma, r)

    if opt_type == "call":
        return float(S * norm.cdf(d1) - K * np.exp(-r * T) * norm.cdf(d2))
    return float(K * np.exp(-r * T) * norm.cdf(-d2) - S * norm.cdf(-d1))


def bs_delta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes delta."""
    opt_type = normalize_option_type(option_type)
    if sigma <= 0 or T <= 0:
        return 0.0

    d1, _ = bs_d1_d2(S, K, T, sigma, r)
    delta_call = norm.cdf(d1)
    if opt_type == "call":
        return float(delta_call)
    return float(delta_call - 1.0)


def bs_gamma(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> float:
    """Black-Scholes gamma."""
    if sigma <= 0 or T <= 0:
        return 0.0
    d1, _ = bs_d1_d2(S, K, T, sigma, r)
    return float(norm.pdf(d1) / (S * sigma * np.sqrt(T)))
