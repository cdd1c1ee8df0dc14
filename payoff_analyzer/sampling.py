"""
Price sampling for payoff analysis and charting.

Payoff at expiration is piecewise-linear with kinks exactly at strikes. The
candidate set clusters points around every strike so that no sign change
between two closely packed strikes is missed.
"""

import logging

import numpy as np

from payoff_analyzer.config import (
    STRIKE_SAMPLE_MULTIPLIERS,
    FAR_RIGHT_MULTIPLIER,
    DEFAULT_PRICE_RANGE,
    CHART_DOMAIN_LOW,
    CHART_DOMAIN_HIGH,
    CHART_GRID_POINTS,
)

logger = logging.getLogger(__name__)


def valid_strikes(portfolio) -> list[float]:
    return [p.strike for p in portfolio if p.is_valid]


def leg_break_even(position) -> float:
    """Algebraic break-even of a single leg: K + premium for calls, K - premium for puts."""
    if position.is_call:
        return position.strike + position.premium
    return position.strike - position.premium


def sample_prices(portfolio) -> list[float]:
    """
    Candidate underlying prices for extremum and zero-crossing detection.

    Includes 0, five points clustered around each valid strike, the far-right
    bound and every leg's own break-even (when non-negative), sorted and
    de-duplicated. Returns the default range when no leg is valid.
    """
    valid = [p for p in portfolio if p.is_valid]
    if not valid:
        return list(DEFAULT_PRICE_RANGE)

    strikes = [p.strike for p in valid]
    points = {0.0, max(strikes) * FAR_RIGHT_MULTIPLIER}
    for strike in strikes:
        points.update(strike * m for m in STRIKE_SAMPLE_MULTIPLIERS)
    for position in valid:
        be = leg_break_even(position)
        if be >= 0:
            points.add(be)

    prices = sorted(points)
    logger.debug(f"Sampled {len(prices)} prices for {len(valid)} valid legs")
    return prices


def price_domain(portfolio) -> tuple[float, float]:
    """Visible chart range around the strikes of the valid legs."""
    strikes = valid_strikes(portfolio)
    if not strikes:
        return DEFAULT_PRICE_RANGE
    return min(strikes) * CHART_DOMAIN_LOW, max(strikes) * CHART_DOMAIN_HIGH


def chart_prices(portfolio, num_points: int = CHART_GRID_POINTS) -> np.ndarray:
    """
    Grid of prices for plotting.

    An evenly spaced grid over price_domain() merged with every sample price
    that falls inside it, so a linearly interpolated line passes through each
    kink exactly.
    """
    low, high = price_domain(portfolio)
    grid = np.linspace(low, high, num_points)
    kinks = [p for p in sample_prices(portfolio) if low <= p <= high]
    return np.unique(np.concatenate([grid, np.asarray(kinks, dtype=float)]))
