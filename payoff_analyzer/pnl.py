"""
P&L calculation engine for option portfolios at expiration.

Contains pure functions for:
- Intrinsic (settlement) value of a call or put
- Per-leg and portfolio profit at a given underlying price
- Payoff curve tables for charting
"""

import numpy as np
import pandas as pd

from payoff_analyzer.models import OptionKind, OptionPosition


def intrinsic_value(price, strike, kind):
    """Calculate intrinsic value at settlement"""
    if OptionKind(kind) is OptionKind.CALL:
        return max(0.0, price - strike)
    else:  # Put
        return max(0.0, strike - price)


def payoff_at(price: float, position: OptionPosition) -> float:
    """
    Profit of one leg at expiration for the given underlying price.

    Long legs earn intrinsic value minus the premium paid, short legs keep the
    premium minus the intrinsic value owed; both scale by quantity. Invalid legs
    contribute exactly zero.
    """
    if not position.is_valid:
        return 0.0

    intrinsic = intrinsic_value(price, position.strike, position.kind)
    if position.is_long:
        per_unit = intrinsic - position.premium
    else:
        per_unit = position.premium - intrinsic
    return per_unit * position.quantity


def portfolio_payoff_at(price: float, portfolio) -> float:
    """Aggregate profit of all valid legs at the given underlying price."""
    return sum((payoff_at(price, p) for p in portfolio if p.is_valid), 0.0)


def _leg_curve(prices: np.ndarray, position: OptionPosition) -> np.ndarray:
    if not position.is_valid:
        return np.zeros_like(prices)
    if position.is_call:
        intrinsic = np.maximum(0.0, prices - position.strike)
    else:
        intrinsic = np.maximum(0.0, position.strike - prices)
    sign = 1.0 if position.is_long else -1.0
    return sign * (intrinsic - position.premium) * position.quantity


def payoff_curve(portfolio, prices) -> pd.DataFrame:
    """
    Evaluate every leg and the portfolio total over a price grid.

    Args:
        portfolio: Sequence of OptionPosition
        prices: Iterable of underlying prices

    Returns:
        DataFrame with columns 'price', 'leg_0' .. 'leg_<n-1>' (portfolio order)
        and 'total'.
    """
    grid = np.asarray(list(prices), dtype=float)
    df = pd.DataFrame({'price': grid})
    total = np.zeros_like(grid)
    for i, position in enumerate(portfolio):
        values = _leg_curve(grid, position)
        df[f'leg_{i}'] = values
        total = total + values
    df['total'] = total
    return df
