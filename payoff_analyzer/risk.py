"""
Risk/reward analysis for option portfolios at expiration.

Contains pure functions for:
- Portfolio max gain / max loss with unbounded-risk detection
- Break-even search by linear interpolation between sampled prices
- Closed-form per-leg risk/reward

Nothing here raises for bad position data: invalid legs are skipped.
"""

import logging

from payoff_analyzer.config import BREAK_EVEN_TOLERANCE, BREAK_EVEN_DECIMALS
from payoff_analyzer.models import RiskBound, RiskReward
from payoff_analyzer.pnl import portfolio_payoff_at
from payoff_analyzer.sampling import sample_prices, leg_break_even

logger = logging.getLogger(__name__)


def _interpolate_zero(p1, v1, p2, v2):
    """Linear zero-crossing between two samples of opposite sign."""
    return p1 - v1 * (p2 - p1) / (v2 - v1)


def find_break_evens(samples, tolerance: float = BREAK_EVEN_TOLERANCE) -> tuple[float, ...]:
    """
    Find zero-crossings in a sequence of (price, value) samples.

    Adjacent samples whose values differ in sign contribute one interpolated
    crossing. A sample that is exactly zero is a break-even itself; a run of
    consecutive zero samples (a flat zero segment) reports only its two ends.
    Crossings are rounded to cents and de-duplicated within ``tolerance``.

    Returns:
        Break-even prices, sorted ascending.
    """
    ordered = sorted(samples, key=lambda s: s[0])
    candidates = []
    for i, (price, value) in enumerate(ordered):
        if value == 0:
            prev_zero = i > 0 and ordered[i - 1][1] == 0
            next_zero = i + 1 < len(ordered) and ordered[i + 1][1] == 0
            if not (prev_zero and next_zero):
                candidates.append(price)
    for (p1, v1), (p2, v2) in zip(ordered, ordered[1:]):
        if v1 * v2 < 0:
            candidates.append(_interpolate_zero(p1, v1, p2, v2))

    found = []
    for be in sorted(round(c, BREAK_EVEN_DECIMALS) for c in candidates):
        if not any(abs(x - be) < tolerance for x in found):
            found.append(be)
    return tuple(found)


def tail_break_even(samples, slope: float):
    """
    Zero-crossing beyond the last sample, where payoff is linear with ``slope``.

    Returns None when the payoff keeps its sign (or is flat) past the last sample.
    """
    if not samples or slope == 0:
        return None
    last_price, last_value = max(samples, key=lambda s: s[0])
    if last_value * slope >= 0:
        return None
    return last_price - last_value / slope


def call_slope_above_strikes(portfolio) -> int:
    """
    Payoff slope of the portfolio above its highest strike.

    Puts are worthless there, so only calls count: +quantity per long call,
    -quantity per short call.
    """
    slope = 0
    for p in portfolio:
        if p.is_valid and p.is_call:
            slope += p.quantity if p.is_long else -p.quantity
    return slope


def unbounded_sides(portfolio) -> tuple[bool, bool]:
    """(gain unbounded above, loss unbounded below) for the valid legs."""
    slope = call_slope_above_strikes(portfolio)
    return slope > 0, slope < 0


def analyze(portfolio, tolerance: float = BREAK_EVEN_TOLERANCE) -> RiskReward:
    """
    Max gain, max loss and break-evens of a portfolio at expiration.

    Args:
        portfolio: Iterable of OptionPosition (order does not matter)
        tolerance: Break-evens closer than this are reported once

    Returns:
        RiskReward. A portfolio without valid legs yields zero gain, zero loss
        and no break-evens.
    """
    legs = list(portfolio)
    if not any(p.is_valid for p in legs):
        return RiskReward.empty()

    samples = [(price, portfolio_payoff_at(price, legs)) for price in sample_prices(legs)]
    values = [v for _, v in samples]

    gain_unbounded, loss_unbounded = unbounded_sides(legs)
    max_gain = RiskBound.unbounded_above() if gain_unbounded else RiskBound.bounded(max(values))
    max_loss = RiskBound.unbounded_below() if loss_unbounded else RiskBound.bounded(min(values))
    # Payoff is linear above the last sample; it may still cross zero there
    tail = tail_break_even(samples, call_slope_above_strikes(legs))
    crossings = samples + [(tail, 0.0)] if tail is not None else samples
    break_evens = find_break_evens(crossings, tolerance)

    logger.debug(
        f"Analyzed {len(legs)} legs over {len(samples)} samples: "
        f"gain={max_gain.to_float()}, loss={max_loss.to_float()}, break_evens={break_evens}"
    )
    return RiskReward(max_gain=max_gain, max_loss=max_loss, break_evens=break_evens)


def analyze_leg(position) -> RiskReward:
    """
    Closed-form risk/reward of a single leg.

    Long call: unbounded gain, loses the premium.
    Short call: keeps the premium, unbounded loss.
    Long put: gains at most (strike - premium), loses the premium.
    Short put: keeps the premium, loses at most (strike - premium).
    All amounts scale by quantity.
    """
    if not position.is_valid:
        return RiskReward.empty()

    q = position.quantity
    premium_total = position.premium * q
    be = leg_break_even(position)
    break_evens = (round(be, BREAK_EVEN_DECIMALS),) if be >= 0 else ()

    if position.is_call:
        if position.is_long:
            gain, loss = RiskBound.unbounded_above(), RiskBound.bounded(-premium_total)
        else:
            gain, loss = RiskBound.bounded(premium_total), RiskBound.unbounded_below()
    else:
        # Put payoff is worst/best at price 0
        floor_value = (position.strike - position.premium) * q
        if position.is_long:
            gain, loss = RiskBound.bounded(floor_value), RiskBound.bounded(-premium_total)
        else:
            gain, loss = RiskBound.bounded(premium_total), RiskBound.bounded(-floor_value)

    return RiskReward(max_gain=gain, max_loss=loss, break_evens=break_evens)


def analyze_legs(portfolio) -> list[RiskReward]:
    """Per-leg risk/reward, in portfolio order."""
    return [analyze_leg(p) for p in portfolio]
