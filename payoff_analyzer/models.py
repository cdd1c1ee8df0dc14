"""
Domain models for the option payoff analyzer.

Dataclasses and enums for typed, self-documenting data flow between the
payoff evaluator, the risk analyzer and the dashboard.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum


class OptionKind(str, Enum):
    CALL = 'call'
    PUT = 'put'


class Direction(str, Enum):
    LONG = 'long'
    SHORT = 'short'


@dataclass(frozen=True)
class OptionPosition:
    """A single leg of an options strategy.

    Out-of-range numbers are accepted on purpose: a leg that is being edited may
    briefly carry a zero strike. Such a leg reports ``is_valid == False`` and the
    analytics treat it as contributing nothing.
    """
    kind: OptionKind
    direction: Direction
    strike: float
    premium: float
    quantity: int = 1

    def __post_init__(self):
        # Accept 'call' / 'long' style strings coming from the UI
        object.__setattr__(self, 'kind', OptionKind(self.kind))
        object.__setattr__(self, 'direction', Direction(self.direction))

    @property
    def is_valid(self) -> bool:
        """True when the leg can take part in payoff and risk calculations."""
        if not (math.isfinite(self.strike) and math.isfinite(self.premium)):
            return False
        return self.strike > 0 and self.premium >= 0 and self.quantity > 0

    @property
    def is_call(self) -> bool:
        return self.kind is OptionKind.CALL

    @property
    def is_long(self) -> bool:
        return self.direction is Direction.LONG

    def with_kind(self, kind) -> 'OptionPosition':
        return replace(self, kind=OptionKind(kind))

    def with_direction(self, direction) -> 'OptionPosition':
        return replace(self, direction=Direction(direction))

    def with_strike(self, strike: float) -> 'OptionPosition':
        return replace(self, strike=strike)

    def with_premium(self, premium: float) -> 'OptionPosition':
        return replace(self, premium=premium)

    def with_quantity(self, quantity: int) -> 'OptionPosition':
        return replace(self, quantity=quantity)

    def label(self) -> str:
        """Short human label, e.g. 'Long Call 100 x2'."""
        text = f"{self.direction.value.title()} {self.kind.value.title()} {self.strike:g}"
        if self.quantity != 1:
            text += f" x{self.quantity}"
        return text


class BoundKind(str, Enum):
    BOUNDED = 'bounded'
    UNBOUNDED_ABOVE = 'unbounded_above'
    UNBOUNDED_BELOW = 'unbounded_below'


@dataclass(frozen=True)
class RiskBound:
    """Maximum gain or loss: either a finite value or unbounded in one direction.

    Infinity only appears through ``to_float()``, at the presentation boundary.
    """
    kind: BoundKind
    value: float = 0.0

    @classmethod
    def bounded(cls, value: float) -> 'RiskBound':
        return cls(BoundKind.BOUNDED, float(value))

    @classmethod
    def unbounded_above(cls) -> 'RiskBound':
        return cls(BoundKind.UNBOUNDED_ABOVE)

    @classmethod
    def unbounded_below(cls) -> 'RiskBound':
        return cls(BoundKind.UNBOUNDED_BELOW)

    @property
    def is_bounded(self) -> bool:
        return self.kind is BoundKind.BOUNDED

    def to_float(self) -> float:
        if self.kind is BoundKind.UNBOUNDED_ABOVE:
            return math.inf
        if self.kind is BoundKind.UNBOUNDED_BELOW:
            return -math.inf
        return self.value


@dataclass(frozen=True)
class RiskReward:
    """Risk/reward summary for a leg or a whole portfolio."""
    max_gain: RiskBound
    max_loss: RiskBound
    break_evens: tuple[float, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> 'RiskReward':
        return cls(RiskBound.bounded(0.0), RiskBound.bounded(0.0), ())

    @property
    def first_break_even(self) -> float | None:
        return self.break_evens[0] if self.break_evens else None

    def as_dict(self) -> dict:
        """Plain floats (with infinities) for display and serialization."""
        return {
            'max_gain': self.max_gain.to_float(),
            'max_loss': self.max_loss.to_float(),
            'break_evens': list(self.break_evens),
        }
