"""
Hue-separated color allocation for leg curves.

Each issued color keeps at least HUE_THRESHOLD degrees of circular hue distance
from every color issued before it. When no such hue turns up within the retry
budget, the candidate farthest from all issued hues is used instead.
"""

import logging
import random

from payoff_analyzer.config import (
    HUE_THRESHOLD,
    SATURATION_RANGE,
    LIGHTNESS_RANGE,
    MAX_COLOR_ATTEMPTS,
)

logger = logging.getLogger(__name__)


def hue_distance(h1: float, h2: float) -> float:
    """Circular distance between two hues in degrees (0-180)."""
    delta = abs(h1 - h2) % 360
    return min(delta, 360 - delta)


def hsl_to_hex(h: float, s: float, l: float) -> str:
    """Convert HSL (h: 0-360, s/l: 0-100) to a '#rrggbb' string."""
    l /= 100
    a = s * min(l, 1 - l) / 100

    def channel(n):
        k = (n + h / 30) % 12
        color = l - a * max(min(k - 3, 9 - k, 1), -1)
        return round(255 * min(max(color, 0), 1))

    return '#{:02x}{:02x}{:02x}'.format(channel(0), channel(8), channel(4))


class ColorAllocator:
    """Issues visually distinct colors, one per call to next().

    The allocator can be rebuilt from the hues it already issued, which is how
    the dashboard keeps it across stateless callbacks.
    """

    def __init__(self, issued_hues=None, hue_threshold=HUE_THRESHOLD,
                 max_attempts=MAX_COLOR_ATTEMPTS, rng=None):
        self.issued_hues = list(issued_hues or [])
        self.hue_threshold = hue_threshold
        self.max_attempts = max_attempts
        self._rng = rng or random.Random()

    def _min_distance(self, hue: float) -> float:
        if not self.issued_hues:
            return 180.0
        return min(hue_distance(hue, h) for h in self.issued_hues)

    def _random_hsl(self):
        h = self._rng.randrange(360)
        s = self._rng.uniform(*SATURATION_RANGE)
        l = self._rng.uniform(*LIGHTNESS_RANGE)
        return h, s, l

    def next_hsl(self):
        best = None
        best_distance = -1.0
        for _ in range(self.max_attempts):
            candidate = self._random_hsl()
            distance = self._min_distance(candidate[0])
            if distance >= self.hue_threshold:
                best = candidate
                break
            if distance > best_distance:
                best, best_distance = candidate, distance
        else:
            logger.warning(
                f"No hue at least {self.hue_threshold} degrees from {len(self.issued_hues)} "
                f"issued colors; using closest available (distance {best_distance:.0f})"
            )
        self.issued_hues.append(best[0])
        return best

    def next(self) -> str:
        """Return the next color as a hex string."""
        return hsl_to_hex(*self.next_hsl())
