"""
Centralized business constants for the option payoff analyzer.

All hardcoded values that drive sampling, risk analysis, charting and color
allocation are defined here. Import from this module instead of hardcoding
values in business logic.
"""

# --- Sampling Strategy ---

# Multipliers applied to every valid strike; payoff kinks sit exactly at strikes
STRIKE_SAMPLE_MULTIPLIERS = (0.9, 0.95, 1.0, 1.05, 1.1)

# Far-right bound: 1.5x the highest strike approximates the asymptotic slope
FAR_RIGHT_MULTIPLIER = 1.5

# Candidate range used when the portfolio has no valid positions
DEFAULT_PRICE_RANGE = (0.0, 100000.0)


# --- Break-Even Search ---

# Crossings closer than this (absolute, in price units) are the same break-even
BREAK_EVEN_TOLERANCE = 0.01

# Break-evens are reported rounded to cents
BREAK_EVEN_DECIMALS = 2


# --- Chart ---

# Visible x-range: 0.7x lowest strike to 1.3x highest strike
CHART_DOMAIN_LOW = 0.7
CHART_DOMAIN_HIGH = 1.3

# Evenly spaced grid points across the visible range (kinks are added on top)
CHART_GRID_POINTS = 200

CHART_HEIGHT = 500


# --- Color Allocation ---

# Minimum circular hue distance (degrees) between two issued leg colors
HUE_THRESHOLD = 30

SATURATION_RANGE = (50, 90)
LIGHTNESS_RANGE = (30, 60)

# Random candidates tried before falling back to the farthest one seen
MAX_COLOR_ATTEMPTS = 100


# --- Dash Server Defaults (overridable through environment / .env) ---

APP_HOST = '127.0.0.1'
APP_PORT = 8050
