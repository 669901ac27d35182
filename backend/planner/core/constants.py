"""Shared application constants.

Centralizes calendar and money values used across the aggregation,
navigation and API layers so we can document and adjust them in one place.
"""

from decimal import Decimal

# Working week shown on the board: Monday..Saturday (Sunday is off)
DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
WORKING_DAYS = len(DAY_NAMES)

# Navigation wraps here unless strict ISO week counting is enabled
APPROX_WEEKS_PER_YEAR = 52

# Revenue is presented in whole cents, hours and percentages to 2 places
CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")
