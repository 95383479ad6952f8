"""Constants and payroll defaults.

Note: Every default used when a school has no settings row lives here.
"""

from datetime import time
from decimal import Decimal

DEFAULT_ABSENCE_PENALTY_RATE = Decimal("1.0")
DEFAULT_LATENESS_PENALTY_RATE = Decimal("1.0")
DEFAULT_EARLY_DEPARTURE_PENALTY_RATE = Decimal("1.0")
DEFAULT_OVERTIME_RATE = Decimal("1.5")

DEFAULT_LATENESS_GRACE_MINUTES = 15
DEFAULT_MAX_GRACE_MINUTES = 30
DEFAULT_EARLY_DEPARTURE_GRACE_MINUTES = 15

DEFAULT_OFFICIAL_START_TIME = time(8, 0)
DEFAULT_OFFICIAL_END_TIME = time(15, 45)

DEFAULT_WORKING_HOURS_PER_DAY = Decimal("8")
DEFAULT_WORKING_DAYS_PER_MONTH = Decimal("30")

# Weekday indices start at Sunday = 0 (Friday, Saturday).
DEFAULT_WEEKEND_DAYS = frozenset({5, 6})

WEEKDAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

# Worked hours must exceed the standard day by this much before overtime is derived from them.
OVERTIME_HOURS_TOLERANCE = Decimal("0.25")

MONEY_QUANTUM = Decimal("0.01")
