"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_TOKEN_HOURS = 24
DEFAULT_HISTORY_LIMIT = 200
DEFAULT_LOG_LIMIT = 500
MAX_HOURS_PER_EVENT = Decimal("999.99")
HOURS_QUANTUM = Decimal("0.01")
