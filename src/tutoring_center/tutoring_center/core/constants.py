"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

TAX_RATE = Decimal("0.18")
STALENESS_WINDOW_HOURS = 30
LEADERBOARD_LIMIT = 100

FCC_ID_PATTERN = r"^\d{4}200024$|^XXXX200024$"

TASK_STATUS_COMPLETED = "COMPLETED"
LEADERBOARD_ACTION_UPDATE = "UPDATE"
LEADERBOARD_COMPLETION_NOTE = "Score updated by task completion"

ALL_CLASSES = "ALL"

DEFAULT_EXTERNAL_TIMEOUT_SECONDS = 30

# Largest value a DECIMAL(10,2) money column holds.
MAX_STORED_AMOUNT = Decimal("99999999.99")
