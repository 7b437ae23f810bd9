"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 1440
DEFAULT_HALF_DAY_THRESHOLD_MINUTES = 240

TIME_PLACEHOLDER = "--:--"
UNASSIGNED_SHIFT_LABEL = "No Shift Bound in Ledger"
UNASSIGNED_SHIFT_SHORT_LABEL = "Unassigned"
ROOT_ASSIGNMENT_TOKEN = "ROOT"
