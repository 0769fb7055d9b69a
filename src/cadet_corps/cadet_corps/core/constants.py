"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

PRESENT_THRESHOLD = 80.0
LEAVE_EARLY_THRESHOLD = 20.0

RECENT_JOIN_DAYS = 30
MIN_PASSWORD_LENGTH = 6

JUNIOR_MIN_AGE = 12
SENIOR_MIN_AGE = 14
SENIOR_MAX_AGE = 20

# Fixed column widths of the plain-text session report.
REPORT_COLUMN_WIDTHS = {
    "name": 30,
    "app_no": 10,
    "platoon": 10,
    "entry": 8,
    "exit": 8,
    "percentage": 6,
}
