"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_DATA_FILE = "data.json"
DEFAULT_STORAGE_TIMEOUT_SECONDS = 5.0
DEFAULT_PORT = 3000

IDENTITY_FIELD = "id"
ATTENDANCE_KEY_FIELDS = ("employeeId", "date")
