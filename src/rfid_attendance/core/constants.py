"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across handlers.
"""

DEFAULT_LOCATION_ID = 1
DEFAULT_ROOM_NUMBER = "Default Room"
DEFAULT_SECTIONS = ("CS-A", "CS-B", "EE-A", "EE-B", "ME-A", "ME-B")

UNKNOWN_SECTION_LABEL = "Unknown"

# Column widths from schema.sql; longer values are rejected before any insert.
MAX_NAME_LENGTH = 100
MAX_RFID_TAG_LENGTH = 100
MAX_SECTION_NAME_LENGTH = 50
MAX_ID_NUMBER_LENGTH = 20
