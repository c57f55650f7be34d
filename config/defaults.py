"""Settings shared by every environment, read from the process environment."""

import os

from rfid_attendance.core import constants as _constants

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "rfid_attendance"),
}

PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Where verify-attendance records events when the request names no classroom.
DEFAULT_LOCATION_ID = int(os.getenv("DEFAULT_LOCATION_ID", str(_constants.DEFAULT_LOCATION_ID)))
DEFAULT_ROOM_NUMBER = os.getenv("DEFAULT_ROOM_NUMBER", _constants.DEFAULT_ROOM_NUMBER)
DEFAULT_SECTIONS = tuple(
    name.strip()
    for name in os.getenv("DEFAULT_SECTIONS", ",".join(_constants.DEFAULT_SECTIONS)).split(",")
    if name.strip()
)
