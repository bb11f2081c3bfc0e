"""
Service zone value object.
"""

from enum import Enum


class Zone(str, Enum):
    """Service area zone enumeration."""

    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"
    CENTRAL = "Central"
