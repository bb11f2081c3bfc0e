"""
Service type value object.
"""

from enum import Enum


class ServiceType(str, Enum):
    """Cleaning service type enumeration."""

    CARPET_CLEANING = "carpet_cleaning"
    UPHOLSTERY_CLEANING = "upholstery_cleaning"
    TILE_GROUT_CLEANING = "tile_grout_cleaning"
    AREA_RUG_CLEANING = "area_rug_cleaning"
    WATER_DAMAGE_RESTORATION = "water_damage_restoration"
    MAINTENANCE = "maintenance"

    @property
    def display_name(self) -> str:
        """Get human readable service name."""
        names = {
            ServiceType.CARPET_CLEANING: "Carpet Cleaning",
            ServiceType.UPHOLSTERY_CLEANING: "Upholstery Cleaning",
            ServiceType.TILE_GROUT_CLEANING: "Tile & Grout Cleaning",
            ServiceType.AREA_RUG_CLEANING: "Area Rug Cleaning",
            ServiceType.WATER_DAMAGE_RESTORATION: "Water Damage Restoration",
            ServiceType.MAINTENANCE: "Maintenance",
        }
        return names[self]
