"""
Configuration module: Settings, logging, constants.
"""

from shared.config.settings import settings, API_BASE_URL
from shared.config.logging import get_logger, setup_logging
from shared.config.constants import (
    TeamRole,
    RestaurantStatus,
    PosType,
    StorageKeys,
    Limits,
)

__all__ = [
    # settings
    "settings",
    "API_BASE_URL",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "TeamRole",
    "RestaurantStatus",
    "PosType",
    "StorageKeys",
    "Limits",
]
