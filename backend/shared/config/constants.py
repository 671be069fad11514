"""
Centralized constants for the back-office.
Avoid magic strings and repeated constants.

Usage:
    from shared.config.constants import PosType, TeamRole, StorageKeys

    if config.pos_type == PosType.MPLUSKASSA:
        ...

    key = StorageKeys.onboarding(restaurant_id)
"""

from typing import Final


# =============================================================================
# Team Roles
# =============================================================================


class TeamRole:
    """Role names used by onboarding personnel and team forms."""

    MANAGER: Final[str] = "manager"
    STAFF: Final[str] = "staff"

    ALL: Final[list[str]] = [MANAGER, STAFF]


# =============================================================================
# Restaurant Status
# =============================================================================


class RestaurantStatus:
    """Restaurant status values reported by the backend."""

    ACTIVE: Final[str] = "active"
    INACTIVE: Final[str] = "inactive"
    ONBOARDING: Final[str] = "onboarding"
    DELETED: Final[str] = "deleted"

    ALL: Final[list[str]] = [ACTIVE, INACTIVE, ONBOARDING, DELETED]


# =============================================================================
# POS Providers
# =============================================================================


class PosType:
    """Supported point-of-sale providers."""

    MPLUSKASSA: Final[str] = "mpluskassa"
    UNTILL: Final[str] = "untill"

    ALL: Final[list[str]] = [MPLUSKASSA, UNTILL]


# =============================================================================
# QR stands / table sections
# =============================================================================


# Section names offered by the QR stand step (Dutch, as printed on stands)
DEFAULT_TABLE_SECTIONS: Final[tuple[str, ...]] = ("bar", "binnen", "terras", "lounge")

# Template for Google review links derived from a place id
GOOGLE_REVIEW_URL: Final[str] = "https://search.google.com/local/writereview?placeid={place_id}"


# =============================================================================
# Storage keys
# =============================================================================


class StorageKeys:
    """Key names in the key-value store."""

    AUTH_TOKEN: Final[str] = "auth_token"
    ONBOARDING_PREFIX: Final[str] = "onboarding_"

    @staticmethod
    def onboarding(restaurant_id: int | str) -> str:
        return f"{StorageKeys.ONBOARDING_PREFIX}{restaurant_id}"


# =============================================================================
# Pagination Limits
# =============================================================================


class Limits:
    """Limit constants for listings."""

    DEFAULT_PAGE_SIZE: Final[int] = 50
    MAX_PAGE_SIZE: Final[int] = 200

    MIN_PASSWORD_LENGTH: Final[int] = 8
