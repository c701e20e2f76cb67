"""
Centralized constants and configuration values for the auction application.

This module contains all magic numbers, default values, and configuration
constants used throughout the application.
"""

from typing import Final

# ==================== TIMEZONE ====================
DEFAULT_TIMEZONE: Final[str] = 'UTC'

# ==================== BUDGET & PRICING ====================
DEFAULT_TEAM_BUDGET: Final[int] = 100_000     # points per team
DEFAULT_BASE_PRICE: Final[int] = 10_000       # floor used by bulk import

# Quick-bid buttons shown to the operator
BID_INCREMENTS: Final[tuple] = (1_000, 5_000, 10_000, 50_000)

# ==================== TEAM COLORS ====================
PRESET_COLORS: Final[tuple] = (
    '#3b82f6',  # blue
    '#ef4444',  # red
    '#10b981',  # green
    '#f59e0b',  # amber
    '#8b5cf6',  # violet
    '#ec4899',  # pink
    '#06b6d4',  # cyan
    '#f97316',  # orange
)
DEFAULT_TEAM_COLOR: Final[str] = PRESET_COLORS[0]

# ==================== BULK IMPORT ====================
IMPORT_DELIMITER: Final[str] = ','
IMPORT_FIELDS: Final[tuple] = (
    'name', 'base_price', 'category', 'role', 'intro', 'photo_ref',
)

# ==================== PERSISTENCE ====================
AUCTION_STATE_KEY: Final[str] = 'current'
EXPORT_FILENAME_TEMPLATE: Final[str] = 'auction-results-{timestamp}.json'

# ==================== SOCKET EVENTS ====================
STATE_EVENT: Final[str] = 'auction_state'
