"""
Enums for the live auction application.

Provides type-safe constants for player statuses and history actions.
"""

from enum import Enum


class PlayerStatus(str, Enum):
    """Player auction status."""
    AVAILABLE = "available"
    SOLD = "sold"
    UNSOLD = "unsold"
    PASSED = "passed"

    @classmethod
    def from_string(cls, value: str) -> "PlayerStatus":
        """Convert string to PlayerStatus.

        Raises:
            ValueError: If the value is not a known status.
        """
        return cls(value.lower().strip())


class HistoryAction(str, Enum):
    """Biddable actions recorded in the auction history."""
    SOLD = "sold"
    UNSOLD = "unsold"
    PASSED = "passed"
