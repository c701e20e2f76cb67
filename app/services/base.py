"""
Base service class with transaction management.

Provides a foundation for all service classes with:
- Transaction context manager for automatic commit/rollback
- Custom exception hierarchy for consistent error handling
- Logging integration
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy.exc import SQLAlchemyError

from app import db
from app.logger import get_logger

logger = get_logger(__name__)


class ServiceError(Exception):
    """Base exception for service layer errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code for the error response.
    """

    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(ServiceError):
    """Exception raised when a requested resource is not found."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, 404)


class ValidationError(ServiceError):
    """Exception raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, 400)


class ConflictError(ServiceError):
    """Exception raised when an operation conflicts with current state."""

    def __init__(self, message: str):
        super().__init__(message, 409)


class AuthorizationError(ServiceError):
    """Exception raised when authorization fails."""

    def __init__(self, message: str = "Operator login required"):
        super().__init__(message, 403)


# ==================== AUCTION RULE VIOLATIONS ====================
# Every one of these rejects the operation before any state is built.

class SetupIncompleteError(ValidationError):
    """Raised when the auction is started without teams or players."""

    def __init__(self, message: str = "Please add teams and players first"):
        super().__init__(message)


class TeamNotSelectedError(ValidationError):
    """Raised when a sale or transfer names no team."""

    def __init__(self, message: str = "Please select a team first"):
        super().__init__(message)


class InvalidAmountError(ValidationError):
    """Raised for non-positive increments and negative prices."""


class AlreadySoldError(ConflictError):
    """Raised when selling a player whose status is already sold."""


class AlreadyAssignedError(ConflictError):
    """Raised when the player is already on some team's roster."""


class InsufficientBudgetError(ValidationError):
    """Raised when a team's remaining budget is below the price."""


class TeamNotFoundError(NotFoundError):
    """Raised when a team id does not exist."""

    def __init__(self, message: str = "Team not found"):
        super().__init__(message)


class PlayerNotFoundError(NotFoundError):
    """Raised when a player id is not in the auction."""

    def __init__(self, message: str = "Player not found"):
        super().__init__(message)


class NothingToUndoError(ValidationError):
    """Raised when undo is requested with an empty history."""

    def __init__(self, message: str = "No previous actions to undo"):
        super().__init__(message)


class AuctionNotStartedError(ConflictError):
    """Raised for lot operations before the auction starts."""

    def __init__(self, message: str = "Auction has not started"):
        super().__init__(message)


class AuctionInProgressError(ConflictError):
    """Raised for setup changes after the auction starts."""

    def __init__(self, message: str = "Auction is already in progress"):
        super().__init__(message)


class BaseService:
    """Base class for all services.

    Provides transaction management and common utilities for service classes.
    Services should inherit from this class to ensure consistent error handling
    and database transaction management.

    Example:
        class AuctionService(BaseService):
            def sell(self, player_id: str, team_id: str, price: float):
                with self.transaction():
                    # Persist the new snapshot here
                    # Automatically commits on success, rolls back on exception
                    pass
    """

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        """Context manager for database transactions.

        Automatically commits on successful completion and rolls back on any
        exception. Re-raises ServiceError subclasses as-is, wraps other
        exceptions in a generic ServiceError.

        Yields:
            None

        Raises:
            ServiceError: On database errors or unexpected exceptions.
        """
        try:
            yield
            db.session.commit()
        except ServiceError:
            db.session.rollback()
            raise
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Database error: {e}", exc_info=True)
            raise ServiceError("Database operation failed", 500)
        except Exception as e:
            db.session.rollback()
            logger.error(f"Unexpected error: {e}", exc_info=True)
            raise ServiceError("An unexpected error occurred", 500)
