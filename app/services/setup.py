"""
Shared base for the setup services.

Teams and players are edited only before the auction starts; afterwards
the auction snapshot owns them until the data is reset.
"""

from typing import Optional

from app.repositories.state_repository import StateRepository
from app.services.base import AuctionInProgressError, BaseService


class SetupService(BaseService):
    """Base for services that edit the setup collections."""

    def __init__(self, repo: Optional[StateRepository] = None):
        """Initialize service with optional repository injection.

        Args:
            repo: StateRepository instance (defaults to new instance).
        """
        self.repo = repo or StateRepository()

    def ensure_setup_open(self) -> None:
        """Raise if the auction has already started.

        Raises:
            AuctionInProgressError: If setup is locked.
        """
        state = self.repo.load_auction_state()
        if state is not None and state.auction_started:
            raise AuctionInProgressError(
                "Teams and players cannot be changed once the auction has started"
            )
