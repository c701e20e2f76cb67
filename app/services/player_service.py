"""
Player service for managing player operations.

Encapsulates all business logic related to:
- Player CRUD operations
- Bulk import from pasted delimited text
- Player queries and filtering
"""

from dataclasses import replace
from typing import List, Optional

from app.constants import DEFAULT_BASE_PRICE
from app.dataclasses import Player
from app.db_utils import AuctionLock
from app.enums import PlayerStatus
from app.intake import new_id, parse_player_lines
from app.logger import get_logger
from app.services.base import PlayerNotFoundError, ValidationError
from app.services.setup import SetupService
from app.utils import blank_to_none, is_valid_amount

logger = get_logger(__name__)

EDITABLE_FIELDS = ('category', 'role', 'intro', 'photo_ref')


class PlayerService(SetupService):
    """Service for player-related operations.

    Handles player CRUD, bulk import and queries before the auction starts.
    """

    def create_player(
        self,
        name: str,
        base_price: float,
        category: Optional[str] = None,
        role: Optional[str] = None,
        intro: Optional[str] = None,
        photo_ref: Optional[str] = None,
    ) -> dict:
        """Create a new player.

        Args:
            name: Player's name.
            base_price: Floor price for the auction.
            category: Optional grouping (e.g. 'Marquee').
            role: Optional playing role.
            intro: Optional free-text introduction.
            photo_ref: Optional photo URL or reference.

        Returns:
            Dict with success status and player ID.

        Raises:
            ValidationError: If validation fails.
        """
        if not name or not name.strip():
            raise ValidationError("Player name is required")
        if base_price is None or not is_valid_amount(base_price):
            raise ValidationError("Base price must be a finite, non-negative amount")

        player = Player(
            id=new_id(),
            name=name.strip(),
            base_price=base_price,
            category=blank_to_none(category),
            role=blank_to_none(role),
            intro=blank_to_none(intro),
            photo_ref=blank_to_none(photo_ref),
        )

        with AuctionLock():
            self.ensure_setup_open()
            with self.transaction():
                self.repo.replace_players(self.repo.load_players() + [player])

        logger.info(f"Created player: {player.name} (ID: {player.id})")

        return {'success': True, 'player_id': player.id}

    def update_player(
        self,
        player_id: str,
        name: Optional[str] = None,
        base_price: Optional[float] = None,
        **fields: Optional[str]
    ) -> dict:
        """Update an existing player.

        Args:
            player_id: ID of the player to update.
            name: New name (optional).
            base_price: New base price (optional).
            **fields: Any of category, role, intro, photo_ref. An empty
                string clears the field.

        Returns:
            Dict with success status.

        Raises:
            PlayerNotFoundError: If player not found.
            ValidationError: If validation fails.
        """
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")

        with AuctionLock():
            self.ensure_setup_open()
            players = self.repo.load_players()
            player = next((p for p in players if p.id == player_id), None)
            if player is None:
                raise PlayerNotFoundError()

            if name is not None:
                if not name.strip():
                    raise ValidationError("Player name is required")
                player = replace(player, name=name.strip())
            if base_price is not None:
                if not is_valid_amount(base_price):
                    raise ValidationError("Base price must be a finite, non-negative amount")
                player = replace(player, base_price=base_price)
            player = replace(player, **{k: blank_to_none(v) for k, v in fields.items()})

            with self.transaction():
                self.repo.replace_players(
                    [player if p.id == player_id else p for p in players]
                )

            logger.info(f"Updated player: {player.name}")

            return {'success': True}

    def delete_player(self, player_id: str) -> dict:
        """Delete a player.

        Raises:
            PlayerNotFoundError: If player not found.
        """
        with AuctionLock():
            self.ensure_setup_open()
            players = self.repo.load_players()
            player = next((p for p in players if p.id == player_id), None)
            if player is None:
                raise PlayerNotFoundError()

            with self.transaction():
                self.repo.replace_players([p for p in players if p.id != player_id])

            logger.info(f"Deleted player: {player.name}")

            return {'success': True}

    def import_players(
        self,
        text: str,
        default_base_price: float = DEFAULT_BASE_PRICE,
    ) -> dict:
        """Append players parsed from pasted delimited text.

        Args:
            text: One player per line (see ``app.intake``).
            default_base_price: Floor for records without a usable price.

        Returns:
            Dict with success status, count and the new player IDs.

        Raises:
            ValidationError: If there is nothing to import.
        """
        if not text or not text.strip():
            raise ValidationError("Nothing to import")

        imported = parse_player_lines(text, default_base_price)

        with AuctionLock():
            self.ensure_setup_open()
            with self.transaction():
                self.repo.replace_players(self.repo.load_players() + imported)

        logger.info(f"Imported {len(imported)} players")

        return {
            'success': True,
            'count': len(imported),
            'player_ids': [p.id for p in imported],
        }

    def get_players(
        self,
        status: Optional[str] = None,
        team_id: Optional[str] = None,
    ) -> List[dict]:
        """Get players, optionally filtered by status or owning team.

        Raises:
            ValidationError: If ``status`` is not a known status.
        """
        if status:
            try:
                players = self.repo.get_players_by_status(PlayerStatus.from_string(status))
            except ValueError:
                raise ValidationError(f"Invalid status: {status}")
        elif team_id:
            players = self.repo.get_players_by_team(team_id)
        else:
            players = self.repo.load_players()
        return [p.to_dict() for p in players]


# Singleton instance for use in routes
player_service = PlayerService()
