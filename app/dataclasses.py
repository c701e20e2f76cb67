"""
Data classes for the auction domain.

Provides immutable records for players, teams, history entries and the
composed auction snapshot. Every auction transition builds new instances
with ``dataclasses.replace``; nothing here is mutated in place.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple

from app.constants import DEFAULT_TEAM_COLOR
from app.enums import HistoryAction, PlayerStatus


@dataclass(frozen=True)
class Player:
    """A player offered in the auction.

    ``team_id`` and ``current_price`` are set only while the player is sold.
    """
    id: str
    name: str
    base_price: float
    status: PlayerStatus = PlayerStatus.AVAILABLE
    category: Optional[str] = None
    role: Optional[str] = None
    intro: Optional[str] = None
    photo_ref: Optional[str] = None
    current_price: Optional[float] = None
    team_id: Optional[str] = None

    @property
    def is_sold(self) -> bool:
        return self.status == PlayerStatus.SOLD

    def sold_to(self, team_id: str, price: float) -> "Player":
        """Return a copy owned by ``team_id`` at ``price``."""
        return replace(
            self, status=PlayerStatus.SOLD, current_price=price, team_id=team_id
        )

    def released(self, status: PlayerStatus = PlayerStatus.AVAILABLE) -> "Player":
        """Return an unowned copy with the given status."""
        return replace(self, status=status, current_price=None, team_id=None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage and API responses."""
        return {
            "id": self.id,
            "name": self.name,
            "base_price": self.base_price,
            "status": self.status.value,
            "category": self.category,
            "role": self.role,
            "intro": self.intro,
            "photo_ref": self.photo_ref,
            "current_price": self.current_price,
            "team_id": self.team_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Player":
        """Create from dictionary."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            base_price=data.get("base_price", 0),
            status=PlayerStatus(data.get("status", PlayerStatus.AVAILABLE.value)),
            category=data.get("category"),
            role=data.get("role"),
            intro=data.get("intro"),
            photo_ref=data.get("photo_ref"),
            current_price=data.get("current_price"),
            team_id=data.get("team_id"),
        )


@dataclass(frozen=True)
class Team:
    """A bidding team with a finite budget.

    ``players`` is a denormalized roster of player snapshots. It is rebuilt
    in the same transition that updates the player collection.
    """
    id: str
    name: str
    budget: float
    remaining_budget: float
    color: str = DEFAULT_TEAM_COLOR
    players: Tuple[Player, ...] = ()

    @property
    def spent(self) -> float:
        return self.budget - self.remaining_budget

    def can_afford(self, price: float) -> bool:
        """Budget checks are inclusive: spending down to zero is allowed."""
        return self.remaining_budget >= price

    def has_player(self, player_id: str) -> bool:
        return any(p.id == player_id for p in self.players)

    def with_player(self, player: Player, price: float) -> "Team":
        """Debit ``price`` and append ``player`` to the roster."""
        return replace(
            self,
            remaining_budget=self.remaining_budget - price,
            players=self.players + (player,),
        )

    def without_player(self, player_id: str, refund: float) -> "Team":
        """Credit ``refund`` and drop ``player_id`` from the roster."""
        return replace(
            self,
            remaining_budget=self.remaining_budget + refund,
            players=tuple(p for p in self.players if p.id != player_id),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage and API responses."""
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "budget": self.budget,
            "remaining_budget": self.remaining_budget,
            "spent": self.spent,
            "players": [p.to_dict() for p in self.players],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        """Create from dictionary."""
        budget = data.get("budget", 0)
        return cls(
            id=str(data["id"]),
            name=data["name"],
            budget=budget,
            remaining_budget=data.get("remaining_budget", budget),
            color=data.get("color") or DEFAULT_TEAM_COLOR,
            players=tuple(Player.from_dict(p) for p in data.get("players", [])),
        )


@dataclass(frozen=True)
class HistoryEntry:
    """One committed biddable action. Timestamps are epoch milliseconds."""
    player_id: str
    player_name: str
    action: HistoryAction
    timestamp: int
    team_id: Optional[str] = None
    team_name: Optional[str] = None
    price: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "action": self.action.value,
            "team_id": self.team_id,
            "team_name": self.team_name,
            "price": self.price,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        """Create from dictionary."""
        return cls(
            player_id=str(data["player_id"]),
            player_name=data["player_name"],
            action=HistoryAction(data["action"]),
            timestamp=data.get("timestamp", 0),
            team_id=data.get("team_id"),
            team_name=data.get("team_name"),
            price=data.get("price"),
        )


@dataclass(frozen=True)
class AuctionState:
    """Composed auction snapshot.

    ``current_player_index`` may run past the last player; that only means
    every lot has been offered. Completion is set explicitly.
    ``history`` is ordered most recent first.
    """
    teams: Tuple[Team, ...] = ()
    players: Tuple[Player, ...] = ()
    current_player_index: int = 0
    auction_started: bool = False
    auction_completed: bool = False
    history: Tuple[HistoryEntry, ...] = ()

    @property
    def current_player(self) -> Optional[Player]:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    @property
    def all_processed(self) -> bool:
        """True once the cursor has moved past the last player."""
        return self.current_player_index >= len(self.players)

    @property
    def progress(self) -> float:
        """Percentage of lots reached, capped at 100."""
        if not self.players:
            return 0.0
        return min(100.0, (self.current_player_index + 1) / len(self.players) * 100)

    def find_player(self, player_id: str) -> Tuple[int, Optional[Player]]:
        for index, player in enumerate(self.players):
            if player.id == player_id:
                return index, player
        return -1, None

    def find_team(self, team_id: Optional[str]) -> Optional[Team]:
        return next((t for t in self.teams if t.id == team_id), None)

    def team_holding(self, player_id: str) -> Optional[Team]:
        """Team whose roster contains ``player_id``, if any."""
        return next((t for t in self.teams if t.has_player(player_id)), None)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage and API responses."""
        return {
            "teams": [t.to_dict() for t in self.teams],
            "players": [p.to_dict() for p in self.players],
            "current_player_index": self.current_player_index,
            "auction_started": self.auction_started,
            "auction_completed": self.auction_completed,
            "history": [h.to_dict() for h in self.history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuctionState":
        """Create from dictionary."""
        return cls(
            teams=tuple(Team.from_dict(t) for t in data.get("teams", [])),
            players=tuple(Player.from_dict(p) for p in data.get("players", [])),
            current_player_index=data.get("current_player_index", 0),
            auction_started=data.get("auction_started", False),
            auction_completed=data.get("auction_completed", False),
            history=tuple(HistoryEntry.from_dict(h) for h in data.get("history", [])),
        )


@dataclass(frozen=True)
class BidState:
    """Transient bid on the lot being offered. Never persisted."""
    player_id: Optional[str] = None
    current_price: float = 0
    selected_team_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "current_price": self.current_price,
            "selected_team_id": self.selected_team_id,
        }


@dataclass
class StorageStats:
    """Counts reported by the storage layer."""
    teams: int = 0
    players: int = 0
    has_auction: bool = False
    players_by_status: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "teams": self.teams,
            "players": self.players,
            "has_auction": self.has_auction,
            "players_by_status": dict(self.players_by_status),
        }


def index_by_id(items: Iterable[Any]) -> Dict[str, Any]:
    """Map ``item.id`` to item, preserving order."""
    return {item.id: item for item in items}
