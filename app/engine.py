"""
Auction engine.

Pure state transitions over an ``AuctionState`` snapshot. Each function
validates its guards first, then builds and returns a new snapshot; the
snapshot passed in is never modified and nothing is stored here between
calls. Persisting the result is the caller's job.

Lot transitions (sell, unsold, pass, undo) advance or rewind the cursor and
write to the history. Corrections (transfer, status override) change the
same collections but are not recorded in the history, so Undo never
reverts them.
"""

import math
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from app.dataclasses import AuctionState, BidState, HistoryEntry, Player, Team
from app.enums import HistoryAction, PlayerStatus
from app.services.base import (
    AlreadyAssignedError,
    AlreadySoldError,
    AuctionNotStartedError,
    InsufficientBudgetError,
    InvalidAmountError,
    NothingToUndoError,
    PlayerNotFoundError,
    SetupIncompleteError,
    TeamNotFoundError,
    TeamNotSelectedError,
)
from app.utils import is_valid_amount, now_ms


# ==================== LIFECYCLE ====================

def initial_state(teams: Iterable[Team], players: Iterable[Player]) -> AuctionState:
    """Snapshot shown before the auction starts.

    The working set is the players still available, in the order given.
    """
    return AuctionState(
        teams=tuple(teams),
        players=tuple(p for p in players if p.status == PlayerStatus.AVAILABLE),
    )


def start_auction(teams: Iterable[Team], players: Iterable[Player]) -> AuctionState:
    """Start the auction over the available players.

    Raises:
        SetupIncompleteError: If there are no teams or no players.
    """
    teams = tuple(teams)
    players = tuple(players)
    if not teams or not players:
        raise SetupIncompleteError()

    return replace(initial_state(teams, players), auction_started=True)


def end_auction(state: AuctionState) -> AuctionState:
    """Mark the auction completed. Never inferred from the cursor."""
    _require_started(state)
    return replace(state, auction_completed=True)


# ==================== BID ADJUSTMENTS ====================
# The running bid lives outside committed state; these only build BidState.

def bid_for(player: Optional[Player]) -> BidState:
    """Fresh bid for a lot: base price, no team selected."""
    if player is None:
        return BidState()
    return BidState(player_id=player.id, current_price=player.base_price)


def set_current_price(bid: BidState, price: float) -> BidState:
    """Set the running bid directly.

    Raises:
        InvalidAmountError: If ``price`` is negative or not finite.
    """
    if not is_valid_amount(price):
        raise InvalidAmountError("Price must be a finite, non-negative amount")
    return replace(bid, current_price=price)


def increment_price(bid: BidState, amount: float) -> BidState:
    """Raise the running bid. Only strictly positive amounts are accepted.

    Raises:
        InvalidAmountError: If ``amount`` is zero, negative or not finite.
    """
    if not is_valid_amount(amount, allow_zero=False):
        raise InvalidAmountError("Increment must be positive")
    return replace(bid, current_price=bid.current_price + amount)


def reset_to_base(bid: BidState, player: Player) -> BidState:
    """Back to the lot's floor price with no team selected."""
    return replace(
        bid, player_id=player.id, current_price=player.base_price, selected_team_id=None
    )


def select_team(bid: BidState, state: AuctionState, team_id: str) -> BidState:
    """Choose the team the running bid belongs to.

    Raises:
        TeamNotFoundError: If ``team_id`` is not in the auction.
    """
    if state.find_team(team_id) is None:
        raise TeamNotFoundError()
    return replace(bid, selected_team_id=team_id)


# ==================== LOT TRANSITIONS ====================

def sell(
    state: AuctionState,
    player_id: str,
    team_id: Optional[str],
    price: float,
    timestamp: Optional[int] = None,
) -> AuctionState:
    """Sell a player to a team and advance the cursor.

    Guards run in this order: team selected, player exists, not already
    sold, not on any roster, team exists, price is a finite non-negative
    amount, team can afford the price.

    Raises:
        TeamNotSelectedError, PlayerNotFoundError, AlreadySoldError,
        AlreadyAssignedError, TeamNotFoundError, InvalidAmountError,
        InsufficientBudgetError
    """
    _require_started(state)
    if not team_id:
        raise TeamNotSelectedError("Please select a team before marking as sold")

    player = _get_player(state, player_id)

    if player.is_sold:
        owner = state.find_team(player.team_id)
        raise AlreadySoldError(
            f"{player.name} is already sold to {owner.name if owner else 'another team'}"
        )

    holder = state.team_holding(player.id)
    if holder is not None:
        raise AlreadyAssignedError(f"{player.name} is already in {holder.name}")

    team = state.find_team(team_id)
    if team is None:
        raise TeamNotFoundError()
    if not is_valid_amount(price):
        raise InvalidAmountError("Price must be a finite, non-negative amount")
    if not team.can_afford(price):
        raise InsufficientBudgetError(
            f"{team.name} does not have enough budget for this bid"
        )

    sold = player.sold_to(team.id, price)
    entry = HistoryEntry(
        player_id=player.id,
        player_name=player.name,
        action=HistoryAction.SOLD,
        timestamp=_stamp(timestamp),
        team_id=team.id,
        team_name=team.name,
        price=price,
    )
    return replace(
        state,
        players=_swap_player(state.players, sold),
        teams=_swap_team(state.teams, team.with_player(sold, price)),
        history=(entry,) + state.history,
        current_player_index=state.current_player_index + 1,
    )


def mark_unsold(
    state: AuctionState,
    player_id: str,
    timestamp: Optional[int] = None,
) -> AuctionState:
    """Mark a player unsold and advance. No budget or team checks."""
    _require_started(state)
    player = _get_player(state, player_id)

    entry = HistoryEntry(
        player_id=player.id,
        player_name=player.name,
        action=HistoryAction.UNSOLD,
        timestamp=_stamp(timestamp),
    )
    return replace(
        state,
        players=_swap_player(state.players, player.released(PlayerStatus.UNSOLD)),
        history=(entry,) + state.history,
        current_player_index=state.current_player_index + 1,
    )


def pass_player(
    state: AuctionState,
    player_id: str,
    timestamp: Optional[int] = None,
) -> AuctionState:
    """Record a pass and advance.

    The player's stored status is left exactly as it was, so undoing a pass
    only removes the history entry.
    """
    _require_started(state)
    player = _get_player(state, player_id)

    entry = HistoryEntry(
        player_id=player.id,
        player_name=player.name,
        action=HistoryAction.PASSED,
        timestamp=_stamp(timestamp),
    )
    return replace(
        state,
        history=(entry,) + state.history,
        current_player_index=state.current_player_index + 1,
    )


def move_to_next(state: AuctionState) -> AuctionState:
    _require_started(state)
    return replace(state, current_player_index=state.current_player_index + 1)


def undo(state: AuctionState) -> AuctionState:
    """Revert the most recent history entry and step the cursor back.

    A sold entry releases the player from whichever team holds it now and
    refunds what that team paid. An unsold entry makes the player available
    again. A passed entry changes nothing but the history.

    Raises:
        NothingToUndoError: If the history is empty.
    """
    _require_started(state)
    if not state.history:
        raise NothingToUndoError()

    last = state.history[0]
    teams = state.teams
    players = state.players

    if last.action in (HistoryAction.SOLD, HistoryAction.UNSOLD):
        _, player = state.find_player(last.player_id)
        if player is not None:
            teams = _release_from_team(state, player)
            players = _swap_player(players, player.released(PlayerStatus.AVAILABLE))

    return replace(
        state,
        teams=teams,
        players=players,
        history=state.history[1:],
        current_player_index=max(0, state.current_player_index - 1),
    )


# ==================== CORRECTIONS ====================

def transfer(
    state: AuctionState,
    player_id: str,
    new_team_id: Optional[str],
    price: Optional[float] = None,
) -> AuctionState:
    """Move a player to another team outside the normal sell flow.

    ``price`` defaults to what the player last sold for, then to its base
    price. The previous owner, if any, gets its spend back. Not recorded in
    the history.

    Raises:
        TeamNotSelectedError, PlayerNotFoundError, TeamNotFoundError,
        InsufficientBudgetError, InvalidAmountError
    """
    _require_started(state)
    if not new_team_id:
        raise TeamNotSelectedError("Please select a team to transfer the player to")

    player = _get_player(state, player_id)
    if price is None:
        price = player.current_price if player.current_price is not None else player.base_price
    if not is_valid_amount(price):
        raise InvalidAmountError("Price must be a finite, non-negative amount")

    destination = state.find_team(new_team_id)
    if destination is None:
        raise TeamNotFoundError("Selected team does not exist")
    if not destination.can_afford(price):
        raise InsufficientBudgetError(
            f"{destination.name} does not have enough budget "
            f"({destination.remaining_budget:,.0f} points available)"
        )

    teams = _release_from_team(state, player)
    moved = player.sold_to(destination.id, price)
    destination = next(t for t in teams if t.id == destination.id)
    return replace(
        state,
        players=_swap_player(state.players, moved),
        teams=_swap_team(teams, destination.with_player(moved, price)),
    )


def set_status(
    state: AuctionState,
    player_id: str,
    new_status: PlayerStatus,
) -> AuctionState:
    """Manual status override. Not recorded in the history.

    Moving a player to any status other than sold releases it from its
    team with a refund. The status itself is set unconditionally.
    """
    _require_started(state)
    player = _get_player(state, player_id)
    new_status = PlayerStatus(new_status)

    teams = state.teams
    if new_status != PlayerStatus.SOLD and (
        player.team_id is not None or state.team_holding(player.id) is not None
    ):
        teams = _release_from_team(state, player)
        updated = player.released(new_status)
    else:
        updated = replace(player, status=new_status)

    return replace(
        state,
        teams=teams,
        players=_swap_player(state.players, updated),
    )


# ==================== NAVIGATION ====================

def select_player(state: AuctionState, player_id: str) -> AuctionState:
    """Jump the cursor to any player, sold or not.

    Raises:
        PlayerNotFoundError: If the player is not in the working set.
    """
    _require_started(state)
    index, _ = state.find_player(player_id)
    if index < 0:
        raise PlayerNotFoundError()
    return replace(state, current_player_index=index)


# ==================== INVARIANTS ====================

def check_invariants(state: AuctionState) -> List[str]:
    """Return a description of every broken invariant; empty when sound."""
    problems: List[str] = []
    owners = {}

    for team in state.teams:
        if not 0 <= team.remaining_budget <= team.budget:
            problems.append(
                f"{team.name}: remaining budget {team.remaining_budget} "
                f"outside 0..{team.budget}"
            )
        roster_spend = sum(p.current_price or 0 for p in team.players)
        if not math.isclose(team.spent, roster_spend, abs_tol=1e-6):
            problems.append(
                f"{team.name}: spent {team.spent} but roster totals {roster_spend}"
            )
        for member in team.players:
            if member.id in owners:
                problems.append(f"{member.name} is on more than one roster")
            owners[member.id] = team.id

    for player in state.players:
        if (player.team_id is not None) != player.is_sold or (
            player.current_price is not None
        ) != player.is_sold:
            problems.append(f"{player.name}: ownership fields disagree with status")
        if player.is_sold and owners.get(player.id) != player.team_id:
            problems.append(f"{player.name}: sold but not on its team's roster")
        if not player.is_sold and player.id in owners:
            problems.append(f"{player.name}: on a roster but not sold")

    return problems


# ==================== HELPERS ====================

def _require_started(state: AuctionState) -> None:
    if not state.auction_started:
        raise AuctionNotStartedError()


def _get_player(state: AuctionState, player_id: str) -> Player:
    _, player = state.find_player(player_id)
    if player is None:
        raise PlayerNotFoundError()
    return player


def _stamp(timestamp: Optional[int]) -> int:
    return now_ms() if timestamp is None else timestamp


def _swap_player(players: Tuple[Player, ...], updated: Player) -> Tuple[Player, ...]:
    return tuple(updated if p.id == updated.id else p for p in players)


def _swap_team(teams: Tuple[Team, ...], updated: Team) -> Tuple[Team, ...]:
    return tuple(updated if t.id == updated.id else t for t in teams)


def _release_from_team(state: AuctionState, player: Player) -> Tuple[Team, ...]:
    """Teams with ``player`` removed from whichever roster holds it.

    The holder is credited what it paid: the player's current price, or the
    roster copy's price if the player record has lost it.
    """
    holder = state.find_team(player.team_id) if player.team_id else None
    if holder is None or not holder.has_player(player.id):
        holder = state.team_holding(player.id)
    if holder is None:
        return state.teams

    paid = player.current_price
    if paid is None:
        paid = next(
            (p.current_price for p in holder.players if p.id == player.id), None
        )
    return _swap_team(state.teams, holder.without_player(player.id, paid or 0))
