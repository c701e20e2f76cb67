"""
Repository layer for data access.

This module provides repository classes that abstract database operations,
providing a clean interface for data access separate from business logic.
"""

from app.repositories.base import BaseRepository
from app.repositories.player_repository import PlayerRepository
from app.repositories.state_repository import StateRepository
from app.repositories.team_repository import TeamRepository

__all__ = [
    'BaseRepository',
    'PlayerRepository',
    'StateRepository',
    'TeamRepository',
]
