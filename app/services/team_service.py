"""
Team service for managing team operations.

Encapsulates all business logic related to:
- Team CRUD operations
- Quick setup of N identical teams
- Budget edits that preserve what has been spent
"""

from dataclasses import replace
from typing import List, Optional

from app.constants import DEFAULT_TEAM_BUDGET, PRESET_COLORS
from app.dataclasses import Team
from app.db_utils import AuctionLock
from app.intake import new_id
from app.logger import get_logger
from app.services.base import ConflictError, TeamNotFoundError, ValidationError
from app.services.setup import SetupService
from app.utils import is_valid_amount

logger = get_logger(__name__)


class TeamService(SetupService):
    """Service for team-related operations.

    Handles team CRUD and budget tracking before the auction starts.
    """

    def create_team(
        self,
        name: str,
        budget: Optional[float] = None,
        color: Optional[str] = None,
    ) -> dict:
        """Create a new team.

        Args:
            name: Team name.
            budget: Team budget (defaults to DEFAULT_TEAM_BUDGET).
            color: Display color (defaults to the next preset color).

        Returns:
            Dict with success status and team ID.

        Raises:
            ValidationError: If validation fails.
            ConflictError: If the name is already taken.
            AuctionInProgressError: If the auction has started.
        """
        if not name or not name.strip():
            raise ValidationError("Team name is required")

        team_budget = budget if budget is not None else DEFAULT_TEAM_BUDGET
        if not is_valid_amount(team_budget):
            raise ValidationError("Budget must be a finite, non-negative amount")

        with AuctionLock():
            self.ensure_setup_open()
            teams = self.repo.load_teams()
            if self.repo.teams.find_by_name(name.strip()) is not None:
                raise ConflictError(f"A team named {name.strip()} already exists")

            team = Team(
                id=new_id(),
                name=name.strip(),
                budget=team_budget,
                remaining_budget=team_budget,
                color=color or PRESET_COLORS[len(teams) % len(PRESET_COLORS)],
            )
            with self.transaction():
                self.repo.replace_teams(teams + [team])

            logger.info(f"Created team: {team.name} (ID: {team.id})")

            return {'success': True, 'team_id': team.id}

    def update_team(
        self,
        team_id: str,
        name: Optional[str] = None,
        budget: Optional[float] = None,
        color: Optional[str] = None,
    ) -> dict:
        """Update an existing team.

        Changing the budget keeps the amount already spent, so the remaining
        budget moves by the same difference.

        Args:
            team_id: ID of the team to update.
            name: New name (optional).
            budget: New budget (optional).
            color: New color (optional).

        Returns:
            Dict with success status.

        Raises:
            TeamNotFoundError: If team not found.
            ValidationError: If validation fails.
        """
        with AuctionLock():
            self.ensure_setup_open()
            teams = self.repo.load_teams()
            team = next((t for t in teams if t.id == team_id), None)
            if team is None:
                raise TeamNotFoundError()

            if name is not None:
                if not name.strip():
                    raise ValidationError("Team name is required")
                team = replace(team, name=name.strip())
            if color:
                team = replace(team, color=color)
            if budget is not None:
                if not is_valid_amount(budget):
                    raise ValidationError("Budget must be a finite, non-negative amount")
                if budget < team.spent:
                    raise ValidationError(
                        f"Budget cannot be less than the {team.spent:,.0f} points already spent"
                    )
                team = replace(team, budget=budget, remaining_budget=budget - team.spent)

            with self.transaction():
                self.repo.replace_teams([team if t.id == team_id else t for t in teams])

            logger.info(f"Updated team: {team.name}")

            return {'success': True}

    def delete_team(self, team_id: str) -> dict:
        """Delete a team.

        Args:
            team_id: ID of the team to delete.

        Returns:
            Dict with success status.

        Raises:
            TeamNotFoundError: If team not found.
        """
        with AuctionLock():
            self.ensure_setup_open()
            teams = self.repo.load_teams()
            team = next((t for t in teams if t.id == team_id), None)
            if team is None:
                raise TeamNotFoundError()

            with self.transaction():
                self.repo.replace_teams([t for t in teams if t.id != team_id])

            logger.info(f"Deleted team: {team.name}")

            return {'success': True}

    def quick_setup(self, count: int, budget: float) -> dict:
        """Replace all teams with ``Team 1`` .. ``Team N`` sharing one budget.

        Args:
            count: Number of teams to create.
            budget: Budget for every team.

        Returns:
            Dict with success status and the new team IDs.

        Raises:
            ValidationError: If count or budget is invalid.
        """
        if count is None or count < 1:
            raise ValidationError("Number of teams must be at least 1")
        if budget is None or not is_valid_amount(budget):
            raise ValidationError("Budget must be a finite, non-negative amount")

        teams = [
            Team(
                id=new_id(),
                name=f"Team {i + 1}",
                budget=budget,
                remaining_budget=budget,
                color=PRESET_COLORS[i % len(PRESET_COLORS)],
            )
            for i in range(count)
        ]

        with AuctionLock():
            self.ensure_setup_open()
            with self.transaction():
                self.repo.replace_teams(teams)

        logger.info(f"Quick setup created {count} teams with budget {budget}")

        return {'success': True, 'team_ids': [t.id for t in teams]}

    def get_teams(self) -> List[dict]:
        """Get all teams.

        Returns:
            List of team dictionaries.
        """
        return [t.to_dict() for t in self.repo.load_teams()]

    def get_team(self, team_id: str) -> dict:
        """Get a specific team by ID.

        Raises:
            TeamNotFoundError: If team not found.
        """
        team = self.repo.teams.load_one(team_id)
        if team is None:
            raise TeamNotFoundError()
        return team.to_dict()


# Singleton instance for use in routes
team_service = TeamService()
