"""
Results export.

Read-only summary of team spending and rosters for download or printing.
"""

from typing import Any, Dict, Iterable, List, Optional

from app.constants import EXPORT_FILENAME_TEMPLATE
from app.dataclasses import Team
from app.utils import now_ms


def build_results(teams: Iterable[Team]) -> List[Dict[str, Any]]:
    """Per-team budget, spend, remaining and roster."""
    return [{
        'team': team.name,
        'total_budget': team.budget,
        'spent': team.spent,
        'remaining': team.remaining_budget,
        'players': [{
            'name': p.name,
            'price': p.current_price,
            'role': p.role,
            'category': p.category,
        } for p in team.players],
    } for team in teams]


def export_filename(timestamp: Optional[int] = None) -> str:
    return EXPORT_FILENAME_TEMPLATE.format(
        timestamp=now_ms() if timestamp is None else timestamp
    )
