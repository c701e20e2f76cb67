"""
Bulk player intake.

Turns pasted delimited text into ``Player`` records. One player per line,
fields in this order::

    name, base_price, category, role, intro, photo_ref

Trailing fields may be omitted. Blank lines are skipped.
"""

import uuid
from typing import Iterable, List, Union

from app.constants import DEFAULT_BASE_PRICE, IMPORT_DELIMITER, IMPORT_FIELDS
from app.dataclasses import Player
from app.enums import PlayerStatus
from app.utils import blank_to_none, is_valid_amount, safe_float


def new_id() -> str:
    """Fresh unique id for a team or player."""
    return uuid.uuid4().hex


def parse_player_line(
    line: str,
    number: int,
    default_base_price: float = DEFAULT_BASE_PRICE,
) -> Player:
    """Build one player from a delimited record.

    Args:
        line: The raw record.
        number: 1-based position, used to name players with no name.
        default_base_price: Floor used when the price is missing or not
            a positive number.

    Returns:
        A new available Player with a fresh id.
    """
    values = [v.strip() for v in line.split(IMPORT_DELIMITER)]
    values += [''] * (len(IMPORT_FIELDS) - len(values))
    fields = dict(zip(IMPORT_FIELDS, values))

    base_price = safe_float(fields['base_price'], default=0.0)
    if not is_valid_amount(base_price, allow_zero=False):
        base_price = default_base_price

    return Player(
        id=new_id(),
        name=fields['name'] or f"Player {number}",
        base_price=base_price,
        status=PlayerStatus.AVAILABLE,
        category=blank_to_none(fields['category']),
        role=blank_to_none(fields['role']),
        intro=blank_to_none(fields['intro']),
        photo_ref=blank_to_none(fields['photo_ref']),
    )


def parse_player_lines(
    text: Union[str, Iterable[str]],
    default_base_price: float = DEFAULT_BASE_PRICE,
) -> List[Player]:
    """Parse many records.

    Args:
        text: Either the pasted text or an iterable of lines.
        default_base_price: Floor for records without a usable price.

    Returns:
        Players in input order.
    """
    lines = text.splitlines() if isinstance(text, str) else list(text)
    records = [line for line in lines if line.strip()]
    return [
        parse_player_line(line, number, default_base_price)
        for number, line in enumerate(records, start=1)
    ]
