"""Filtered views of the board's cards."""
from datetime import date
from typing import Any, List, Mapping, Optional, Sequence


def filter_cards(
    cards: Sequence[Mapping[str, Any]],
    columns: Sequence[Mapping[str, Any]],
    member_id: Optional[int] = None,
    today_only: bool = False,
    query: str = "",
    today: Optional[date] = None,
) -> List[Mapping[str, Any]]:
    """Apply the member, due-today and search filters, in that order.

    A card counts as "today" when it is due today or sits in a column titled
    "Today".
    """
    filtered = list(cards)

    if member_id is not None:
        filtered = [card for card in filtered if card.get("assignee_id") == member_id]

    if today_only:
        today_iso = (today or date.today()).isoformat()
        today_column_ids = {
            column["id"] for column in columns if (column.get("title") or "").strip().lower() == "today"
        }
        filtered = [
            card
            for card in filtered
            if (card.get("due_date") or "").startswith(today_iso) or card.get("column_id") in today_column_ids
        ]

    needle = query.strip().lower()
    if needle:
        filtered = [card for card in filtered if _matches(card, needle)]

    return filtered


def _matches(card: Mapping[str, Any], needle: str) -> bool:
    if needle in (card.get("title") or "").lower():
        return True
    if needle in (card.get("description") or "").lower():
        return True
    return any(needle in str(tag).lower() for tag in card.get("tags") or [])
