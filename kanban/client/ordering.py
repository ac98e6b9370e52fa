"""Turns a drag-and-drop gesture into a reorder plan.

Cards are the JSON rows returned by the API (``id``, ``column_id``,
``order_index`` ...). A plan lists the new position of every card in each
column the gesture touched; positions are always ``0..n-1`` per column.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from kanban.schemas import CardOrder, ColumnOrder

Row = Mapping[str, Any]


@dataclass(frozen=True)
class ColumnTarget:
    """Drop on a column: append to the end of its cards."""

    column_id: int


@dataclass(frozen=True)
class CardTarget:
    """Drop on a card: take that card's place in its column."""

    card_id: int


DropTarget = Union[ColumnTarget, CardTarget]


def column_cards(cards: Sequence[Row], column_id: int) -> List[Row]:
    """Cards of ``column_id`` by order index; ties keep their fetch order."""
    return sorted((card for card in cards if card["column_id"] == column_id), key=lambda card: card["order_index"])


def _find(rows: Sequence[Row], row_id: int) -> Optional[Row]:
    return next((row for row in rows if row["id"] == row_id), None)


def resolve_card_drop(
    cards: Sequence[Row],
    card_id: int,
    target: Optional[DropTarget],
) -> Optional[List[CardOrder]]:
    """Compute the order plan for dropping ``card_id`` on ``target``.

    Returns ``None`` when the gesture should be abandoned without a request:
    no target, an unknown card, or a card dropped on itself.
    """
    if target is None:
        return None

    dragged = _find(cards, card_id)
    if dragged is None:
        return None

    if isinstance(target, CardTarget):
        if target.card_id == card_id:
            return None
        over = _find(cards, target.card_id)
        if over is None:
            return None
        target_column_id = over["column_id"]
        siblings = column_cards(cards, target_column_id)
        target_index = next(i for i, card in enumerate(siblings) if card["id"] == over["id"])
    else:
        target_column_id = target.column_id
        target_index = len(column_cards(cards, target_column_id))

    remaining = [card for card in cards if card["id"] != card_id]
    target_cards = column_cards(remaining, target_column_id)
    target_cards.insert(target_index, {**dragged, "column_id": target_column_id})

    plan = [
        CardOrder(id=card["id"], column_id=target_column_id, order_index=index)
        for index, card in enumerate(target_cards)
    ]

    source_column_id = dragged["column_id"]
    if source_column_id != target_column_id:
        plan.extend(
            CardOrder(id=card["id"], column_id=source_column_id, order_index=index)
            for index, card in enumerate(column_cards(remaining, source_column_id))
        )

    return plan


def resolve_column_move(
    columns: Sequence[Row],
    column_id: int,
    target_index: int,
) -> Optional[List[ColumnOrder]]:
    """Plan for moving a column to ``target_index`` among the board's columns."""
    ordered = sorted(columns, key=lambda column: (column["order_index"], column["id"]))
    moving = _find(ordered, column_id)
    if moving is None:
        return None

    ordered = [column for column in ordered if column["id"] != column_id]
    target_index = max(0, min(target_index, len(ordered)))
    ordered.insert(target_index, moving)
    return [ColumnOrder(id=column["id"], order_index=index) for index, column in enumerate(ordered)]


def apply_plan(rows: Sequence[Row], plan: Sequence[Union[CardOrder, ColumnOrder]]) -> List[Dict[str, Any]]:
    """Return copies of ``rows`` with the plan's positions applied."""
    updates = {entry.id: entry for entry in plan}
    result = []
    for row in rows:
        row = dict(row)
        entry = updates.get(row["id"])
        if entry is not None:
            row["order_index"] = entry.order_index
            if getattr(entry, "column_id", None) is not None:
                row["column_id"] = entry.column_id
        result.append(row)
    return result
