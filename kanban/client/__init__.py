"""Client side of the board: drop resolution, filters and the API client."""
from kanban.client.api import BoardClient, BoardClientError, DragInProgressError
from kanban.client.filters import filter_cards
from kanban.client.ordering import (
    CardTarget,
    ColumnTarget,
    apply_plan,
    column_cards,
    resolve_card_drop,
    resolve_column_move,
)

__all__ = [
    "BoardClient",
    "BoardClientError",
    "DragInProgressError",
    "filter_cards",
    "CardTarget",
    "ColumnTarget",
    "apply_plan",
    "column_cards",
    "resolve_card_drop",
    "resolve_column_move",
]
