"""
Pydantic schemas for request/response validation
"""
from kanban.schemas.board import BoardUpdate, BoardResponse, BoardState, BoardExport, THEMES
from kanban.schemas.column import (
    ColumnCreate,
    ColumnUpdate,
    ColumnOrder,
    ColumnReorderRequest,
    ColumnResponse,
)
from kanban.schemas.card import CardCreate, CardUpdate, CardOrder, CardReorderRequest, CardResponse
from kanban.schemas.member import MemberCreate, MemberUpdate, MemberResponse

__all__ = [
    "BoardUpdate",
    "BoardResponse",
    "BoardState",
    "BoardExport",
    "THEMES",
    "ColumnCreate",
    "ColumnUpdate",
    "ColumnOrder",
    "ColumnReorderRequest",
    "ColumnResponse",
    "CardCreate",
    "CardUpdate",
    "CardOrder",
    "CardReorderRequest",
    "CardResponse",
    "MemberCreate",
    "MemberUpdate",
    "MemberResponse",
]
