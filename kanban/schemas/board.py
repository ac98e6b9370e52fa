"""Schemas for the board itself"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from kanban.schemas.card import CardResponse
from kanban.schemas.column import ColumnResponse
from kanban.schemas.member import MemberResponse

THEMES = ("light", "dark")


class BoardUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    theme: Optional[str] = None

    class Config:
        str_strip_whitespace = True


class BoardResponse(BaseModel):
    id: int
    name: str
    theme: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BoardState(BoardResponse):
    columns: List[ColumnResponse] = Field(default_factory=list)
    cards: List[CardResponse] = Field(default_factory=list)
    members: List[MemberResponse] = Field(default_factory=list)


class BoardExport(BaseModel):
    board: BoardResponse
    columns: List[ColumnResponse]
    cards: List[CardResponse]
    members: List[MemberResponse]
    exportedAt: datetime
