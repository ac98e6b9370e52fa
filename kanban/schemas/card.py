"""Schemas for cards"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from kanban.schemas.fields import is_integer_index


class CardCreate(BaseModel):
    column_id: int = Field(..., alias="columnId")
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    assignee_id: Optional[int] = Field(None, alias="assigneeId")
    color: Optional[str] = None
    emoji: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    due_date: Optional[str] = Field(None, alias="dueDate")
    order_index: Optional[int] = Field(None, alias="orderIndex", ge=0)

    @field_validator("order_index", mode="before")
    @classmethod
    def _place_at_end_unless_integer(cls, value):
        return value if is_integer_index(value) else None

    class Config:
        populate_by_name = True
        str_strip_whitespace = True


class CardUpdate(BaseModel):
    column_id: Optional[int] = Field(None, alias="columnId")
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    assignee_id: Optional[int] = Field(None, alias="assigneeId")
    color: Optional[str] = None
    emoji: Optional[str] = None
    tags: Optional[List[str]] = None
    due_date: Optional[str] = Field(None, alias="dueDate")
    order_index: Optional[int] = Field(None, alias="orderIndex", ge=0)

    class Config:
        populate_by_name = True
        str_strip_whitespace = True


class CardOrder(BaseModel):
    """One entry of a card reorder batch."""

    id: int
    column_id: Optional[int] = Field(None, alias="columnId")
    order_index: int = Field(..., alias="orderIndex", ge=0)

    class Config:
        populate_by_name = True


class CardReorderRequest(BaseModel):
    orders: List[CardOrder]


class CardResponse(BaseModel):
    id: int
    board_id: int
    column_id: int
    title: str
    description: Optional[str]
    assignee_id: Optional[int]
    color: Optional[str]
    emoji: Optional[str]
    tags: List[str] = Field(default_factory=list)
    due_date: Optional[str]
    order_index: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
