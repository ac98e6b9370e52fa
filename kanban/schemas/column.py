"""Schemas for board columns"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from kanban.schemas.fields import is_integer_index


class ColumnCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    order_index: Optional[int] = Field(None, alias="orderIndex", ge=0)

    @field_validator("order_index", mode="before")
    @classmethod
    def _place_at_end_unless_integer(cls, value):
        return value if is_integer_index(value) else None

    class Config:
        populate_by_name = True
        str_strip_whitespace = True


class ColumnUpdate(ColumnCreate):
    pass


class ColumnOrder(BaseModel):
    id: int
    order_index: int = Field(..., alias="orderIndex", ge=0)

    class Config:
        populate_by_name = True


class ColumnReorderRequest(BaseModel):
    orders: List[ColumnOrder]


class ColumnResponse(BaseModel):
    id: int
    board_id: int
    title: str
    order_index: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
