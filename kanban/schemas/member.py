"""Schemas for board members"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class MemberCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    color: Optional[str] = None
    avatar: Optional[str] = None

    class Config:
        str_strip_whitespace = True


class MemberUpdate(MemberCreate):
    pass


class MemberResponse(BaseModel):
    id: int
    name: str
    color: str
    avatar: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
