"""
Member Model
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from kanban.database import Base

DEFAULT_MEMBER_COLOR = "#6366f1"


class Member(Base):
    __tablename__ = "members"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    color = Column(String(50), default=DEFAULT_MEMBER_COLOR, nullable=False)
    avatar = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships; the assignee FK is nulled on delete, cards are kept
    cards = relationship("Card", back_populates="assignee")
