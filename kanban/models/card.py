"""
Card Model
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from kanban.database import Base
from kanban.models.types import JSONEncodedList


class Card(Base):
    __tablename__ = "cards"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    board_id = Column(Integer, ForeignKey("board.id"), default=1, nullable=False)
    column_id = Column(Integer, ForeignKey("columns.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    assignee_id = Column(Integer, ForeignKey("members.id", ondelete="SET NULL"), nullable=True)
    color = Column(String(50), nullable=True)
    emoji = Column(String(50), nullable=True)
    tags = Column(JSONEncodedList, default=list, nullable=False)
    due_date = Column(String(32), nullable=True)
    order_index = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    column = relationship("BoardColumn", back_populates="cards")
    assignee = relationship("Member", back_populates="cards")
