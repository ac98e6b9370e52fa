"""Kanban database models"""
from kanban.models.board import Board
from kanban.models.column import BoardColumn
from kanban.models.card import Card
from kanban.models.member import Member, DEFAULT_MEMBER_COLOR

__all__ = [
    "Board",
    "BoardColumn",
    "Card",
    "Member",
    "DEFAULT_MEMBER_COLOR",
]
