"""Card endpoints"""
from typing import List, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from kanban.config import Settings
from kanban.database import BOARD_ID, get_db
from kanban.dependencies import get_settings
from kanban.exceptions import UnknownOrderTargetError
from kanban.models import BoardColumn, Card, Member
from kanban.schemas import CardCreate, CardReorderRequest, CardResponse, CardUpdate
from kanban.services.ordering import apply_card_orders, list_cards, next_card_index
from kanban.utils.sanitize import clean_tags, clean_text

logger = structlog.get_logger(__name__)

router = APIRouter()

TEXT_FIELDS = ("title", "description", "color", "emoji")


def _sanitize_card_fields(data: dict) -> dict:
    for field in TEXT_FIELDS:
        if data.get(field) is not None:
            data[field] = clean_text(data[field])
    if data.get("tags") is not None:
        data["tags"] = clean_tags(data["tags"])
    return data


def _ensure_column(db: Session, column_id: int) -> None:
    if db.get(BoardColumn, column_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Column does not exist")


def _ensure_member(db: Session, member_id: Optional[int]) -> None:
    if member_id is not None and db.get(Member, member_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Assignee does not exist")


@router.get("", response_model=List[CardResponse])
def get_cards(db: Session = Depends(get_db)):
    return list_cards(db)


@router.post("", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
def create_card(card_in: CardCreate, db: Session = Depends(get_db)):
    """Create a card; without ``orderIndex`` it goes to the end of its column."""
    _ensure_column(db, card_in.column_id)
    _ensure_member(db, card_in.assignee_id)

    data = _sanitize_card_fields(card_in.model_dump())
    if data["order_index"] is None:
        data["order_index"] = next_card_index(db, card_in.column_id)

    card = Card(board_id=BOARD_ID, **data)
    db.add(card)
    db.commit()
    db.refresh(card)
    logger.info("card_created", card_id=card.id, column_id=card.column_id, order_index=card.order_index)
    return card


@router.post("/reorder", response_model=List[CardResponse])
def reorder_cards(
    reorder: CardReorderRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Apply a drag-and-drop order plan atomically and return every card."""
    try:
        return apply_card_orders(db, reorder.orders, strict=settings.STRICT_REORDER)
    except UnknownOrderTargetError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)


@router.put("/{card_id}", response_model=CardResponse)
def update_card(card_id: int, card_update: CardUpdate, db: Session = Depends(get_db)):
    card = db.get(Card, card_id)
    if not card:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Card not found")

    update_data = _sanitize_card_fields(card_update.model_dump(exclude_unset=True))
    if update_data.get("column_id") is not None:
        _ensure_column(db, update_data["column_id"])
    else:
        update_data.pop("column_id", None)
    if update_data.get("title") is None:
        update_data.pop("title", None)
    if update_data.get("order_index") is None:
        update_data.pop("order_index", None)
    if "tags" in update_data and update_data["tags"] is None:
        update_data["tags"] = []
    _ensure_member(db, update_data.get("assignee_id"))

    for field, value in update_data.items():
        setattr(card, field, value)

    db.commit()
    db.refresh(card)
    return card


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_card(card_id: int, db: Session = Depends(get_db)):
    card = db.get(Card, card_id)
    if card:
        db.delete(card)
        db.commit()
