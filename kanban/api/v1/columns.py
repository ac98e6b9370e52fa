"""Column endpoints"""
from typing import List

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from kanban.config import Settings
from kanban.database import BOARD_ID, get_db
from kanban.dependencies import get_settings
from kanban.exceptions import LastColumnError, UnknownOrderTargetError
from kanban.models import BoardColumn
from kanban.schemas import ColumnCreate, ColumnReorderRequest, ColumnResponse, ColumnUpdate
from kanban.services.board import delete_column as remove_column
from kanban.services.ordering import apply_column_orders, list_columns, next_column_index
from kanban.utils.sanitize import clean_text

logger = structlog.get_logger(__name__)

router = APIRouter()


def _load_column(db: Session, column_id: int) -> BoardColumn:
    column = db.get(BoardColumn, column_id)
    if not column:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Column not found")
    return column


@router.get("", response_model=List[ColumnResponse])
def get_columns(db: Session = Depends(get_db)):
    return list_columns(db)


@router.post("", response_model=ColumnResponse, status_code=status.HTTP_201_CREATED)
def create_column(column_in: ColumnCreate, db: Session = Depends(get_db)):
    order_index = column_in.order_index
    if order_index is None:
        order_index = next_column_index(db)

    column = BoardColumn(board_id=BOARD_ID, title=clean_text(column_in.title), order_index=order_index)
    db.add(column)
    db.commit()
    db.refresh(column)
    logger.info("column_created", column_id=column.id, order_index=column.order_index)
    return column


@router.post("/reorder", response_model=List[ColumnResponse])
def reorder_columns(
    reorder: ColumnReorderRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Apply a batch of column positions atomically and return every column."""
    try:
        return apply_column_orders(db, reorder.orders, strict=settings.STRICT_REORDER)
    except UnknownOrderTargetError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)


@router.put("/{column_id}", response_model=ColumnResponse)
def update_column(column_id: int, column_update: ColumnUpdate, db: Session = Depends(get_db)):
    column = _load_column(db, column_id)
    column.title = clean_text(column_update.title)
    if column_update.order_index is not None:
        column.order_index = column_update.order_index
    db.commit()
    db.refresh(column)
    return column


@router.delete("/{column_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_column(column_id: int, db: Session = Depends(get_db)):
    column = _load_column(db, column_id)
    try:
        remove_column(db, column)
    except LastColumnError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
