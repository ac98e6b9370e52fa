"""Server-side ordering: listing, default placement and atomic reorder batches."""
from typing import Iterable, List

import structlog
from sqlalchemy import func
from sqlalchemy.orm import Session

from kanban.database import BOARD_ID
from kanban.exceptions import UnknownOrderTargetError
from kanban.models import BoardColumn, Card
from kanban.schemas import CardOrder, ColumnOrder

logger = structlog.get_logger(__name__)


def list_columns(db: Session) -> List[BoardColumn]:
    return (
        db.query(BoardColumn)
        .order_by(BoardColumn.order_index.asc(), BoardColumn.id.asc())
        .all()
    )


def list_cards(db: Session) -> List[Card]:
    return db.query(Card).order_by(Card.order_index.asc(), Card.id.asc()).all()


def next_column_index(db: Session, board_id: int = BOARD_ID) -> int:
    """Order index that places a new column after every existing one."""
    return db.query(func.count(BoardColumn.id)).filter(BoardColumn.board_id == board_id).scalar() or 0


def next_card_index(db: Session, column_id: int) -> int:
    """Order index that places a new card at the end of ``column_id``."""
    return db.query(func.count(Card.id)).filter(Card.column_id == column_id).scalar() or 0


def apply_column_orders(db: Session, orders: Iterable[ColumnOrder], strict: bool = False) -> List[BoardColumn]:
    """Apply a column reorder batch in one transaction and return every column.

    Entries naming a column that does not exist are skipped unless ``strict``
    is set, in which case the whole batch is rolled back.
    """
    applied = 0
    try:
        for entry in orders:
            matched = (
                db.query(BoardColumn)
                .filter(BoardColumn.id == entry.id)
                .update({BoardColumn.order_index: entry.order_index}, synchronize_session=False)
            )
            if not matched and strict:
                raise UnknownOrderTargetError("column", entry.id)
            applied += matched
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("columns_reordered", applied=applied)
    return list_columns(db)


def apply_card_orders(db: Session, orders: Iterable[CardOrder], strict: bool = False) -> List[Card]:
    """Apply a card reorder batch in one transaction and return every card.

    An entry without ``column_id`` keeps the card in its current column.
    """
    applied = 0
    try:
        for entry in orders:
            values = {Card.order_index: entry.order_index}
            if entry.column_id is not None:
                values[Card.column_id] = entry.column_id
            matched = (
                db.query(Card)
                .filter(Card.id == entry.id)
                .update(values, synchronize_session=False)
            )
            if not matched and strict:
                raise UnknownOrderTargetError("card", entry.id)
            applied += matched
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("cards_reordered", applied=applied)
    return list_cards(db)
