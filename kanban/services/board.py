"""Board-level reads and the column/member removal rules."""
from datetime import datetime, timezone

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, aliased

from kanban.database import BOARD_ID
from kanban.exceptions import LastColumnError
from kanban.models import Board, BoardColumn, Member
from kanban.schemas import BoardExport, BoardResponse, BoardState, CardResponse, ColumnResponse, MemberResponse
from kanban.services.ordering import list_cards, list_columns

logger = structlog.get_logger(__name__)


def get_board(db: Session) -> Board:
    board = db.get(Board, BOARD_ID)
    if board is None:
        raise LookupError("Board row is missing; was the schema initialized?")
    return board


def list_members(db: Session):
    return db.query(Member).order_by(Member.name.asc(), Member.id.asc()).all()


def board_state(db: Session) -> BoardState:
    """Everything the client needs to render the board in one payload."""
    board = get_board(db)
    return BoardState(
        **BoardResponse.model_validate(board).model_dump(),
        columns=[ColumnResponse.model_validate(column) for column in list_columns(db)],
        cards=[CardResponse.model_validate(card) for card in list_cards(db)],
        members=[MemberResponse.model_validate(member) for member in list_members(db)],
    )


def export_board(db: Session) -> BoardExport:
    state = board_state(db)
    return BoardExport(
        board=BoardResponse.model_validate(get_board(db)),
        columns=state.columns,
        cards=state.cards,
        members=state.members,
        exportedAt=datetime.now(timezone.utc),
    )


def delete_column(db: Session, column: BoardColumn) -> None:
    """Delete ``column`` and its cards; the board must keep at least one column."""
    column_id = column.id
    sibling = aliased(BoardColumn)
    remaining = (
        select(func.count(sibling.id))
        .where(sibling.board_id == column.board_id)
        .scalar_subquery()
    )
    # count and delete in one statement so concurrent deletes cannot empty the board
    result = db.execute(
        delete(BoardColumn)
        .where(BoardColumn.id == column_id, remaining > 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        raise LastColumnError()
    db.commit()
    logger.info("column_deleted", column_id=column_id)


def delete_member(db: Session, member: Member) -> None:
    """Delete ``member``; their cards stay on the board unassigned."""
    for card in member.cards:
        card.assignee_id = None
    member_id = member.id
    db.delete(member)
    db.commit()
    logger.info("member_deleted", member_id=member_id)
