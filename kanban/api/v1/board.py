"""Board endpoints: full state, settings, export and database download"""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from kanban.database import Database, get_db
from kanban.dependencies import get_database
from kanban.schemas import THEMES, BoardResponse, BoardState, BoardUpdate
from kanban.services.board import board_state, export_board, get_board
from kanban.utils.sanitize import clean_text

router = APIRouter()


@router.get("", response_model=BoardState)
def read_board(db: Session = Depends(get_db)):
    """Return the board with all of its columns, cards and members."""
    return board_state(db)


@router.put("", response_model=BoardResponse)
def update_board(board_update: BoardUpdate, db: Session = Depends(get_db)):
    board = get_board(db)
    board.name = clean_text(board_update.name)
    board.theme = board_update.theme if board_update.theme in THEMES else "light"
    db.commit()
    db.refresh(board)
    return board


@router.get("/export")
def export(db: Session = Depends(get_db)):
    data = export_board(db)
    return JSONResponse(
        content=data.model_dump(mode="json"),
        headers={"Content-Disposition": "attachment; filename=kanban-export.json"},
    )


@router.get("/download-db")
def download_database(database: Database = Depends(get_database)):
    """Send the SQLite file after folding the WAL into it."""
    path = database.path
    if path is None or not path.exists():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Database file not found")

    database.checkpoint()
    payload = path.read_bytes()
    filename = path.name or "board.db"
    return Response(
        content=payload,
        media_type="application/x-sqlite3",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
