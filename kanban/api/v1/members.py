"""Member endpoints"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from kanban.database import get_db
from kanban.models import DEFAULT_MEMBER_COLOR, Member
from kanban.schemas import MemberCreate, MemberResponse, MemberUpdate
from kanban.services.board import delete_member as remove_member, list_members
from kanban.utils.sanitize import clean_text

router = APIRouter()


@router.get("", response_model=List[MemberResponse])
def get_members(db: Session = Depends(get_db)):
    return list_members(db)


@router.post("", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
def create_member(member_in: MemberCreate, db: Session = Depends(get_db)):
    member = Member(
        name=clean_text(member_in.name),
        color=clean_text(member_in.color) if member_in.color else DEFAULT_MEMBER_COLOR,
        avatar=clean_text(member_in.avatar) if member_in.avatar else None,
    )
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@router.put("/{member_id}", response_model=MemberResponse)
def update_member(member_id: int, member_update: MemberUpdate, db: Session = Depends(get_db)):
    member = db.get(Member, member_id)
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Member not found")

    member.name = clean_text(member_update.name)
    member.color = clean_text(member_update.color) if member_update.color else DEFAULT_MEMBER_COLOR
    member.avatar = clean_text(member_update.avatar) if member_update.avatar else None
    db.commit()
    db.refresh(member)
    return member


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_member(member_id: int, db: Session = Depends(get_db)):
    member = db.get(Member, member_id)
    if member:
        remove_member(db, member)
