from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import DomainError
from storefront.domain.schemas import (
    ChatMessageIn,
    ChatMessageOut,
    ChatSessionCreate,
    ChatSessionOut,
    ChatSessionUpdate,
)
from storefront.services.chat_service import ChatService

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/sessions", response_model=List[ChatSessionOut])
def list_sessions(user_id: Optional[int] = Query(None), db: Session = Depends(get_db)):
    return ChatService(db).list_sessions(user_id)


@router.post("/sessions", response_model=ChatSessionOut, status_code=201)
def create_session(payload: ChatSessionCreate, db: Session = Depends(get_db)):
    return ChatService(db).create_session(payload.user_id)


@router.put("/sessions/{session_id}", response_model=ChatSessionOut)
def update_session(session_id: int, payload: ChatSessionUpdate, db: Session = Depends(get_db)):
    try:
        return ChatService(db).update_session(session_id, payload.status)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/sessions/{session_id}/messages", response_model=List[ChatMessageOut])
def list_messages(session_id: int, db: Session = Depends(get_db)):
    try:
        return ChatService(db).list_messages(session_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/sessions/{session_id}/messages", response_model=ChatMessageOut, status_code=201)
def add_message(session_id: int, payload: ChatMessageIn, db: Session = Depends(get_db)):
    try:
        return ChatService(db).add_message(session_id, payload.sender, payload.message)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
