from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.chat import ChatSessionModel, ChatMessageModel


class ChatRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_sessions(self, user_id: int | None = None) -> list[ChatSessionModel]:
        stmt = select(ChatSessionModel).order_by(ChatSessionModel.id)
        if user_id is not None:
            stmt = stmt.where(ChatSessionModel.user_id == user_id)
        return list(self.db.execute(stmt).scalars().all())

    def get_session(self, session_id: int) -> ChatSessionModel | None:
        return self.db.get(ChatSessionModel, session_id)

    def save_session(self, session: ChatSessionModel) -> ChatSessionModel:
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)
        return session

    def list_messages(self, session_id: int) -> list[ChatMessageModel]:
        stmt = (
            select(ChatMessageModel)
            .where(ChatMessageModel.session_id == session_id)
            .order_by(ChatMessageModel.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def add_message(self, message: ChatMessageModel) -> ChatMessageModel:
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message
