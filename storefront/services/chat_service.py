from sqlalchemy.orm import Session

from storefront.data.models.chat import ChatSessionModel, ChatMessageModel
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.repos.chat_repo import ChatRepo


class ChatService:
    """Storage side of the live-chat widget. Transport lives elsewhere."""

    def __init__(self, db: Session):
        self.repo = ChatRepo(db)

    def list_sessions(self, user_id: int | None = None) -> list[ChatSessionModel]:
        return self.repo.list_sessions(user_id)

    def create_session(self, user_id: int | None = None) -> ChatSessionModel:
        return self.repo.save_session(ChatSessionModel(user_id=user_id, status="active"))

    def update_session(self, session_id: int, status: str) -> ChatSessionModel:
        session = self._get_session(session_id)
        session.status = status
        return self.repo.save_session(session)

    def list_messages(self, session_id: int) -> list[ChatMessageModel]:
        self._get_session(session_id)
        return self.repo.list_messages(session_id)

    def add_message(self, session_id: int, sender: str, message: str) -> ChatMessageModel:
        session = self._get_session(session_id)
        if session.status == "closed":
            raise ConflictError("Chat session is closed")
        return self.repo.add_message(ChatMessageModel(session_id=session_id, sender=sender, message=message))

    def _get_session(self, session_id: int) -> ChatSessionModel:
        session = self.repo.get_session(session_id)
        if not session:
            raise NotFoundError("Chat session not found")
        return session
