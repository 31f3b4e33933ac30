from passlib.context import CryptContext
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import ConflictError, NotFoundError
from storefront.domain.schemas import UserCreate, UserRead
from storefront.repos.user_repo import UserRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# salted PBKDF2, never plaintext
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: UserCreate) -> UserRead:
        email = payload.email.lower()
        if self.repo.get_user_by_email(email):
            raise ConflictError("User already exists")

        user = UserModel(name=payload.name, email=email, password_hash=hash_password(payload.password))
        created = self.repo.create_user(user)
        logger.info(f"Registered user {created.id}")
        return UserRead.model_validate(created)

    def login(self, email: str, password: str) -> UserRead:
        user = self.repo.get_user_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise PermissionError("Invalid credentials")
        return UserRead.model_validate(user)

    def get_user(self, user_id: int) -> UserRead:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserRead.model_validate(user)
