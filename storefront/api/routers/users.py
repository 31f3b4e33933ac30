from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import DomainError
from storefront.domain.schemas import UserCreate, UserRead, LoginIn
from storefront.services.user_service import UserService

router = APIRouter(tags=["users"])


@router.post("/auth/register", response_model=UserRead, status_code=201)
def register(payload: UserCreate, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.register(payload)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/auth/login", response_model=UserRead)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.login(payload.email, payload.password)
    except PermissionError as e:
        raise HTTPException(status_code=401, detail=str(e))


@router.get("/users/{user_id}", response_model=UserRead)
def get_user(user_id: int, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
