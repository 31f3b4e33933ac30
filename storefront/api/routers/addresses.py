from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import DomainError
from storefront.domain.schemas import AddressCreate, AddressOut
from storefront.services.address_service import AddressService

router = APIRouter(prefix="/addresses", tags=["addresses"])


@router.get("/{user_id}", response_model=List[AddressOut])
def list_addresses(user_id: int, db: Session = Depends(get_db)):
    return AddressService(db).list_addresses(user_id)


@router.post("", response_model=AddressOut, status_code=201)
def create_address(payload: AddressCreate, db: Session = Depends(get_db)):
    try:
        return AddressService(db).create_address(payload)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
