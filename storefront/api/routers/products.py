from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import DomainError
from storefront.domain.schemas import CategoryOut, ProductOut, ProductDetailOut
from storefront.services.catalog_service import CatalogService

router = APIRouter(tags=["catalog"])


@router.get("/products", response_model=List[ProductOut])
def list_products(
    category: Optional[int] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return CatalogService(db).list_products(category_id=category, search=search)


@router.get("/products/featured", response_model=List[ProductOut])
def featured_products(db: Session = Depends(get_db)):
    return CatalogService(db).featured_products()


@router.get("/products/{product_id}", response_model=ProductDetailOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).get_product(product_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CatalogService(db).list_categories()


@router.get("/categories/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).get_category(category_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
