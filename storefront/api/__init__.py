# storefront/api/__init__.py
from fastapi import APIRouter

from storefront.api.routers import (
    addresses,
    carts,
    chat,
    coupons,
    favorites,
    notifications,
    orders,
    products,
    reviews,
    users,
)

api_router = APIRouter(prefix="/api")

for _module in (users, products, carts, addresses, coupons, orders, favorites, reviews, notifications, chat):
    api_router.include_router(_module.router)
