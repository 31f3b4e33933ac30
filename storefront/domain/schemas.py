# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from enum import Enum


# =====================================================
# USERS
# =====================================================
class UserCreate(BaseModel):
    """Registration payload."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)


class LoginIn(BaseModel):
    email: EmailStr
    password: str


class UserRead(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# CATALOG
# =====================================================
class CategoryOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class GalleryOut(BaseModel):
    id: int
    product_id: int
    image_url: str
    alt_text: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    id: int
    category_id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    stock: int
    is_digital: bool
    recipe: Optional[str] = None
    magical_properties: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ReviewOut(BaseModel):
    id: int
    user_id: int
    product_id: int
    rating: int
    comment: Optional[str] = None
    helpful_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductDetailOut(ProductOut):
    galleries: List[GalleryOut] = []
    reviews: List[ReviewOut] = []


# =====================================================
# CART
# =====================================================
class CartAddIn(BaseModel):
    """Adding a product to the user's open cart."""

    user_id: int = Field(..., gt=0)
    cart_id: Optional[int] = Field(None, gt=0)
    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, description="Must be >= 1, checked by the cart service")
    # expected unit price as shown to the client, a stale one is refused
    price_at_moment: Optional[Decimal] = Field(None, ge=0)


class CartUpdateIn(BaseModel):
    quantity: int


class CartItemOut(BaseModel):
    id: int
    cart_id: int
    user_id: int
    product_id: int
    quantity: int
    price_at_moment: Decimal

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    id: int
    user_id: int
    status: str
    items: List[CartItemOut]
    total: Decimal
    item_count: int


# =====================================================
# ADDRESSES
# =====================================================
class AddressCreate(BaseModel):
    user_id: int = Field(..., gt=0)
    street: str = Field(..., min_length=1)
    colony: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1, max_length=12)
    reference: Optional[str] = None


class AddressOut(AddressCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# COUPONS
# =====================================================
class CouponType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class CouponOut(BaseModel):
    id: int
    code: str
    name: str
    description: Optional[str] = None
    type: CouponType
    value: Decimal
    minimum_amount: Optional[Decimal] = None
    max_discount: Optional[Decimal] = None
    usage_limit: Optional[int] = None
    used_count: int
    is_active: bool
    valid_from: datetime
    valid_until: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CouponValidateIn(BaseModel):
    code: str = Field(..., min_length=1)
    user_id: int = Field(..., gt=0)
    total: Decimal = Field(..., ge=0)


class CouponValidateOut(BaseModel):
    valid: bool
    discount: Decimal
    coupon: Optional[CouponOut] = None
    message: str


class CouponApplyIn(BaseModel):
    user_id: int = Field(..., gt=0)
    coupon_id: int = Field(..., gt=0)
    order_id: Optional[int] = Field(None, gt=0)


# =====================================================
# ORDERS
# =====================================================
class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderCreate(BaseModel):
    """Checkout of the user's open cart."""

    user_id: int = Field(..., gt=0)
    address_id: int = Field(..., gt=0)
    coupon_code: Optional[str] = None


class OrderStatusIn(BaseModel):
    status: OrderStatus


class OrderItemOut(BaseModel):
    product_id: int
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: int
    user_id: int
    address_id: int
    total: Decimal
    currency: str
    status: OrderStatus
    items: List[OrderItemOut] = []
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# FAVORITES / REVIEWS
# =====================================================
class FavoriteIn(BaseModel):
    user_id: int = Field(..., gt=0)
    product_id: int = Field(..., gt=0)


class FavoriteOut(FavoriteIn):
    id: int

    model_config = ConfigDict(from_attributes=True)


class ReviewCreate(BaseModel):
    user_id: int = Field(..., gt=0)
    product_id: int = Field(..., gt=0)
    rating: int
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewHelpfulIn(BaseModel):
    user_id: int = Field(..., gt=0)
    is_helpful: bool = True


# =====================================================
# NOTIFICATIONS / CHAT
# =====================================================
class NotificationCreate(BaseModel):
    user_id: int = Field(..., gt=0)
    type: str = "info"
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)


class NotificationOut(NotificationCreate):
    id: int
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ChatSessionCreate(BaseModel):
    user_id: Optional[int] = Field(None, gt=0)


class ChatSessionUpdate(BaseModel):
    status: str = Field(..., pattern="^(active|closed)$")


class ChatSessionOut(BaseModel):
    id: int
    user_id: Optional[int] = None
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ChatMessageIn(BaseModel):
    sender: str = Field("user", pattern="^(user|agent|bot)$")
    message: str = Field(..., min_length=1, max_length=2000)


class ChatMessageOut(ChatMessageIn):
    id: int
    session_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageOut(BaseModel):
    message: str
