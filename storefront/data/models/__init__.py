#import all models so SQLAlchemy registers them in Base.metadata

from storefront.data.models.user import UserModel
from storefront.data.models.catalog import CategoryModel, ProductModel, ProductGalleryModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.address import AddressModel
from storefront.data.models.order import OrderModel, OrderItemModel
from storefront.data.models.coupon import CouponModel, CouponUsageModel
from storefront.data.models.favorite import FavoriteModel
from storefront.data.models.review import ReviewModel, ReviewHelpfulModel
from storefront.data.models.notification import NotificationModel
from storefront.data.models.chat import ChatSessionModel, ChatMessageModel

__all__ = [
    "UserModel",
    "CategoryModel",
    "ProductModel",
    "ProductGalleryModel",
    "CartModel",
    "CartItemModel",
    "AddressModel",
    "OrderModel",
    "OrderItemModel",
    "CouponModel",
    "CouponUsageModel",
    "FavoriteModel",
    "ReviewModel",
    "ReviewHelpfulModel",
    "NotificationModel",
    "ChatSessionModel",
    "ChatMessageModel",
]
