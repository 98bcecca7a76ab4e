"""
Database models
All SQLAlchemy models should be defined here or imported here
"""

# Import Base for models to inherit from
from storefront.core.database import Base
from storefront.models.gallery import Gallery, GalleryType
from storefront.models.invitation import Invitation, InvitationStatus
from storefront.models.language import Language
from storefront.models.order import Order, PointHistory
from storefront.models.shop import (
    SHOP_TYPE,
    DeliveryType,
    Shop,
    ShopClosedDate,
    ShopStatus,
    ShopSubscription,
    ShopTranslation,
    ShopWorkingDay,
    shop_tag_assignments,
)
from storefront.models.tag import Tag, TagTranslation
from storefront.models.user import Role, User, user_roles

# Export all models for easy imports
__all__ = [
    "Base",
    "DeliveryType",
    "Gallery",
    "GalleryType",
    "Invitation",
    "InvitationStatus",
    "Language",
    "Order",
    "PointHistory",
    "Role",
    "SHOP_TYPE",
    "Shop",
    "ShopClosedDate",
    "ShopStatus",
    "ShopSubscription",
    "ShopTranslation",
    "ShopWorkingDay",
    "Tag",
    "TagTranslation",
    "User",
    "shop_tag_assignments",
    "user_roles",
]
