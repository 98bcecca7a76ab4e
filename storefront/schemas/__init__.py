"""
Pydantic schemas for service inputs and serialized outputs
"""

from storefront.schemas.shop import (
    ImageTag,
    ShopCreate,
    ShopDetailResponse,
    ShopResponse,
    ShopScheduleResponse,
    ShopUpdate,
)

__all__ = [
    "ImageTag",
    "ShopCreate",
    "ShopDetailResponse",
    "ShopResponse",
    "ShopScheduleResponse",
    "ShopUpdate",
]
