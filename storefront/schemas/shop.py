"""
Schemas for the shop lifecycle: validated inputs and serialized outputs.

Reference: https://docs.pydantic.dev/latest/concepts/models/
"""

from datetime import date as Date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.models.shop import DeliveryType, ShopStatus

# Translatable fields, each given as {locale: text}
TRANSLATABLE_FIELDS = ("title", "description", "address")

# Input keys that are handled by dedicated steps rather than copied onto the row
NON_COLUMN_FIELDS = {
    "user_id",
    *TRANSLATABLE_FIELDS,
    "images",
    "documents",
    "tags",
    "delivery_time_from",
    "delivery_time_to",
    "delivery_time_type",
}


class ImageTag(str, Enum):
    """Image slot of a shop."""

    LOGO = "logo"
    BACKGROUND = "background"


class ShopFields(BaseModel):
    """Fields shared by create and update. Everything is optional here."""

    title: Optional[dict[str, str]] = Field(
        None, description="Shop name per locale, e.g. {'en': 'Corner Bakery'}"
    )
    description: Optional[dict[str, str]] = Field(None, description="Description per locale")
    address: Optional[dict[str, str]] = Field(None, description="Address per locale")

    phone: Optional[str] = Field(None, max_length=30)
    tax: Optional[float] = Field(None, ge=0)
    percentage: Optional[float] = Field(None, ge=0, le=100)
    min_amount: Optional[float] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0, description="Base delivery price")
    price_per_km: Optional[float] = Field(None, ge=0)
    open: Optional[bool] = None
    visibility: Optional[bool] = None
    status: Optional[ShopStatus] = None
    location: Optional[dict[str, float]] = Field(
        None, description="{'latitude': ..., 'longitude': ...}"
    )

    delivery_type: Optional[DeliveryType] = None
    delivery_time_from: Optional[str] = Field(None, description="Start of the delivery window")
    delivery_time_to: Optional[str] = Field(None, description="End of the delivery window")
    delivery_time_type: Optional[str] = Field(
        None, description="Unit or kind of the delivery window (e.g. 'minute', 'hour')"
    )

    images: Optional[list[str]] = Field(
        None, description="Uploaded image paths; the first two become logo and background"
    )
    documents: Optional[list[str]] = Field(None, description="Uploaded document paths")
    tags: Optional[list[int]] = Field(None, description="Tag ids; replaces the current set")

    def column_values(self) -> dict[str, Any]:
        """Explicitly supplied values that map straight onto Shop columns."""
        values = self.model_dump(
            exclude_unset=True, exclude_none=True, exclude=NON_COLUMN_FIELDS
        )
        for field, value in values.items():
            if isinstance(value, Enum):
                values[field] = value.value
        return values

    def translation_values(self) -> dict[str, Optional[dict[str, str]]]:
        return {field: getattr(self, field) for field in TRANSLATABLE_FIELDS}


class ShopCreate(ShopFields):
    """
    Input for creating a shop.

    `user_id` is optional at the schema level so a missing owner is reported
    by the service as not found rather than as a validation error.
    """

    user_id: Optional[int] = Field(None, description="Owning seller id")


class ShopUpdate(ShopFields):
    """
    Input for a partial shop update.

    `user_id`, when given outside an admin context, scopes the lookup to
    shops owned by that user.
    """

    user_id: Optional[int] = Field(None, description="Ownership scope for non-admin callers")


class TranslationResponse(BaseModel):
    locale: str
    title: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class RoleResponse(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class SellerResponse(BaseModel):
    id: int
    uuid: str
    firstname: Optional[str] = None
    lastname: Optional[str] = None
    roles: list[RoleResponse] = []

    model_config = ConfigDict(from_attributes=True)


class TagTranslationResponse(BaseModel):
    locale: str
    title: str

    model_config = ConfigDict(from_attributes=True)


class TagResponse(BaseModel):
    id: int
    img: Optional[str] = None
    translations: list[TagTranslationResponse] = []

    model_config = ConfigDict(from_attributes=True)


class SubscriptionResponse(BaseModel):
    id: int
    price: float
    active: bool
    expired_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class WorkingDayResponse(BaseModel):
    day: str
    from_time: str = Field(..., serialization_alias="from")
    to_time: str = Field(..., serialization_alias="to")
    disabled: bool

    model_config = ConfigDict(from_attributes=True)


class ClosedDateResponse(BaseModel):
    date: Date

    model_config = ConfigDict(from_attributes=True)


class ShopResponse(BaseModel):
    """Shop columns only (no relations)."""

    id: int
    uuid: str
    user_id: int
    phone: Optional[str] = None
    tax: float
    percentage: float
    min_amount: float
    price: float
    price_per_km: float
    open: bool
    visibility: bool
    status: str
    location: Optional[dict[str, Any]] = None
    logo_img: Optional[str] = None
    background_img: Optional[str] = None
    delivery_type: str
    delivery_time: Optional[dict[str, Any]] = None
    verify: bool
    type: int

    model_config = ConfigDict(from_attributes=True)


class ShopDetailResponse(ShopResponse):
    """Shop with the relations loaded by create/update."""

    translations: list[TranslationResponse] = []
    subscription: Optional[SubscriptionResponse] = None
    seller: Optional[SellerResponse] = None
    tags: list[TagResponse] = []


class ShopScheduleResponse(ShopDetailResponse):
    """Detail shape returned by update, including the shop schedule."""

    working_days: list[WorkingDayResponse] = []
    closed_dates: list[ClosedDateResponse] = []
