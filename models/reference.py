"""
Reference entity schemas.

Rows from the platform's reference tables (taxes, manufacturers, categories,
properties, sales channels, ...). The store owns these records; the toolkit
only reads them back and builds insert payloads.
"""

from typing import Any, Optional
from pydantic import Field

from config.media import VISIBILITY_ALL
from models.base import BaseSchema, TimestampMixin


# Locale code → translated fields, e.g. {"en-GB": {"name": "Color"}}
Translations = dict[str, dict[str, str]]


# ===================
# INSERT PAYLOADS
# ===================

class TaxCreate(BaseSchema):
    """Create a tax rate. The rate is not range-checked."""

    name: str = Field(..., description="Tax name")
    tax_rate: float = Field(..., description="Tax rate in percent")


class ManufacturerCreate(BaseSchema):
    """Create a manufacturer, optionally with a logo media reference."""

    name: str = Field(..., description="Manufacturer name")
    media_id: Optional[str] = Field(None, description="Logo media id")


class CategoryCreate(BaseSchema):
    """Create a category, at the root or under a parent."""

    name: str = Field(..., description="Category name")
    parent_id: Optional[str] = Field(None, description="Parent category id")


class PropertyGroupCreate(BaseSchema):
    """
    Create a property group.

    The description mirrors the name.
    """

    name: str = Field(..., description="Property group name")
    filterable: bool = Field(True, description="Usable as storefront filter")
    position: int = Field(0, description="Sort position")
    translations: Optional[Translations] = Field(None, description="Per-locale fields")

    @property
    def description(self) -> str:
        return self.name


class PropertyOptionCreate(BaseSchema):
    """Create a property option inside a group."""

    name: str = Field(..., description="Option value")
    group_id: str = Field(..., description="Owning property group id")
    type: str = Field(..., description="Option type, e.g. text or color")
    position: int = Field(0, description="Sort position")
    custom_fields: Optional[dict[str, Any]] = Field(None, description="Custom field values")
    translations: Optional[Translations] = Field(None, description="Per-locale fields")


# ===================
# RESPONSES
# ===================

class CurrencyResponse(BaseSchema, TimestampMixin):
    """Currency row."""

    id: str
    iso_code: str
    name: Optional[str] = None
    symbol: Optional[str] = None
    factor: Optional[float] = None


class TaxResponse(BaseSchema, TimestampMixin):
    """Tax rate row."""

    id: str
    name: str
    tax_rate: float


class ManufacturerResponse(BaseSchema, TimestampMixin):
    """Manufacturer row."""

    id: str
    name: str
    media_id: Optional[str] = None


class CategoryResponse(BaseSchema, TimestampMixin):
    """Category row."""

    id: str
    name: str
    parent_id: Optional[str] = None


class PropertyGroupResponse(BaseSchema, TimestampMixin):
    """Property group row."""

    id: str
    name: str
    description: Optional[str] = None
    filterable: bool = True
    position: int = 0


class PropertyOptionResponse(BaseSchema, TimestampMixin):
    """Property group option row."""

    id: str
    group_id: str
    name: str
    type: Optional[str] = None
    position: int = 0
    custom_fields: Optional[dict[str, Any]] = None


class SalesChannelResponse(BaseSchema, TimestampMixin):
    """Sales channel row."""

    id: str
    name: str
    active: bool = True


class CountryResponse(BaseSchema, TimestampMixin):
    """Country row."""

    id: str
    iso: str
    name: Optional[str] = None


class CustomerGroupResponse(BaseSchema, TimestampMixin):
    """Customer group row."""

    id: str
    name: str


class PaymentMethodResponse(BaseSchema, TimestampMixin):
    """Payment method row."""

    id: str
    name: str
    active: bool


class SalutationResponse(BaseSchema, TimestampMixin):
    """Salutation row."""

    id: str
    salutation_key: str
    display_name: Optional[str] = None


class ChannelVisibility(BaseSchema):
    """
    Product visibility entry for one sales channel.

    sales_channel_id is None when the channel does not exist; callers
    must check before attaching it to a product.
    """

    sales_channel_id: Optional[str] = None
    visibility: int = VISIBILITY_ALL
