"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    TimestampMixin,
)
from models.reference import (
    Translations,
    TaxCreate,
    ManufacturerCreate,
    CategoryCreate,
    PropertyGroupCreate,
    PropertyOptionCreate,
    CurrencyResponse,
    TaxResponse,
    ManufacturerResponse,
    CategoryResponse,
    PropertyGroupResponse,
    PropertyOptionResponse,
    SalesChannelResponse,
    CountryResponse,
    CustomerGroupResponse,
    PaymentMethodResponse,
    SalutationResponse,
    ChannelVisibility,
)
from models.media import (
    SourceKind,
    ImageSource,
    MediaFile,
    MediaReference,
    MediaCreate,
    MediaFolderResponse,
    ThumbnailSizeResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",

    # Reference data
    "Translations",
    "TaxCreate",
    "ManufacturerCreate",
    "CategoryCreate",
    "PropertyGroupCreate",
    "PropertyOptionCreate",
    "CurrencyResponse",
    "TaxResponse",
    "ManufacturerResponse",
    "CategoryResponse",
    "PropertyGroupResponse",
    "PropertyOptionResponse",
    "SalesChannelResponse",
    "CountryResponse",
    "CustomerGroupResponse",
    "PaymentMethodResponse",
    "SalutationResponse",
    "ChannelVisibility",

    # Media
    "SourceKind",
    "ImageSource",
    "MediaFile",
    "MediaReference",
    "MediaCreate",
    "MediaFolderResponse",
    "ThumbnailSizeResponse",
]
