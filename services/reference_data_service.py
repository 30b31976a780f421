"""
Reference data service for platform lookup tables.

Finds taxes, manufacturers, categories, property groups/options, sales
channels, countries, currencies, customer groups, payment methods and
salutations by their natural key, and creates the creatable ones.

first_or_create_* methods read, then write. No lock is taken: two callers
racing on the same key can both miss the lookup and both insert. Unique
constraints in the store are the only protection.
"""

from typing import Any, Optional, TypeVar
import structlog

from config import get_supabase_client
from models.base import BaseSchema
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
from services.media_service import MediaService, get_media_service
from utils.ids import new_id

logger = structlog.get_logger(__name__)

T = TypeVar("T", bound=BaseSchema)

DEFAULT_TAX_NAME = "Standard rate"
DEFAULT_CUSTOMER_GROUP_NAME = "Standard customer group"
DEFAULT_SALUTATION_KEY = "not_specified"


class ReferenceDataService:
    """
    Reference data lookups and first-or-create helpers.

    Lookups return None when nothing matches. Store errors are logged and
    re-raised unchanged.
    """

    def __init__(self, media_service: Optional[MediaService] = None):
        self.db = get_supabase_client()
        self._media_service = media_service

    @property
    def media_service(self) -> MediaService:
        """Media service used for manufacturer logos (resolved on first use)."""
        if self._media_service is None:
            self._media_service = get_media_service()
        return self._media_service

    # ===================
    # QUERY HELPERS
    # ===================

    def _find_first(
        self,
        table: str,
        filters: dict[str, Any],
        model: type[T],
        order_by: Optional[str] = None
    ) -> Optional[T]:
        """
        Return the first row matching all equality filters, or None.

        A None filter value matches NULL.
        """
        logger.debug("finding_reference", table=table, filters=filters)

        try:
            query = self.db.table(table).select("*")

            for column, value in filters.items():
                if value is None:
                    query = query.is_(column, "null")
                else:
                    query = query.eq(column, value)

            if order_by:
                query = query.order(order_by, desc=False)

            result = query.limit(1).execute()

        except Exception as e:
            logger.error("find_reference_failed", table=table, filters=filters, error=str(e))
            raise

        if not result.data:
            logger.debug("reference_not_found", table=table, filters=filters)
            return None

        return model.model_validate(result.data[0])

    def _insert(self, table: str, data: dict[str, Any]) -> str:
        """Insert one row with a fresh id and return the id."""
        record_id = new_id()
        row = {"id": record_id, **data}

        try:
            self.db.table(table).insert(row).execute()
        except Exception as e:
            logger.error("create_reference_failed", table=table, error=str(e))
            raise

        logger.info("reference_created", table=table, id=record_id)
        return record_id

    # ===================
    # READ-ONLY LOOKUPS
    # ===================

    def get_currency_by_iso_code(self, iso_code: str) -> Optional[CurrencyResponse]:
        """Find a currency by ISO 4217 code (e.g. EUR)."""
        return self._find_first("currency", {"iso_code": iso_code}, CurrencyResponse)

    def get_sales_channel_by_name(self, name: str) -> Optional[SalesChannelResponse]:
        """Find a sales channel by name."""
        return self._find_first("sales_channel", {"name": name}, SalesChannelResponse)

    def get_country_by_iso_code(self, iso_code: str) -> Optional[CountryResponse]:
        """Find a country by ISO 3166 alpha-2 code (e.g. DE)."""
        return self._find_first("country", {"iso": iso_code}, CountryResponse)

    def get_customer_group(
        self,
        name: str = DEFAULT_CUSTOMER_GROUP_NAME
    ) -> Optional[CustomerGroupResponse]:
        """Find a customer group by name."""
        return self._find_first("customer_group", {"name": name}, CustomerGroupResponse)

    def get_first_active_payment_method(self) -> Optional[PaymentMethodResponse]:
        """Return the active payment method whose name sorts first."""
        return self._find_first(
            "payment_method",
            {"active": True},
            PaymentMethodResponse,
            order_by="name"
        )

    def get_salutation(
        self,
        salutation_key: str = DEFAULT_SALUTATION_KEY
    ) -> Optional[SalutationResponse]:
        """Find a salutation by key (e.g. mr, mrs, not_specified)."""
        return self._find_first(
            "salutation",
            {"salutation_key": salutation_key},
            SalutationResponse
        )

    def get_channel_visibility_all(self, channel_name: str) -> ChannelVisibility:
        """
        Build a "visible everywhere" product visibility for a sales channel.

        sales_channel_id is None when the channel does not exist.
        """
        channel = self.get_sales_channel_by_name(channel_name)
        if channel is None:
            logger.warning("sales_channel_not_found", name=channel_name)

        return ChannelVisibility(sales_channel_id=channel.id if channel else None)

    # ===================
    # TAX
    # ===================

    def get_default_tax(self, tax_name: str = DEFAULT_TAX_NAME) -> Optional[TaxResponse]:
        """Find the tax used by default ("Standard rate" unless given)."""
        return self.get_tax_by_name(tax_name)

    def get_tax_by_name(self, name: str) -> Optional[TaxResponse]:
        """Find a tax by name."""
        return self._find_first("tax", {"name": name}, TaxResponse)

    def create_tax(self, name: str, tax_rate: float) -> str:
        """
        Create a tax. The rate is stored as given.

        Returns:
            New tax id
        """
        data = TaxCreate(name=name, tax_rate=tax_rate)

        logger.info("creating_tax", name=data.name, tax_rate=data.tax_rate)

        return self._insert("tax", data.model_dump())

    def first_or_create_tax(self, name: str, tax_rate: float) -> str:
        """Return the id of the tax with this name, creating it if missing."""
        existing = self.get_tax_by_name(name)
        if existing:
            return existing.id

        return self.create_tax(name, tax_rate)

    # ===================
    # MANUFACTURER
    # ===================

    def get_manufacturer_by_name(self, name: str) -> Optional[ManufacturerResponse]:
        """Find a manufacturer by name."""
        return self._find_first("product_manufacturer", {"name": name}, ManufacturerResponse)

    def create_manufacturer(self, name: str, image: Optional[str] = None) -> str:
        """
        Create a manufacturer, optionally with a logo.

        The logo (URL or base64) goes through the media service. If it yields
        no media reference the manufacturer is created without one.

        Args:
            name: Manufacturer name
            image: Logo source

        Returns:
            New manufacturer id

        Raises:
            MediaHelperError: If logo ingestion fails
        """
        data = ManufacturerCreate(name=name)

        if image is not None:
            media = self.media_service.assign_media([image])
            if media:
                data.media_id = media[0].to_payload()["media_id"]

        logger.info("creating_manufacturer", name=data.name, media_id=data.media_id)

        return self._insert("product_manufacturer", data.model_dump(exclude_none=True))

    def first_or_create_manufacturer(self, name: str, image: Optional[str] = None) -> str:
        """
        Return the id of the manufacturer with this name, creating it if missing.

        The image is only used when creating.
        """
        existing = self.get_manufacturer_by_name(name)
        if existing:
            return existing.id

        return self.create_manufacturer(name, image)

    # ===================
    # CATEGORY
    # ===================

    def get_category_by_name(
        self,
        name: str,
        parent_id: Optional[str] = None
    ) -> Optional[CategoryResponse]:
        """
        Find a category by name and parent.

        Without parent_id only root categories (no parent) match.
        """
        return self._find_first(
            "category",
            {"name": name, "parent_id": parent_id},
            CategoryResponse
        )

    def create_category(self, name: str, parent_id: Optional[str] = None) -> str:
        """Create a category, at the root or under parent_id."""
        data = CategoryCreate(name=name, parent_id=parent_id)

        logger.info("creating_category", name=data.name, parent_id=data.parent_id)

        return self._insert("category", data.model_dump(exclude_none=True))

    def first_or_create_category(self, name: str, parent_id: Optional[str] = None) -> str:
        """Return the id of the (name, parent_id) category, creating it if missing."""
        existing = self.get_category_by_name(name, parent_id)
        if existing:
            return existing.id

        return self.create_category(name, parent_id)

    # ===================
    # PROPERTY GROUP
    # ===================

    def get_property_group_by_name(self, name: str) -> Optional[PropertyGroupResponse]:
        """Find a property group by name."""
        return self._find_first("property_group", {"name": name}, PropertyGroupResponse)

    def create_property_group(
        self,
        name: str,
        filterable: bool = True,
        position: int = 0,
        translations: Optional[Translations] = None
    ) -> str:
        """
        Create a property group.

        Args:
            name: Group name, also used as description
            filterable: Usable as storefront filter
            position: Sort position
            translations: Locale code → fields, e.g. {"de-DE": {"name": "Farbe"}}

        Returns:
            New property group id
        """
        data = PropertyGroupCreate(
            name=name,
            filterable=filterable,
            position=position,
            translations=translations or None,
        )

        logger.info("creating_property_group", name=data.name, position=data.position)

        row = {
            "name": data.name,
            "description": data.description,
            "filterable": data.filterable,
            "position": data.position,
        }
        if data.translations:
            row["translations"] = data.translations

        return self._insert("property_group", row)

    def first_or_create_property_group(
        self,
        name: str,
        filterable: bool = True,
        position: int = 0,
        translations: Optional[Translations] = None
    ) -> str:
        """Return the id of the property group with this name, creating it if missing."""
        existing = self.get_property_group_by_name(name)
        if existing:
            return existing.id

        return self.create_property_group(name, filterable, position, translations)

    # ===================
    # PROPERTY OPTION
    # ===================

    def get_property_option_by_name(
        self,
        name: str,
        group_id: str
    ) -> Optional[PropertyOptionResponse]:
        """Find a property option by value within a group."""
        return self._find_first(
            "property_group_option",
            {"name": name, "group_id": group_id},
            PropertyOptionResponse
        )

    def create_property_option(
        self,
        name: str,
        group_id: str,
        option_type: str,
        custom_fields: Optional[dict[str, Any]] = None,
        position: int = 0,
        translations: Optional[Translations] = None
    ) -> str:
        """
        Create a property option in a group.

        custom_fields and translations are only sent when non-empty.

        Returns:
            New property option id
        """
        data = PropertyOptionCreate(
            name=name,
            group_id=group_id,
            type=option_type,
            position=position,
            custom_fields=custom_fields or None,
            translations=translations or None,
        )

        logger.info(
            "creating_property_option",
            name=data.name,
            group_id=data.group_id,
            type=data.type
        )

        return self._insert("property_group_option", data.model_dump(exclude_none=True))

    def first_or_create_property_option(
        self,
        name: str,
        group_id: str,
        option_type: str,
        custom_fields: Optional[dict[str, Any]] = None,
        position: int = 0,
        translations: Optional[Translations] = None
    ) -> str:
        """Return the id of the (name, group_id) option, creating it if missing."""
        existing = self.get_property_option_by_name(name, group_id)
        if existing:
            return existing.id

        return self.create_property_option(
            name,
            group_id,
            option_type,
            custom_fields,
            position,
            translations
        )


# Singleton instance
_reference_data_service: Optional[ReferenceDataService] = None


def get_reference_data_service() -> ReferenceDataService:
    """Get or create ReferenceDataService instance."""
    global _reference_data_service
    if _reference_data_service is None:
        _reference_data_service = ReferenceDataService()
    return _reference_data_service
