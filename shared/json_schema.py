"""Esquema canonico de campos JSON del catalogo persistido."""

from __future__ import annotations

SKU_FIELD = "sku"
NAME_FIELD = "name"
DESCRIPTION_FIELD = "description"
QUANTITY_FIELD = "quantityInStock"
PRICE_FIELD = "price"
CATEGORY_FIELD = "category"
AVAILABILITY_FIELD = "availabilityStatus"
CREATED_AT_FIELD = "createdAt"
LAST_MODIFIED_AT_FIELD = "lastModifiedAt"

BRAND_FIELD = "brand"
WARRANTY_FIELD = "warrantyPeriodMonths"

AUTHOR_FIELD = "author"
ISBN_FIELD = "isbn"
PAGES_FIELD = "pages"
PUBLISHER_FIELD = "publisher"

# availabilityStatus se escribe para lectores externos pero nunca se lee.
REQUIRED_BASE_FIELDS: tuple[str, ...] = (
    SKU_FIELD,
    NAME_FIELD,
    QUANTITY_FIELD,
    PRICE_FIELD,
    CATEGORY_FIELD,
)

ELECTRONIC_FIELDS: tuple[str, ...] = (BRAND_FIELD, WARRANTY_FIELD)
BOOK_FIELDS: tuple[str, ...] = (AUTHOR_FIELD, ISBN_FIELD, PAGES_FIELD, PUBLISHER_FIELD)


def missing_fields(record: dict[str, object], fields: tuple[str, ...]) -> list[str]:
    """Retorna los campos de ``fields`` ausentes (o nulos) en un registro."""
    return [field for field in fields if record.get(field) is None]
