"""Persistencia JSON del catalogo con reconstruccion polimorfica de productos."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from parametros import CATALOG_JSON
from servidor.domain.models import BookProduct, ElectronicProduct, Product, ProductCategory
from servidor.services.inventory_utils import parse_iso_timestamp, timestamp_to_iso
from shared.errors import ServiceError, ValidationError
from shared.json_schema import (
    AUTHOR_FIELD,
    AVAILABILITY_FIELD,
    BOOK_FIELDS,
    BRAND_FIELD,
    CATEGORY_FIELD,
    CREATED_AT_FIELD,
    DESCRIPTION_FIELD,
    ELECTRONIC_FIELDS,
    ISBN_FIELD,
    LAST_MODIFIED_AT_FIELD,
    NAME_FIELD,
    PAGES_FIELD,
    PRICE_FIELD,
    PUBLISHER_FIELD,
    QUANTITY_FIELD,
    REQUIRED_BASE_FIELDS,
    SKU_FIELD,
    WARRANTY_FIELD,
    missing_fields,
)

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogLoadResult:
    """Resultado de carga: productos por SKU y error reportado (si hubo)."""

    products: dict[str, Product] = field(default_factory=dict)
    error: str | None = None


def product_to_dict(product: Product) -> dict[str, Any]:
    """Serializa un producto con el set completo de campos de su variante."""
    data: dict[str, Any] = {
        SKU_FIELD: product.sku,
        NAME_FIELD: product.name,
        DESCRIPTION_FIELD: product.description,
        QUANTITY_FIELD: product.quantity_in_stock,
        PRICE_FIELD: product.price,
        CATEGORY_FIELD: product.category.value,
        AVAILABILITY_FIELD: product.availability_status.value,
        CREATED_AT_FIELD: timestamp_to_iso(product.created_at),
        LAST_MODIFIED_AT_FIELD: timestamp_to_iso(product.last_modified_at),
    }

    if isinstance(product, ElectronicProduct):
        data[BRAND_FIELD] = product.brand
        data[WARRANTY_FIELD] = product.warranty_period_months
    elif isinstance(product, BookProduct):
        data[AUTHOR_FIELD] = product.author
        data[ISBN_FIELD] = product.isbn
        data[PAGES_FIELD] = product.pages
        data[PUBLISHER_FIELD] = product.publisher

    return data


def product_from_dict(data: dict[str, Any]) -> Product:
    """Reconstruye un producto eligiendo la variante segun ``category``.

    ``Electronics`` produce ``ElectronicProduct``, ``Books`` produce
    ``BookProduct`` y cualquier otro valor cae en ``Product`` base con un
    warning. Registros incompletos o invalidos levantan ``ValidationError``.
    """
    if not isinstance(data, dict):
        raise ValidationError("Cada producto debe ser un objeto JSON.")

    absent = missing_fields(data, REQUIRED_BASE_FIELDS)
    if absent:
        raise ValidationError(f"Producto sin campos obligatorios: {', '.join(absent)}")

    raw_category = data[CATEGORY_FIELD]
    category = ProductCategory.from_value(raw_category)
    base_kwargs = _base_kwargs(data)

    try:
        if category is ProductCategory.ELECTRONICS:
            _require_variant_fields(data, ELECTRONIC_FIELDS)
            return ElectronicProduct(
                brand=_as_text(data[BRAND_FIELD]),
                warranty_period_months=_as_int(data[WARRANTY_FIELD], WARRANTY_FIELD),
                **base_kwargs,
            )

        if category is ProductCategory.BOOKS:
            _require_variant_fields(data, BOOK_FIELDS)
            return BookProduct(
                author=_as_text(data[AUTHOR_FIELD]),
                isbn=_as_text(data[ISBN_FIELD]),
                pages=_as_int(data[PAGES_FIELD], PAGES_FIELD),
                publisher=_as_text(data[PUBLISHER_FIELD]),
                **base_kwargs,
            )

        if category is None:
            LOGGER.warning(
                "Categoria desconocida %r para SKU %s; se carga como Product base (%s).",
                raw_category,
                data.get(SKU_FIELD),
                ProductCategory.OTHER.value,
            )
            category = ProductCategory.OTHER
        else:
            LOGGER.warning(
                "Categoria %s sin esquema de variante para SKU %s; se carga como Product base.",
                category.value,
                data.get(SKU_FIELD),
            )
        return Product(category=category, **base_kwargs)
    except TypeError as exc:
        raise ValidationError(
            f"Tipos invalidos en producto {data.get(SKU_FIELD)!r}: {exc}"
        ) from exc


def _base_kwargs(data: dict[str, Any]) -> dict[str, Any]:
    created_raw = data.get(CREATED_AT_FIELD)
    modified_raw = data.get(LAST_MODIFIED_AT_FIELD)
    return {
        "sku": _as_text(data[SKU_FIELD]),
        "name": _as_text(data[NAME_FIELD]),
        "description": _as_text(data.get(DESCRIPTION_FIELD) or ""),
        "quantity_in_stock": _as_int(data[QUANTITY_FIELD], QUANTITY_FIELD),
        "price": _as_number(data[PRICE_FIELD], PRICE_FIELD),
        "created_at": _as_timestamp(created_raw),
        "last_modified_at": _as_timestamp(modified_raw),
    }


def _require_variant_fields(data: dict[str, Any], fields: tuple[str, ...]) -> None:
    absent = missing_fields(data, fields)
    if absent:
        raise ValidationError(
            f"Producto {data.get(SKU_FIELD)!r} sin campos de variante: {', '.join(absent)}"
        )


def _as_text(value: Any) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"Se esperaba texto y se recibio: {value!r}")
    return value


def _as_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} debe ser un entero: {value!r}")
    return value


def _as_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{field_name} debe ser numerico: {value!r}")
    return float(value)


def _as_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    return parse_iso_timestamp(_as_text(value))


class ProductCatalogRepository:
    """Carga y guarda el catalogo completo como un arreglo JSON."""

    def __init__(self, file_path: Path = CATALOG_JSON) -> None:
        self._file_path = Path(file_path)

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load_products(self) -> CatalogLoadResult:
        """Carga el catalogo; nunca levanta excepciones por archivo corrupto.

        Archivo inexistente equivale a primer uso (catalogo vacio sin error).
        Cualquier otro fallo retorna catalogo vacio con el error reportado.
        """
        if not self._file_path.exists():
            LOGGER.info(
                "No existe catalogo en %s. Se inicia con catalogo vacio.",
                self._file_path,
            )
            return CatalogLoadResult()

        LOGGER.info("Cargando catalogo desde %s", self._file_path)
        try:
            products = self._read_products()
        except ServiceError as exc:
            message = str(exc)
            LOGGER.error("%s Se retorna catalogo vacio.", message)
            return CatalogLoadResult(error=message)

        LOGGER.info("Catalogo cargado: %s productos.", len(products))
        return CatalogLoadResult(products=products)

    def save_products(self, products: Iterable[Product]) -> bool:
        """Escribe el catalogo de manera segura (temp + replace)."""
        product_list = list(products)
        LOGGER.info("Guardando %s productos en %s", len(product_list), self._file_path)

        temp_path = self._file_path.with_name(f"{self._file_path.name}.tmp")
        try:
            serialized = json.dumps(
                [product_to_dict(product) for product in product_list],
                ensure_ascii=False,
                indent=2,
                allow_nan=False,
            )
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(serialized + "\n", encoding="utf-8")
            temp_path.replace(self._file_path)
        except (OSError, TypeError, ValueError) as exc:
            LOGGER.error("No fue posible guardar el catalogo en %s: %s", self._file_path, exc)
            return False
        finally:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)

        LOGGER.info("Catalogo guardado correctamente.")
        return True

    def _read_products(self) -> dict[str, Product]:
        """Lee y valida el documento; cualquier problema se traduce a ServiceError."""
        try:
            raw_text = self._file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ServiceError(
                f"Error de lectura del catalogo {self._file_path}: {exc}"
            ) from exc

        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise ServiceError(
                f"El catalogo {self._file_path} tiene formato JSON invalido: {exc}"
            ) from exc

        if not isinstance(data, list):
            raise ServiceError(f"El catalogo {self._file_path} debe ser un arreglo JSON.")

        products: dict[str, Product] = {}
        for index, record in enumerate(data):
            try:
                product = product_from_dict(record)
            except ValidationError as exc:
                raise ServiceError(
                    f"Producto invalido en posicion {index} de {self._file_path}: {exc}"
                ) from exc

            if product.sku in products:
                raise ServiceError(
                    f"SKU duplicado en {self._file_path}: {product.sku}"
                )
            products[product.sku] = product

        return products
