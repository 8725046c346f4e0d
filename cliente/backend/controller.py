"""Controlador principal del cliente."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from parametros import CATALOG_JSON
from servidor.domain.models import BookProduct, ElectronicProduct, Product, ProductCategory
from servidor.services.catalog_manager import ProductCatalogManager
from servidor.services.catalog_repository import ProductCatalogRepository
from servidor.services.inventory_utils import format_price
from shared.errors import NotFoundError, PersistenceError, ValidationError
from shared.protocol import ProductDraft, ProductSummary

from .product_details_formatter import format_product_details
from .validators import (
    parse_category,
    parse_int_field,
    parse_price_field,
    validate_data_file,
)

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

LOGGER = logging.getLogger(__name__)


class AppController:
    """Coordina acciones de UI con el administrador del catalogo."""

    def __init__(
        self,
        manager: ProductCatalogManager | None = None,
        data_file: Path = CATALOG_JSON,
    ) -> None:
        self._data_file = data_file
        self._manager = manager or ProductCatalogManager(ProductCatalogRepository(data_file))
        self._load_error: str | None = None

    @property
    def manager(self) -> ProductCatalogManager:
        return self._manager

    def initialize(self) -> str | None:
        """Carga el catalogo; retorna el error de carga para avisar al usuario."""
        validate_data_file(self._data_file)
        error = self._manager.initialize()
        self._load_error = error
        if error:
            LOGGER.warning("Catalogo iniciado vacio por error de carga: %s", error)
        LOGGER.info("Catalogo inicializado con %s productos.", len(self._manager))
        return error

    @staticmethod
    def list_categories() -> list[str]:
        """Lista valores de categoria disponibles para la UI."""
        return [category.value for category in ProductCategory]

    def list_products(self, category_value: str = "") -> list[ProductSummary]:
        """Lista productos, filtrando por categoria si se indica."""
        filter_category = parse_category(category_value) if category_value.strip() else None
        return [self._to_summary(p) for p in self._manager.list_all(filter_category)]

    def search_products(self, term: str) -> list[ProductSummary]:
        """Busca productos por nombre, descripcion o SKU."""
        results = self._manager.search(term)
        LOGGER.info("Busqueda %r: %s resultados.", term, len(results))
        return [self._to_summary(product) for product in results]

    def create_product(self, draft: ProductDraft) -> str:
        """Valida el draft, construye la variante y la agrega al catalogo."""
        product = self.build_product(draft)
        if not self._manager.add_product(product):
            raise ValidationError(f"Ya existe un producto con SKU {product.sku}.")
        return product.sku

    def get_product(self, sku: str) -> Product:
        """Retorna el producto o levanta NotFoundError."""
        product = self._manager.get_by_sku(sku)
        if product is None:
            raise NotFoundError(f"No existe producto con SKU {sku}.")
        return product

    def update_details(
        self,
        sku: str,
        name: str,
        description: str,
        category_value: str,
    ) -> None:
        """Actualiza nombre, descripcion y categoria de un producto."""
        category = parse_category(category_value)
        if not self._manager.update_details(sku, name.strip(), description.strip(), category):
            raise NotFoundError(f"No existe producto con SKU {sku}.")

    def adjust_stock(self, sku: str, raw_delta: str) -> int:
        """Aplica un cambio de stock y retorna la cantidad resultante."""
        delta = parse_int_field(raw_delta, "Cambio de stock")
        if not self._manager.update_stock(sku, delta):
            raise NotFoundError(f"No existe producto con SKU {sku}.")
        return self.get_product(sku).quantity_in_stock

    def remove_product(self, sku: str) -> None:
        """Elimina un producto del catalogo."""
        if not self._manager.remove_product(sku):
            raise NotFoundError(f"No existe producto con SKU {sku}.")

    def get_product_details(self, sku: str) -> str:
        """Retorna el texto de detalle de un producto."""
        return format_product_details(self.get_product(sku))

    def save_catalog(self) -> None:
        """Persiste el catalogo; un fallo se reporta una sola vez."""
        if not self._manager.save():
            raise PersistenceError(f"No fue posible guardar el catalogo en {self._data_file}.")
        self._load_error = None

    @property
    def load_error(self) -> str | None:
        """Error de la ultima carga, mientras no se guarde explicitamente."""
        return self._load_error

    def save_on_exit(self) -> bool:
        """Guarda al salir salvo que la carga haya fallado.

        Con un archivo ilegible el catalogo en memoria esta vacio; guardarlo
        sobrescribiria el documento original.
        """
        if self._load_error is not None:
            LOGGER.warning(
                "Se omite el guardado al salir: el catalogo %s no se pudo cargar.",
                self._data_file,
            )
            return False
        self.save_catalog()
        return True

    def on_exit(
        self,
        app: QApplication | Callable[[], None] | None,
    ) -> None:
        """Cierra la aplicacion."""
        LOGGER.info("Accion ejecutada: salir")

        if callable(app):
            app()
            return

        if app is not None:
            app.quit()

    @staticmethod
    def build_product(draft: ProductDraft) -> Product:
        """Construye la variante de producto segun la categoria del draft."""
        category = parse_category(draft.category)
        common = {
            "sku": draft.sku.strip(),
            "name": draft.name.strip(),
            "description": draft.description.strip(),
            "quantity_in_stock": parse_int_field(draft.quantity_in_stock, "Cantidad"),
            "price": parse_price_field(draft.price),
        }

        if category is ProductCategory.ELECTRONICS:
            return ElectronicProduct(
                brand=draft.brand.strip(),
                warranty_period_months=parse_int_field(
                    draft.warranty_period_months, "Garantia (meses)"
                ),
                **common,
            )

        if category is ProductCategory.BOOKS:
            return BookProduct(
                author=draft.author.strip(),
                isbn=draft.isbn.strip(),
                pages=parse_int_field(draft.pages, "Paginas"),
                publisher=draft.publisher.strip(),
                **common,
            )

        return Product(category=category, **common)

    @staticmethod
    def _to_summary(product: Product) -> ProductSummary:
        return ProductSummary(
            sku=product.sku,
            name=product.name,
            category=product.category.value,
            quantity_in_stock=product.quantity_in_stock,
            availability_status=product.availability_status.value,
            price=format_price(product.price),
        )
