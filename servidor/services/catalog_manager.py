"""Administrador en memoria del catalogo de productos."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from servidor.domain.inventory_rules import compute_availability, normalize_sku
from servidor.domain.models import (
    AvailabilityStatus,
    InventoryUpdateEvent,
    Product,
    ProductCategory,
)
from servidor.services.catalog_repository import ProductCatalogRepository
from servidor.services.inventory_utils import matches_search_term
from shared.errors import ValidationError

LOGGER = logging.getLogger(__name__)

_ALERT_STATUSES = frozenset({AvailabilityStatus.LOW_STOCK, AvailabilityStatus.OUT_OF_STOCK})


class ProductCatalogManager:
    """Coordina altas, bajas, cambios y consultas sobre el catalogo.

    El mapa de productos no tiene locking: no debe compartirse entre
    llamadores concurrentes sin sincronizacion externa.
    """

    def __init__(self, repository: ProductCatalogRepository | None = None) -> None:
        self._repository = repository or ProductCatalogRepository()
        self._products: dict[str, Product] = {}
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def __len__(self) -> int:
        return len(self._products)

    def initialize(self) -> str | None:
        """Carga el catalogo desde disco y retorna el error reportado, si hubo."""
        for product in self._products.values():
            product.unsubscribe(self._on_inventory_updated)

        result = self._repository.load_products()
        self._products = {}
        for product in result.products.values():
            self._products[normalize_sku(product.sku)] = product
            product.subscribe(self._on_inventory_updated)

        self._initialized = True
        return result.error

    def save(self) -> bool:
        """Persiste el catalogo completo."""
        return self._repository.save_products(self._products.values())

    def add_product(self, product: Product) -> bool:
        """Agrega un producto; rechaza SKU duplicado sin modificar el catalogo."""
        key = normalize_sku(product.sku)
        if key in self._products:
            LOGGER.error(
                "Ya existe un producto con SKU %s. No se agrega duplicado.",
                product.sku,
            )
            return False

        self._products[key] = product
        product.subscribe(self._on_inventory_updated)
        LOGGER.info("Producto agregado: %s (SKU: %s)", product.name, product.sku)
        return True

    def get_by_sku(self, sku: str) -> Product | None:
        """Busca un producto por SKU sin distinguir mayusculas."""
        return self._products.get(normalize_sku(sku))

    def update_details(
        self,
        sku: str,
        name: str,
        description: str,
        category: ProductCategory,
    ) -> bool:
        """Actualiza nombre, descripcion y categoria. SKU y precio no cambian."""
        product = self.get_by_sku(sku)
        if product is None:
            LOGGER.error("No existe producto con SKU %s para actualizar.", sku)
            return False

        product.update_details(name, description, category)
        LOGGER.info("Detalles actualizados: %s (SKU: %s)", product.name, product.sku)
        return True

    def update_stock(self, sku: str, delta: int) -> bool:
        """Aplica un cambio de stock; InvalidOperationError deja el stock intacto."""
        product = self.get_by_sku(sku)
        if product is None:
            LOGGER.error("No existe producto con SKU %s para actualizar stock.", sku)
            return False

        product.update_stock(delta)
        return True

    def remove_product(self, sku: str) -> bool:
        """Elimina un producto y cancela su suscripcion de inventario."""
        removed = self._products.pop(normalize_sku(sku), None)
        if removed is None:
            LOGGER.error("No existe producto con SKU %s para eliminar.", sku)
            return False

        removed.unsubscribe(self._on_inventory_updated)
        LOGGER.info("Producto eliminado: %s (SKU: %s)", removed.name, removed.sku)
        return True

    def list_all(self, filter_category: ProductCategory | None = None) -> list[Product]:
        """Lista productos ordenados por nombre, opcionalmente por categoria."""
        products = self._products.values()
        if filter_category is not None:
            products = [p for p in products if p.category is filter_category]
        return self._sorted(products)

    def search(self, term: str) -> list[Product]:
        """Busca por nombre, descripcion o SKU sin distinguir mayusculas."""
        if term is None or not term.strip():
            raise ValidationError("El termino de busqueda no puede estar vacio.")

        needle = term.strip()
        return self._sorted(
            product
            for product in self._products.values()
            if matches_search_term(needle, product.name, product.description, product.sku)
        )

    @staticmethod
    def _sorted(products: Iterable[Product]) -> list[Product]:
        return sorted(products, key=lambda product: (product.name.casefold(), product.sku))

    def _on_inventory_updated(self, event: InventoryUpdateEvent) -> None:
        """Registra el cambio de inventario y alerta si queda bajo o sin stock."""
        LOGGER.info(
            "Cambio de inventario para %s (SKU: %s): %s -> %s",
            event.product_name,
            event.sku,
            event.old_quantity,
            event.new_quantity,
        )

        status = compute_availability(event.new_quantity)
        if status in _ALERT_STATUSES:
            LOGGER.warning(
                "Alerta de stock: %s (SKU: %s) quedo en estado %s con %s unidades.",
                event.product_name,
                event.sku,
                status.value,
                event.new_quantity,
            )
