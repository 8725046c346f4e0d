"""Modelos de dominio del catalogo de productos."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from servidor.domain.enums import AvailabilityStatus, ProductCategory
from servidor.domain.inventory_rules import compute_availability, normalize_sku, utc_now
from shared.errors import InvalidOperationError, ValidationError

__all__ = [
    "AvailabilityStatus",
    "BookProduct",
    "ElectronicProduct",
    "InventoryListener",
    "InventoryUpdateEvent",
    "Product",
    "ProductCategory",
]

# Categorias que exigen un esquema de variante propio.
_VARIANT_CATEGORIES = frozenset({ProductCategory.ELECTRONICS, ProductCategory.BOOKS})


@dataclass(frozen=True, slots=True)
class InventoryUpdateEvent:
    """Notificacion de cambio de stock de un producto."""

    sku: str
    product_name: str
    old_quantity: int
    new_quantity: int


InventoryListener = Callable[[InventoryUpdateEvent], None]


def _require_text(value: str, field_label: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_label} no puede estar vacio.")
    return str(value)


class Product:
    """Producto generico del catalogo.

    ``sku`` y ``price`` son inmutables tras la construccion. La cantidad solo
    cambia mediante ``update_stock``, que notifica a los listeners suscritos.
    """

    def __init__(
        self,
        sku: str,
        name: str,
        description: str,
        quantity_in_stock: int,
        price: float,
        category: ProductCategory = ProductCategory.OTHER,
        *,
        created_at: datetime | None = None,
        last_modified_at: datetime | None = None,
    ) -> None:
        _require_text(sku, "SKU")
        _require_text(name, "Nombre")
        if not math.isfinite(price):
            raise ValidationError("El precio debe ser un numero finito.")
        if price < 0:
            raise ValidationError("El precio no puede ser negativo.")
        if quantity_in_stock < 0:
            raise ValidationError("La cantidad en stock no puede ser negativa.")

        now = utc_now()
        self._sku = normalize_sku(sku)
        self.name = name
        self.description = description or ""
        self._quantity_in_stock = int(quantity_in_stock)
        self._price = float(price)
        self.category = ProductCategory(category)
        self.created_at = created_at or now
        self.last_modified_at = last_modified_at or self.created_at
        self._listeners: list[InventoryListener] = []

        if type(self) is Product:
            self._validate_category_change(self.category)

    @property
    def sku(self) -> str:
        return self._sku

    @property
    def price(self) -> float:
        return self._price

    @property
    def quantity_in_stock(self) -> int:
        return self._quantity_in_stock

    @property
    def availability_status(self) -> AvailabilityStatus:
        """Estado derivado de la cantidad actual; nunca se almacena."""
        return compute_availability(self._quantity_in_stock)

    def subscribe(self, listener: InventoryListener) -> None:
        """Registra un listener de cambios de inventario."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: InventoryListener) -> None:
        """Quita un listener; ignora listeners no registrados."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def update_stock(self, delta: int) -> None:
        """Aplica ``delta`` al stock y notifica si la cantidad cambio."""
        old_quantity = self._quantity_in_stock
        if old_quantity + delta < 0:
            raise InvalidOperationError(
                f"No se puede dejar el stock de {self.name} bajo cero. "
                f"Actual: {old_quantity}, cambio solicitado: {delta}"
            )

        self._quantity_in_stock = old_quantity + delta
        self.last_modified_at = utc_now()

        if self._quantity_in_stock != old_quantity:
            event = InventoryUpdateEvent(
                sku=self._sku,
                product_name=self.name,
                old_quantity=old_quantity,
                new_quantity=self._quantity_in_stock,
            )
            # Un listener no debe suscribir/desuscribir durante el despacho.
            for listener in tuple(self._listeners):
                listener(event)

    def update_details(
        self,
        name: str,
        description: str,
        category: ProductCategory,
    ) -> None:
        """Actualiza nombre, descripcion y categoria (nunca SKU ni precio)."""
        _require_text(name, "Nombre")
        new_category = ProductCategory(category)
        self._validate_category_change(new_category)

        self.name = name
        self.description = description or ""
        self.category = new_category
        self.last_modified_at = utc_now()

    def _validate_category_change(self, new_category: ProductCategory) -> None:
        if new_category in _VARIANT_CATEGORIES:
            raise ValidationError(
                f"Un producto generico no puede pasar a la categoria {new_category.value}."
            )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(sku={self._sku!r}, name={self.name!r}, "
            f"quantity_in_stock={self._quantity_in_stock}, price={self._price})"
        )


class ElectronicProduct(Product):
    """Producto electronico con marca y garantia en meses."""

    def __init__(
        self,
        sku: str,
        name: str,
        description: str,
        quantity_in_stock: int,
        price: float,
        brand: str,
        warranty_period_months: int,
        *,
        created_at: datetime | None = None,
        last_modified_at: datetime | None = None,
    ) -> None:
        super().__init__(
            sku,
            name,
            description,
            quantity_in_stock,
            price,
            ProductCategory.ELECTRONICS,
            created_at=created_at,
            last_modified_at=last_modified_at,
        )
        _require_text(brand, "Marca")
        if warranty_period_months < 0:
            raise ValidationError("La garantia no puede ser negativa.")

        self.brand = brand
        self.warranty_period_months = int(warranty_period_months)

    def _validate_category_change(self, new_category: ProductCategory) -> None:
        if new_category is not ProductCategory.ELECTRONICS:
            raise ValidationError("La categoria de un producto electronico es fija.")


class BookProduct(Product):
    """Libro con autor, ISBN, numero de paginas y editorial."""

    def __init__(
        self,
        sku: str,
        name: str,
        description: str,
        quantity_in_stock: int,
        price: float,
        author: str,
        isbn: str,
        pages: int,
        publisher: str,
        *,
        created_at: datetime | None = None,
        last_modified_at: datetime | None = None,
    ) -> None:
        super().__init__(
            sku,
            name,
            description,
            quantity_in_stock,
            price,
            ProductCategory.BOOKS,
            created_at=created_at,
            last_modified_at=last_modified_at,
        )
        _require_text(author, "Autor")
        _require_text(isbn, "ISBN")
        _require_text(publisher, "Editorial")
        if pages <= 0:
            raise ValidationError("El numero de paginas debe ser positivo.")

        self.author = author
        self.isbn = isbn
        self.pages = int(pages)
        self.publisher = publisher

    def _validate_category_change(self, new_category: ProductCategory) -> None:
        if new_category is not ProductCategory.BOOKS:
            raise ValidationError("La categoria de un libro es fija.")
