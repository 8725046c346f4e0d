"""DTOs entre el controlador de UI y el catalogo."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ProductDraft:
    """DTO para capturar datos crudos del formulario de producto."""

    sku: str
    name: str
    description: str
    quantity_in_stock: str
    price: str
    category: str
    brand: str = ""
    warranty_period_months: str = ""
    author: str = ""
    isbn: str = ""
    pages: str = ""
    publisher: str = ""


@dataclass(slots=True)
class ProductSummary:
    """Fila resumida de producto para la tabla principal."""

    sku: str
    name: str
    category: str
    quantity_in_stock: int
    availability_status: str
    price: str
