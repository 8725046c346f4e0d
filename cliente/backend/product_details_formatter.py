"""Formateo puro del detalle de un producto."""

from __future__ import annotations

from collections.abc import Callable

from servidor.domain.models import BookProduct, ElectronicProduct, Product
from servidor.services.inventory_utils import format_price, format_timestamp


def format_product_details(product: Product) -> str:
    """Construye el bloque de detalle como lineas ``Campo: valor``.

    Primero las lineas comunes a todo producto y luego las propias de la
    variante concreta, resueltas por ``_VARIANT_FORMATTERS``.
    """
    lines = _base_lines(product)
    variant_formatter = _VARIANT_FORMATTERS.get(type(product))
    if variant_formatter is not None:
        lines.extend(variant_formatter(product))
    return "\n".join(lines)


def _base_lines(product: Product) -> list[str]:
    return [
        f"--- Detalle: {product.name} ({product.sku}) ---",
        f"Descripcion: {product.description}",
        f"Categoria: {product.category.value}",
        f"Stock actual: {product.quantity_in_stock} ({product.availability_status.value})",
        f"Precio: {format_price(product.price)}",
        f"Creado: {format_timestamp(product.created_at)}",
        f"Ultima modificacion: {format_timestamp(product.last_modified_at)}",
    ]


def _electronic_lines(product: ElectronicProduct) -> list[str]:
    return [
        f"Marca: {product.brand}",
        f"Garantia: {product.warranty_period_months} meses",
    ]


def _book_lines(product: BookProduct) -> list[str]:
    return [
        f"Autor: {product.author}",
        f"ISBN: {product.isbn}",
        f"Paginas: {product.pages}",
        f"Editorial: {product.publisher}",
    ]


_VARIANT_FORMATTERS: dict[type[Product], Callable[..., list[str]]] = {
    ElectronicProduct: _electronic_lines,
    BookProduct: _book_lines,
}
