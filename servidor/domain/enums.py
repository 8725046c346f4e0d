"""Enumeraciones del dominio de catalogo."""

from __future__ import annotations

from enum import Enum


class ProductCategory(str, Enum):
    """Categoria de producto; su valor es el discriminador persistido."""

    ELECTRONICS = "Electronics"
    BOOKS = "Books"
    CLOTHING = "Clothing"
    HOME_GOODS = "HomeGoods"
    FOOD = "Food"
    OTHER = "Other"

    @classmethod
    def from_value(cls, raw_value: object) -> ProductCategory | None:
        """Resuelve una categoria desde su nombre o su ordinal; None si no existe."""
        if isinstance(raw_value, bool):
            return None

        if isinstance(raw_value, int):
            members = list(cls)
            if 0 <= raw_value < len(members):
                return members[raw_value]
            return None

        if isinstance(raw_value, str):
            wanted = raw_value.strip().casefold()
            for member in cls:
                if member.value.casefold() == wanted:
                    return member
        return None


class AvailabilityStatus(str, Enum):
    """Estado de disponibilidad derivado de la cantidad en stock."""

    IN_STOCK = "InStock"
    LOW_STOCK = "LowStock"
    OUT_OF_STOCK = "OutOfStock"
