"""Reglas de inventario compartidas por las entidades del catalogo."""

from __future__ import annotations

from datetime import datetime, timezone

from parametros import LOW_STOCK_THRESHOLD
from servidor.domain.enums import AvailabilityStatus


def normalize_sku(sku: str) -> str:
    """Normaliza un SKU para uso como clave del catalogo."""
    return sku.strip().upper()


def compute_availability(
    quantity: int,
    low_stock_threshold: int = LOW_STOCK_THRESHOLD,
) -> AvailabilityStatus:
    """Calcula el estado de disponibilidad a partir de la cantidad en stock."""
    if quantity <= 0:
        return AvailabilityStatus.OUT_OF_STOCK
    if quantity <= low_stock_threshold:
        return AvailabilityStatus.LOW_STOCK
    return AvailabilityStatus.IN_STOCK


def utc_now() -> datetime:
    """Retorna el instante actual en UTC."""
    return datetime.now(timezone.utc)
