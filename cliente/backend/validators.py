"""Validaciones para entradas del cliente."""

from __future__ import annotations

import math
from pathlib import Path

from servidor.domain.models import ProductCategory
from shared.errors import ValidationError


def validate_data_file(path: Path) -> None:
    """Valida que la ruta del catalogo sea utilizable como archivo JSON."""
    if path.exists() and path.is_dir():
        raise ValidationError(f"La ruta del catalogo es un directorio: {path}")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ValidationError(f"No se pudo crear/acceder al directorio: {path.parent}") from exc


def parse_int_field(raw_value: str, field_label: str) -> int:
    """Parsea un entero (admite signo) desde texto de formulario."""
    text = (raw_value or "").strip()
    if not text:
        raise ValidationError(f"{field_label} es obligatorio.")

    try:
        return int(text)
    except ValueError as exc:
        raise ValidationError(f"{field_label} debe ser un numero entero.") from exc


def parse_price_field(raw_value: str, field_label: str = "Precio") -> float:
    """Parsea un precio aceptando coma o punto decimal."""
    text = (raw_value or "").strip().replace(",", ".")
    if not text:
        raise ValidationError(f"{field_label} es obligatorio.")

    try:
        value = float(text)
    except ValueError as exc:
        raise ValidationError(f"{field_label} debe ser numerico.") from exc

    if not math.isfinite(value):
        raise ValidationError(f"{field_label} debe ser un numero finito.")
    return value


def parse_category(raw_value: str) -> ProductCategory:
    """Resuelve la categoria seleccionada en la UI."""
    category = ProductCategory.from_value((raw_value or "").strip())
    if category is None:
        raise ValidationError(f"Categoria invalida: {raw_value}")
    return category
