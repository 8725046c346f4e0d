"""Utilidades puras para productos del catalogo."""

from __future__ import annotations

from datetime import datetime, timezone

from parametros import DEFAULT_CURRENCY_SYMBOL
from shared.errors import ValidationError

_TIMESTAMP_DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_price(amount: float, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Formatea un monto con separador de miles y dos decimales."""
    return f"{symbol}{amount:,.2f}"


def format_timestamp(value: datetime) -> str:
    """Formatea un timestamp UTC para mostrar en pantalla."""
    return f"{value.astimezone(timezone.utc).strftime(_TIMESTAMP_DISPLAY_FORMAT)} (UTC)"


def timestamp_to_iso(value: datetime) -> str:
    """Serializa un timestamp como ISO-8601 en UTC."""
    return value.astimezone(timezone.utc).isoformat()


def parse_iso_timestamp(raw_value: str) -> datetime:
    """Parsea un ISO-8601; los valores sin zona horaria se asumen UTC."""
    if not isinstance(raw_value, str):
        raise ValidationError(f"Timestamp invalido: {raw_value!r}")
    try:
        parsed = datetime.fromisoformat(raw_value.strip())
    except ValueError as exc:
        raise ValidationError(f"Timestamp invalido: {raw_value!r}") from exc

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def matches_search_term(term: str, *values: str) -> bool:
    """Indica si ``term`` aparece (sin distinguir mayusculas) en algun valor."""
    needle = term.casefold()
    return any(needle in (value or "").casefold() for value in values)
