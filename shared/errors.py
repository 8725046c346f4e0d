"""Excepciones compartidas del proyecto."""

from __future__ import annotations


class ValidationError(Exception):
    """Error de validacion de datos de entrada."""


class ServiceError(Exception):
    """Error en la ejecucion de servicios."""


class NotFoundError(ServiceError):
    """No existe un producto con el SKU solicitado."""


class InvalidOperationError(ServiceError):
    """Operacion que violaria un invariante del inventario."""


class PersistenceError(ServiceError):
    """Fallo al leer o escribir el catalogo en disco."""
