"""Tests de validaciones de entrada del cliente."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from cliente.backend.validators import (
    parse_category,
    parse_int_field,
    parse_price_field,
    validate_data_file,
)
from servidor.domain.models import ProductCategory
from shared.errors import ValidationError


class ValidatorsTests(unittest.TestCase):
    """Valida parseo de campos de formulario."""

    def test_parse_int_field(self) -> None:
        """Acepta enteros con signo y espacios; rechaza vacios y decimales."""
        self.assertEqual(parse_int_field(" -2 ", "Cambio"), -2)
        for raw in ("", "1.5", "abc"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValidationError):
                    parse_int_field(raw, "Cambio")

    def test_parse_price_field(self) -> None:
        """Acepta coma decimal; rechaza texto y valores no finitos."""
        self.assertEqual(parse_price_field("19,90"), 19.9)
        self.assertEqual(parse_price_field("5"), 5.0)
        for raw in ("", "gratis", "nan", "inf"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValidationError):
                    parse_price_field(raw)

    def test_parse_category(self) -> None:
        """Resuelve categorias conocidas y rechaza desconocidas."""
        self.assertIs(parse_category("HomeGoods"), ProductCategory.HOME_GOODS)
        with self.assertRaises(ValidationError):
            parse_category("Widgets")

    def test_validate_data_file_creates_parent(self) -> None:
        """Crea el directorio padre del catalogo si no existe."""
        with tempfile.TemporaryDirectory() as temp_dir:
            data_file = Path(temp_dir) / "nuevo" / "catalog.json"
            validate_data_file(data_file)
            self.assertTrue(data_file.parent.is_dir())


if __name__ == "__main__":
    unittest.main()
