"""Tests del AppController sobre un catalogo temporal."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from cliente.backend.controller import AppController
from servidor.domain.models import BookProduct, ElectronicProduct, Product, ProductCategory
from shared.errors import (
    InvalidOperationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from shared.protocol import ProductDraft


class AppControllerTests(unittest.TestCase):
    """Valida la coordinacion entre formulario, catalogo y persistencia."""

    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self._temp_dir.cleanup)
        self.data_file = Path(self._temp_dir.name) / "data" / "catalog.json"
        self.controller = AppController(data_file=self.data_file)
        self.assertIsNone(self.controller.initialize())

    @staticmethod
    def _draft(**overrides: str) -> ProductDraft:
        values = {
            "sku": "elec001",
            "name": "Smart Phone",
            "description": "Telefono 5G",
            "quantity_in_stock": "10",
            "price": "1200,50",
            "category": "Electronics",
            "brand": "Acme",
            "warranty_period_months": "12",
        }
        values.update(overrides)
        return ProductDraft(**values)

    def test_build_product_selects_variant(self) -> None:
        """La categoria del draft define la variante construida."""
        phone = AppController.build_product(self._draft())
        book = AppController.build_product(
            self._draft(
                sku="b1",
                category="Books",
                author="Autor",
                isbn="978-4",
                pages="120",
                publisher="Editorial",
            )
        )
        generic = AppController.build_product(self._draft(sku="f1", category="Food"))

        self.assertIsInstance(phone, ElectronicProduct)
        self.assertEqual(phone.price, 1200.5)
        self.assertIsInstance(book, BookProduct)
        self.assertEqual(book.pages, 120)
        self.assertIs(type(generic), Product)
        self.assertIs(generic.category, ProductCategory.FOOD)

    def test_build_product_rejects_bad_input(self) -> None:
        """Entradas no numericas o categoria invalida son errores de validacion."""
        for overrides in (
            {"quantity_in_stock": "diez"},
            {"price": ""},
            {"category": "Widgets"},
            {"warranty_period_months": "-1"},
            {"brand": "  "},
        ):
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValidationError):
                    AppController.build_product(self._draft(**overrides))

    def test_create_product_and_duplicate(self) -> None:
        """Crear retorna el SKU normalizado; un duplicado levanta ValidationError."""
        self.assertEqual(self.controller.create_product(self._draft()), "ELEC001")

        with self.assertRaises(ValidationError):
            self.controller.create_product(self._draft(sku="ELEC001"))
        self.assertEqual(len(self.controller.manager), 1)

    def test_list_and_search_return_summaries(self) -> None:
        """Las filas resumidas incluyen disponibilidad y precio formateado."""
        self.controller.create_product(self._draft())
        self.controller.create_product(self._draft(sku="e2", name="Laptop", quantity_in_stock="2"))

        rows = self.controller.list_products("Electronics")
        found = self.controller.search_products("phone")

        self.assertEqual([row.name for row in rows], ["Laptop", "Smart Phone"])
        self.assertEqual(rows[0].availability_status, "LowStock")
        self.assertEqual(rows[1].price, "$1,200.50")
        self.assertEqual([row.sku for row in found], ["ELEC001"])
        self.assertEqual(self.controller.list_products("Books"), [])
        self.assertEqual(len(self.controller.list_products("")), 2)

    def test_adjust_stock(self) -> None:
        """Aplica cambios validos y traduce errores a excepciones de UI."""
        self.controller.create_product(self._draft())

        self.assertEqual(self.controller.adjust_stock("elec001", "-2"), 8)
        with self.assertRaises(InvalidOperationError):
            self.controller.adjust_stock("ELEC001", "-9")
        with self.assertRaises(ValidationError):
            self.controller.adjust_stock("ELEC001", "dos")
        with self.assertRaises(NotFoundError):
            self.controller.adjust_stock("NOPE", "1")
        self.assertEqual(self.controller.get_product("ELEC001").quantity_in_stock, 8)

    def test_update_details_and_remove(self) -> None:
        """Actualizar y eliminar levantan NotFoundError si el SKU no existe."""
        self.controller.create_product(self._draft(sku="f1", category="Food", name="Cafe"))

        self.controller.update_details("F1", " Cafe molido ", "Bolsa 1kg", "Food")
        self.assertEqual(self.controller.get_product("f1").name, "Cafe molido")
        self.assertIn("Bolsa 1kg", self.controller.get_product_details("F1"))

        self.controller.remove_product("F1")
        with self.assertRaises(NotFoundError):
            self.controller.remove_product("F1")
        with self.assertRaises(NotFoundError):
            self.controller.update_details("F1", "x", "", "Food")
        with self.assertRaises(NotFoundError):
            self.controller.get_product_details("F1")

    def test_save_catalog_writes_document(self) -> None:
        """Guardar escribe el arreglo JSON con el discriminador."""
        self.controller.create_product(self._draft())

        self.controller.save_catalog()
        data = json.loads(self.data_file.read_text(encoding="utf-8"))

        self.assertEqual([record["category"] for record in data], ["Electronics"])

    def test_save_catalog_failure_raises_persistence_error(self) -> None:
        """Un guardado fallido se reporta como PersistenceError."""
        with mock.patch.object(self.controller.manager, "save", return_value=False):
            with self.assertRaises(PersistenceError):
                self.controller.save_catalog()

    def test_save_on_exit_writes_catalog_after_clean_load(self) -> None:
        """Sin error de carga, salir guarda el catalogo."""
        self.controller.create_product(self._draft())

        self.assertTrue(self.controller.save_on_exit())

        data = json.loads(self.data_file.read_text(encoding="utf-8"))
        self.assertEqual([record["sku"] for record in data], ["ELEC001"])

    def test_save_on_exit_keeps_unreadable_catalog(self) -> None:
        """Si la carga fallo, salir no sobrescribe el archivo original."""
        original_text = '[{"sku": "X1", "name": "A",}]'
        self.data_file.write_text(original_text, encoding="utf-8")
        controller = AppController(data_file=self.data_file)

        with self.assertLogs("cliente.backend.controller", level="WARNING"):
            self.assertIsNotNone(controller.initialize())
        self.assertIsNotNone(controller.load_error)

        with self.assertLogs("cliente.backend.controller", level="WARNING"):
            self.assertFalse(controller.save_on_exit())
        self.assertEqual(self.data_file.read_text(encoding="utf-8"), original_text)

        controller.save_catalog()
        self.assertIsNone(controller.load_error)
        self.assertTrue(controller.save_on_exit())
        self.assertEqual(json.loads(self.data_file.read_text(encoding="utf-8")), [])

    def test_initialize_rejects_directory_as_data_file(self) -> None:
        """Si la ruta del catalogo es un directorio, se rechaza."""
        self.data_file.mkdir(parents=True)
        controller = AppController(data_file=self.data_file)

        with self.assertRaises(ValidationError):
            controller.initialize()

    def test_on_exit_calls_callable(self) -> None:
        """on_exit ejecuta el callable recibido."""
        quit_callback = mock.Mock()
        self.controller.on_exit(quit_callback)
        quit_callback.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
