"""Tests de persistencia JSON polimorfica del catalogo."""

from __future__ import annotations

import json
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest import mock

from servidor.domain.models import BookProduct, ElectronicProduct, Product, ProductCategory
from servidor.services.catalog_repository import (
    ProductCatalogRepository,
    product_from_dict,
    product_to_dict,
)
from shared.errors import ValidationError

CREATED = datetime(2024, 3, 1, 10, 30, tzinfo=timezone.utc)
MODIFIED = datetime(2024, 3, 2, 8, 0, tzinfo=timezone.utc)


def build_phone() -> ElectronicProduct:
    return ElectronicProduct(
        sku="ELEC001",
        name="Smart Phone",
        description="Telefono 5G",
        quantity_in_stock=10,
        price=1200.0,
        brand="Acme",
        warranty_period_months=24,
        created_at=CREATED,
        last_modified_at=MODIFIED,
    )


def build_book() -> BookProduct:
    return BookProduct(
        sku="BOOK001",
        name="Cien anios de soledad",
        description="Novela",
        quantity_in_stock=3,
        price=19.9,
        author="Gabriel Garcia Marquez",
        isbn="978-0307474728",
        pages=417,
        publisher="Sudamericana",
        created_at=CREATED,
        last_modified_at=MODIFIED,
    )


class ProductCodecTests(unittest.TestCase):
    """Valida el codec por registro."""

    def test_to_dict_uses_variant_fields_and_discriminator(self) -> None:
        """Debe incluir category, campos base y los de la variante."""
        data = product_to_dict(build_phone())

        self.assertEqual(data["category"], "Electronics")
        self.assertEqual(data["quantityInStock"], 10)
        self.assertEqual(data["availabilityStatus"], "InStock")
        self.assertEqual(data["brand"], "Acme")
        self.assertEqual(data["warrantyPeriodMonths"], 24)
        self.assertNotIn("author", data)

    def test_availability_in_document_is_ignored_on_read(self) -> None:
        """availabilityStatus se recalcula desde la cantidad."""
        data = product_to_dict(build_book())
        data["availabilityStatus"] = "InStock"

        product = product_from_dict(data)

        self.assertEqual(product.availability_status.value, "LowStock")

    def test_known_category_without_variant_loads_as_base(self) -> None:
        """Clothing se carga como Product base manteniendo la categoria."""
        data = {
            "sku": "C1",
            "name": "Polera",
            "quantityInStock": 2,
            "price": 9.5,
            "category": "Clothing",
        }
        with self.assertLogs("servidor.services.catalog_repository", level="WARNING"):
            product = product_from_dict(data)

        self.assertIs(type(product), Product)
        self.assertIs(product.category, ProductCategory.CLOTHING)
        self.assertEqual(product.description, "")

    def test_integer_discriminator_is_accepted(self) -> None:
        """Un ordinal de enum (0 = Electronics) selecciona la variante."""
        data = product_to_dict(build_phone())
        data["category"] = 0

        self.assertIsInstance(product_from_dict(data), ElectronicProduct)

    def test_invalid_records_raise_validation_error(self) -> None:
        """Campos faltantes, tipos invalidos o valores fuera de rango fallan."""
        base = product_to_dict(build_book())
        broken_records = [
            {key: value for key, value in base.items() if key != "sku"},
            {key: value for key, value in base.items() if key != "isbn"},
            {**base, "quantityInStock": "3"},
            {**base, "price": -1},
            {**base, "pages": 0},
            {**base, "createdAt": "ayer"},
            {**base, "createdAt": 12345},
            {**base, "lastModifiedAt": ["2024-03-01"]},
            {**base, "price": float("nan")},
            ["no", "es", "objeto"],
        ]
        for record in broken_records:
            with self.subTest(record=record):
                with self.assertRaises(ValidationError):
                    product_from_dict(record)  # type: ignore[arg-type]


class ProductCatalogRepositoryTests(unittest.TestCase):
    """Valida carga y guardado del documento completo."""

    def test_round_trip_preserves_variants_and_fields(self) -> None:
        """Guardar y cargar debe conservar variante concreta y valores."""
        with tempfile.TemporaryDirectory() as temp_dir:
            repository = ProductCatalogRepository(Path(temp_dir) / "data" / "catalog.json")
            phone, book = build_phone(), build_book()

            self.assertTrue(repository.save_products([phone, book]))
            result = repository.load_products()

        self.assertIsNone(result.error)
        loaded_phone = result.products["ELEC001"]
        loaded_book = result.products["BOOK001"]
        self.assertIs(type(loaded_phone), ElectronicProduct)
        self.assertIs(type(loaded_book), BookProduct)
        self.assertEqual(product_to_dict(loaded_phone), product_to_dict(phone))
        self.assertEqual(product_to_dict(loaded_book), product_to_dict(book))
        self.assertEqual(loaded_phone.created_at, CREATED)
        self.assertEqual(loaded_book.last_modified_at, MODIFIED)

    def test_saved_document_is_pretty_printed_utf8_array(self) -> None:
        """El archivo debe ser un arreglo JSON indentado en UTF-8."""
        with tempfile.TemporaryDirectory() as temp_dir:
            file_path = Path(temp_dir) / "catalog.json"
            book = BookProduct("B2", "Canción", "", 1, 5.0, "Autor", "1", 10, "Ed")
            ProductCatalogRepository(file_path).save_products([book])
            raw_text = file_path.read_text(encoding="utf-8")

        self.assertIn("Canción", raw_text)
        self.assertIn('\n  {\n    "sku": "B2"', raw_text)
        self.assertIsInstance(json.loads(raw_text), list)

    def test_missing_file_is_first_run(self) -> None:
        """Sin archivo: catalogo vacio y sin error."""
        with tempfile.TemporaryDirectory() as temp_dir:
            result = ProductCatalogRepository(Path(temp_dir) / "nada.json").load_products()

        self.assertEqual(result.products, {})
        self.assertIsNone(result.error)

    def test_mixed_categories_file(self) -> None:
        """Books se carga como BookProduct y Widgets como Product base con warning."""
        records = [
            {
                "category": "Books",
                "sku": "B1",
                "name": "Libro",
                "description": "",
                "quantityInStock": 4,
                "price": 12.5,
                "author": "Autor",
                "isbn": "978-1",
                "pages": 200,
                "publisher": "Editorial",
            },
            {
                "category": "Widgets",
                "sku": "W1",
                "name": "Widget",
                "description": "Generico",
                "quantityInStock": 7,
                "price": 3.0,
            },
        ]
        with tempfile.TemporaryDirectory() as temp_dir:
            file_path = Path(temp_dir) / "catalog.json"
            file_path.write_text(json.dumps(records), encoding="utf-8")

            with self.assertLogs("servidor.services.catalog_repository", level="WARNING") as logs:
                result = ProductCatalogRepository(file_path).load_products()

        self.assertIsNone(result.error)
        self.assertIs(type(result.products["B1"]), BookProduct)
        self.assertIs(type(result.products["W1"]), Product)
        self.assertIs(result.products["W1"].category, ProductCategory.OTHER)
        self.assertTrue(any("Widgets" in line for line in logs.output))

    def test_malformed_documents_degrade_to_empty_catalog(self) -> None:
        """Documento o registro invalido, o SKU duplicado: vacio con error."""
        duplicated = [
            {"sku": "x1", "name": "A", "quantityInStock": 1, "price": 1, "category": "Food"},
            {"sku": "X1", "name": "B", "quantityInStock": 1, "price": 1, "category": "Food"},
        ]
        contents = [
            "{ no es json",
            json.dumps({"sku": "X1"}),
            json.dumps(duplicated),
            json.dumps([{"sku": "X1"}]),
            json.dumps(
                [
                    {
                        "sku": "X1",
                        "name": "A",
                        "quantityInStock": 1,
                        "price": 1,
                        "category": "Food",
                        "createdAt": 12345,
                    }
                ]
            ),
            '[{"sku": "X1", "name": "A", "quantityInStock": 1, "price": NaN, "category": "Food"}]',
        ]
        for content in contents:
            with self.subTest(content=content):
                with tempfile.TemporaryDirectory() as temp_dir:
                    file_path = Path(temp_dir) / "catalog.json"
                    file_path.write_text(content, encoding="utf-8")

                    with self.assertLogs(
                        "servidor.services.catalog_repository", level="ERROR"
                    ):
                        result = ProductCatalogRepository(file_path).load_products()

                self.assertEqual(result.products, {})
                self.assertIsNotNone(result.error)

    def test_failed_save_reports_and_keeps_previous_document(self) -> None:
        """Un fallo de escritura retorna False y no deja archivo parcial."""
        with tempfile.TemporaryDirectory() as temp_dir:
            file_path = Path(temp_dir) / "catalog.json"
            repository = ProductCatalogRepository(file_path)
            repository.save_products([build_phone()])
            original_text = file_path.read_text(encoding="utf-8")

            with mock.patch.object(Path, "replace", side_effect=OSError("disco lleno")):
                with self.assertLogs("servidor.services.catalog_repository", level="ERROR"):
                    saved = repository.save_products([build_phone(), build_book()])

            self.assertFalse(saved)
            self.assertEqual(file_path.read_text(encoding="utf-8"), original_text)
            self.assertFalse(file_path.with_name("catalog.json.tmp").exists())

    def test_non_finite_values_are_not_written(self) -> None:
        """NaN no es JSON estandar: el guardado falla sin tocar el archivo."""
        with tempfile.TemporaryDirectory() as temp_dir:
            file_path = Path(temp_dir) / "catalog.json"
            repository = ProductCatalogRepository(file_path)

            with mock.patch(
                "servidor.services.catalog_repository.product_to_dict",
                return_value={"sku": "E1", "price": float("nan")},
            ):
                with self.assertLogs("servidor.services.catalog_repository", level="ERROR"):
                    saved = repository.save_products([build_phone()])

            self.assertFalse(saved)
            self.assertFalse(file_path.exists())


if __name__ == "__main__":
    unittest.main()
