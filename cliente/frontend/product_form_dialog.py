"""Dialogo para crear productos o editar sus detalles."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QComboBox,
    QDialog,
    QFormLayout,
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cliente.frontend.dialogs import show_error, show_info
from servidor.domain.models import BookProduct, ElectronicProduct, ProductCategory
from shared.errors import ServiceError, ValidationError
from shared.protocol import ProductDraft

if TYPE_CHECKING:
    from cliente.backend.controller import AppController


class ProductFormDialog(QDialog):
    """Dialogo modal de producto.

    Sin ``sku`` crea un producto nuevo. Con ``sku`` edita nombre, descripcion
    y categoria; SKU, precio y stock quedan de solo lectura.
    """

    def __init__(
        self,
        controller: AppController,
        sku: str | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._edit_sku = sku
        self._inputs: dict[str, QLineEdit] = {}
        self._electronic_rows: list[str] = ["brand", "warranty_period_months"]
        self._book_rows: list[str] = ["author", "isbn", "pages", "publisher"]
        self._form: QFormLayout
        self._category_combo: QComboBox

        title = "Editar producto" if sku else "Crear producto"
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumSize(520, 560)

        self._build_ui(title)
        self._apply_styles()
        if sku:
            self._load_product(sku)
        self._refresh_variant_rows()

    def _build_ui(self, title: str) -> None:
        """Construye widgets del dialogo."""
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(18, 18, 18, 18)

        card = QFrame(self)
        card.setObjectName("dialogCard")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(24, 24, 24, 24)
        card_layout.setSpacing(12)

        title_label = QLabel(title, card)
        title_label.setObjectName("titleLabel")
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._form = QFormLayout()
        self._form.setSpacing(10)

        self._category_combo = QComboBox(card)
        self._category_combo.addItems(self._controller.list_categories())
        self._category_combo.currentTextChanged.connect(self._refresh_variant_rows)

        self._add_input("sku", "SKU", "ELEC001")
        self._add_input("name", "Nombre", "Smart Phone")
        self._add_input("description", "Descripcion", "")
        self._add_input("quantity_in_stock", "Cantidad", "0")
        self._add_input("price", "Precio", "0.00")
        self._form.addRow(self._build_label("Categoria"), self._category_combo)
        self._add_input("brand", "Marca", "")
        self._add_input("warranty_period_months", "Garantia (meses)", "12")
        self._add_input("author", "Autor", "")
        self._add_input("isbn", "ISBN", "")
        self._add_input("pages", "Paginas", "")
        self._add_input("publisher", "Editorial", "")

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch(1)

        cancel_button = QPushButton("Cancelar", card)
        cancel_button.setObjectName("cancelButton")
        save_button = QPushButton("Guardar", card)

        cancel_button.clicked.connect(self.reject)
        save_button.clicked.connect(self._on_save_clicked)

        buttons_layout.addWidget(cancel_button)
        buttons_layout.addWidget(save_button)

        card_layout.addWidget(title_label)
        card_layout.addSpacing(4)
        card_layout.addLayout(self._form)
        card_layout.addSpacing(4)
        card_layout.addLayout(buttons_layout)

        shadow = QGraphicsDropShadowEffect(card)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 0, 0, 35))
        card.setGraphicsEffect(shadow)

        root_layout.addWidget(card)
        self._inputs["sku"].setFocus()

    def _add_input(self, key: str, label: str, placeholder: str) -> None:
        line_edit = QLineEdit(self)
        line_edit.setPlaceholderText(placeholder)
        self._inputs[key] = line_edit
        self._form.addRow(self._build_label(label), line_edit)

    def _build_label(self, text: str) -> QLabel:
        label = QLabel(text, self)
        label.setObjectName("fieldLabel")
        return label

    def _load_product(self, sku: str) -> None:
        """Precarga el formulario y bloquea campos inmutables."""
        product = self._controller.get_product(sku)
        values = {
            "sku": product.sku,
            "name": product.name,
            "description": product.description,
            "quantity_in_stock": str(product.quantity_in_stock),
            "price": f"{product.price:.2f}",
        }
        if isinstance(product, ElectronicProduct):
            values["brand"] = product.brand
            values["warranty_period_months"] = str(product.warranty_period_months)
        elif isinstance(product, BookProduct):
            values.update(
                author=product.author,
                isbn=product.isbn,
                pages=str(product.pages),
                publisher=product.publisher,
            )

        for key, value in values.items():
            self._inputs[key].setText(value)

        editable = {"name", "description"}
        for key, line_edit in self._inputs.items():
            line_edit.setReadOnly(key not in editable)
        self._category_combo.setCurrentText(product.category.value)

    def _refresh_variant_rows(self, _text: str = "") -> None:
        """Muestra solo los campos de la variante seleccionada."""
        category = self._category_combo.currentText()
        visible = set()
        if category == ProductCategory.ELECTRONICS.value:
            visible.update(self._electronic_rows)
        elif category == ProductCategory.BOOKS.value:
            visible.update(self._book_rows)

        for key in (*self._electronic_rows, *self._book_rows):
            self._form.setRowVisible(self._inputs[key], key in visible)

    def _on_save_clicked(self) -> None:
        """Crea o actualiza el producto usando el controller."""
        try:
            if self._edit_sku:
                self._controller.update_details(
                    self._edit_sku,
                    self._inputs["name"].text(),
                    self._inputs["description"].text(),
                    self._category_combo.currentText(),
                )
                message = f"Detalles actualizados: {self._edit_sku}"
            else:
                sku = self._controller.create_product(self._build_draft())
                message = f"Producto creado: {sku}"
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error al guardar producto", str(exc))
            return

        show_info(self, "Producto guardado", message)
        self.accept()

    def _build_draft(self) -> ProductDraft:
        values = {key: line_edit.text() for key, line_edit in self._inputs.items()}
        return ProductDraft(category=self._category_combo.currentText(), **values)

    def _apply_styles(self) -> None:
        """Aplica estilos visuales consistentes con la app."""
        self.setStyleSheet(
            """
            QDialog {
                background-color: #eef1f4;
            }
            QFrame#dialogCard {
                background-color: #ffffff;
                border-radius: 16px;
            }
            QLabel#titleLabel {
                color: #20232a;
                font-family: "Segoe UI";
                font-size: 22px;
                font-weight: 700;
            }
            QLabel#fieldLabel {
                color: #334155;
                font-family: "Segoe UI";
                font-size: 13px;
                font-weight: 600;
            }
            QLineEdit, QComboBox {
                background-color: #f8fafc;
                border: 1px solid #d1d5db;
                border-radius: 8px;
                color: #111827;
                font-family: "Segoe UI";
                font-size: 13px;
                padding: 8px;
            }
            QLineEdit:focus, QComboBox:focus {
                border: 1px solid #2563eb;
                background-color: #ffffff;
            }
            QLineEdit[readOnly="true"] {
                color: #6b7280;
                background-color: #f1f5f9;
            }
            QPushButton {
                background-color: #2563eb;
                border: none;
                border-radius: 10px;
                color: #ffffff;
                font-family: "Segoe UI";
                font-size: 13px;
                font-weight: 600;
                min-height: 40px;
                min-width: 100px;
                padding: 8px 12px;
            }
            QPushButton:hover {
                background-color: #1d4ed8;
            }
            QPushButton#cancelButton {
                background-color: #e5e7eb;
                color: #1f2937;
            }
            QPushButton#cancelButton:hover {
                background-color: #d1d5db;
            }
            """
        )
