"""Dialogo de solo lectura con el detalle de un producto."""

from __future__ import annotations

from PyQt6.QtGui import QFontDatabase
from PyQt6.QtWidgets import (
    QApplication,
    QDialog,
    QHBoxLayout,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)


class ProductDetailsDialog(QDialog):
    """Muestra el texto de ``format_product_details`` y permite copiarlo."""

    def __init__(self, details_text: str, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._details_text = details_text.strip()

        self.setWindowTitle("Detalle del producto")
        self.setModal(True)
        self.resize(560, 360)

        details_view = QTextEdit(self)
        details_view.setReadOnly(True)
        details_view.setFont(QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont))
        details_view.setPlainText(self._details_text)

        copy_button = QPushButton("Copiar", self)
        close_button = QPushButton("Cerrar", self)
        copy_button.clicked.connect(self._copy_to_clipboard)
        close_button.clicked.connect(self.accept)

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch(1)
        buttons_layout.addWidget(copy_button)
        buttons_layout.addWidget(close_button)

        layout = QVBoxLayout(self)
        layout.addWidget(details_view)
        layout.addLayout(buttons_layout)

    def _copy_to_clipboard(self) -> None:
        QApplication.clipboard().setText(self._details_text)
