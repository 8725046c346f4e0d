"""Ventana principal del catalogo de productos."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QCloseEvent, QColor, QFont, QGuiApplication
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QApplication,
    QComboBox,
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QHeaderView,
    QInputDialog,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from cliente.backend.controller import AppController
from cliente.frontend.details_dialog import ProductDetailsDialog
from cliente.frontend.dialogs import ask_confirmation, show_error, show_info
from cliente.frontend.product_form_dialog import ProductFormDialog
from shared.errors import ServiceError, ValidationError
from shared.protocol import ProductSummary

_ALL_CATEGORIES_LABEL = "Todas las categorias"
_TABLE_HEADERS: tuple[str, ...] = (
    "SKU",
    "Nombre",
    "Categoria",
    "Stock",
    "Disponibilidad",
    "Precio",
)


class MainWindow(QMainWindow):
    """Ventana principal con la tabla del catalogo y sus acciones."""

    def __init__(self, controller: AppController) -> None:
        super().__init__()
        self._controller = controller
        self._closing_saved = False

        self._table: QTableWidget
        self._category_filter: QComboBox
        self._search_input: QLineEdit
        self._status_label: QLabel

        self._add_button: QPushButton
        self._edit_button: QPushButton
        self._stock_button: QPushButton
        self._remove_button: QPushButton
        self._details_button: QPushButton
        self._save_button: QPushButton
        self._exit_button: QPushButton

        self.setWindowTitle("Catalogo de productos")
        screen = QGuiApplication.primaryScreen()
        geo = screen.availableGeometry()
        w = int(geo.width() * 0.65)
        h = int(geo.height() * 0.75)
        self.resize(w, h)
        self.setMinimumSize(int(w * 0.70), int(h * 0.70))
        self._build_ui()
        self._apply_styles()
        self._connect_signals()
        self.refresh_products()

    def _build_ui(self) -> None:
        """Construye filtros, tabla y botonera."""
        page = QWidget(self)
        root_layout = QVBoxLayout(page)
        root_layout.setContentsMargins(28, 28, 28, 28)

        card = QFrame(page)
        card.setObjectName("mainCard")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(28, 28, 28, 28)
        card_layout.setSpacing(14)

        title_label = QLabel("Catalogo de productos", card)
        title_label.setObjectName("titleLabel")
        title_label.setFont(QFont("Segoe UI", 20, QFont.Weight.Bold))

        filters_layout = QHBoxLayout()
        self._category_filter = QComboBox(card)
        self._category_filter.addItem(_ALL_CATEGORIES_LABEL, "")
        for category in self._controller.list_categories():
            self._category_filter.addItem(category, category)

        self._search_input = QLineEdit(card)
        self._search_input.setPlaceholderText("Buscar por nombre, descripcion o SKU...")
        search_button = QPushButton("Buscar", card)
        search_button.clicked.connect(self._on_search_clicked)
        clear_button = QPushButton("Limpiar", card)
        clear_button.setObjectName("secondaryButton")
        clear_button.clicked.connect(self._on_clear_search_clicked)

        filters_layout.addWidget(self._category_filter, 1)
        filters_layout.addWidget(self._search_input, 3)
        filters_layout.addWidget(search_button)
        filters_layout.addWidget(clear_button)

        self._table = QTableWidget(0, len(_TABLE_HEADERS), card)
        self._table.setHorizontalHeaderLabels(list(_TABLE_HEADERS))
        self._table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self._table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self._table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self._table.verticalHeader().setVisible(False)
        self._table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)

        actions_layout = QHBoxLayout()
        self._add_button = self._build_button("Agregar")
        self._edit_button = self._build_button("Editar detalles")
        self._stock_button = self._build_button("Ajustar stock")
        self._remove_button = self._build_button("Eliminar")
        self._details_button = self._build_button("Ver detalle")
        self._save_button = self._build_button("Guardar")
        self._exit_button = self._build_button("Salir")
        self._exit_button.setObjectName("exitButton")
        for button in (
            self._add_button,
            self._edit_button,
            self._stock_button,
            self._remove_button,
            self._details_button,
            self._save_button,
        ):
            actions_layout.addWidget(button)
        actions_layout.addStretch(1)
        actions_layout.addWidget(self._exit_button)

        self._status_label = QLabel(card)
        self._status_label.setObjectName("statusLabel")

        card_layout.addWidget(title_label)
        card_layout.addLayout(filters_layout)
        card_layout.addWidget(self._table, 1)
        card_layout.addLayout(actions_layout)
        card_layout.addWidget(self._status_label)

        shadow = QGraphicsDropShadowEffect(card)
        shadow.setBlurRadius(38)
        shadow.setOffset(0, 8)
        shadow.setColor(QColor(0, 0, 0, 38))
        card.setGraphicsEffect(shadow)

        root_layout.addWidget(card)
        self.setCentralWidget(page)

    def _apply_styles(self) -> None:
        """Aplica estilos QSS de la interfaz."""
        self.setStyleSheet(
            """
            QMainWindow {
                background-color: #eef1f4;
            }
            QFrame#mainCard {
                background-color: #ffffff;
                border-radius: 18px;
            }
            QLabel#statusLabel {
                color: #475569;
                font-family: "Segoe UI";
                font-size: 12px;
            }
            QLineEdit, QComboBox {
                background-color: #f8fafc;
                border: 1px solid #d1d5db;
                border-radius: 8px;
                font-family: "Segoe UI";
                font-size: 13px;
                padding: 8px;
            }
            QTableWidget {
                border: 1px solid #e5e7eb;
                border-radius: 8px;
                font-family: "Segoe UI";
                font-size: 13px;
                selection-background-color: #fde2e2;
                selection-color: #111827;
            }
            QPushButton {
                background-color: #C80202;
                border: none;
                border-radius: 10px;
                color: #ffffff;
                font-family: "Segoe UI";
                font-size: 13px;
                font-weight: 600;
                min-height: 38px;
                padding: 6px 14px;
            }
            QPushButton:hover {
                background-color: #A30202;
            }
            QPushButton:pressed {
                background-color: #820101;
            }
            QPushButton#exitButton, QPushButton#secondaryButton {
                background-color: #e5e7eb;
                color: #1f2937;
            }
            QPushButton#exitButton:hover, QPushButton#secondaryButton:hover {
                background-color: #d1d5db;
            }
            """
        )

    def _connect_signals(self) -> None:
        """Conecta botones de UI con acciones del controller."""
        self._category_filter.currentIndexChanged.connect(self._on_filter_changed)
        self._search_input.returnPressed.connect(self._on_search_clicked)
        self._table.doubleClicked.connect(self._on_details_clicked)
        self._add_button.clicked.connect(self._on_add_clicked)
        self._edit_button.clicked.connect(self._on_edit_clicked)
        self._stock_button.clicked.connect(self._on_stock_clicked)
        self._remove_button.clicked.connect(self._on_remove_clicked)
        self._details_button.clicked.connect(self._on_details_clicked)
        self._save_button.clicked.connect(self._on_save_clicked)
        self._exit_button.clicked.connect(self.close)

    def refresh_products(self) -> None:
        """Recarga la tabla aplicando el filtro de categoria actual."""
        try:
            products = self._controller.list_products(self._category_filter.currentData() or "")
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error de catalogo", str(exc))
            return
        self._fill_table(products)

    def _fill_table(self, products: list[ProductSummary]) -> None:
        self._table.setRowCount(len(products))
        for row, product in enumerate(products):
            values = (
                product.sku,
                product.name,
                product.category,
                str(product.quantity_in_stock),
                product.availability_status,
                product.price,
            )
            for column, value in enumerate(values):
                item = QTableWidgetItem(value)
                if column in (3, 5):
                    item.setTextAlignment(
                        Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter
                    )
                self._table.setItem(row, column, item)

        if products:
            self._status_label.setText(f"{len(products)} productos")
        else:
            self._status_label.setText("No hay productos para mostrar.")

    def _selected_sku(self) -> str | None:
        """Retorna el SKU de la fila seleccionada o avisa si no hay seleccion."""
        row = self._table.currentRow()
        item = self._table.item(row, 0) if row >= 0 else None
        if item is None:
            show_info(self, "Sin seleccion", "Selecciona un producto de la tabla.")
            return None
        return item.text()

    def _on_filter_changed(self, _index: int) -> None:
        self._search_input.clear()
        self.refresh_products()

    def _on_search_clicked(self, _checked: bool = False) -> None:
        """Busca productos con el termino ingresado."""
        try:
            products = self._controller.search_products(self._search_input.text())
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error de busqueda", str(exc))
            return
        self._fill_table(products)

    def _on_clear_search_clicked(self, _checked: bool = False) -> None:
        self._search_input.clear()
        self.refresh_products()

    def _on_add_clicked(self, _checked: bool = False) -> None:
        """Abre dialogo modal para crear un producto."""
        dialog = ProductFormDialog(controller=self._controller, parent=self)
        if dialog.exec():
            self.refresh_products()

    def _on_edit_clicked(self, _checked: bool = False) -> None:
        """Abre dialogo modal para editar detalles del producto seleccionado."""
        sku = self._selected_sku()
        if sku is None:
            return
        try:
            dialog = ProductFormDialog(controller=self._controller, sku=sku, parent=self)
        except ServiceError as exc:
            show_error(self, "Error de catalogo", str(exc))
            return
        if dialog.exec():
            self.refresh_products()

    def _on_stock_clicked(self, _checked: bool = False) -> None:
        """Solicita un cambio de stock (positivo o negativo) y lo aplica."""
        sku = self._selected_sku()
        if sku is None:
            return

        raw_delta, accepted = QInputDialog.getText(
            self,
            "Ajustar stock",
            f"Cambio de stock para {sku} (ej. 5 o -2):",
        )
        if not accepted:
            return

        try:
            new_quantity = self._controller.adjust_stock(sku, raw_delta)
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error de stock", str(exc))
            return

        self._status_label.setText(f"Stock de {sku} actualizado a {new_quantity}.")
        self.refresh_products()

    def _on_remove_clicked(self, _checked: bool = False) -> None:
        """Elimina el producto seleccionado tras confirmacion."""
        sku = self._selected_sku()
        if sku is None:
            return

        if not ask_confirmation(self, "Eliminar producto", f"¿Eliminar {sku}?"):
            return

        try:
            self._controller.remove_product(sku)
        except ServiceError as exc:
            show_error(self, "Error al eliminar", str(exc))
            return
        self.refresh_products()

    def _on_details_clicked(self, *_args: object) -> None:
        """Muestra el detalle formateado del producto seleccionado."""
        sku = self._selected_sku()
        if sku is None:
            return
        try:
            details = self._controller.get_product_details(sku)
        except ServiceError as exc:
            show_error(self, "Error de catalogo", str(exc))
            return
        ProductDetailsDialog(details, parent=self).exec()

    def _on_save_clicked(self, _checked: bool = False) -> None:
        """Guarda el catalogo en disco."""
        try:
            self._controller.save_catalog()
        except ServiceError as exc:
            show_error(self, "Error al guardar", str(exc))
            return
        show_info(self, "Catalogo guardado", "El catalogo se guardo correctamente.")

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        """Guarda una vez al salir (si la carga fue valida) y delega el cierre."""
        if not self._closing_saved:
            self._closing_saved = True
            try:
                self._controller.save_on_exit()
            except ServiceError as exc:
                show_error(self, "Error al guardar", str(exc))
        super().closeEvent(event)
        self._controller.on_exit(QApplication.instance())

    @staticmethod
    def _build_button(text: str) -> QPushButton:
        """Construye un boton estandar de la botonera."""
        button = QPushButton(text)
        button.setCursor(Qt.CursorShape.PointingHandCursor)
        return button
