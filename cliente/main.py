"""Inicializacion de la aplicacion de cliente."""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from cliente.backend.controller import AppController
from cliente.frontend.dialogs import show_error
from cliente.frontend.main_window import MainWindow
from shared.errors import ValidationError

LOGGER = logging.getLogger(__name__)


def main() -> int:
    """Ejecuta la aplicacion grafica."""
    app = QApplication(sys.argv)

    controller = AppController()
    try:
        load_error = controller.initialize()
    except ValidationError as exc:
        LOGGER.error("No fue posible inicializar el catalogo: %s", exc)
        show_error(None, "Error de catalogo", str(exc))
        return 1

    window = MainWindow(controller=controller)
    window.showMaximized()
    if load_error:
        show_error(
            window,
            "Catalogo no cargado",
            f"{load_error}\n\nEl archivo no se sobrescribira al salir salvo que guarde manualmente.",
        )

    LOGGER.info("Aplicacion iniciada.")
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
