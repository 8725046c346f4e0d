"""Helpers de dialogos para frontend."""

from __future__ import annotations

import logging

from PyQt6.QtWidgets import QMessageBox, QWidget

LOGGER = logging.getLogger(__name__)


def show_info(parent: QWidget | None, title: str, message: str) -> None:
    """Muestra un dialogo informativo."""
    QMessageBox.information(parent, title, message)


def show_error(parent: QWidget | None, title: str, message: str) -> None:
    """Registra y muestra un dialogo de error."""
    LOGGER.warning("%s: %s", title, message)
    QMessageBox.critical(parent, title, message)


def ask_confirmation(parent: QWidget | None, title: str, message: str) -> bool:
    """Pide confirmacion Si/No; por defecto No."""
    answer = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        QMessageBox.StandardButton.No,
    )
    return answer == QMessageBox.StandardButton.Yes
