"""Parametros globales del proyecto."""

from __future__ import annotations

import logging
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
CATALOG_JSON = DATA_DIR / "product_catalog.json"
LOW_STOCK_THRESHOLD = 5
DEFAULT_CURRENCY_SYMBOL = "$"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
