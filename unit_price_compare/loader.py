from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path
from typing import Any

from .models import ProductCategory, ProductComparison

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "quantity", "unit", "price")

# Dotted groups of three with no decimal comma are pt-br thousands: "1.234" -> 1234.
_THOUSANDS_RE = re.compile(r"^\d{1,3}(?:\.\d{3})+$")


def _to_float(value: Any, *, field: str, row: int) -> float:
    if isinstance(value, bool):
        raise RuntimeError(f"Row {row}: {field} must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)

    text = str(value).strip()
    sign = ""
    if text.startswith("-"):
        sign, text = "-", text[1:].strip()
    text = text.replace("R$", "").strip()
    # pt-br: "1.234,56" / "10,5" / "1.234"
    if "," in text:
        text = text.replace(".", "").replace(",", ".")
    elif _THOUSANDS_RE.match(text):
        text = text.replace(".", "")
    text = sign + text
    try:
        return float(text)
    except ValueError:
        raise RuntimeError(f"Row {row}: {field} must be a number, got {value!r}") from None


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def product_from_row(row: dict[str, Any], *, index: int) -> ProductComparison:
    """Build a ProductComparison from a loosely-typed mapping (1-based index)."""
    for key in REQUIRED_FIELDS:
        if _opt_str(row.get(key)) is None:
            raise RuntimeError(f"Row {index}: missing required field '{key}'")

    raw_category = _opt_str(row.get("category"))
    category = ProductCategory.parse(raw_category)
    if raw_category and category is None:
        logger.info("row %d: ignoring unknown product category %r", index, raw_category)

    return ProductComparison(
        id=_opt_str(row.get("id")) or str(index),
        name=str(row["name"]).strip(),
        quantity=_to_float(row["quantity"], field="quantity", row=index),
        unit=str(row["unit"]).strip(),
        price=_to_float(row["price"], field="price", row=index),
        category=category,
        brand=_opt_str(row.get("brand")),
        description=_opt_str(row.get("description")),
    )


def _read_json(path: Path) -> list[dict[str, Any]]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RuntimeError(f"Failed to read {path}: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise RuntimeError(f"Failed to decode JSON from {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("products") or data.get("items") or []
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise RuntimeError(f"{path}: expected a list of product objects")
    return data


def _read_csv(path: Path) -> list[dict[str, Any]]:
    try:
        with path.open(encoding="utf-8-sig", newline="") as f:
            first = f.readline()
            delimiter = ";" if first.count(";") > first.count(",") else ","
            f.seek(0)
            return list(csv.DictReader(f, delimiter=delimiter))
    except (OSError, UnicodeDecodeError) as e:
        raise RuntimeError(f"Failed to read {path}: {e}") from e


def load_products(path: str | Path) -> list[ProductComparison]:
    """Read products from a .json or .csv file."""
    path = Path(path)
    if not path.exists():
        raise RuntimeError(f"File not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".json":
        rows = _read_json(path)
    elif suffix == ".csv":
        rows = _read_csv(path)
    else:
        raise RuntimeError(f"Unsupported file type '{suffix}' (use .json or .csv)")

    products = [product_from_row(r, index=i) for i, r in enumerate(rows, 1)]
    logger.info("loaded %d products from %s", len(products), path)
    return products
