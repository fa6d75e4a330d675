from __future__ import annotations

import re
from dataclasses import replace

from .models import ProductComparison

# Alternatives are tried in order; the first one found anywhere in the text wins.
_COUNT_RES = (
    re.compile(r"(\d+)\s*rolos?", re.IGNORECASE),
    re.compile(r"(\d+)\s*unidades?", re.IGNORECASE),
    re.compile(r"(\d+)\s*un", re.IGNORECASE),
)

_METERS_RES = (
    re.compile(r"(\d+(?:\.\d+)?)\s*metros?", re.IGNORECASE),
    # bare "m" must be followed by whitespace or end of text ("30m", not "30ml")
    re.compile(r"(\d+(?:\.\d+)?)\s*m(?:\s|$)", re.IGNORECASE),
)

_PLY_RE = re.compile(r"(\d+)\s*camadas?", re.IGNORECASE)

# "folhas" counts as a ply synonym, so "N folhas" can land in both layers and sheets.
_LAYERS_RES = (
    _PLY_RE,
    re.compile(r"(\d+)\s*folhas?", re.IGNORECASE),
)

_SHEETS_RES = (re.compile(r"(\d+)\s*folhas?", re.IGNORECASE),)


def _first_match(patterns: tuple[re.Pattern[str], ...], text: str | None) -> str | None:
    if not text:
        return None
    for pat in patterns:
        m = pat.search(text)
        if m:
            return m.group(1)
    return None


def extract_count(text: str | None) -> int | None:
    """Roll/unit count, e.g. '12 rolos' -> 12."""
    val = _first_match(_COUNT_RES, text)
    return int(val) if val is not None else None


def extract_meters(text: str | None) -> float | None:
    """Length of one unit in metres, e.g. '30 metros' or '27.5m'."""
    val = _first_match(_METERS_RES, text)
    return float(val) if val is not None else None


def extract_layers(text: str | None) -> int | None:
    val = _first_match(_LAYERS_RES, text)
    return int(val) if val is not None else None


def extract_ply(text: str | None) -> int | None:
    """Like extract_layers, but only an explicit 'camadas' counts."""
    val = _first_match((_PLY_RE,), text)
    return int(val) if val is not None else None


def extract_sheets(text: str | None) -> int | None:
    val = _first_match(_SHEETS_RES, text)
    return int(val) if val is not None else None


def extract_details(product: ProductComparison) -> ProductComparison:
    """Return a copy of ``product`` with attributes mined from its description.

    A count found in the description replaces the declared quantity. When a
    per-unit length is found, ``total_meters`` is that length times the
    (possibly replaced) quantity. Without a description the product is
    returned as is.
    """
    if not product.description:
        return product

    text = product.description.lower()
    changes: dict[str, object] = {}

    quantity = product.quantity
    count = extract_count(text)
    if count is not None:
        quantity = count
        changes["quantity"] = count

    meters = extract_meters(text)
    if meters is not None:
        changes["meters_per_unit"] = meters
        changes["total_meters"] = quantity * meters

    layers = extract_layers(text)
    if layers is not None:
        changes["layers"] = layers

    sheets = extract_sheets(text)
    if sheets is not None:
        changes["sheets"] = sheets

    return replace(product, **changes)
