from __future__ import annotations

import math

from .extract import extract_details, extract_ply
from .models import ProductCategory, ProductComparison
from .units import lookup


def safe_divide(num: float, den: float) -> float:
    """Float division that returns inf/-inf/nan instead of raising on zero."""
    if den == 0:
        if num == 0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)
    return num / den


def unit_price(product: ProductComparison) -> float:
    """Price per base unit, or per metre when a total length was extracted.

    Units missing from the registry fall back to plain price / quantity.
    """
    p = extract_details(product)

    if p.total_meters is not None and p.total_meters > 0:
        return safe_divide(p.price, p.total_meters)

    conv = lookup(p.unit)
    if conv is None:
        return safe_divide(p.price, p.quantity)

    return safe_divide(p.price, p.quantity * conv.multiplier)


def efficiency(product: ProductComparison, category: ProductCategory | str | None = None) -> float:
    """Higher is better: inverse unit price, with a ply bonus for toilet paper."""
    price = product.unit_price if product.unit_price is not None else unit_price(product)
    score = safe_divide(1.0, price)

    if ProductCategory.parse(category) is ProductCategory.PAPEL_HIGIENICO and product.description:
        layers = extract_ply(product.description)
        if layers is not None:
            score *= 1 + layers * 0.1

    return score
