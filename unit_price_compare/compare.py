from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Iterable, Sequence

from .extract import extract_details
from .models import ComparisonResult, ProductComparison, UnitCategory
from .pricing import efficiency, safe_divide, unit_price
from .units import lookup, normalize_quantity

logger = logging.getLogger(__name__)


def enrich(product: ProductComparison) -> ProductComparison:
    """Extract attributes and attach unit price and normalized quantity."""
    detailed = extract_details(product)
    normalized = normalize_quantity(detailed.quantity, detailed.unit)
    priced = replace(
        detailed,
        unit_price=unit_price(product),
        normalized_quantity=normalized.normalized_quantity if normalized else None,
    )
    return replace(priced, efficiency=efficiency(priced, priced.category))


def category_of(product: ProductComparison) -> UnitCategory:
    conv = lookup(product.unit)
    return conv.category if conv else UnitCategory.OTHER


def group_products_by_category(
    products: Iterable[ProductComparison],
) -> dict[UnitCategory, list[ProductComparison]]:
    """Enrich products and bucket them by unit dimension, in first-seen order."""
    groups: dict[UnitCategory, list[ProductComparison]] = {}
    for product in products:
        enriched = enrich(product)
        category = category_of(enriched)
        if category is UnitCategory.OTHER:
            logger.debug("unrecognized unit %r for product %s", enriched.unit, enriched.id)
        groups.setdefault(category, []).append(enriched)
    return groups


def _price_sort_key(product: ProductComparison) -> tuple[int, float]:
    # Total order: -inf and finite values by value, then +inf, then nan.
    price = product.unit_price
    if price is None or math.isnan(price):
        return (2, 0.0)
    if price == math.inf:
        return (1, 0.0)
    return (0, price)


def savings_percentage(price: float, best_price: float) -> float:
    """How much more expensive ``price`` is than ``best_price``, in percent."""
    return safe_divide(price - best_price, best_price) * 100


def compare_products(products: Sequence[ProductComparison]) -> list[ComparisonResult]:
    """Rank products by unit price within each unit dimension.

    Returns one result per dimension holding at least two products. An empty
    list means there was nothing to compare.
    """
    if len(products) < 2:
        return []

    results: list[ComparisonResult] = []
    for category, members in group_products_by_category(products).items():
        if len(members) < 2:
            logger.debug("skipping %s: only one product", category.value)
            continue

        ranked = tuple(sorted(members, key=_price_sort_key))
        best = ranked[0]

        savings: dict[str, float] = {}
        for p in ranked[1:]:
            if p.id == best.id:
                continue
            savings[p.id] = savings_percentage(p.unit_price, best.unit_price)

        results.append(
            ComparisonResult(
                category=category,
                products=ranked,
                best_product=best,
                savings=savings,
            )
        )

    return results


def can_compare_products(a: ProductComparison, b: ProductComparison) -> bool:
    """True when both units are known and measure the same dimension."""
    na = normalize_quantity(a.quantity, a.unit)
    nb = normalize_quantity(b.quantity, b.unit)
    if na is None or nb is None:
        return False
    return na.category is nb.category
