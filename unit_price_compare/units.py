from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from .models import ProductCategory, UnitCategory, UnitConversion

_W = UnitCategory.WEIGHT
_V = UnitCategory.VOLUME
_L = UnitCategory.LENGTH
_A = UnitCategory.AREA
_C = UnitCategory.COUNT
_T = UnitCategory.TIME

UNIT_CONVERSIONS: Mapping[str, UnitConversion] = MappingProxyType({
    # weight, base g
    "mg": UnitConversion("g", 0.001, _W),
    "g": UnitConversion("g", 1, _W),
    "kg": UnitConversion("g", 1000, _W),
    "ton": UnitConversion("g", 1000000, _W),
    # volume, base ml
    "ml": UnitConversion("ml", 1, _V),
    "cl": UnitConversion("ml", 10, _V),
    "dl": UnitConversion("ml", 100, _V),
    "l": UnitConversion("ml", 1000, _V),
    # length, base cm
    "mm": UnitConversion("cm", 0.1, _L),
    "cm": UnitConversion("cm", 1, _L),
    "m": UnitConversion("cm", 100, _L),
    "km": UnitConversion("cm", 100000, _L),
    # area, base cm²
    "cm²": UnitConversion("cm²", 1, _A),
    "m²": UnitConversion("cm²", 10000, _A),
    # count, base un
    "un": UnitConversion("un", 1, _C),
    "pç": UnitConversion("un", 1, _C),
    "rolo": UnitConversion("un", 1, _C),
    "folha": UnitConversion("un", 1, _C),
    "pacote": UnitConversion("un", 1, _C),
    "caixa": UnitConversion("un", 1, _C),
    "dúzia": UnitConversion("un", 12, _C),
    "centena": UnitConversion("un", 100, _C),
    # time, base min
    "min": UnitConversion("min", 1, _T),
    "h": UnitConversion("min", 60, _T),
    "dia": UnitConversion("min", 1440, _T),
})

DEFAULT_UNIT_SUGGESTIONS: tuple[str, ...] = ("un", "g", "kg", "ml", "l", "cm", "m")


@dataclass(frozen=True)
class NormalizedQuantity:
    normalized_quantity: float
    base_unit: str
    category: UnitCategory


def lookup(unit: str | None) -> UnitConversion | None:
    """Registry entry for a unit symbol ('KG' and 'kg' are the same), or None."""
    if not unit:
        return None
    return UNIT_CONVERSIONS.get(unit.strip().lower())


def normalize_quantity(quantity: float, unit: str | None) -> NormalizedQuantity | None:
    conv = lookup(unit)
    if conv is None:
        return None
    return NormalizedQuantity(
        normalized_quantity=quantity * conv.multiplier,
        base_unit=conv.base_unit,
        category=conv.category,
    )


def to_base(quantity: float, unit: str) -> float:
    conv = lookup(unit)
    if conv is None:
        raise KeyError(f"Unrecognized unit: {unit!r}")
    return quantity * conv.multiplier


def from_base(amount: float, unit: str) -> float:
    conv = lookup(unit)
    if conv is None:
        raise KeyError(f"Unrecognized unit: {unit!r}")
    return amount / conv.multiplier


def format_unit(unit: str) -> str:
    conv = lookup(unit)
    return conv.base_unit if conv else unit


def unit_suggestions(category: ProductCategory | str | None = None) -> list[str]:
    """Preferred units for a product category, or a general default list."""
    parsed = ProductCategory.parse(category)
    if parsed is not None:
        return list(parsed.info.preferred_units)
    return list(DEFAULT_UNIT_SUGGESTIONS)


def units_in(category: UnitCategory) -> list[str]:
    return [sym for sym, conv in UNIT_CONVERSIONS.items() if conv.category is category]
