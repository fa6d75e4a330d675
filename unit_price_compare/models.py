from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class UnitCategory(str, Enum):
    """Dimension of a measurement unit. Only comparable within one dimension."""

    WEIGHT = "weight"
    VOLUME = "volume"
    LENGTH = "length"
    AREA = "area"
    COUNT = "count"
    TIME = "time"

    # Grouping key for units missing from the registry; never a registry value.
    OTHER = "other"


@dataclass(frozen=True)
class UnitConversion:
    base_unit: str
    multiplier: float
    category: UnitCategory


@dataclass(frozen=True)
class CategoryInfo:
    name: str
    preferred_units: tuple[str, ...]
    comparison_factors: tuple[str, ...]
    icon: str


class ProductCategory(str, Enum):
    """Product type chosen by the user (not the unit dimension)."""

    PAPEL_HIGIENICO = "papel_higienico"
    ALIMENTOS = "alimentos"
    LIMPEZA = "limpeza"
    BEBIDAS = "bebidas"
    HIGIENE = "higiene"

    @property
    def info(self) -> CategoryInfo:
        return PRODUCT_CATEGORIES[self]

    @classmethod
    def parse(cls, value: str | ProductCategory | None) -> ProductCategory | None:
        if value is None or isinstance(value, ProductCategory):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


PRODUCT_CATEGORIES: dict[ProductCategory, CategoryInfo] = {
    ProductCategory.PAPEL_HIGIENICO: CategoryInfo(
        name="Papel Higiênico",
        preferred_units=("rolo", "m", "folha"),
        comparison_factors=("quantity", "length", "layers", "softness"),
        icon="🧻",
    ),
    ProductCategory.ALIMENTOS: CategoryInfo(
        name="Alimentos",
        preferred_units=("g", "kg", "ml", "l", "un"),
        comparison_factors=("weight", "volume", "nutritional_value"),
        icon="🍎",
    ),
    ProductCategory.LIMPEZA: CategoryInfo(
        name="Produtos de Limpeza",
        preferred_units=("ml", "l", "g", "kg"),
        comparison_factors=("volume", "concentration", "effectiveness"),
        icon="🧽",
    ),
    ProductCategory.BEBIDAS: CategoryInfo(
        name="Bebidas",
        preferred_units=("ml", "l"),
        comparison_factors=("volume", "alcohol_content"),
        icon="🥤",
    ),
    ProductCategory.HIGIENE: CategoryInfo(
        name="Higiene Pessoal",
        preferred_units=("ml", "l", "g", "un"),
        comparison_factors=("volume", "duration", "effectiveness"),
        icon="🧴",
    ),
}


@dataclass(frozen=True)
class ProductComparison:
    id: str
    name: str
    quantity: float
    unit: str
    price: float
    category: ProductCategory | None = None
    brand: str | None = None
    description: str | None = None

    # Derived by the pipeline; callers leave these unset.
    unit_price: float | None = None
    normalized_quantity: float | None = None
    meters_per_unit: float | None = None
    total_meters: float | None = None
    layers: int | None = None
    sheets: int | None = None
    efficiency: float | None = None


@dataclass(frozen=True)
class ComparisonResult:
    """One ranked group of products sharing a unit dimension.

    ``savings`` is stored read-only. Results are not hashable.
    """

    category: UnitCategory
    products: tuple[ProductComparison, ...]
    best_product: ProductComparison

    # Percent more expensive than best_product, keyed by product id.
    savings: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "savings", MappingProxyType(dict(self.savings)))
