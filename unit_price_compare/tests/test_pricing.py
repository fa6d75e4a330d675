import math

import pytest

from unit_price_compare.models import ProductCategory, ProductComparison
from unit_price_compare.pricing import efficiency, safe_divide, unit_price


def _product(quantity=1.0, unit="kg", price=10.0, description=None, category=None):
    return ProductComparison(
        id="p", name="x", quantity=quantity, unit=unit, price=price,
        description=description, category=category,
    )


def test_recognised_unit_uses_base_units():
    assert unit_price(_product(1, "kg", 10)) == pytest.approx(0.01)
    assert unit_price(_product(500, "g", 6)) == pytest.approx(0.012)
    assert unit_price(_product(2, "L", 8)) == pytest.approx(0.004)


def test_total_meters_wins():
    p = _product(1, "un", 24.0, description="4 rolos, 30 metros, 2 camadas")
    assert unit_price(p) == pytest.approx(24.0 / 120)


def test_unrecognised_unit_falls_back_to_quantity():
    assert unit_price(_product(4, "xyz", 10)) == pytest.approx(2.5)


def test_zero_quantity_does_not_raise():
    assert unit_price(_product(0, "kg", 10)) == math.inf
    assert math.isnan(unit_price(_product(0, "kg", 0)))
    assert unit_price(_product(0, "xyz", 5)) == math.inf


def test_negative_quantity_gives_negative_price():
    assert unit_price(_product(-1, "g", 5)) == -5


def test_safe_divide():
    assert safe_divide(6, 3) == 2
    assert safe_divide(-1, 0) == -math.inf
    assert safe_divide(1, -0.0) == -math.inf
    assert math.isnan(safe_divide(0, 0))


def test_efficiency_inverse_of_unit_price():
    p = _product(1, "kg", 10)
    assert efficiency(p) == pytest.approx(100.0)


def test_efficiency_ply_bonus_for_toilet_paper():
    p = _product(1, "un", 24.0, description="4 rolos 30 metros 2 camadas")
    base = 1 / (24.0 / 120)
    assert efficiency(p, ProductCategory.PAPEL_HIGIENICO) == pytest.approx(base * 1.2)
    assert efficiency(p, "papel_higienico") == pytest.approx(base * 1.2)
    assert efficiency(p, "alimentos") == pytest.approx(base)


def test_efficiency_folhas_is_not_ply():
    p = _product(1, "un", 10.0, description="300 folhas")
    assert efficiency(p, ProductCategory.PAPEL_HIGIENICO) == pytest.approx(0.1)


def test_efficiency_free_product():
    assert efficiency(_product(1, "kg", 0)) == math.inf
