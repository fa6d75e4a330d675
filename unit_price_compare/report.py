from __future__ import annotations

import json
import math
from dataclasses import asdict
from pathlib import Path
from typing import Any, Sequence

from .config import Config
from .models import ComparisonResult, ProductComparison
from .units import format_unit

REPORT_TITLE = "📊 RELATÓRIO DE COMPARAÇÃO DE PRODUTOS"


def format_price(value: float, config: Config | None = None) -> str:
    """Render a price as currency, e.g. 1234.5 -> 'R$ 1.234,50'."""
    cfg = config or Config()
    sign = "-" if value < 0 else ""
    if math.isnan(value):
        return f"{cfg.currency} NaN"
    if math.isinf(value):
        return f"{sign}{cfg.currency} ∞"

    digits = f"{abs(value):,.2f}"
    digits = digits.replace(",", "\0").replace(".", cfg.decimal_sep).replace("\0", cfg.thousands_sep)
    return f"{sign}{cfg.currency} {digits}"


def _num(value: float | None) -> str:
    # 120.0 -> "120", 27.5 -> "27.5"
    if value is None:
        return "?"
    return f"{value:g}"


def _length_lines(p: ProductComparison, indent: str, *, best: bool, cfg: Config) -> list[str]:
    qty = _num(p.quantity)
    per = _num(p.meters_per_unit)
    total = _num(p.total_meters)
    price = format_price(p.unit_price or 0, cfg)
    if best:
        lines = [
            f"{indent}📏 Total: {qty} rolos × {per}m = {total}m",
            f"{indent}💰 Preço por metro: {price}",
        ]
        if p.layers:
            lines.append(f"{indent}📄 Camadas: {p.layers}")
    else:
        lines = [
            f"{indent}📏 {qty} rolos × {per}m = {total}m",
            f"{indent}💰 {price}/metro",
        ]
        if p.layers:
            lines.append(f"{indent}📄 {p.layers} camadas")
    return lines


def generate_report(results: Sequence[ComparisonResult], config: Config | None = None) -> str:
    """Human-readable summary of ranked groups.

    Only reads prices already computed on the results. With no results the
    report is just the title.
    """
    cfg = config or Config()
    lines = [REPORT_TITLE, ""]

    for i, result in enumerate(results, 1):
        best = result.best_product
        lines.append(f"{i}. CATEGORIA: {result.category.value.upper()}")
        lines.append(f"   🏆 Melhor opção: {best.name}")
        if best.total_meters:
            lines.extend(_length_lines(best, "   ", best=True, cfg=cfg))
        else:
            price = format_price(best.unit_price or 0, cfg)
            lines.append(f"   💰 Preço por {format_unit(best.unit)}: {price}")
        lines.append("")

        for rank, product in enumerate(result.products[1:], 2):
            lines.append(f"   {rank}º {product.name}")
            if product.total_meters:
                lines.extend(_length_lines(product, "      ", best=False, cfg=cfg))
            savings = result.savings.get(product.id)
            if savings is not None:
                lines.append(f"      💸 {savings:.1f}% mais caro")

        lines.append("")

    return "\n".join(lines) + "\n"


def _finite_or_none(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _product_dict(p: ProductComparison) -> dict[str, Any]:
    d = asdict(p)
    d["category"] = p.category.value if p.category else None
    return {k: _finite_or_none(v) for k, v in d.items()}


def results_to_dict(results: Sequence[ComparisonResult]) -> list[dict[str, Any]]:
    """JSON-safe view of results; inf/nan become None."""
    out: list[dict[str, Any]] = []
    for r in results:
        out.append({
            "category": r.category.value,
            "best_product": r.best_product.id,
            "products": [_product_dict(p) for p in r.products],
            "savings": {k: _finite_or_none(v) for k, v in r.savings.items()},
        })
    return out


def write_json(results: Sequence[ComparisonResult], path: str = "artifacts/comparison_report.json") -> str:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(results_to_dict(results), indent=2, ensure_ascii=False), encoding="utf-8")
    return str(out)
