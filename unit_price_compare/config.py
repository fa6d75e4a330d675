from __future__ import annotations

import os
from dataclasses import dataclass


CONFIG_KEYS = [
    "UNIT_PRICE_CURRENCY",
    "UNIT_PRICE_DECIMAL_SEP",
    "UNIT_PRICE_THOUSANDS_SEP",
    "UNIT_PRICE_REPORT_PATH",
]


@dataclass(frozen=True)
class Config:
    currency: str = "R$"
    decimal_sep: str = ","
    thousands_sep: str = "."
    report_path: str = "artifacts/comparison_report.json"

    @staticmethod
    def load_from_env(environ: dict[str, str] | None = None) -> "Config":
        env = os.environ if environ is None else environ
        defaults = Config()

        currency = env.get("UNIT_PRICE_CURRENCY", defaults.currency).strip()
        if not currency:
            raise RuntimeError("UNIT_PRICE_CURRENCY must not be empty")

        decimal_sep = env.get("UNIT_PRICE_DECIMAL_SEP", defaults.decimal_sep)
        thousands_sep = env.get("UNIT_PRICE_THOUSANDS_SEP", defaults.thousands_sep)
        if len(decimal_sep) != 1:
            raise RuntimeError(f"UNIT_PRICE_DECIMAL_SEP must be one character, got {decimal_sep!r}")
        if decimal_sep == thousands_sep:
            raise RuntimeError("Decimal and thousands separators must differ")

        report_path = env.get("UNIT_PRICE_REPORT_PATH", "").strip() or defaults.report_path

        return Config(
            currency=currency,
            decimal_sep=decimal_sep,
            thousands_sep=thousands_sep,
            report_path=report_path,
        )
