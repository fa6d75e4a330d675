from __future__ import annotations

import argparse
import logging

from .compare import compare_products
from .config import CONFIG_KEYS, Config
from .extract import extract_count, extract_layers, extract_meters, extract_sheets
from .loader import load_products
from .models import ProductCategory, UnitCategory
from .report import generate_report, write_json
from .units import UNIT_CONVERSIONS, unit_suggestions, units_in

__version__ = "0.1.0"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="unit-price-compare")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = p.add_subparsers(dest="cmd", required=False)

    p_compare = sub.add_parser("compare", help="Rank products from a .json or .csv file by unit price")
    p_compare.add_argument("file", help="Products file")
    # SUPPRESS keeps a top-level -v from being reset by the sub-parser default
    p_compare.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Debug logging")
    p_compare.add_argument(
        "--json",
        nargs="?",
        const="",
        default=None,
        metavar="PATH",
        help="Also write results as JSON (default path from UNIT_PRICE_REPORT_PATH)",
    )

    p_extract = sub.add_parser("extract", help="Show attributes parsed from a product description")
    p_extract.add_argument("text", help="Description, e.g. '4 rolos 30m 2 camadas'")

    p_units = sub.add_parser("units", help="List known units")
    p_units.add_argument("--category", choices=[c.value for c in UnitCategory if c is not UnitCategory.OTHER])

    p_suggest = sub.add_parser("suggest", help="Suggested units for a product category")
    p_suggest.add_argument("category", nargs="?", default=None, help=", ".join(c.value for c in ProductCategory))

    p_config = sub.add_parser("config", help="Config commands")
    sub_config = p_config.add_subparsers(dest="config_cmd", required=True)
    sub_config.add_parser("keys", help="List recognised environment keys")
    sub_config.add_parser("show", help="Print the effective config")

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.version:
        print(__version__)
        return 0

    if args.cmd is None:
        p.print_help()
        return 0

    if args.cmd == "compare":
        return _run_compare(args)

    if args.cmd == "extract":
        print(f"count:  {extract_count(args.text)}")
        print(f"meters: {extract_meters(args.text)}")
        print(f"layers: {extract_layers(args.text)}")
        print(f"sheets: {extract_sheets(args.text)}")
        return 0

    if args.cmd == "units":
        symbols = units_in(UnitCategory(args.category)) if args.category else list(UNIT_CONVERSIONS)
        for sym in symbols:
            conv = UNIT_CONVERSIONS[sym]
            print(f"{sym:<8} = {conv.multiplier:g} {conv.base_unit:<4} ({conv.category.value})")
        return 0

    if args.cmd == "suggest":
        if args.category and ProductCategory.parse(args.category) is None:
            print(f"WARN: unknown category '{args.category}', showing defaults.")
        print(" ".join(unit_suggestions(args.category)))
        return 0

    if args.cmd == "config":
        if args.config_cmd == "keys":
            for k in CONFIG_KEYS:
                print(k)
            return 0

        if args.config_cmd == "show":
            cfg = Config.load_from_env()
            print(f"currency={cfg.currency}")
            print(f"decimal_sep={cfg.decimal_sep}")
            print(f"thousands_sep={cfg.thousands_sep}")
            print(f"report_path={cfg.report_path}")
            return 0

    raise RuntimeError("unreachable")


def _run_compare(args) -> int:
    cfg = Config.load_from_env()

    try:
        products = load_products(args.file)
    except RuntimeError as exc:
        print(f"ERROR: {exc}")
        return 2

    results = compare_products(products)
    if not results:
        print("Nothing to compare: need at least two products with units of the same kind.")
        return 1

    print(generate_report(results, cfg))

    if args.json is not None:
        path = write_json(results, args.json or cfg.report_path)
        print(f"Report written to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
