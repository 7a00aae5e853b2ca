"""
growthnav-gtm - compile GTM container exports into tracking configs.

Usage:
    growthnav-gtm extract <export.json> [-o config.json] [-c customer-001]
    growthnav-gtm analyze <export.json>

Examples:
    growthnav-gtm extract GTM-ABC123_workspace.json -c acme -o configs/acme.json
    growthnav-gtm analyze GTM-ABC123_workspace.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from growthnav.gtm.compiler import analyze_container, compile_container
from growthnav.gtm.generator import write_config_to_file


def cmd_extract(args: argparse.Namespace) -> int:
    print(f"Extracting from: {args.file}")
    if not Path(args.file).exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1

    result = compile_container(Path(args.file), customer_id=args.customer)
    write_config_to_file(result.config, args.output)

    print(f"Extracted {len(result.referenced_variables)} unique variables from tags")
    print(f"Extracted {len(result.macro_definitions)} macro definitions with dataLayer paths")
    print(f"Config written to: {args.output}")
    print(f"Events detected: {len(result.config.events)}")
    for name in result.config.event_names:
        print(f"  - {name}")

    if result.unmapped_variables:
        print(f"Variables needing manual mapping: {', '.join(result.unmapped_variables)}")
    return 0


def cmd_analyze(args: argparse.Namespace) -> int:
    if not Path(args.file).exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        return 1

    analysis = analyze_container(Path(args.file))
    print(json.dumps(analysis.to_dict(), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="growthnav-gtm",
        description="Extract dataLayer variable mappings from GTM exports",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Extract variable mappings from GTM export JSON")
    extract.add_argument("file", help="GTM export JSON file path")
    extract.add_argument("-o", "--output", default="./config.json", help="Output config.json path")
    extract.add_argument("-c", "--customer", default="customer-001", help="Customer ID")
    extract.set_defaults(func=cmd_extract)

    analyze = subparsers.add_parser("analyze", help="Summarize GA4 / Google Ads tags in an export")
    analyze.add_argument("file", help="GTM export JSON file path")
    analyze.set_defaults(func=cmd_analyze)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
