"""marketgen CLI - marketplace catalog generator.

Usage:
    marketgen             # Regenerate .claude-plugin/marketplace.json
    marketgen generate    # Same as above
    marketgen check       # Exit 1 if marketplace.json is out of date
    marketgen list        # List discovered plugins
    marketgen status      # Show the current catalog

Exit status is 0 on success (including "no changes") and 1 on any fatal
error: no manifests, malformed manifest, duplicate plugin name, malformed
catalog version, or a failed write.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from .catalog.commands import add_catalog_commands, run_catalog_command


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="marketgen",
        description="Generate a plugin marketplace catalog from plugin manifests",
    )

    parser.add_argument("--root", type=Path, help="Repository root (default: current directory)")
    parser.add_argument(
        "--catalog",
        help="Catalog path relative to the root (default: .claude-plugin/marketplace.json)",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        default=1,
        help="Parse manifests on N threads (default: 1)",
    )
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print warnings and errors")

    sub = parser.add_subparsers(dest="subcmd")
    add_catalog_commands(sub)
    return parser


def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    raise SystemExit(run_catalog_command(args))


if __name__ == "__main__":
    main()
