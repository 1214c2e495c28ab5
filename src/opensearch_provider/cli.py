"""CLI entry point for inspecting description documents and fetching suggestions."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from opensearch_provider.config.settings import Settings


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="opensearch-provider",
        description="Query search engines described by OpenSearch description documents",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"opensearch-provider {_get_version()}",
    )

    commands = parser.add_subparsers(dest="command", required=True)
    describe = commands.add_parser("describe", help="Print the normalized description as JSON")
    describe.add_argument("file", type=Path, help="Description document")
    suggest = commands.add_parser("suggest", help="Fetch suggestions for search terms")
    suggest.add_argument("file", type=Path, help="Description document")
    suggest.add_argument("terms", help="Search terms")

    args = parser.parse_args(argv)

    from opensearch_provider.config.settings import Settings
    from opensearch_provider.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level
    setup_logging(settings.observability)

    from opensearch_provider.exceptions import ProviderError

    try:
        output = asyncio.run(_run(args, settings))
    except ProviderError as e:
        logging.getLogger(__name__).debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(output, indent=2, ensure_ascii=False))


async def _run(args: argparse.Namespace, settings: Settings) -> Any:
    from opensearch_provider.provider import OpenSearchProvider

    async with await OpenSearchProvider.create_from_file(args.file, settings=settings) as provider:
        if args.command == "describe":
            return provider.description.model_dump(mode="json", by_alias=True)
        return await provider.get_suggestions({"searchTerms": args.terms})


def _get_version() -> str:
    """Get the package version."""
    try:
        from opensearch_provider import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
