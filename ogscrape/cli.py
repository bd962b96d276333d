#!/usr/bin/env python3
"""
ogscrape command-line interface.

Prints the Open Graph metadata of a URL or a saved HTML file. JSON output
is meant for pipes (``ogscrape example.com | jq .title``); the tree view
is for reading.
"""
import sys
import argparse
import json
import logging
from pathlib import Path
from typing import Any, List, Optional
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree
from bs4 import UnicodeDammit

from ogscrape import scrape
from ogscrape.config import init_config
from ogscrape.extractor import ExtractOptions, Extractor
from ogscrape.exceptions import ConfigError, OgScrapeError
from ogscrape.fetcher import Fetcher
from ogscrape.tree import MetaTree

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_FETCH_FAILED = 1
EXIT_NO_METADATA = 2
EXIT_BAD_CONFIG = 3
EXIT_INTERRUPTED = 130


def _add_branch(branch: Tree, key: str, value: Any):
    label = f"[cyan]{escape(key) if key else '(value)'}[/cyan]"
    if isinstance(value, dict):
        child = branch.add(label)
        for k, v in value.items():
            _add_branch(child, k, v)
    elif isinstance(value, list):
        child = branch.add(f"{label} [dim]({len(value)} values)[/dim]")
        for i, item in enumerate(value):
            _add_branch(child, f"[{i}]", item)
    else:
        branch.add(f"{label}: [green]{escape(value)}[/green]")


def output_meta(meta: MetaTree, format: str = "json", source: str = ""):
    """Output extracted metadata in the specified format."""
    if format == "tree":
        tree = Tree(f"[bold]{escape(source or 'metadata')}[/bold]")
        for key, value in meta.items():
            _add_branch(tree, key, value)
        console.print(tree)
    else:
        print(json.dumps(meta, indent=2, ensure_ascii=False))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ogscrape",
        description="Extract Open Graph metadata from a web page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ogscrape example.com
  ogscrape https://example.com/article --output tree
  ogscrape --file saved.html --strict
  ogscrape example.com | jq '.image.url'

Configuration:
  Config file: ~/.config/ogscrape/config.toml or ./ogscrape.toml
  Environment: OGSCRAPE_TIMEOUT, OGSCRAPE_STRICT, OGSCRAPE_OUTPUT_FORMAT
        """
    )
    parser.add_argument("url", nargs="?", help="Page URL (scheme optional)")
    parser.add_argument("-f", "--file", help="Read HTML from a file instead of fetching ('-' for stdin)")
    parser.add_argument("--strict", action="store_true", default=None,
                        help="Fail unless the page declares the Open Graph namespace")
    parser.add_argument("--no-fallbacks", dest="fallbacks", action="store_false", default=None,
                        help="Do not fill title/image from <title> and <img>")
    parser.add_argument("-o", "--output", choices=["json", "tree"], help="Output format")
    parser.add_argument("-t", "--timeout", type=float, help="Request timeout in seconds")
    parser.add_argument("--config", help="Config file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _read_html(path: str) -> str:
    """Read a saved page, letting BeautifulSoup work out its encoding."""
    if path == "-":
        data = sys.stdin.buffer.read()
    else:
        data = Path(path).read_bytes()
    return UnicodeDammit(data, is_html=True).unicode_markup


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.url and not args.file:
        parser.error("a URL or --file is required")

    try:
        config = init_config(
            config_file=Path(args.config) if args.config else None,
            strict=args.strict,
            fallbacks=args.fallbacks,
            output_format=args.output,
            timeout=args.timeout,
        )
    except ConfigError as e:
        err_console.print(f"[red]Config error: {escape(str(e))}[/red]")
        return EXIT_BAD_CONFIG

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.log_level.upper(), logging.WARNING),
        format='%(levelname)s: %(message)s',
    )

    options = ExtractOptions(strict=config.strict, fallbacks=config.fallbacks)

    try:
        if args.file:
            source = args.file
            meta = Extractor().extract(_read_html(args.file), options)
        else:
            source = args.url
            fetcher = Fetcher(
                timeout=config.timeout,
                user_agent=config.user_agent,
                verify_ssl=config.verify_ssl,
                max_redirects=config.max_redirects,
            )
            meta = scrape(args.url, options, fetcher=fetcher)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Interrupted[/yellow]")
        return EXIT_INTERRUPTED
    except (OgScrapeError, OSError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        return EXIT_FETCH_FAILED

    if meta is None:
        err_console.print("[yellow]No Open Graph namespace declared (strict mode)[/yellow]")
        return EXIT_NO_METADATA

    logger.debug(f"Extracted {len(meta)} top-level properties from {source}")
    output_meta(meta, config.output_format, source)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
