#!/usr/bin/env python3
"""
CLI Entry Point — render the code articles site from the terminal
=================================================================
Usage:
    python -m codearticles list [--json]
    python -m codearticles show example.py [--copy]
    python -m codearticles render -o index.html
    python -m codearticles render --file example.css -o article.html
    python -m codearticles serve --port 8000

Global options (before the subcommand):
    --config site.yaml      YAML site configuration
    --articles-dir PATH     read articles from a folder instead of the demo set
    --verbose / -v          debug logging
    --tracing               print OpenTelemetry spans to the console
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .clipboard import COPIED_LABEL, CommandClipboard
from .config import SiteConfig, load_config
from .models import (
    ARTICLE_HEADING, ARTICLE_LANGUAGE, CODE_CONTENT, COPY_BUTTON, LIST_CONTAINER,
    ConfigError, LoadFailure, RenderMode,
)
from .renderer import LIST_ERROR_MESSAGE
from .server import serve
from .site import build_renderer, build_sources, render_document, render_index
from .target import PageTarget
from .tracing import TracingConfig, configure_tracing


def setup_logging(verbose: bool = False):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Subcommands
# ─────────────────────────────────────────────────────────────────────────────

def cmd_list(args, config: SiteConfig) -> int:
    """Print the index page as a table, or the raw catalog with --json."""
    if args.json:
        return _list_json(config)
    page = asyncio.run(render_index(config))
    cards = page.cards(LIST_CONTAINER)
    if not cards:
        message = page.get_text(LIST_CONTAINER)
        print(message)
        return 1 if message == LIST_ERROR_MESSAGE else 0

    print(f"{'Title':<32} {'Language':<12} {'Date':<14} Link")
    print("-" * 80)
    for card in cards:
        print(f"{card.title[:32]:<32} {card.language:<12} {card.date:<14} {card.href}")
    print(f"\n{len(cards)} article(s)")
    return 0


def _list_json(config: SiteConfig) -> int:
    catalog, _ = build_sources(config)
    try:
        records = asyncio.run(catalog.list_articles())
    except LoadFailure as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    print(json.dumps([record.to_dict() for record in records], indent=2))
    return 0


async def _show(config: SiteConfig, filename: str, copy: bool) -> tuple[PageTarget, Optional[str]]:
    page = PageTarget.article_page()
    renderer = build_renderer(config, page, clipboard=CommandClipboard() if copy else None)
    code = await renderer.render_detail({"file": filename})
    if copy and code is not None:
        await page.click(COPY_BUTTON)
    return page, code


def cmd_show(args, config: SiteConfig) -> int:
    """Print one article with its title and language; optionally copy it."""
    page, code = asyncio.run(_show(config, args.filename, args.copy))
    if code is None:
        print(page.get_text(CODE_CONTENT), file=sys.stderr)
        return 1
    heading = page.get_text(ARTICLE_HEADING)
    print(heading)
    print(f"Language: {page.get_text(ARTICLE_LANGUAGE)}")
    print("=" * max(len(heading), 20))
    print(code)
    if args.copy:
        if page.get_text(COPY_BUTTON) != COPIED_LABEL:
            return 1
        print("\n(copied to clipboard)", file=sys.stderr)
    return 0


def cmd_render(args, config: SiteConfig) -> int:
    """Write the index page, or the article page for --file, as an HTML file."""
    if args.file:
        document = asyncio.run(render_document(config, RenderMode.DETAIL, {"file": args.file}))
    else:
        document = asyncio.run(render_document(config, RenderMode.LIST))
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document, encoding="utf-8")
    print(f"Page written to: {output.resolve()}")
    return 0


def cmd_serve(args, config: SiteConfig) -> int:
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port
    serve(config)
    return 0


# ─────────────────────────────────────────────────────────────────────────────
# Parser
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codearticles",
        description="Render the code articles site: index, article pages, local server",
    )
    parser.add_argument("--config", "-c", type=str, default="",
                        help="YAML site configuration file")
    parser.add_argument("--articles-dir", dest="articles_dir", type=str, default="",
                        help="Folder of article source files (default: built-in demo articles)")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("--tracing", action="store_true", default=False,
                        help="Enable OpenTelemetry tracing (console exporter)")
    parser.add_argument("--otlp-endpoint", dest="otlp_endpoint", type=str, default=None,
                        help="Send spans to this OTLP gRPC endpoint instead of the console")

    subparsers = parser.add_subparsers(dest="subcommand", metavar="SUBCOMMAND", required=True)

    lp = subparsers.add_parser("list", help="List articles (index page)")
    lp.add_argument("--json", action="store_true", default=False,
                    help="Print the article records as JSON")
    lp.set_defaults(func=cmd_list)

    sp = subparsers.add_parser("show", help="Show one article (article page)")
    sp.add_argument("filename", help="Article filename, e.g. example.py")
    sp.add_argument("--copy", action="store_true", default=False,
                    help="Copy the article text to the system clipboard")
    sp.set_defaults(func=cmd_show)

    rp = subparsers.add_parser("render", help="Write a page as an HTML file")
    rp.add_argument("--file", "-f", type=str, default="",
                    help="Render the article page for this file (default: index page)")
    rp.add_argument("--output", "-o", type=str, required=True,
                    help="Output HTML path")
    rp.set_defaults(func=cmd_render)

    vp = subparsers.add_parser("serve", help="Serve the site over HTTP")
    vp.add_argument("--host", type=str, default="", help="Bind address (default: from config)")
    vp.add_argument("--port", "-p", type=int, default=0, help="Port (default: from config)")
    vp.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args.config or None)
    except (FileNotFoundError, ConfigError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    if args.articles_dir:
        config.articles_dir = Path(args.articles_dir)

    if args.tracing or config.tracing:
        configure_tracing(TracingConfig(enabled=True, otlp_endpoint=args.otlp_endpoint))

    sys.exit(args.func(args, config))


if __name__ == "__main__":
    main()
