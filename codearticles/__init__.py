"""
Code Articles
=============
Renders a small "code articles" site: an index page listing code examples
and an article page showing one example, syntax-highlighted, with a
copy-to-clipboard button.

Basic usage:
    import asyncio
    from codearticles import PageRenderer, PageTarget, StaticCatalog, StaticContent

    page = PageTarget.index_page()
    renderer = PageRenderer(page, StaticCatalog(), StaticContent())
    asyncio.run(renderer.bootstrap())
    for card in page.cards("articles-container"):
        print(card.title, card.href)

Article page with highlighting and copy support:
    from codearticles import MemoryClipboard, PygmentsHighlighter

    page = PageTarget.article_page()
    renderer = PageRenderer(page, StaticCatalog(), StaticContent(),
                            highlighter=PygmentsHighlighter(),
                            clipboard=MemoryClipboard())
    asyncio.run(renderer.bootstrap("?file=example.py"))
"""

from .models import (
    ArticleRecord, RenderMode, SUPPORTED_LANGUAGES,
    CodeArticlesError, LoadFailure, ClipboardFailure, ConfigError,
)
from .metadata import extension_of, language_label, title_from_filename, format_date
from .sources import (
    CatalogSource, ContentSource, StaticCatalog, StaticContent,
    DirectoryCatalog, DirectoryContent,
)
from .target import Card, RenderTarget, PageTarget
from .clipboard import Clipboard, MemoryClipboard, CommandClipboard, CopyHandler
from .highlight import Highlighter, PygmentsHighlighter
from .hooks import EventType, HookRegistry
from .renderer import PageRenderer
from .config import SiteConfig, load_config

__version__ = "0.1.0"

__all__ = [
    # ── Data model ───────────────────────────────────────────────────────────
    "ArticleRecord", "RenderMode", "SUPPORTED_LANGUAGES",
    "CodeArticlesError", "LoadFailure", "ClipboardFailure", "ConfigError",
    # ── Metadata deriver ─────────────────────────────────────────────────────
    "extension_of", "language_label", "title_from_filename", "format_date",
    # ── Sources ──────────────────────────────────────────────────────────────
    "CatalogSource", "ContentSource", "StaticCatalog", "StaticContent",
    "DirectoryCatalog", "DirectoryContent",
    # ── Rendering ────────────────────────────────────────────────────────────
    "Card", "RenderTarget", "PageTarget", "PageRenderer",
    "Highlighter", "PygmentsHighlighter",
    "Clipboard", "MemoryClipboard", "CommandClipboard", "CopyHandler",
    "EventType", "HookRegistry",
    "SiteConfig", "load_config",
]
