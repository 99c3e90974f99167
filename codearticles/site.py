"""
Site wiring — build sources, renderer and pages from a SiteConfig.

Used by the CLI and the HTTP server so both render pages the same way.
"""
from __future__ import annotations

import logging
from typing import Optional

from .clipboard import Clipboard, Notifier, stderr_notifier
from .config import SiteConfig
from .highlight import PygmentsHighlighter
from .hooks import HookRegistry
from .models import RenderMode
from .page import render_html
from .renderer import PageRenderer, Query
from .sources import (
    CatalogSource, ContentSource, DirectoryCatalog, DirectoryContent,
    StaticCatalog, StaticContent,
)
from .target import PageTarget

logger = logging.getLogger("codearticles.site")


def build_sources(config: SiteConfig) -> tuple[CatalogSource, ContentSource]:
    """Directory sources when articles_dir is set, the built-in demo otherwise."""
    if config.articles_dir is not None:
        logger.debug("Using articles folder %s", config.articles_dir)
        return DirectoryCatalog(config.articles_dir), DirectoryContent(config.articles_dir)
    return StaticCatalog(), StaticContent()


def build_renderer(
    config: SiteConfig,
    target: PageTarget,
    clipboard: Optional[Clipboard] = None,
    notify: Notifier = stderr_notifier,
    hooks: Optional[HookRegistry] = None,
    sources: Optional[tuple[CatalogSource, ContentSource]] = None,
) -> PageRenderer:
    catalog, content = sources or build_sources(config)
    return PageRenderer(
        target,
        catalog,
        content,
        highlighter=PygmentsHighlighter(config.pygments_style) if config.highlight else None,
        clipboard=clipboard,
        notify=notify,
        hooks=hooks,
        article_page=config.article_page,
        site_title=config.site_title,
        copy_revert_seconds=config.copy_revert_seconds,
    )


async def render_index(config: SiteConfig, **kwargs) -> PageTarget:
    page = PageTarget.index_page()
    await build_renderer(config, page, **kwargs).bootstrap()
    return page


async def render_article(config: SiteConfig, query: Query, **kwargs) -> PageTarget:
    page = PageTarget.article_page()
    await build_renderer(config, page, **kwargs).bootstrap(query)
    return page


async def render_document(config: SiteConfig, mode: RenderMode, query: Query = None) -> str:
    """Full HTML for the index (LIST) or an article page (DETAIL)."""
    if mode is RenderMode.LIST:
        page = await render_index(config)
    elif mode is RenderMode.DETAIL:
        page = await render_article(config, query)
    else:
        raise ValueError(f"Cannot render a document for mode {mode!r}")
    stylesheet = PygmentsHighlighter(config.pygments_style).stylesheet() if config.highlight else None
    return render_html(
        page,
        site_title=config.site_title,
        stylesheet=stylesheet,
        copy_revert_seconds=config.copy_revert_seconds,
    )
