"""
Page Renderer
=============
Fills a RenderTarget from the catalog/content sources. Two mutually
exclusive modes, picked by bootstrap() from the elements the page holds:

  articles-container present → list mode   (index page)
  code-content present       → detail mode (article page, ?file=<name>)
  neither                    → nothing happens

Any exception raised while fetching or rendering is logged and the mode's
container is reset to a fixed error message, so a failed render never
leaves half-written content on the page.
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence, Union
from urllib.parse import parse_qs, quote

from .clipboard import DEFAULT_REVERT_SECONDS, Clipboard, CopyHandler, Notifier, stderr_notifier
from .highlight import LANGUAGE_CLASS_PREFIX, Highlighter
from .hooks import EventType, HookRegistry
from .metadata import extension_of, language_label, title_from_filename
from .models import (
    ARTICLE_HEADING, ARTICLE_LANGUAGE, ARTICLE_TITLE, CODE_CONTENT, COPY_BUTTON,
    LIST_CONTAINER, ArticleRecord, LoadFailure, RenderMode,
)
from .sources import CatalogSource, ContentSource
from .target import Card, RenderTarget
from .tracing import traced_render

logger = logging.getLogger("codearticles.renderer")

NO_ARTICLES_MESSAGE = "No articles found."
LIST_ERROR_MESSAGE = "Error loading articles. Please try again later."
NO_ARTICLE_MESSAGE = "No article specified. Please select an article from the homepage."
DETAIL_ERROR_MESSAGE = "Error loading article. Please try again later."
DEFAULT_DESCRIPTION = "Code example and explanation"
DEFAULT_SITE_TITLE = "Code Articles"
DEFAULT_ARTICLE_PAGE = "article.html"
FILE_PARAM = "file"

Query = Union[str, Mapping[str, Union[str, Sequence[str]]], None]


def file_param(query: Query) -> Optional[str]:
    """
    Extract the `file` parameter from a raw query string ("?file=a.py") or a
    mapping (plain values or parse_qs-style lists). Empty values count as absent.
    """
    if query is None:
        return None
    if isinstance(query, str):
        query = parse_qs(query.lstrip("?"), keep_blank_values=True)
    value = query.get(FILE_PARAM)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return value or None


def article_href(article_page: str, filename: str) -> str:
    return f"{article_page}?{FILE_PARAM}={quote(filename, safe='')}"


class PageRenderer:
    """
    Renders the index and article pages into a RenderTarget.

    Usage:
        page = PageTarget.article_page()
        renderer = PageRenderer(page, StaticCatalog(), StaticContent(),
                                highlighter=PygmentsHighlighter(),
                                clipboard=MemoryClipboard())
        mode = asyncio.run(renderer.bootstrap("?file=example.py"))
    """

    def __init__(
        self,
        target: RenderTarget,
        catalog: CatalogSource,
        content: ContentSource,
        highlighter: Optional[Highlighter] = None,
        clipboard: Optional[Clipboard] = None,
        notify: Notifier = stderr_notifier,
        hooks: Optional[HookRegistry] = None,
        article_page: str = DEFAULT_ARTICLE_PAGE,
        site_title: str = DEFAULT_SITE_TITLE,
        copy_revert_seconds: float = DEFAULT_REVERT_SECONDS,
    ) -> None:
        self.target = target
        self.catalog = catalog
        self.content = content
        self.highlighter = highlighter
        self.clipboard = clipboard
        self.notify = notify
        self.hooks = hooks if hooks is not None else HookRegistry()
        self.article_page = article_page
        self.site_title = site_title
        self.copy_revert_seconds = copy_revert_seconds
        self.copy_handler: Optional[CopyHandler] = None

    async def bootstrap(self, query: Query = None) -> RenderMode:
        """Run whichever mode the target's elements call for."""
        if self.target.has_element(LIST_CONTAINER):
            await self.render_list()
            return RenderMode.LIST
        if self.target.has_element(CODE_CONTENT):
            await self.render_detail(query)
            return RenderMode.DETAIL
        logger.debug("Neither %s nor %s present; nothing to render", LIST_CONTAINER, CODE_CONTENT)
        return RenderMode.NONE

    # ── List mode ─────────────────────────────────────────────────────────────

    async def render_list(self) -> int:
        """Render one card per catalog record. Returns the number of cards written."""
        self.hooks.fire(EventType.RENDER_STARTED, mode=RenderMode.LIST, filename=None)
        with traced_render(RenderMode.LIST.value):
            try:
                articles = await self.catalog.list_articles()
                if articles is None:
                    raise LoadFailure("Catalog returned None instead of a list")
                cards = [self._card(article) for article in articles]
                if not cards:
                    self.target.set_text(LIST_CONTAINER, NO_ARTICLES_MESSAGE)
                else:
                    self.target.clear(LIST_CONTAINER)
                    for card in cards:
                        self.target.append_card(LIST_CONTAINER, card)
            except Exception as exc:
                logger.exception("Error loading articles")
                self.target.set_text(LIST_CONTAINER, LIST_ERROR_MESSAGE)
                self.hooks.fire(EventType.LOAD_FAILED, mode=RenderMode.LIST,
                                filename=None, error=exc)
                return 0

        logger.info("Rendered %d article cards", len(cards))
        self.hooks.fire(EventType.RENDER_COMPLETED, mode=RenderMode.LIST,
                        filename=None, count=len(cards))
        return len(cards)

    def _card(self, article: ArticleRecord) -> Card:
        return Card(
            title=article.title,
            description=article.description or DEFAULT_DESCRIPTION,
            language=article.language,
            date=article.date,
            href=article_href(self.article_page, article.filename),
        )

    # ── Detail mode ───────────────────────────────────────────────────────────

    async def render_detail(self, query: Query = None) -> Optional[str]:
        """
        Render the article named by the `file` query parameter.

        Returns the loaded source text, or None when no file was given or the
        load failed.
        """
        filename = file_param(query)
        if not filename:
            self.target.set_text(CODE_CONTENT, NO_ARTICLE_MESSAGE)
            return None

        self.hooks.fire(EventType.RENDER_STARTED, mode=RenderMode.DETAIL, filename=filename)
        with traced_render(RenderMode.DETAIL.value):
            try:
                code = await self._render_article(filename)
            except Exception as exc:
                logger.exception("Error loading article %s", filename)
                self._reset_meta()
                self.target.clear_classes(CODE_CONTENT)
                self.target.set_text(CODE_CONTENT, DETAIL_ERROR_MESSAGE)
                self.hooks.fire(EventType.LOAD_FAILED, mode=RenderMode.DETAIL,
                                filename=filename, error=exc)
                return None

        logger.info("Rendered article %s (%d chars)", filename, len(code))
        self.hooks.fire(EventType.RENDER_COMPLETED, mode=RenderMode.DETAIL,
                        filename=filename, count=1)
        return code

    async def _render_article(self, filename: str) -> str:
        title = title_from_filename(filename)
        extension = extension_of(filename)
        self._set_if_present(ARTICLE_TITLE, f"{title} - {self.site_title}")
        self._set_if_present(ARTICLE_HEADING, title)
        self._set_if_present(ARTICLE_LANGUAGE, language_label(extension))

        self.target.set_class(CODE_CONTENT, f"{LANGUAGE_CLASS_PREFIX}{extension}")
        code = await self.content.load_content(filename)
        if code is None:
            raise LoadFailure(f"Content source returned None for {filename}")
        self.target.set_text(CODE_CONTENT, code)

        if self.highlighter is not None:
            self.highlighter.highlight_all(self.target)

        if self.clipboard is not None and self.target.has_element(COPY_BUTTON):
            self.copy_handler = CopyHandler(
                self.target,
                self.clipboard,
                notify=self.notify,
                revert_seconds=self.copy_revert_seconds,
                hooks=self.hooks,
            )
            self.copy_handler.bind(code)
        return code

    def _set_if_present(self, element_id: str, text: str) -> None:
        if self.target.has_element(element_id):
            self.target.set_text(element_id, text)

    def _reset_meta(self) -> None:
        self._set_if_present(ARTICLE_TITLE, self.site_title)
        self._set_if_present(ARTICLE_HEADING, "")
        self._set_if_present(ARTICLE_LANGUAGE, "")
