"""
Tests for codearticles/renderer.py — list mode, detail mode, bootstrap.
No network, no filesystem: sources are static or AsyncMock stand-ins.
"""
from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock

import pytest

from codearticles import examples
from codearticles.hooks import EventType, HookRegistry
from codearticles.models import (
    ARTICLE_HEADING, ARTICLE_LANGUAGE, ARTICLE_TITLE, CODE_CONTENT, COPY_BUTTON,
    LIST_CONTAINER, ArticleRecord, LoadFailure, RenderMode,
)
from codearticles.renderer import (
    DEFAULT_DESCRIPTION,
    DETAIL_ERROR_MESSAGE,
    LIST_ERROR_MESSAGE,
    NO_ARTICLE_MESSAGE,
    NO_ARTICLES_MESSAGE,
    PageRenderer,
    article_href,
    file_param,
)
from codearticles.sources import CatalogSource, ContentSource, StaticCatalog, StaticContent
from codearticles.target import Card, PageTarget


# ── Helpers ───────────────────────────────────────────────────────────────────

def _records(n: int) -> list[ArticleRecord]:
    return [
        ArticleRecord(
            filename=f"file_{i}.py",
            title=f"Title {i}",
            language="Python",
            date=f"Jan {i + 1}, 2023",
            description=f"Description {i}" if i % 2 == 0 else None,
        )
        for i in range(n)
    ]


class FailingCatalog(CatalogSource):
    async def list_articles(self):
        raise LoadFailure("catalog unavailable")


class FailingContent(ContentSource):
    async def load_content(self, filename):
        raise LoadFailure(f"cannot load {filename}")


def _renderer(page, catalog=None, content=None, **kwargs) -> PageRenderer:
    return PageRenderer(
        page,
        catalog if catalog is not None else StaticCatalog(),
        content if content is not None else StaticContent(),
        **kwargs,
    )


# ── Query / link helpers ──────────────────────────────────────────────────────

@pytest.mark.parametrize("query,expected", [
    ("?file=example.py", "example.py"),
    ("file=example.py&x=1", "example.py"),
    ({"file": "a.css"}, "a.css"),
    ({"file": ["b.js", "c.js"]}, "b.js"),
    ("?file=", None),
    ("?other=1", None),
    ({}, None),
    (None, None),
])
def test_file_param(query, expected):
    assert file_param(query) == expected


def test_article_href_literal_for_plain_names():
    assert article_href("article.html", "example.py") == "article.html?file=example.py"


def test_article_href_percent_encodes_unsafe_names():
    href = article_href("article.html", 'a b&c"<x>.py')
    assert href == "article.html?file=a%20b%26c%22%3Cx%3E.py"


# ── List mode ─────────────────────────────────────────────────────────────────

def test_list_mode_empty_catalog_shows_message_and_no_cards():
    page = PageTarget.index_page()
    count = asyncio.run(_renderer(page, catalog=StaticCatalog([])).render_list())
    assert count == 0
    assert page.get_text(LIST_CONTAINER) == NO_ARTICLES_MESSAGE
    assert page.cards(LIST_CONTAINER) == []


@pytest.mark.parametrize("n", [1, 3, 7])
def test_list_mode_renders_one_card_per_record_in_order(n):
    records = _records(n)
    page = PageTarget.index_page()
    count = asyncio.run(_renderer(page, catalog=StaticCatalog(records)).render_list())

    cards = page.cards(LIST_CONTAINER)
    assert count == n
    assert len(cards) == n
    for record, card in zip(records, cards):
        assert card.title == record.title
        assert card.language == record.language
        assert card.date == record.date
        assert card.href == f"article.html?file={record.filename}"


def test_list_mode_default_description():
    page = PageTarget.index_page()
    asyncio.run(_renderer(page, catalog=StaticCatalog(_records(2))).render_list())
    cards = page.cards(LIST_CONTAINER)
    assert cards[0].description == "Description 0"
    assert cards[1].description == DEFAULT_DESCRIPTION


def test_list_mode_uses_configured_article_page():
    page = PageTarget.index_page()
    asyncio.run(_renderer(page, article_page="view").render_list())
    assert page.cards(LIST_CONTAINER)[0].href == "view?file=example.js"


def test_list_mode_demo_catalog():
    page = PageTarget.index_page()
    asyncio.run(_renderer(page).render_list())
    titles = [c.title for c in page.cards(LIST_CONTAINER)]
    assert titles == [r.title for r in examples.ARTICLES]


def test_list_mode_failure_replaces_previous_content():
    page = PageTarget.index_page()
    page.append_card(LIST_CONTAINER, Card("old", "old", "Old", "Jan 1, 2000", "x"))
    count = asyncio.run(_renderer(page, catalog=FailingCatalog()).render_list())
    assert count == 0
    assert page.get_text(LIST_CONTAINER) == LIST_ERROR_MESSAGE
    assert page.cards(LIST_CONTAINER) == []


def test_list_mode_none_from_catalog_is_a_failure():
    catalog = AsyncMock(spec=CatalogSource)
    catalog.list_articles.return_value = None
    page = PageTarget.index_page()
    asyncio.run(_renderer(page, catalog=catalog).render_list())
    assert page.get_text(LIST_CONTAINER) == LIST_ERROR_MESSAGE


def test_list_mode_error_while_building_cards_leaves_no_partial_cards():
    class BadRecord:
        title = "Broken"
        language = "Python"
        date = "Jan 1, 2023"
        description = None

        @property
        def filename(self):
            raise RuntimeError("corrupt record")

    records = _records(2) + [BadRecord()]
    page = PageTarget.index_page()
    asyncio.run(_renderer(page, catalog=StaticCatalog(records)).render_list())
    assert page.cards(LIST_CONTAINER) == []
    assert page.get_text(LIST_CONTAINER) == LIST_ERROR_MESSAGE


# ── Detail mode ───────────────────────────────────────────────────────────────

def test_detail_mode_without_file_shows_message_and_skips_providers():
    content = AsyncMock(spec=ContentSource)
    catalog = AsyncMock(spec=CatalogSource)
    page = PageTarget.article_page()
    result = asyncio.run(_renderer(page, catalog=catalog, content=content).render_detail({}))

    assert result is None
    assert page.get_text(CODE_CONTENT) == NO_ARTICLE_MESSAGE
    content.load_content.assert_not_called()
    catalog.list_articles.assert_not_called()
    assert page.get_text(ARTICLE_HEADING) == ""


def test_detail_mode_css_sets_class_and_exact_text():
    page = PageTarget.article_page()
    asyncio.run(_renderer(page).render_detail("?file=example.css"))
    assert page.classes(CODE_CONTENT) == ["language-css"]
    assert page.get_text(CODE_CONTENT) == examples.SOURCES["css"]
    assert page.markup(CODE_CONTENT) is None


def test_detail_mode_updates_title_heading_and_language():
    page = PageTarget.article_page()
    asyncio.run(_renderer(page).render_detail({"file": "my-cool_article.py"}))
    assert page.get_text(ARTICLE_TITLE) == "My Cool Article - Code Articles"
    assert page.get_text(ARTICLE_HEADING) == "My Cool Article"
    assert page.get_text(ARTICLE_LANGUAGE) == "Python"
    assert page.classes(CODE_CONTENT) == ["language-py"]


def test_detail_mode_html_content_stays_plain_text():
    page = PageTarget.article_page()
    asyncio.run(_renderer(page).render_detail({"file": "example.html"}))
    text = page.get_text(CODE_CONTENT)
    assert text == examples.SOURCES["html"]
    assert text.startswith("<!DOCTYPE html>")
    assert page.cards(CODE_CONTENT) == []


def test_detail_mode_unknown_extension_uses_placeholder_and_uppercase_label():
    page = PageTarget.article_page()
    asyncio.run(_renderer(page).render_detail({"file": "tool.kt"}))
    assert page.get_text(CODE_CONTENT) == "// Code for tool.kt would be loaded here"
    assert page.get_text(ARTICLE_LANGUAGE) == "KT"


def test_detail_mode_failure_shows_only_error_message():
    page = PageTarget.article_page()
    page.set_text(CODE_CONTENT, "stale content from a previous render")
    result = asyncio.run(_renderer(page, content=FailingContent()).render_detail({"file": "example.py"}))

    assert result is None
    assert page.get_text(CODE_CONTENT) == DETAIL_ERROR_MESSAGE
    assert page.markup(CODE_CONTENT) is None
    assert page.get_text(ARTICLE_HEADING) == ""
    assert page.get_text(ARTICLE_TITLE) == "Code Articles"
    assert page.classes(CODE_CONTENT) == []


def test_detail_mode_highlighter_failure_is_a_load_failure():
    class BrokenHighlighter:
        def highlight_all(self, target):
            raise RuntimeError("highlighter crashed")

    page = PageTarget.article_page()
    asyncio.run(_renderer(page, highlighter=BrokenHighlighter()).render_detail({"file": "example.py"}))
    assert page.get_text(CODE_CONTENT) == DETAIL_ERROR_MESSAGE


def test_detail_mode_calls_highlighter_after_text_is_written():
    seen = {}

    class RecordingHighlighter:
        def highlight_all(self, target):
            seen["text"] = target.get_text(CODE_CONTENT)
            seen["classes"] = target.classes(CODE_CONTENT)

    page = PageTarget.article_page()
    asyncio.run(_renderer(page, highlighter=RecordingHighlighter()).render_detail({"file": "example.js"}))
    assert seen == {"text": examples.SOURCES["js"], "classes": ["language-js"]}


def test_detail_mode_wires_copy_button_only_with_clipboard():
    from codearticles.clipboard import MemoryClipboard

    page = PageTarget.article_page()
    renderer = _renderer(page)
    asyncio.run(renderer.render_detail({"file": "example.py"}))
    assert renderer.copy_handler is None
    assert page.element(COPY_BUTTON).handlers == []

    page = PageTarget.article_page()
    clipboard = MemoryClipboard()
    renderer = _renderer(page, clipboard=clipboard)

    async def run():
        await renderer.render_detail({"file": "example.py"})
        await page.click(COPY_BUTTON)

    asyncio.run(run())
    assert clipboard.text == examples.SOURCES["py"]


# ── Bootstrap ─────────────────────────────────────────────────────────────────

def test_bootstrap_picks_list_mode_on_index_page():
    page = PageTarget.index_page()
    assert asyncio.run(_renderer(page).bootstrap()) is RenderMode.LIST
    assert len(page.cards(LIST_CONTAINER)) == 4


def test_bootstrap_picks_detail_mode_on_article_page():
    page = PageTarget.article_page()
    assert asyncio.run(_renderer(page).bootstrap("?file=example.js")) is RenderMode.DETAIL
    assert page.get_text(CODE_CONTENT) == examples.SOURCES["js"]


def test_bootstrap_prefers_list_mode_when_both_present():
    page = PageTarget([LIST_CONTAINER, CODE_CONTENT])
    assert asyncio.run(_renderer(page).bootstrap("?file=example.js")) is RenderMode.LIST
    assert page.get_text(CODE_CONTENT) == ""


def test_bootstrap_without_containers_does_nothing():
    catalog = AsyncMock(spec=CatalogSource)
    content = AsyncMock(spec=ContentSource)
    page = PageTarget([ARTICLE_HEADING])
    mode = asyncio.run(_renderer(page, catalog=catalog, content=content).bootstrap("?file=x.py"))
    assert mode is RenderMode.NONE
    catalog.list_articles.assert_not_called()
    content.load_content.assert_not_called()


# ── Hooks ─────────────────────────────────────────────────────────────────────

def test_hooks_fire_for_successful_list_render():
    hooks = HookRegistry()
    events = []
    hooks.add(EventType.RENDER_STARTED, lambda **kw: events.append(("started", kw["mode"])))
    hooks.add(EventType.RENDER_COMPLETED, lambda **kw: events.append(("completed", kw["count"])))
    asyncio.run(_renderer(PageTarget.index_page(), hooks=hooks).render_list())
    assert events == [("started", RenderMode.LIST), ("completed", 4)]


def test_hooks_fire_load_failed_with_error():
    hooks = HookRegistry()
    errors = []
    hooks.add(EventType.LOAD_FAILED, lambda **kw: errors.append((kw["filename"], kw["error"])))
    page = PageTarget.article_page()
    asyncio.run(_renderer(page, content=FailingContent(), hooks=hooks).render_detail({"file": "a.py"}))
    assert len(errors) == 1
    assert errors[0][0] == "a.py"
    assert isinstance(errors[0][1], LoadFailure)
