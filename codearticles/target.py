"""
Render targets — the page surface the renderer writes into.
===========================================================
RenderTarget is the capability PageRenderer depends on instead of a browser
DOM. Elements are addressed by id (see the constants in models.py).

PageTarget is the in-memory implementation used by the CLI, the HTTP server
and the tests. Its index_page() / article_page() constructors hold the same
elements as the site's two HTML shells, so bootstrap() picks the right mode.

Writing text into an element replaces everything it held before (text,
highlighted markup, cards), the same way assigning textContent does.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional

from .models import (
    ARTICLE_HEADING, ARTICLE_LANGUAGE, ARTICLE_TITLE,
    CODE_CONTENT, COPY_BUTTON, LIST_CONTAINER,
)

logger = logging.getLogger("codearticles.target")

ClickHandler = Callable[[], Awaitable[None]]


@dataclass(frozen=True)
class Card:
    """One article card on the index page."""
    title: str
    description: str
    language: str
    date: str
    href: str


# ─────────────────────────────────────────────────────────────────────────────
# RenderTarget ABC
# ─────────────────────────────────────────────────────────────────────────────

class RenderTarget(ABC):

    @abstractmethod
    def has_element(self, element_id: str) -> bool: ...

    @abstractmethod
    def set_text(self, element_id: str, text: str) -> None:
        """Replace the element's content with plain text (never parsed as markup)."""

    @abstractmethod
    def get_text(self, element_id: str) -> str: ...

    @abstractmethod
    def set_class(self, element_id: str, class_name: str) -> None:
        """Replace the element's class list with a single class."""

    @abstractmethod
    def classes(self, element_id: str) -> list[str]: ...

    @abstractmethod
    def clear_classes(self, element_id: str) -> None: ...

    @abstractmethod
    def add_class(self, element_id: str, class_name: str) -> None: ...

    @abstractmethod
    def remove_class(self, element_id: str, class_name: str) -> None: ...

    @abstractmethod
    def append_card(self, element_id: str, card: Card) -> None: ...

    @abstractmethod
    def clear(self, element_id: str) -> None:
        """Remove all content (text, markup, cards) from the element."""

    @abstractmethod
    def set_markup(self, element_id: str, markup: str) -> None:
        """Attach trusted, already-escaped markup (highlighter output only)."""

    @abstractmethod
    def on_click(self, element_id: str, handler: ClickHandler) -> None: ...


# ─────────────────────────────────────────────────────────────────────────────
# PageTarget
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class Element:
    id: str
    text: str = ""
    classes: list[str] = field(default_factory=list)
    markup: Optional[str] = None
    cards: list[Card] = field(default_factory=list)
    handlers: list[ClickHandler] = field(default_factory=list)


class PageTarget(RenderTarget):
    """In-memory page holding a fixed set of elements."""

    def __init__(self, element_ids: list[str] | tuple[str, ...] = ()) -> None:
        self.elements: dict[str, Element] = {eid: Element(eid) for eid in element_ids}

    @classmethod
    def index_page(cls) -> "PageTarget":
        return cls([LIST_CONTAINER])

    @classmethod
    def article_page(cls) -> "PageTarget":
        page = cls([ARTICLE_TITLE, ARTICLE_HEADING, ARTICLE_LANGUAGE, CODE_CONTENT, COPY_BUTTON])
        page.set_text(ARTICLE_TITLE, "Code Articles")
        page.set_text(COPY_BUTTON, "Copy Code")
        return page

    def element(self, element_id: str) -> Element:
        try:
            return self.elements[element_id]
        except KeyError:
            raise KeyError(f"No element with id '{element_id}'") from None

    # ── RenderTarget ─────────────────────────────────────────────────────────

    def has_element(self, element_id: str) -> bool:
        return element_id in self.elements

    def set_text(self, element_id: str, text: str) -> None:
        el = self.element(element_id)
        el.text = text
        el.markup = None
        el.cards.clear()

    def get_text(self, element_id: str) -> str:
        return self.element(element_id).text

    def set_class(self, element_id: str, class_name: str) -> None:
        self.element(element_id).classes = [class_name]

    def classes(self, element_id: str) -> list[str]:
        return list(self.element(element_id).classes)

    def clear_classes(self, element_id: str) -> None:
        self.element(element_id).classes.clear()

    def add_class(self, element_id: str, class_name: str) -> None:
        el = self.element(element_id)
        if class_name not in el.classes:
            el.classes.append(class_name)

    def remove_class(self, element_id: str, class_name: str) -> None:
        el = self.element(element_id)
        if class_name in el.classes:
            el.classes.remove(class_name)

    def append_card(self, element_id: str, card: Card) -> None:
        self.element(element_id).cards.append(card)

    def clear(self, element_id: str) -> None:
        self.set_text(element_id, "")

    def set_markup(self, element_id: str, markup: str) -> None:
        self.element(element_id).markup = markup

    def on_click(self, element_id: str, handler: ClickHandler) -> None:
        self.element(element_id).handlers.append(handler)

    # ── Inspection / events ──────────────────────────────────────────────────

    def cards(self, element_id: str) -> list[Card]:
        return list(self.element(element_id).cards)

    def markup(self, element_id: str) -> Optional[str]:
        return self.element(element_id).markup

    async def click(self, element_id: str) -> None:
        """Run every click handler registered on the element, in order."""
        handlers = list(self.element(element_id).handlers)
        logger.debug("click %s (%d handlers)", element_id, len(handlers))
        for handler in handlers:
            await handler()
