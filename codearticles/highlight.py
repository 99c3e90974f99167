"""
Syntax highlighting via Pygments.

The renderer marks the code element with a `language-<ext>` class before
calling highlight_all(); the highlighter reads that class and the element's
plain text and attaches escaped, token-annotated markup next to the text.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name, get_lexer_for_filename
from pygments.util import ClassNotFound

from .models import CODE_CONTENT
from .target import RenderTarget

logger = logging.getLogger("codearticles.highlight")

LANGUAGE_CLASS_PREFIX = "language-"
CSS_SCOPE = ".highlight"


class Highlighter(ABC):

    @abstractmethod
    def highlight_all(self, target: RenderTarget) -> None:
        """Re-scan the target and highlight every marked code element."""


def lexer_for_extension(extension: str) -> Lexer:
    try:
        return get_lexer_by_name(extension, stripall=False)
    except ClassNotFound:
        pass
    try:
        return get_lexer_for_filename(f"article.{extension}", stripall=False)
    except ClassNotFound:
        return TextLexer(stripall=False)


class PygmentsHighlighter(Highlighter):
    def __init__(self, style: str = "default", element_id: str = CODE_CONTENT) -> None:
        self.style = style
        self.element_id = element_id
        self._formatter = HtmlFormatter(nowrap=True, style=style)

    def highlight_all(self, target: RenderTarget) -> None:
        if not target.has_element(self.element_id):
            return
        extension = self._extension(target.classes(self.element_id))
        if extension is None:
            logger.debug("No %s* class on %s; nothing to highlight",
                         LANGUAGE_CLASS_PREFIX, self.element_id)
            return
        code = target.get_text(self.element_id)
        lexer = lexer_for_extension(extension)
        target.set_markup(self.element_id, highlight(code, lexer, self._formatter))
        logger.debug("Highlighted %d chars as %s", len(code), lexer.name)

    def stylesheet(self) -> str:
        return self._formatter.get_style_defs(CSS_SCOPE)

    @staticmethod
    def _extension(classes: list[str]) -> str | None:
        for name in classes:
            if name.startswith(LANGUAGE_CLASS_PREFIX):
                return name[len(LANGUAGE_CLASS_PREFIX):]
        return None
