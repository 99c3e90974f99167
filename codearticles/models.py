"""
Code Articles — Core Models & Types
===================================
Article records, the extension → language table, render modes, element ids
and the exception hierarchy shared by every other module.

models.py imports nothing from the rest of the package, so any module can
depend on it without creating an import cycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


# ─────────────────────────────────────────────
# Enums
# ─────────────────────────────────────────────

class RenderMode(str, Enum):
    LIST = "list"
    DETAIL = "detail"
    NONE = "none"


# ─────────────────────────────────────────────
# Element ids (the render target contract)
# ─────────────────────────────────────────────

LIST_CONTAINER = "articles-container"
CODE_CONTENT = "code-content"
ARTICLE_TITLE = "article-title"
ARTICLE_HEADING = "article-heading"
ARTICLE_LANGUAGE = "article-language"
COPY_BUTTON = "copy-button"


# ─────────────────────────────────────────────
# Language table (lowercase extension → display name)
# ─────────────────────────────────────────────

SUPPORTED_LANGUAGES: Mapping[str, str] = MappingProxyType({
    "js":   "JavaScript",
    "py":   "Python",
    "html": "HTML",
    "css":  "CSS",
    "java": "Java",
    "cpp":  "C++",
    "c":    "C",
    "php":  "PHP",
    "rb":   "Ruby",
    "go":   "Go",
    "rs":   "Rust",
    "ts":   "TypeScript",
    "sql":  "SQL",
    "json": "JSON",
    "xml":  "XML",
    "md":   "Markdown",
})


# ─────────────────────────────────────────────
# ArticleRecord
# ─────────────────────────────────────────────

@dataclass(frozen=True)
class ArticleRecord:
    """Metadata for one code example, as listed on the index page."""
    filename: str
    title: str
    language: str
    date: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "filename": self.filename,
            "title": self.title,
            "language": self.language,
            "date": self.date,
            "description": self.description,
        }


# ─────────────────────────────────────────────
# Errors
# ─────────────────────────────────────────────

class CodeArticlesError(Exception):
    """Base class for every error raised by this package."""


class LoadFailure(CodeArticlesError):
    """A catalog or content source could not produce its result."""


class ClipboardFailure(CodeArticlesError):
    """The platform clipboard rejected a write."""


class ConfigError(CodeArticlesError, ValueError):
    """A configuration file or override holds an invalid value."""
