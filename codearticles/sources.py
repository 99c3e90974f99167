"""
Article Sources — catalog and content providers
================================================
Follows an ABC + concrete-class pattern: the renderer only ever sees
CatalogSource / ContentSource and awaits them, so a network- or disk-backed
provider can replace the built-in demo data without touching rendering.

Built-in sources:
  StaticCatalog     — fixed list of ArticleRecord (the demo catalog by default)
  StaticContent     — fixed example text keyed by file extension
  DirectoryCatalog  — one record per supported file in an articles folder
  DirectoryContent  — reads article files from that folder

Contract for every CatalogSource:
  - returns a list, empty when there is no data (never None)
  - raises LoadFailure when the underlying data cannot be read
"""
from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Mapping, Optional

import yaml

from . import examples
from .metadata import extension_of, format_date, language_label, title_from_filename
from .models import SUPPORTED_LANGUAGES, ArticleRecord, LoadFailure
from .tracing import traced_fetch

logger = logging.getLogger("codearticles.sources")

DESCRIPTIONS_FILE = "descriptions.yaml"


# ─────────────────────────────────────────────────────────────────────────────
# ABCs
# ─────────────────────────────────────────────────────────────────────────────

class CatalogSource(ABC):
    """Provides the list of articles shown on the index page."""

    @abstractmethod
    async def list_articles(self) -> list[ArticleRecord]:
        """Return every article in display order. Raise LoadFailure on failure."""


class ContentSource(ABC):
    """Provides the raw source text of a single article."""

    @abstractmethod
    async def load_content(self, filename: str) -> str:
        """Return the text for filename. Raise LoadFailure on failure."""


# ─────────────────────────────────────────────────────────────────────────────
# Static (demo) sources
# ─────────────────────────────────────────────────────────────────────────────

class StaticCatalog(CatalogSource):
    def __init__(self, records: Optional[Iterable[ArticleRecord]] = None) -> None:
        self._records: tuple[ArticleRecord, ...] = (
            examples.ARTICLES if records is None else tuple(records)
        )

    async def list_articles(self) -> list[ArticleRecord]:
        with traced_fetch("catalog", "static"):
            return list(self._records)


class StaticContent(ContentSource):
    """
    Deterministic content keyed by extension.

    Unmapped extensions produce a placeholder that names the requested file.
    """

    def __init__(self, sources: Optional[Mapping[str, str]] = None) -> None:
        self._sources = dict(examples.SOURCES if sources is None else sources)

    async def load_content(self, filename: str) -> str:
        with traced_fetch("content", filename):
            text = self._sources.get(extension_of(filename))
            if text is None:
                logger.debug("No example text for %s; using placeholder", filename)
                return examples.placeholder_for(filename)
            return text


# ─────────────────────────────────────────────────────────────────────────────
# Directory-backed sources
# ─────────────────────────────────────────────────────────────────────────────

class DirectoryCatalog(CatalogSource):
    """
    Lists the files of an articles folder whose extension is in
    SUPPORTED_LANGUAGES, sorted by filename.

    Titles and languages are derived from the filename, dates from the file's
    modification time. Descriptions come from an optional descriptions.yaml
    in the same folder mapping filename -> description.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    async def list_articles(self) -> list[ArticleRecord]:
        with traced_fetch("catalog", str(self.root)):
            return await asyncio.to_thread(self._scan)

    def _scan(self) -> list[ArticleRecord]:
        if not self.root.is_dir():
            raise LoadFailure(f"Articles folder not found: {self.root}")
        descriptions = self._load_descriptions()
        records: list[ArticleRecord] = []
        try:
            paths = sorted(p for p in self.root.iterdir() if p.is_file())
        except OSError as exc:
            raise LoadFailure(f"Cannot list {self.root}: {exc}") from exc
        for path in paths:
            ext = extension_of(path.name)
            if "." not in path.name or ext not in SUPPORTED_LANGUAGES:
                continue
            records.append(ArticleRecord(
                filename=path.name,
                title=title_from_filename(path.name),
                language=language_label(ext),
                date=format_date(path.stat().st_mtime),
                description=descriptions.get(path.name),
            ))
        logger.debug("Found %d articles in %s", len(records), self.root)
        return records

    def _load_descriptions(self) -> dict[str, str]:
        path = self.root / DESCRIPTIONS_FILE
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise LoadFailure(f"Cannot read {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise LoadFailure(f"'{path}': expected a mapping of filename -> description")
        return {str(k): str(v) for k, v in raw.items() if v is not None}


class DirectoryContent(ContentSource):
    """Reads article text from a folder; names may not escape that folder."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    async def load_content(self, filename: str) -> str:
        with traced_fetch("content", filename):
            return await asyncio.to_thread(self._read, filename)

    def _read(self, filename: str) -> str:
        root = self.root.resolve()
        path = (root / filename).resolve()
        if root != path.parent and root not in path.parents:
            raise LoadFailure(f"Refusing to read outside the articles folder: {filename}")
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise LoadFailure(f"Cannot read {filename}: {exc}") from exc
