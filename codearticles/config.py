"""
Site Configuration — load SiteConfig from a YAML file and the environment
=========================================================================
Schema reference (every field is optional):

    site_title: "Code Articles"          # default "Code Articles"
    articles_dir: "./articles"           # default: built-in demo articles
    article_page: "article.html"         # detail page that list links point to
    copy_revert_seconds: 2.0             # "Copied!" feedback window
    highlight: true                      # run Pygments on article pages
    pygments_style: "default"            # any installed Pygments style
    host: "127.0.0.1"                    # `serve` bind address
    port: 8000                           # `serve` port
    tracing: false                       # OpenTelemetry console spans

Environment overrides (applied after the file, before CLI flags):

    CODEARTICLES_ARTICLES_DIR, CODEARTICLES_ARTICLE_PAGE, CODEARTICLES_PORT

The CLI calls dotenv.load_dotenv() first, so these may also live in a .env file.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .models import ConfigError

logger = logging.getLogger("codearticles.config")

ENV_ARTICLES_DIR = "CODEARTICLES_ARTICLES_DIR"
ENV_ARTICLE_PAGE = "CODEARTICLES_ARTICLE_PAGE"
ENV_PORT = "CODEARTICLES_PORT"


@dataclass
class SiteConfig:
    site_title: str = "Code Articles"
    articles_dir: Optional[Path] = None
    article_page: str = "article.html"
    copy_revert_seconds: float = 2.0
    highlight: bool = True
    pygments_style: str = "default"
    host: str = "127.0.0.1"
    port: int = 8000
    tracing: bool = False


# ─────────────────────────────────────────────────────────────────────────────
# Loader
# ─────────────────────────────────────────────────────────────────────────────

def load_config(
    path: str | Path | None = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SiteConfig:
    """
    Build a SiteConfig from an optional YAML file plus environment overrides.

    Raises
    ------
    FileNotFoundError  — path given but the file doesn't exist
    ConfigError        — unknown keys or invalid values
    """
    raw: dict[str, Any] = {}
    source = "<defaults>"
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        source = str(path)
        try:
            with open(path, encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"'{path}': invalid YAML: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"'{path}': top level must be a mapping")
        raw.update(loaded)

    env = os.environ if environ is None else environ
    if env.get(ENV_ARTICLES_DIR):
        raw["articles_dir"] = env[ENV_ARTICLES_DIR]
    if env.get(ENV_ARTICLE_PAGE):
        raw["article_page"] = env[ENV_ARTICLE_PAGE]
    if env.get(ENV_PORT):
        raw["port"] = env[ENV_PORT]

    config = _build(raw, source)
    logger.debug("Loaded config from %s: %s", source, config)
    return config


# ─────────────────────────────────────────────────────────────────────────────
# Internal helpers
# ─────────────────────────────────────────────────────────────────────────────

def _build(raw: dict[str, Any], source: str) -> SiteConfig:
    known = {f.name for f in fields(SiteConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"'{source}': unknown config keys {unknown}. Valid keys: {sorted(known)}")

    config = SiteConfig()
    try:
        if "site_title" in raw:
            config.site_title = str(raw["site_title"]).strip() or config.site_title
        if raw.get("articles_dir"):
            config.articles_dir = Path(str(raw["articles_dir"])).expanduser()
        if "article_page" in raw:
            config.article_page = str(raw["article_page"]).strip()
        if "copy_revert_seconds" in raw:
            config.copy_revert_seconds = float(raw["copy_revert_seconds"])
        if "highlight" in raw:
            config.highlight = _as_bool(raw["highlight"], "highlight", source)
        if "pygments_style" in raw:
            config.pygments_style = str(raw["pygments_style"])
        if "host" in raw:
            config.host = str(raw["host"])
        if "port" in raw:
            config.port = int(raw["port"])
        if "tracing" in raw:
            config.tracing = _as_bool(raw["tracing"], "tracing", source)
    except (TypeError, ValueError) as exc:
        if isinstance(exc, ConfigError):
            raise
        raise ConfigError(f"'{source}': {exc}") from exc

    if not config.article_page:
        raise ConfigError(f"'{source}': 'article_page' must not be empty")
    if config.copy_revert_seconds < 0:
        raise ConfigError(f"'{source}': 'copy_revert_seconds' must be >= 0")
    if not 0 < config.port < 65536:
        raise ConfigError(f"'{source}': 'port' must be between 1 and 65535")
    try:
        get_style_by_name(config.pygments_style)
    except ClassNotFound:
        raise ConfigError(
            f"'{source}': unknown pygments_style '{config.pygments_style}'"
        ) from None
    return config


def _as_bool(value: Any, key: str, source: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"'{source}': '{key}' must be a boolean, got {value!r}")
