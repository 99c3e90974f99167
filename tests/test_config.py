"""Tests for codearticles/config.py — YAML loading and environment overrides."""
from __future__ import annotations

from pathlib import Path

import pytest

from codearticles.config import SiteConfig, load_config
from codearticles.models import ConfigError


def _write(tmp_path, text: str) -> Path:
    path = tmp_path / "site.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_without_file():
    config = load_config(environ={})
    assert config == SiteConfig()
    assert config.article_page == "article.html"
    assert config.copy_revert_seconds == 2.0
    assert config.articles_dir is None


def test_full_file(tmp_path):
    path = _write(tmp_path, """
site_title: My Snippets
articles_dir: ./articles
article_page: view.html
copy_revert_seconds: 1.5
highlight: false
pygments_style: monokai
host: 0.0.0.0
port: 9000
tracing: yes
""")
    config = load_config(path, environ={})
    assert config.site_title == "My Snippets"
    assert config.articles_dir == Path("./articles")
    assert config.article_page == "view.html"
    assert config.copy_revert_seconds == 1.5
    assert config.highlight is False
    assert config.pygments_style == "monokai"
    assert config.host == "0.0.0.0"
    assert config.port == 9000
    assert config.tracing is True


def test_empty_file_gives_defaults(tmp_path):
    assert load_config(_write(tmp_path, ""), environ={}) == SiteConfig()


def test_environment_overrides_file(tmp_path):
    path = _write(tmp_path, "article_page: view.html\nport: 9000\n")
    config = load_config(path, environ={
        "CODEARTICLES_ARTICLE_PAGE": "detail.html",
        "CODEARTICLES_PORT": "8123",
        "CODEARTICLES_ARTICLES_DIR": str(tmp_path),
    })
    assert config.article_page == "detail.html"
    assert config.port == 8123
    assert config.articles_dir == tmp_path


def test_reads_process_environment_by_default(monkeypatch):
    monkeypatch.setenv("CODEARTICLES_PORT", "8555")
    assert load_config().port == 8555


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml", environ={})


@pytest.mark.parametrize("text", [
    "unknown_key: 1\n",
    "port: not-a-number\n",
    "port: 70000\n",
    "copy_revert_seconds: -1\n",
    "highlight: maybe\n",
    "article_page: ''\n",
    "pygments_style: no-such-style\n",
    "- a\n- list\n",
    "site_title: [unclosed\n",
])
def test_invalid_files_raise_config_error(tmp_path, text):
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, text), environ={})


def test_config_error_is_a_value_error():
    assert issubclass(ConfigError, ValueError)
