"""HTML documents for the index and article pages, built from a rendered PageTarget."""
from __future__ import annotations

import html
from typing import Optional

from .models import (
    ARTICLE_HEADING, ARTICLE_LANGUAGE, ARTICLE_TITLE, CODE_CONTENT,
    COPY_BUTTON, LIST_CONTAINER,
)
from .target import Card, PageTarget

_STYLES = """*, *::before, *::after {
  box-sizing: border-box;
}

body {
  margin: 0;
  font-family: system-ui, -apple-system, sans-serif;
  line-height: 1.5;
  color: #1a1a1a;
  background: #f5f5f5;
}

header.site {
  background: #2c3e50;
  color: #ffffff;
  padding: 1rem 2rem;
}

header.site a {
  color: inherit;
  text-decoration: none;
}

main {
  max-width: 1200px;
  margin: 0 auto;
  padding: 2rem;
}

.articles-grid {
  display: grid;
  grid-template-columns: repeat(auto-fill, minmax(280px, 1fr));
  gap: 1.5rem;
}

.article-card {
  background: #ffffff;
  border-radius: 8px;
  box-shadow: 0 2px 4px rgba(0, 0, 0, 0.1);
  padding: 1.5rem;
}

.article-card-meta {
  display: flex;
  justify-content: space-between;
  color: #666666;
  font-size: 0.9rem;
}

.btn {
  display: inline-block;
  margin-top: 1rem;
  padding: 0.5rem 1rem;
  border: none;
  border-radius: 4px;
  background: #3498db;
  color: #ffffff;
  text-decoration: none;
  cursor: pointer;
}

.btn.copied {
  background: #27ae60;
}

.article-meta {
  color: #666666;
  margin-bottom: 1rem;
}

pre.highlight {
  background: #ffffff;
  border-radius: 8px;
  padding: 1rem;
  overflow-x: auto;
}
"""

# Browser-side counterpart of CopyHandler for pages opened from `serve`
_COPY_SCRIPT = """document.addEventListener('DOMContentLoaded', () => {
  const button = document.getElementById('copy-button');
  const code = document.getElementById('code-content');
  if (!button || !code) return;
  let timer = null;
  const original = button.textContent;
  button.addEventListener('click', async () => {
    try {
      await navigator.clipboard.writeText(code.textContent);
      clearTimeout(timer);
      button.textContent = 'Copied!';
      button.classList.add('copied');
      timer = setTimeout(() => {
        button.textContent = original;
        button.classList.remove('copied');
      }, COPY_REVERT_MS);
    } catch (err) {
      console.error('Failed to copy code: ', err);
      alert('Failed to copy code to clipboard');
    }
  });
});
"""


def _e(text: str) -> str:
    return html.escape(text, quote=True)


def render_card(card: Card) -> str:
    return (
        '<div class="article-card">\n'
        '  <div class="article-card-header">\n'
        f"    <h3>{_e(card.title)}</h3>\n"
        f"    <p>{_e(card.description)}</p>\n"
        "  </div>\n"
        '  <div class="article-card-meta">\n'
        f'    <span class="language">{_e(card.language)}</span>\n'
        f'    <span class="date">{_e(card.date)}</span>\n'
        "  </div>\n"
        '  <div class="article-card-footer">\n'
        f'    <a href="{_e(card.href)}" class="btn">Read Article</a>\n'
        "  </div>\n"
        "</div>"
    )


def render_html(
    page: PageTarget,
    site_title: str = "Code Articles",
    stylesheet: Optional[str] = None,
    copy_revert_seconds: float = 2.0,
) -> str:
    """
    Serialize a rendered page. All text is HTML-escaped; only highlighter
    markup (already escaped by Pygments) is inserted as-is.
    """
    if page.has_element(LIST_CONTAINER):
        title = site_title
        body = _index_body(page)
        script = ""
    elif page.has_element(CODE_CONTENT):
        title = page.get_text(ARTICLE_TITLE) if page.has_element(ARTICLE_TITLE) else site_title
        body = _article_body(page)
        script = _COPY_SCRIPT.replace("COPY_REVERT_MS", str(int(copy_revert_seconds * 1000)))
    else:
        title = site_title
        body = ""
        script = ""

    styles = _STYLES + (stylesheet or "")
    parts = [
        "<!doctype html>",
        '<html lang="en">',
        "  <head>",
        '    <meta charset="UTF-8" />',
        '    <meta name="viewport" content="width=device-width, initial-scale=1.0" />',
        f'    <title id="{ARTICLE_TITLE}">{_e(title)}</title>',
        f"    <style>\n{styles}    </style>",
        "  </head>",
        "  <body>",
        '    <header class="site">',
        f'      <a href="index.html"><strong>{_e(site_title)}</strong></a>',
        "    </header>",
        "    <main>",
        body,
        "    </main>",
    ]
    if script:
        parts.append(f"    <script>\n{script}    </script>")
    parts += ["  </body>", "</html>", ""]
    return "\n".join(parts)


def _index_body(page: PageTarget) -> str:
    cards = page.cards(LIST_CONTAINER)
    if cards:
        inner = "\n".join(render_card(card) for card in cards)
    else:
        inner = f"<p>{_e(page.get_text(LIST_CONTAINER))}</p>"
    return f'<div id="{LIST_CONTAINER}" class="articles-grid">\n{inner}\n</div>'


def _article_body(page: PageTarget) -> str:
    heading = page.get_text(ARTICLE_HEADING) if page.has_element(ARTICLE_HEADING) else ""
    language = page.get_text(ARTICLE_LANGUAGE) if page.has_element(ARTICLE_LANGUAGE) else ""
    classes = " ".join(page.classes(CODE_CONTENT))
    code = page.markup(CODE_CONTENT) or _e(page.get_text(CODE_CONTENT))
    lines = [
        f'<h1 id="{ARTICLE_HEADING}">{_e(heading)}</h1>',
        f'<div class="article-meta"><span id="{ARTICLE_LANGUAGE}">{_e(language)}</span></div>',
    ]
    if page.has_element(COPY_BUTTON):
        lines.append(
            f'<button id="{COPY_BUTTON}" class="btn">{_e(page.get_text(COPY_BUTTON))}</button>'
        )
    lines.append(
        f'<pre class="highlight"><code id="{CODE_CONTENT}" class="{_e(classes)}">{code}</code></pre>'
    )
    return "\n".join(lines)
