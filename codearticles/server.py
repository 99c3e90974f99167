"""
Local web server
================
Serves the site with the standard-library HTTP server. Every request renders
its page from scratch with its own event loop:

    /  and /index.html          → index page (list mode)
    /<article_page>?file=NAME   → article page (detail mode)
    anything else               → 404
"""
from __future__ import annotations

import asyncio
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Optional
from urllib.parse import urlparse

from .config import SiteConfig
from .models import RenderMode
from .site import render_document

logger = logging.getLogger("codearticles.server")


def route(config: SiteConfig, path: str) -> Optional[RenderMode]:
    """Map a request path (without query) to the page mode it serves."""
    name = path.lstrip("/")
    if name in ("", "index.html"):
        return RenderMode.LIST
    if name == config.article_page.lstrip("/"):
        return RenderMode.DETAIL
    return None


def make_handler(config: SiteConfig) -> type[BaseHTTPRequestHandler]:

    class RequestHandler(BaseHTTPRequestHandler):

        def do_GET(self) -> None:
            parsed = urlparse(self.path)
            mode = route(config, parsed.path)
            if mode is None:
                self._send(404, "text/plain; charset=utf-8", b"Not found")
                return
            try:
                document = asyncio.run(render_document(config, mode, parsed.query))
            except Exception:
                logger.exception("Error rendering %s", self.path)
                self._send(500, "text/plain; charset=utf-8", b"Internal server error")
                return
            self._send(200, "text/html; charset=utf-8", document.encode("utf-8"))

        def _send(self, status: int, content_type: str, body: bytes) -> None:
            self.send_response(status)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, format, *args):
            logger.info("[%s] %s", self.command, self.path)

    return RequestHandler


def serve(config: SiteConfig) -> None:
    server = ThreadingHTTPServer((config.host, config.port), make_handler(config))
    print(f"Serving {config.site_title} at http://{config.host}:{config.port}")
    print("Press Ctrl+C to stop the server")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nServer stopped.")
    finally:
        server.server_close()
