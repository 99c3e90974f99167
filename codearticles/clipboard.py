"""
Clipboard copy handler
======================
CopyHandler implements the article page's "Copy Code" button:

  success → button label becomes "Copied!" and gains the `copied` class;
            after revert_seconds both go back to what they were before.
  failure → error is logged, the notifier shows a blocking message,
            the button is left untouched.

A click while a revert is still pending cancels it and schedules a fresh one,
so only one revert runs and it restores the label seen before the first click.

Clipboards:
  MemoryClipboard  — in-process buffer (tests, embedding)
  CommandClipboard — runs the platform tool with the text on stdin (pbcopy, wl-copy, xclip, ...)
"""
from __future__ import annotations

import asyncio
import logging
import shutil
import subprocess
import sys
from abc import ABC, abstractmethod
from typing import Callable, Optional

from .hooks import EventType, HookRegistry
from .models import COPY_BUTTON, ClipboardFailure
from .target import RenderTarget
from .tracing import traced_copy

logger = logging.getLogger("codearticles.clipboard")

COPIED_LABEL = "Copied!"
COPIED_CLASS = "copied"
COPY_FAILED_MESSAGE = "Failed to copy code to clipboard"
DEFAULT_REVERT_SECONDS = 2.0
COMMAND_TIMEOUT_SECONDS = 10

Notifier = Callable[[str], None]


def stderr_notifier(message: str) -> None:
    print(f"\n!! {message}", file=sys.stderr)


# ─────────────────────────────────────────────────────────────────────────────
# Clipboard ABC + implementations
# ─────────────────────────────────────────────────────────────────────────────

class Clipboard(ABC):

    @abstractmethod
    async def write_text(self, text: str) -> None:
        """Put text on the clipboard. Raise ClipboardFailure when rejected."""


class MemoryClipboard(Clipboard):
    def __init__(self, fail_with: Optional[Exception] = None) -> None:
        self.text: Optional[str] = None
        self.fail_with = fail_with
        self.writes = 0

    async def write_text(self, text: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.text = text
        self.writes += 1


# Tried in order; the first one found on PATH is used
_CLIPBOARD_COMMANDS: tuple[tuple[str, ...], ...] = (
    ("pbcopy",),
    ("wl-copy",),
    ("xclip", "-selection", "clipboard"),
    ("xsel", "--clipboard", "--input"),
    ("clip",),
)


class CommandClipboard(Clipboard):
    """Writes through the first available platform clipboard command."""

    def __init__(self, command: Optional[tuple[str, ...]] = None) -> None:
        self.command = command

    def _resolve(self) -> tuple[str, ...]:
        if self.command is not None:
            return self.command
        for candidate in _CLIPBOARD_COMMANDS:
            if shutil.which(candidate[0]):
                return candidate
        raise ClipboardFailure("No clipboard command available on this system")

    async def write_text(self, text: str) -> None:
        command = self._resolve()
        try:
            result = await asyncio.to_thread(
                subprocess.run,
                list(command),
                input=text, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE,
                encoding="utf-8", errors="replace",
                timeout=COMMAND_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise ClipboardFailure(f"{command[0]} could not be run: {exc}") from exc
        if result.returncode != 0:
            raise ClipboardFailure(
                f"{command[0]} exited with {result.returncode}: {result.stderr.strip()}"
            )


# ─────────────────────────────────────────────────────────────────────────────
# CopyHandler
# ─────────────────────────────────────────────────────────────────────────────

class CopyHandler:
    """Copy action bound to a button element of a render target."""

    def __init__(
        self,
        target: RenderTarget,
        clipboard: Clipboard,
        notify: Notifier = stderr_notifier,
        button_id: str = COPY_BUTTON,
        revert_seconds: float = DEFAULT_REVERT_SECONDS,
        hooks: Optional[HookRegistry] = None,
    ) -> None:
        self.target = target
        self.clipboard = clipboard
        self.notify = notify
        self.button_id = button_id
        self.revert_seconds = revert_seconds
        self.hooks = hooks if hooks is not None else HookRegistry()
        self.pending: Optional[asyncio.Task] = None
        self._original_label: Optional[str] = None

    def bind(self, text: str) -> None:
        """Wire the button's click to copy text."""
        async def _on_click() -> None:
            await self.copy_to_clipboard(text)
        self.target.on_click(self.button_id, _on_click)

    async def copy_to_clipboard(self, text: str) -> None:
        try:
            with traced_copy(len(text)):
                await self.clipboard.write_text(text)
        except Exception as exc:
            logger.error("Failed to copy code: %s", exc)
            self.hooks.fire(EventType.COPY_FAILED, error=exc)
            self.notify(COPY_FAILED_MESSAGE)
            return

        if self.pending is not None and not self.pending.done():
            self.pending.cancel()
        else:
            self._original_label = self.target.get_text(self.button_id)

        self.target.set_text(self.button_id, COPIED_LABEL)
        self.target.add_class(self.button_id, COPIED_CLASS)
        self.pending = asyncio.create_task(self._revert_later())
        self.hooks.fire(EventType.COPY_SUCCEEDED, length=len(text))

    async def _revert_later(self) -> None:
        await asyncio.sleep(self.revert_seconds)
        self.target.set_text(self.button_id, self._original_label or "")
        self.target.remove_class(self.button_id, COPIED_CLASS)
        logger.debug("Copy button label restored")
