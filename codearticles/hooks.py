"""
HookRegistry — lightweight event hooks for the render lifecycle.
================================================================
A simple pub-sub mechanism for observing renders and copy actions without
changing the renderer. Callbacks are synchronous; async callers can wrap with
asyncio.create_task() if needed.

Events fired (see EventType):
  RENDER_STARTED    — before a list or detail render begins
  RENDER_COMPLETED  — after a render wrote its final content
  LOAD_FAILED       — a render failed and the error message was shown
  COPY_SUCCEEDED    — the clipboard accepted the article text
  COPY_FAILED       — the clipboard write was rejected
"""
from __future__ import annotations

import logging
from collections import defaultdict
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger("codearticles.hooks")


# ─────────────────────────────────────────────────────────────────────────────
# EventType
# ─────────────────────────────────────────────────────────────────────────────

class EventType(str, Enum):
    """
    Lifecycle events fired by PageRenderer and CopyHandler.

    Callback signatures (all kwargs):
      RENDER_STARTED    — mode: RenderMode, filename: str | None
      RENDER_COMPLETED  — mode: RenderMode, filename: str | None, count: int
      LOAD_FAILED       — mode: RenderMode, filename: str | None, error: Exception
      COPY_SUCCEEDED    — length: int
      COPY_FAILED       — error: Exception
    """
    RENDER_STARTED   = "render_started"
    RENDER_COMPLETED = "render_completed"
    LOAD_FAILED      = "load_failed"
    COPY_SUCCEEDED   = "copy_succeeded"
    COPY_FAILED      = "copy_failed"


# ─────────────────────────────────────────────────────────────────────────────
# HookRegistry
# ─────────────────────────────────────────────────────────────────────────────

class HookRegistry:
    """
    Maps event names to lists of callback functions.

    Usage:
        registry = HookRegistry()
        registry.add(EventType.LOAD_FAILED, lambda error, **_: print(error))
        registry.fire(EventType.LOAD_FAILED, mode=RenderMode.LIST, filename=None, error=exc)

    A callback that raises is logged and skipped; the remaining callbacks and
    the render itself continue.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[Callable]] = defaultdict(list)

    def add(self, event: str | EventType, callback: Callable) -> None:
        key = event.value if isinstance(event, EventType) else str(event)
        self._hooks[key].append(callback)

    def fire(self, event: str | EventType, **kwargs) -> None:
        key = event.value if isinstance(event, EventType) else str(event)
        for cb in self._hooks.get(key, []):
            try:
                cb(**kwargs)
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "Hook callback %r raised for event %r: %s",
                    cb, key, exc,
                )

    def clear(self, event: Optional[str | EventType] = None) -> None:
        """Remove the callbacks of one event, or of all events when event is None."""
        if event is None:
            self._hooks.clear()
        else:
            key = event.value if isinstance(event, EventType) else str(event)
            self._hooks.pop(key, None)

    def registered_events(self) -> list[str]:
        return [k for k, v in self._hooks.items() if v]

    def __len__(self) -> int:
        return sum(len(v) for v in self._hooks.values())
