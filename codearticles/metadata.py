"""
Metadata Deriver
================
Pure functions that turn a filename into the display fields shown on the
index and article pages, plus the date formatter used for article dates.

    extension_of("my-cool_article.py")        -> "py"
    language_label("py")                      -> "Python"
    title_from_filename("my-cool_article.py") -> "My Cool Article"
    format_date(datetime(2023, 1, 15))        -> "Jan 15, 2023"

A filename without a dot is its own extension: extension_of("README") returns
"readme", and language_label("readme") falls back to "README".
"""
from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Union

from .models import SUPPORTED_LANGUAGES

Timestamp = Union[datetime, date, int, float, str]

# Fixed English abbreviations so output does not depend on the process locale
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Final ".ext" only: no further dot and no path separator after it
_TRAILING_EXT = re.compile(r"\.[^/.]+$")
_SEPARATORS = re.compile(r"[-_]")
_WORD_START = re.compile(r"\b\w")


def extension_of(filename: str) -> str:
    """Text after the last '.', lowercased (the whole name when there is no dot)."""
    return filename.rsplit(".", 1)[-1].lower()


def language_label(extension: str) -> str:
    return SUPPORTED_LANGUAGES.get(extension.lower(), extension.upper())


def title_from_filename(filename: str) -> str:
    """
    Human title for a filename.

    Strips the final extension, turns '-' and '_' into spaces and uppercases
    the first character of every word. Earlier dots are kept, so
    "my.config.v2.js" becomes "My.Config.V2".
    """
    stem = _TRAILING_EXT.sub("", filename)
    spaced = _SEPARATORS.sub(" ", stem)
    return _WORD_START.sub(lambda m: m.group(0).upper(), spaced)


def format_date(timestamp: Timestamp) -> str:
    """
    Render a timestamp as "Mon D, YYYY".

    Accepts datetime/date objects, ISO-8601 strings, and epoch seconds.
    Epoch values are interpreted in UTC; everything else is rendered as given.
    """
    if isinstance(timestamp, bool):
        raise TypeError("format_date() does not accept bool")
    if isinstance(timestamp, (int, float)):
        value: date = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    elif isinstance(timestamp, str):
        value = datetime.fromisoformat(timestamp.strip().replace("Z", "+00:00"))
    elif isinstance(timestamp, (datetime, date)):
        value = timestamp
    else:
        raise TypeError(f"Unsupported timestamp type: {type(timestamp).__name__}")
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"
