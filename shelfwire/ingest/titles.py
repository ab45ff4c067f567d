"""Canonical title keys.

Royalty and page-read reports embed the subtitle after a colon
("Title: Subtitle") while the catalog keeps the bare main title. Every record
gets a ``title_key`` computed here when it is written, and joins compare keys
for equality.
"""

from __future__ import annotations

SEPARATOR = ":"


def main_title(long_title: str | None) -> str:
    if not long_title:
        return ""
    return long_title.split(SEPARATOR, 1)[0].strip()


def subtitle(long_title: str | None) -> str:
    if not long_title or SEPARATOR not in long_title:
        return ""
    return long_title.split(SEPARATOR, 1)[1].strip()


def title_key(title: str | None) -> str:
    """Join key for a catalog title or a statement title."""
    return main_title(title).casefold()
