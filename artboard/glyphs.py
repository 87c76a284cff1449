"""
Emoji detection for dropped text.

Only emoji become document elements. A lone digit, ``#`` or ``*`` carries
the Unicode Emoji property but is only shown as emoji inside a keycap
sequence, so a single code point below U+238D does not count.
"""

from __future__ import annotations

from typing import Optional

import emoji

_FIRST_EMOJI_ONLY_CODEPOINT = 0x238D


def is_emoji(text: str) -> bool:
    """True when ``text`` is exactly one emoji."""
    if not text or not emoji.is_emoji(text):
        return False
    return ord(text[0]) >= _FIRST_EMOJI_ONLY_CODEPOINT or len(text) > 1


def leading_emoji(text: Optional[str]) -> Optional[str]:
    """The emoji ``text`` starts with, or None."""
    if not text:
        return None
    found = emoji.emoji_list(text)
    if not found or found[0]["match_start"] != 0:
        return None
    first = found[0]["emoji"]
    return first if is_emoji(first) else None
