"""
Collision-free naming for generated labels.

`uniqued("Sticker", {"Sticker"})` -> "Sticker 1"
`uniqued("Set 3", {"Set 3", "Set 4"})` -> "Set 5"
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence


def _split_numeric_suffix(name: str) -> tuple[str, str]:
    end = len(name)
    start = end
    while start > 0 and name[start - 1].isdecimal():
        start -= 1
    return name[:start], name[start:]


def incremented(name: str) -> str:
    """Increment a trailing number, or append " 1" when there is none."""
    prefix, digits = _split_numeric_suffix(name)
    if digits:
        return f"{prefix}{int(digits) + 1}"
    return f"{name} 1"


def uniqued(name: str, others: Iterable[str]) -> str:
    """Return ``name`` if it is not in ``others``, else the first free increment.

    ``others`` is only used for membership tests, so the result does not
    depend on its iteration order.
    """
    taken = others if isinstance(others, (set, frozenset)) else set(others)
    unique = name
    while unique in taken:
        unique = incremented(unique)
    return unique


def index_matching(items: Sequence[Any], element: Any) -> Optional[int]:
    """Index of the first item sharing ``element.id``, or None."""
    target = getattr(element, "id", None)
    for idx, item in enumerate(items):
        if getattr(item, "id", None) == target:
            return idx
    return None
