"""Tag readers for the generic ``[name, value, (unit)]`` tag lists on events.

Entries that are not sequences, are strings, or are too short are treated
as absent. Nothing in this module raises on malformed input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Sequence


@dataclass(frozen=True)
class TagValue:
    """Value of a tag plus its optional unit suffix (third element)."""

    value: Any
    unit: str | None = None


def _iter_tags(tags: Any) -> Iterator[Sequence[Any]]:
    """Yield only well-formed tag entries with at least a name and a value."""
    if not isinstance(tags, (list, tuple)):
        return
    for tag in tags:
        if not isinstance(tag, (list, tuple)) or len(tag) < 2:
            continue
        if not isinstance(tag[0], str):
            continue
        yield tag


def _find_tag(tags: Any, names: str | Iterable[str]) -> Sequence[Any] | None:
    wanted = {names} if isinstance(names, str) else set(names)
    for tag in _iter_tags(tags):
        if tag[0] in wanted:
            return tag
    return None


def get_tag_value(tags: Any, name: str | Iterable[str], default: Any = None) -> Any:
    """Return the value of the first tag named *name*, or *default*.

    *name* may be a single tag name or several synonyms; the first entry
    in tag order matching any of them wins.
    """
    tag = _find_tag(tags, name)
    return tag[1] if tag is not None else default


def get_tag_value_with_unit(tags: Any, name: str | Iterable[str]) -> TagValue | None:
    """Return ``TagValue(value, unit)`` for the first tag named *name*.

    Three-element tags carry a unit; two-element tags give ``unit=None``.
    """
    tag = _find_tag(tags, name)
    if tag is None:
        return None
    unit = tag[2] if len(tag) > 2 and isinstance(tag[2], str) and tag[2].strip() else None
    return TagValue(value=tag[1], unit=unit)


def get_tag_values(tags: Any, name: str) -> list[Any]:
    """Return the values of every tag named *name*, in tag order."""
    return [tag[1] for tag in _iter_tags(tags) if tag[0] == name]


def has_tag_value(tags: Any, names: str | Iterable[str], value: str) -> bool:
    """True if any tag named one of *names* has exactly *value*."""
    wanted = {names} if isinstance(names, str) else set(names)
    return any(tag[0] in wanted and tag[1] == value for tag in _iter_tags(tags))
