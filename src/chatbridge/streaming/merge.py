"""
Merge engine primitives.

Providers fold each decoded stream event into a running accumulator with
these helpers. None of them mutate their arguments: every call returns new
containers, and values taken from an event are deep-copied so the consumer
can keep (or modify) the events it was handed.
"""

import copy
from typing import Any, Callable, Dict, List, Mapping, Optional

Combinator = Callable[[Any, Any], Any]


def concat(prev: Optional[str], nxt: Optional[str]) -> Optional[str]:
    """Concatenate incremental text; a missing side counts as empty."""
    if prev is None:
        return nxt
    if nxt is None:
        return prev
    return prev + nxt


def replace(prev: Any, nxt: Any) -> Any:
    return copy.deepcopy(nxt)


def merge_with(
    base: Optional[Mapping[str, Any]],
    incoming: Mapping[str, Any],
    resolvers: Optional[Mapping[str, Combinator]] = None,
) -> Dict[str, Any]:
    """
    Merge ``incoming`` into a copy of ``base``.

    Keys with a resolver are combined as ``resolver(base_value, incoming_value)``
    (``base_value`` is None when the key is new); every other key is replaced.
    """
    resolvers = resolvers or {}
    merged = dict(base or {})
    for key, value in incoming.items():
        resolver = resolvers.get(key, replace)
        merged[key] = resolver(merged.get(key), value)
    return merged


def merge_indexed(
    stored: Optional[List[Dict[str, Any]]],
    incoming: Optional[List[Dict[str, Any]]],
    combine: Combinator,
    key: str = "index",
    default_index: int = 0,
) -> List[Dict[str, Any]]:
    """
    Merge a list of indexed elements into the stored list.

    Elements are matched by their logical index, not by position. An element
    seen for the first time starts from an empty dict inserted at the front;
    the list is sorted by logical index once every incoming element has been
    merged, so physical order only becomes meaningful at that point.
    """
    items = list(stored or [])
    for element in incoming or []:
        index = element.get(key, default_index)
        position = next(
            (pos for pos, item in enumerate(items) if item.get(key, default_index) == index),
            None,
        )
        if position is None:
            items.insert(0, {})
            position = 0
        items[position] = combine(items[position], element)
    return sorted(items, key=lambda item: item.get(key, default_index))


def _discriminant(part: Mapping[str, Any]) -> Optional[str]:
    return next(iter(part), None)


def merge_keyed_parts(parts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Collapse parts that share a discriminant key.

    Each part is identified by its first key (``text``, ``function_call``, ...).
    When a string-valued part meets an earlier part with the same key the two
    values are concatenated and its other keys replace the stored ones; any
    other part is appended.
    """
    merged: List[Dict[str, Any]] = []
    for part in parts:
        name = _discriminant(part)
        value = part.get(name) if name is not None else None
        position = None
        if isinstance(value, str):
            position = next(
                (pos for pos, existing in enumerate(merged)
                 if _discriminant(existing) == name and isinstance(existing[name], str)),
                None,
            )
        if position is None:
            merged.append(copy.deepcopy(part))
        else:
            existing = dict(merged[position])
            for key, incoming in part.items():
                if key != name:
                    existing[key] = replace(existing.get(key), incoming)
            existing[name] = existing[name] + value
            merged[position] = existing
    return merged
