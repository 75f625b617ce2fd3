"""
Query-string encoding for Helix option records.

Option records are pydantic models whose fields map declaratively onto
query keys: the key is the field's alias (or its name), fields declared
with ``Field(exclude=True)`` never appear, and fields holding an empty
value are omitted. Composition is flattened one level deep.
"""

import re
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple
from urllib.parse import quote

from pydantic import BaseModel

_NUMBER = re.compile(r"[+-]?[0-9]+")

Pair = Tuple[str, str]


def is_number(value: str) -> bool:
    """True if the string is entirely a base-10 integer."""
    return bool(_NUMBER.fullmatch(value))


def choose_key(when: bool, if_true: str, if_false: str) -> str:
    return if_true if when else if_false


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set, frozenset)):
        return len(value) == 0
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float)):
        return value == 0
    return False


def _render(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _append(pairs: List[Pair], key: str, value: Any) -> None:
    if isinstance(value, (list, tuple)):
        for item in value:
            if item is not None:
                pairs.append((key, _render(item)))
    else:
        pairs.append((key, _render(value)))


def _field_pairs(pairs: List[Pair], key: str, value: Any, depth: int) -> None:
    if isinstance(value, (BaseModel, dict)):
        # Composed records are inlined at this position, one level only.
        if depth == 0:
            pairs.extend(_record_pairs(value, depth + 1))
        return
    if _is_empty(value):
        return
    _append(pairs, key, value)


def _record_pairs(record: Any, depth: int) -> List[Pair]:
    pairs: List[Pair] = []
    if isinstance(record, dict):
        for key, value in record.items():
            _field_pairs(pairs, str(key), value, depth)
        return pairs

    for name, info in type(record).model_fields.items():
        if info.exclude:
            continue
        key = info.serialization_alias or info.alias or name
        _field_pairs(pairs, key, getattr(record, name), depth)
    return pairs


def encode_pairs(options: Any) -> List[Pair]:
    """
    Extract ordered ``(key, value)`` pairs from an option record.

    Accepts a pydantic model, a plain dict, or None. Anything else yields
    no pairs.
    """
    if isinstance(options, (BaseModel, dict)):
        return _record_pairs(options, 0)
    return []


def join_pairs(pairs: Iterable[Pair]) -> str:
    return "&".join(f"{key}={quote(value, safe='')}" for key, value in pairs)


def encode_options(options: Any) -> str:
    """
    Encode an option record as a query string without the leading ``?``.

    Example:
        >>> encode_options(GetVideosOptions(id=["123", "456"], game_id="twitch"))
        'id=123&id=456&game_id=twitch'
    """
    return join_pairs(encode_pairs(options))


def mixed_param_pairs(values: Any, string_key: str, numeric_key: str) -> List[Pair]:
    """
    Classify identifiers that may be numeric IDs or textual names.

    Integers and all-digit strings go to ``numeric_key``; any other string
    goes to ``string_key``. Lists are classified element by element; empty
    strings are dropped.
    """
    pairs: List[Pair] = []

    def add(value: Any) -> None:
        if isinstance(value, bool):
            return
        if isinstance(value, int):
            pairs.append((numeric_key, str(value)))
        elif isinstance(value, str) and value:
            pairs.append((choose_key(is_number(value), numeric_key, string_key), value))

    if isinstance(values, (list, tuple)):
        for value in values:
            add(value)
    else:
        add(values)
    return pairs


def encode_mixed_param(values: Any, string_key: str, numeric_key: str) -> str:
    return join_pairs(mixed_param_pairs(values, string_key, numeric_key))


def build_query(*parts: Optional[str]) -> str:
    """Join encoded query fragments into ``?a=1&b=2``, or ``""`` if all are empty."""
    query = "&".join(part for part in parts if part)
    return f"?{query}" if query else ""
