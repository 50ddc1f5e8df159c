# =============================================================================
# Ordered Key/Values Module
# =============================================================================
# Decodes `key: [values]` blocks (mapping, require, reject, ...) while
# recording the declaration order of every value.
# =============================================================================

from typing import Annotated, ItemsView, Iterator, KeysView, NamedTuple

from pydantic import BeforeValidator

from ..errors import MappingFormatError

__all__ = [
    "Key",
    "Value",
    "ANY_VALUE",
    "NIL_VALUE",
    "OrderedValue",
    "KeyValues",
    "KeyValuesField",
    "parse_key_values",
]

Key = str
"""Tag key, e.g. ``highway``."""

Value = str
"""Tag value, e.g. ``primary``."""

ANY_VALUE = "__any__"
"""Matches every value of a key."""

NIL_VALUE = "__nil__"
"""Not supported in filters; treated as a literal value."""


class OrderedValue(NamedTuple):
    """A tag value and its position in the document's declaration order."""

    value: Value
    order: int


class KeyValues:
    """
    Immutable ordered multimap of ``Key -> (OrderedValue, ...)``.

    Keys iterate in declaration order; the values of a key keep the order in
    which the document declared them.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: dict[Key, tuple[OrderedValue, ...]] | None = None):
        self._entries: dict[Key, tuple[OrderedValue, ...]] = {
            key: tuple(values) for key, values in (entries or {}).items()
        }

    def __getitem__(self, key: Key) -> tuple[OrderedValue, ...]:
        return self._entries[key]

    def __iter__(self) -> Iterator[Key]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyValues):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(tuple(self._entries.items()))

    def __repr__(self) -> str:
        return f"KeyValues({self._entries!r})"

    def get(self, key: Key, default: tuple[OrderedValue, ...] = ()) -> tuple[OrderedValue, ...]:
        return self._entries.get(key, default)

    def items(self) -> ItemsView[Key, tuple[OrderedValue, ...]]:
        return self._entries.items()

    def keys(self) -> KeysView[Key]:
        return self._entries.keys()

    def values_for(self, key: Key) -> tuple[Value, ...]:
        """Plain values declared for `key`, without their order."""
        return tuple(item.value for item in self._entries.get(key, ()))


def _iter_pairs(raw) -> Iterator[tuple[object, object]]:
    if isinstance(raw, dict):
        yield from raw.items()
        return
    if isinstance(raw, (list, tuple)):
        for item in raw:
            if isinstance(item, dict) and len(item) == 1:
                yield next(iter(item.items()))
            elif isinstance(item, (list, tuple)) and len(item) == 2:
                yield item[0], item[1]
            else:
                raise MappingFormatError(
                    f"mapping entry must be a (key, values) pair, got {item!r}"
                )
        return
    raise MappingFormatError(
        f"mapping block must map keys to value lists, got {type(raw).__name__}"
    )


def parse_key_values(raw, start: int = 0) -> tuple[KeyValues, int]:
    """
    Decode a ``key: [values]`` block, numbering values in declaration order.

    The counter starts at `start` and is shared by every key of the block.
    Each value gets the current counter, which is then incremented. The next
    unused counter is returned so callers decoding several blocks can thread
    it through to get one total order over a whole document.

    Args:
        raw: Ordered mapping of key to value list, or a sequence of
            ``(key, values)`` pairs. ``None`` decodes to an empty block.
        start: First order number to assign

    Returns:
        Tuple of (decoded block, next unused order number)

    Raises:
        MappingFormatError: If a key or value is not a string, or the values
            of a key are not a list

    Example:
        >>> kv, next_order = parse_key_values({"a": ["a1", "a2"], "b": ["b1"]})
        >>> kv["b"]
        (OrderedValue(value='b1', order=2),)
        >>> next_order
        3
    """
    if raw is None:
        return KeyValues(), start
    if isinstance(raw, KeyValues):
        return raw, start

    entries: dict[Key, list[OrderedValue]] = {}
    order = start
    for key, values in _iter_pairs(raw):
        if not isinstance(key, str):
            raise MappingFormatError(f"mapping key '{key}' not a string")
        if not isinstance(values, list):
            raise MappingFormatError(
                f"values of mapping key '{key}' must be a list, got {type(values).__name__}"
            )
        for value in values:
            if not isinstance(value, str):
                raise MappingFormatError(
                    f"mapping value '{value}' of key '{key}' not a string"
                )
            entries.setdefault(key, []).append(OrderedValue(value, order))
            order += 1
    return KeyValues(entries), order


def _coerce_key_values(raw) -> KeyValues:
    return parse_key_values(raw)[0]


KeyValuesField = Annotated[KeyValues, BeforeValidator(_coerce_key_values)]
"""
Pydantic field type for ordered key/value blocks.

Blocks decoded on their own are numbered from 0. Documents decoded through
`tag_mapping.loader` arrive here already numbered across the whole document.
"""
