# =============================================================================
# Tag Tables Module
# =============================================================================
# Builds the classification index that routes elements to destination tables
# by their tags: key -> value -> ordered destination tables.
# =============================================================================

import logging
from dataclasses import dataclass
from operator import attrgetter

from .models import GeometryKind, Key, KeyValues, Mapping, Value

__all__ = ["DestTable", "OrderedDestTable", "TagTables", "build_tag_tables"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DestTable:
    """Routing target: a table, optionally one of its named sub-mappings."""

    name: str
    sub_mapping: str | None = None


@dataclass(frozen=True)
class OrderedDestTable:
    """Routing target with the declaration order of the entry that produced it."""

    dest: DestTable
    order: int

    @property
    def name(self) -> str:
        return self.dest.name

    @property
    def sub_mapping(self) -> str | None:
        return self.dest.sub_mapping


TagTables = dict[Key, dict[Value, tuple[OrderedDestTable, ...]]]
"""Classification index: key -> value -> destinations in declaration order."""


def _add_from_key_values(
    index: dict[Key, dict[Value, list[OrderedDestTable]]],
    key_values: KeyValues,
    dest: DestTable,
) -> None:
    for key, values in key_values.items():
        by_value = index.setdefault(key, {})
        for item in values:
            by_value.setdefault(item.value, []).append(OrderedDestTable(dest, item.order))


def build_tag_tables(mapping: Mapping, kind: GeometryKind) -> TagTables:
    """
    Build the classification index for one geometry kind.

    Tables of `kind` and `geometry` tables contribute, in declaration order:
    their `mapping` block, each sub-mapping (tagged with its name), then the
    `type_mappings` block for `kind`. Entries are appended, never replaced, so
    a key/value declared by several tables routes to all of them. Each
    destination list is sorted by declaration order (stable for equal orders).

    Args:
        mapping: Normalized mapping
        kind: Geometry kind to build the index for

    Returns:
        Index of key -> value -> tuple of OrderedDestTable
    """
    index: dict[Key, dict[Value, list[OrderedDestTable]]] = {}
    tables = 0
    for name, table in mapping.tables_for(kind):
        tables += 1
        _add_from_key_values(index, table.mapping, DestTable(name))
        for sub_name, sub_mapping in table.mappings.items():
            _add_from_key_values(index, sub_mapping.mapping, DestTable(name, sub_name))
        _add_from_key_values(index, table.type_mappings.for_kind(kind), DestTable(name))

    logger.debug(f"Built {kind.value} index from {tables} tables with {len(index)} keys")

    return {
        key: {
            value: tuple(sorted(dests, key=attrgetter("order")))
            for value, dests in by_value.items()
        }
        for key, by_value in index.items()
    }
