# =============================================================================
# Compiled Mapping Module
# =============================================================================
# Bundles every artifact compiled from a mapping and matches element tags
# against them the way the import pipeline does.
# =============================================================================

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping as ReadOnlyMapping, NamedTuple

from .filters import ElementFilter, compile_filters
from .models import ANY_VALUE, CONCRETE_KINDS, GeometryKind, Key, Mapping, Value
from .tag_tables import DestTable, OrderedDestTable, TagTables, build_tag_tables
from .views import aggregate_extra_tags

__all__ = ["CompiledMapping", "TableMatch", "compile_mapping"]

logger = logging.getLogger(__name__)


class TableMatch(NamedTuple):
    """An element routed to a destination table by one of its tags."""

    dest: DestTable
    key: Key
    value: Value


@dataclass(frozen=True)
class CompiledMapping:
    """
    Read-only artifacts compiled from a mapping.

    Attributes:
        mapping: Normalized mapping the artifacts were compiled from
        tag_tables: Classification index per concrete geometry kind
        filters: Element filters per table name
        extra_tags: Tag keys to retain per concrete geometry kind
    """

    mapping: Mapping
    tag_tables: ReadOnlyMapping[GeometryKind, TagTables]
    filters: ReadOnlyMapping[str, tuple[ElementFilter, ...]]
    extra_tags: ReadOnlyMapping[GeometryKind, frozenset[Key]]

    def _candidates(
        self, kind: GeometryKind, tags: ReadOnlyMapping[str, str]
    ) -> list[tuple[OrderedDestTable, Key, Value]]:
        index = self.tag_tables.get(kind, {})
        best: dict[DestTable, tuple[OrderedDestTable, Key, Value]] = {}
        for key, value in tags.items():
            by_value = index.get(key)
            if by_value is None:
                continue
            for lookup in (value, ANY_VALUE):
                for dest in by_value.get(lookup, ()):
                    current = best.get(dest.dest)
                    if current is None or dest.order < current[0].order:
                        best[dest.dest] = (dest, key, value)
        return sorted(best.values(), key=lambda candidate: candidate[0].order)

    def match(
        self, kind: GeometryKind, tags: ReadOnlyMapping[str, str], closed: bool = False
    ) -> list[TableMatch]:
        """
        Route an element to its destination tables.

        Each tag is looked up by exact value and by `__any__`. When several
        tags route to the same destination, the entry declared first wins and
        its key is the classification key passed to the table's filters.
        Destinations whose filters all keep the element are returned in
        declaration order.

        Args:
            kind: Geometry kind of the element
            tags: Tags of the element
            closed: Whether the element is a closed way

        Returns:
            List of TableMatch
        """
        matches = []
        for dest, key, value in self._candidates(kind, tags):
            filters = self.filters.get(dest.name, ())
            if all(element_filter(tags, key, closed) for element_filter in filters):
                matches.append(TableMatch(dest.dest, key, value))
        return matches


def compile_mapping(mapping: Mapping) -> CompiledMapping:
    """
    Compile the index, filters and retained tags for every concrete kind.

    Args:
        mapping: Normalized mapping (see `tag_mapping.loader`)

    Returns:
        CompiledMapping

    Raises:
        MappingFormatError: If a regular expression is invalid
    """
    tag_tables = {kind: build_tag_tables(mapping, kind) for kind in CONCRETE_KINDS}
    filters = compile_filters(mapping)
    extra_tags = {
        kind: frozenset(aggregate_extra_tags(mapping, kind)) for kind in CONCRETE_KINDS
    }
    logger.info(
        f"Compiled mapping with {len(mapping.tables)} tables "
        f"({', '.join(f'{kind.value}: {len(tag_tables[kind])} keys' for kind in CONCRETE_KINDS)})"
    )
    return CompiledMapping(
        mapping=mapping,
        tag_tables=MappingProxyType(tag_tables),
        filters=MappingProxyType(filters),
        extra_tags=MappingProxyType(extra_tags),
    )
