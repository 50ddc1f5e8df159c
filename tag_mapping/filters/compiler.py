# =============================================================================
# Filter Compiler
# =============================================================================
# Compiles the area hints and per-table `filters` blocks of a mapping into
# ordered lists of element filters.
# =============================================================================

import logging
from typing import Sequence

from ..models import (
    ANY_VALUE,
    NIL_VALUE,
    GeometryKind,
    Key,
    Mapping,
    OrderedValue,
    Table,
)
from .area import AreaTagsFilter, LinearTagsFilter
from .base import ElementFilter, ValueFilter
from .values import AnyValueFilter, RegexpFilter, SingleValueFilter, ValueSetFilter

__all__ = ["compile_filters", "compile_table_filters", "make_value_filter"]

logger = logging.getLogger(__name__)

# Order given to values converted from the deprecated exclude_tags filter
EXCLUDE_TAGS_ORDER = 1


def make_value_filter(
    table_name: str,
    tag_key: Key,
    values: Sequence[OrderedValue],
    keep_on_match: bool,
) -> ValueFilter:
    """
    Build the filter for one key of a require/reject block.

    - `__any__` matches any value of the key; other values next to it are
      ignored with a warning.
    - `__nil__` is not supported; it is matched as a plain value with a warning.
    - A single value compiles to an equality test, several values to a set
      membership test.

    Args:
        table_name: Table the filter belongs to (for diagnostics)
        tag_key: Tag key the filter tests
        values: Configured values of the key
        keep_on_match: True for require filters, False for reject filters

    Returns:
        ValueFilter for the key
    """
    plain_values = [item.value for item in values]

    if NIL_VALUE in plain_values:
        logger.warning(
            f"Filter value '{NIL_VALUE}' is not supported and is matched as a plain value "
            f"(table: {table_name}, key: {tag_key})"
        )

    if ANY_VALUE in plain_values:
        if len(plain_values) > 1:
            logger.warning(
                f"Filter values next to '{ANY_VALUE}' are ignored "
                f"(table: {table_name}, key: {tag_key})"
            )
        return AnyValueFilter(tag_key, keep_on_match)

    if len(plain_values) == 1:
        return SingleValueFilter(tag_key, plain_values[0], keep_on_match)

    return ValueSetFilter(tag_key, plain_values, keep_on_match)


def compile_table_filters(
    table_name: str,
    table: Table,
    area_tags: frozenset[Key] | None = None,
    linear_tags: frozenset[Key] | None = None,
) -> tuple[ElementFilter, ...]:
    """
    Compile the filters of one table, in evaluation order.

    Order: area/linear filter, deprecated exclude_tags, require, reject,
    require_regexp, reject_regexp.

    Raises:
        MappingFormatError: If a regular expression is invalid
    """
    filters: list[ElementFilter] = []

    match table.type:
        case GeometryKind.LINESTRING if area_tags is not None:
            filters.append(AreaTagsFilter(area_tags))
        case GeometryKind.POLYGON if linear_tags is not None:
            filters.append(LinearTagsFilter(linear_tags))
        case _:
            pass

    table_filters = table.filters
    if table_filters is None:
        return tuple(filters)

    if table_filters.exclude_tags is not None:
        logger.warning(
            f"Table '{table_name}': the exclude_tags filter is deprecated and will be "
            f"removed, use the reject filter instead"
        )
        for key, value in table_filters.exclude_tags:
            filters.append(
                make_value_filter(
                    table_name, key, [OrderedValue(value, EXCLUDE_TAGS_ORDER)], keep_on_match=False
                )
            )

    for key, values in table_filters.require.items():
        filters.append(make_value_filter(table_name, key, values, keep_on_match=True))

    for key, values in table_filters.reject.items():
        filters.append(make_value_filter(table_name, key, values, keep_on_match=False))

    for key, pattern in table_filters.require_regexp.items():
        filters.append(RegexpFilter(key, pattern, keep_on_match=True))

    for key, pattern in table_filters.reject_regexp.items():
        filters.append(RegexpFilter(key, pattern, keep_on_match=False))

    return tuple(filters)


def compile_filters(mapping: Mapping) -> dict[str, tuple[ElementFilter, ...]]:
    """
    Compile the element filters of every table.

    Every table of the mapping has an entry; tables without filters map to
    an empty tuple.

    Args:
        mapping: Normalized mapping

    Returns:
        Table name -> filters, to be evaluated left to right

    Raises:
        MappingFormatError: If a regular expression is invalid
    """
    area_tags = mapping.areas.area_tags
    linear_tags = mapping.areas.linear_tags
    if area_tags is not None:
        area_tags = frozenset(area_tags)
    if linear_tags is not None:
        linear_tags = frozenset(linear_tags)

    result = {
        name: compile_table_filters(name, table, area_tags, linear_tags)
        for name, table in mapping.tables.items()
    }
    logger.debug(
        f"Compiled {sum(len(filters) for filters in result.values())} filters "
        f"for {len(result)} tables"
    )
    return result
