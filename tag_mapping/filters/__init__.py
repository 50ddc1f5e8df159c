# =============================================================================
# Element Filters Library
# =============================================================================
# Predicates deciding whether an element routed to a table is kept.
# =============================================================================

"""
Element filters for the mapping compiler.

This library provides:
- ElementFilter: Base class for all element filters
- ValueFilter: Base class for filters on the value of one tag key
- Area/linear filters: AreaTagsFilter, LinearTagsFilter
- Value filters: AnyValueFilter, SingleValueFilter, ValueSetFilter, RegexpFilter
- compile_filters: Per-table filter compilation
"""

from .base import ElementFilter, ValueFilter
from .area import AreaTagsFilter, LinearTagsFilter
from .values import AnyValueFilter, SingleValueFilter, ValueSetFilter, RegexpFilter
from .compiler import compile_filters, compile_table_filters, make_value_filter

__all__ = [
    "ElementFilter",
    "ValueFilter",
    "AreaTagsFilter",
    "LinearTagsFilter",
    "AnyValueFilter",
    "SingleValueFilter",
    "ValueSetFilter",
    "RegexpFilter",
    "compile_filters",
    "compile_table_filters",
    "make_value_filter",
]
