# =============================================================================
# Data Models Library
# =============================================================================
# Pydantic models for the mapping document and its ordered key/value blocks.
# =============================================================================

"""
Data models for the mapping compiler.

This library provides:
- KeyValues: Ordered key/value blocks with declaration order
- GeometryKind: Table geometry kinds
- Mapping document models: Table, Filters, Column, ...
- Configuration models
"""

# Ordered key/value blocks
from .key_values import (
    ANY_VALUE,
    NIL_VALUE,
    Key,
    KeyValues,
    KeyValuesField,
    OrderedValue,
    Value,
    parse_key_values,
)

# Geometry kinds
from .geometry import (
    CONCRETE_KINDS,
    GeometryKind,
    validate_geometry_kind,
)

# Mapping document models
from .mapping import (
    Areas,
    Column,
    Filters,
    GeneralizedTable,
    Mapping,
    SubMapping,
    Table,
    Tags,
    TypeMappings,
)

# Configuration models
from .config import (
    MappingSettings,
    get_settings,
)

__all__ = [
    # Ordered key/value blocks
    "ANY_VALUE",
    "NIL_VALUE",
    "Key",
    "KeyValues",
    "KeyValuesField",
    "OrderedValue",
    "Value",
    "parse_key_values",
    # Geometry kinds
    "CONCRETE_KINDS",
    "GeometryKind",
    "validate_geometry_kind",
    # Mapping document models
    "Areas",
    "Column",
    "Filters",
    "GeneralizedTable",
    "Mapping",
    "SubMapping",
    "Table",
    "Tags",
    "TypeMappings",
    # Configuration models
    "MappingSettings",
    "get_settings",
]
