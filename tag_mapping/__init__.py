# =============================================================================
# Tag Mapping Library
# =============================================================================
# Compiles a declarative tag-classification mapping into the routing index
# and per-table element filters used by the geospatial import pipeline.
# =============================================================================

"""
Tag mapping compiler for the import pipeline.

Sub-packages:
- models: Pydantic models for the mapping document
- filters: Element filters and the filter compiler

Modules:
- loader: Decode a mapping document (YAML text, file or dict)
- normalization: Back-fill derived names after decode
- tag_tables: Build the classification index per geometry kind
- views: Tag and field views used for tag retention and schema generation
- compiled: Compile every artifact at once and match features against them
"""

__version__ = "0.1.0"

from .errors import MappingFormatError
from .models import GeometryKind, KeyValues, Mapping, Table
from .loader import decode_mapping, load_mapping, loads_mapping
from .normalization import normalize_mapping
from .tag_tables import DestTable, OrderedDestTable, TagTables, build_tag_tables
from .filters import ElementFilter, compile_filters
from .views import aggregate_extra_tags, extra_tags, fields_by_table
from .compiled import CompiledMapping, TableMatch, compile_mapping

__all__ = [
    "MappingFormatError",
    "GeometryKind",
    "KeyValues",
    "Mapping",
    "Table",
    "decode_mapping",
    "load_mapping",
    "loads_mapping",
    "normalize_mapping",
    "DestTable",
    "OrderedDestTable",
    "TagTables",
    "build_tag_tables",
    "ElementFilter",
    "compile_filters",
    "aggregate_extra_tags",
    "extra_tags",
    "fields_by_table",
    "CompiledMapping",
    "TableMatch",
    "compile_mapping",
]
