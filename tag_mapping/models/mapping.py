# =============================================================================
# Mapping Document Models Module
# =============================================================================
# Pydantic models for the mapping document:
# - Column: Column definition of a destination table
# - Table: Destination table with its routing blocks and filters
# - Filters: Require/reject filters of a table
# - GeneralizedTable: Generalized table definition (passthrough)
# - Tags / Areas: Global tag retention and area/linear hints
# - Mapping: Document root
# =============================================================================

from typing import Annotated, Any, Iterator

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from .geometry import GeometryKind, validate_geometry_kind
from .key_values import Key, KeyValues, KeyValuesField, Value

__all__ = [
    "Column",
    "SubMapping",
    "TypeMappings",
    "Filters",
    "Table",
    "GeneralizedTable",
    "Tags",
    "Areas",
    "Mapping",
]


def _none_as_empty_dict(value: Any) -> Any:
    return {} if value is None else value


def _none_as_empty_list(value: Any) -> Any:
    return [] if value is None else value


# YAML decodes an empty block (`tables:`) to None
OptionalDict = BeforeValidator(_none_as_empty_dict)
OptionalList = BeforeValidator(_none_as_empty_list)

DOCUMENT_MODEL_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    arbitrary_types_allowed=True,
    populate_by_name=True,
)


# =============================================================================
# Column Model
# =============================================================================

class Column(BaseModel):
    """
    Column definition of a destination table.

    Only `key` and `keys` are interpreted here (see `tag_mapping.views`);
    the remaining fields are handed to schema generation unchanged.

    Attributes:
        name: Column name
        type: Column type name (e.g. "string", "id", "geometry")
        key: Tag key the column reads its value from
        keys: Tag keys for columns built from several tags
        args: Type-specific arguments
        from_member: Read the value from the relation member instead
    """

    name: str = Field(..., description="Column name")
    type: str | None = Field(None, description="Column type name")
    key: Key | None = Field(None, description="Tag key read by this column")
    keys: Annotated[list[Key], OptionalList] = Field(
        default_factory=list, description="Tag keys read by this column"
    )
    args: dict[str, Any] | None = Field(None, description="Type-specific arguments")
    from_member: bool = Field(False, description="Read value from relation member")

    model_config = DOCUMENT_MODEL_CONFIG


# =============================================================================
# Routing Blocks
# =============================================================================

class SubMapping(BaseModel):
    """Named secondary routing block of a table."""

    mapping: KeyValuesField = Field(default_factory=KeyValues)

    model_config = DOCUMENT_MODEL_CONFIG


class TypeMappings(BaseModel):
    """Routing blocks that only apply to one concrete geometry kind."""

    points: KeyValuesField = Field(default_factory=KeyValues)
    linestrings: KeyValuesField = Field(default_factory=KeyValues)
    polygons: KeyValuesField = Field(default_factory=KeyValues)

    model_config = DOCUMENT_MODEL_CONFIG

    def for_kind(self, kind: GeometryKind) -> KeyValues:
        """Return the block for `kind` (empty for kinds without one)."""
        match kind:
            case GeometryKind.POINT:
                return self.points
            case GeometryKind.LINESTRING:
                return self.linestrings
            case GeometryKind.POLYGON:
                return self.polygons
            case GeometryKind.GEOMETRY | GeometryKind.RELATION | GeometryKind.RELATION_MEMBER:
                return KeyValues()


# =============================================================================
# Filters Model
# =============================================================================

class Filters(BaseModel):
    """
    Per-table filters applied after an element was routed to the table.

    Attributes:
        exclude_tags: Deprecated list of [key, value] pairs, compiled as reject
        require: Keep only elements carrying one of these key/values
        reject: Drop elements carrying one of these key/values
        require_regexp: Keep only elements whose value matches the pattern
        reject_regexp: Drop elements whose value matches the pattern
    """

    exclude_tags: list[tuple[Key, Value]] | None = Field(
        None, description="Deprecated, use reject"
    )
    require: KeyValuesField = Field(default_factory=KeyValues)
    reject: KeyValuesField = Field(default_factory=KeyValues)
    require_regexp: Annotated[dict[Key, str], OptionalDict] = Field(default_factory=dict)
    reject_regexp: Annotated[dict[Key, str], OptionalDict] = Field(default_factory=dict)

    model_config = DOCUMENT_MODEL_CONFIG


# =============================================================================
# Table Model
# =============================================================================

class Table(BaseModel):
    """
    Destination table definition.

    `name` is not authored in the document; `normalize_mapping` sets it from
    the table's key. `fields` is the deprecated spelling of `columns`.
    """

    name: str = Field("", description="Table name (set from the document key)")
    type: GeometryKind = Field(..., description="Geometry kind of the table")
    mapping: KeyValuesField = Field(default_factory=KeyValues)
    mappings: Annotated[dict[str, Annotated[SubMapping, OptionalDict]], OptionalDict] = Field(
        default_factory=dict
    )
    type_mappings: Annotated[TypeMappings, OptionalDict] = Field(
        default_factory=TypeMappings
    )
    columns: list[Column] | None = Field(None, description="Column definitions")
    old_fields: list[Column] | None = Field(
        None, alias="fields", description="Deprecated alias of columns"
    )
    filters: Filters | None = None

    model_config = DOCUMENT_MODEL_CONFIG

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v: Any) -> GeometryKind:
        return validate_geometry_kind(v)


# =============================================================================
# Generalized Table Model
# =============================================================================

class GeneralizedTable(BaseModel):
    """Generalized (simplified) copy of another table. Not interpreted here."""

    name: str = ""
    source: str = ""
    tolerance: float = 0.0
    sql_filter: str | None = None

    model_config = DOCUMENT_MODEL_CONFIG


# =============================================================================
# Global Blocks
# =============================================================================

class Tags(BaseModel):
    """Global tag retention policy."""

    load_all: bool = False
    include: Annotated[list[Key], OptionalList] = Field(default_factory=list)
    exclude: Annotated[list[Key], OptionalList] = Field(default_factory=list)

    model_config = DOCUMENT_MODEL_CONFIG


class Areas(BaseModel):
    """
    Hints to resolve closed ways that could be either lines or areas.

    `None` means the hint is not configured; an empty list is configured.
    """

    area_tags: list[Key] | None = None
    linear_tags: list[Key] | None = None

    model_config = DOCUMENT_MODEL_CONFIG


# =============================================================================
# Mapping Model (document root)
# =============================================================================

class Mapping(BaseModel):
    """
    Mapping document root.

    Decode through `tag_mapping.loader` to get document-wide declaration
    order and normalization; constructing the model directly numbers each
    key/value block on its own.
    """

    tables: Annotated[dict[str, Table], OptionalDict] = Field(default_factory=dict)
    generalized_tables: Annotated[dict[str, GeneralizedTable], OptionalDict] = Field(
        default_factory=dict
    )
    tags: Tags = Field(default_factory=Tags)
    areas: Areas = Field(default_factory=Areas)
    use_single_id_space: bool = False

    model_config = DOCUMENT_MODEL_CONFIG

    @field_validator("tags", "areas", mode="before")
    @classmethod
    def empty_block(cls, v: Any) -> Any:
        return {} if v is None else v

    def tables_for(self, kind: GeometryKind) -> Iterator[tuple[str, Table]]:
        """Yield (name, table) in declaration order for tables receiving `kind`."""
        for name, table in self.tables.items():
            if table.type.includes(kind):
                yield name, table
