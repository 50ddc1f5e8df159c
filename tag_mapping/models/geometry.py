# =============================================================================
# Geometry Kind Module
# =============================================================================
# Closed set of table geometry kinds accepted in the mapping document.
# =============================================================================

from enum import Enum

__all__ = ["GeometryKind", "CONCRETE_KINDS", "validate_geometry_kind"]


class GeometryKind(str, Enum):
    """
    Geometry kind of a destination table.

    GEOMETRY is the wildcard kind: tables of that kind take part in index and
    filter construction for every concrete kind.
    """
    POINT = "point"
    LINESTRING = "linestring"
    POLYGON = "polygon"
    GEOMETRY = "geometry"
    RELATION = "relation"
    RELATION_MEMBER = "relation_member"

    def includes(self, kind: "GeometryKind") -> bool:
        """Return True if a table of this kind receives elements of `kind`."""
        return self is GeometryKind.GEOMETRY or self == kind


CONCRETE_KINDS = (
    GeometryKind.POINT,
    GeometryKind.LINESTRING,
    GeometryKind.POLYGON,
    GeometryKind.RELATION,
    GeometryKind.RELATION_MEMBER,
)
"""Kinds the index builder runs for when compiling a whole mapping."""


def validate_geometry_kind(value) -> GeometryKind:
    """
    Validate a table `type` literal.

    Raises:
        ValueError: If the value is missing, empty or not a known kind
    """
    if isinstance(value, GeometryKind):
        return value
    if value is None or value == "":
        raise ValueError("missing table type")
    if not isinstance(value, str):
        raise ValueError(f"table type must be a string, got {type(value).__name__}")
    try:
        return GeometryKind(value)
    except ValueError:
        known = ", ".join(kind.value for kind in GeometryKind)
        raise ValueError(f"unknown table type '{value}' (expected one of: {known})") from None
