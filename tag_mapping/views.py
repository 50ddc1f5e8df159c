"""Tag and column views of a mapping used by the import pipeline."""

from .models import Column, GeometryKind, Key, Mapping, Table

__all__ = ["extra_tags", "aggregate_extra_tags", "fields_by_table"]

# Always retained so closed ways can be resolved as lines or areas
AREA_KEY = "area"


def extra_tags(table: Table) -> set[Key]:
    """Tag keys read by the columns of a table (`key` and `keys`)."""
    tags: set[Key] = set()
    for column in table.columns or ():
        if column.key:
            tags.add(column.key)
        tags.update(column.keys)
    return tags


def aggregate_extra_tags(mapping: Mapping, kind: GeometryKind) -> set[Key]:
    """
    Tag keys the pipeline must retain for elements of `kind`.

    Union of the column keys of every table receiving `kind`, the keys of
    their deprecated exclude_tags filters, the globally included keys, and
    the `area` key.
    """
    tags: set[Key] = set()
    for _, table in mapping.tables_for(kind):
        tags.update(extra_tags(table))
        if table.filters is not None and table.filters.exclude_tags is not None:
            tags.update(key for key, _ in table.filters.exclude_tags)
    tags.update(mapping.tags.include)
    tags.add(AREA_KEY)
    return tags


def fields_by_table(mapping: Mapping, kind: GeometryKind) -> dict[str, tuple[Column, ...]]:
    """Column definitions of every table receiving `kind`, in declaration order."""
    return {name: tuple(table.columns or ()) for name, table in mapping.tables_for(kind)}
