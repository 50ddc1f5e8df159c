"""Post-decode normalization of mapping documents."""

import logging

from .models import Mapping

__all__ = ["normalize_mapping"]

logger = logging.getLogger(__name__)


def normalize_mapping(mapping: Mapping) -> Mapping:
    """
    Fill in the values the document leaves implicit.

    - Every table and generalized table gets its `name` from its document key.
    - Tables written with the deprecated `fields` list get it as `columns`.

    Returns a new Mapping; the input is not modified. Normalizing an already
    normalized mapping returns an equal mapping.
    """
    tables = {}
    for name, table in mapping.tables.items():
        update = {"name": name}
        if table.old_fields is not None:
            logger.debug(f"Table '{name}' uses deprecated 'fields', read as 'columns'")
            update["columns"] = table.old_fields
        tables[name] = table.model_copy(update=update)

    generalized_tables = {
        name: table.model_copy(update={"name": name})
        for name, table in mapping.generalized_tables.items()
    }

    return mapping.model_copy(
        update={"tables": tables, "generalized_tables": generalized_tables}
    )
