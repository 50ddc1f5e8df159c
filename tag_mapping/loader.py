# =============================================================================
# Mapping Loader Module
# =============================================================================
# Decodes mapping documents (YAML file, YAML text or decoded dict) into a
# normalized Mapping with one declaration order across the whole document.
# =============================================================================

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import MappingFormatError
from .models import Mapping, get_settings, parse_key_values
from .normalization import normalize_mapping

__all__ = [
    "assign_declaration_order",
    "decode_mapping",
    "loads_mapping",
    "load_mapping",
]

logger = logging.getLogger(__name__)

TYPE_MAPPING_BLOCKS = ("points", "linestrings", "polygons")
FILTER_BLOCKS = ("require", "reject")


def _number_sub_mappings(raw: Any, order: int) -> tuple[Any, int]:
    if not isinstance(raw, dict):
        return raw, order
    numbered = {}
    for sub_name, sub_mapping in raw.items():
        if isinstance(sub_mapping, dict):
            sub_mapping = dict(sub_mapping)
            if "mapping" in sub_mapping:
                sub_mapping["mapping"], order = parse_key_values(sub_mapping["mapping"], order)
        numbered[sub_name] = sub_mapping
    return numbered, order


def _number_blocks(raw: Any, block_names: tuple[str, ...], order: int) -> tuple[Any, int]:
    if not isinstance(raw, dict):
        return raw, order
    numbered = {}
    for key, value in raw.items():
        if key in block_names:
            value, order = parse_key_values(value, order)
        numbered[key] = value
    return numbered, order


def _number_table(raw: Any, order: int) -> tuple[Any, int]:
    if not isinstance(raw, dict):
        return raw, order
    numbered = {}
    for key, value in raw.items():
        match key:
            case "mapping":
                value, order = parse_key_values(value, order)
            case "mappings":
                value, order = _number_sub_mappings(value, order)
            case "type_mappings":
                value, order = _number_blocks(value, TYPE_MAPPING_BLOCKS, order)
            case "filters":
                value, order = _number_blocks(value, FILTER_BLOCKS, order)
        numbered[key] = value
    return numbered, order


def assign_declaration_order(document: dict[str, Any]) -> dict[str, Any]:
    """
    Decode every ordered key/value block of a raw document with one counter.

    Blocks are visited in the order the document declares them (tables, then
    the keys inside each table as authored), so every value anywhere in the
    document gets a distinct position in a single total order.

    Args:
        document: Raw decoded document (e.g. from `yaml.safe_load`)

    Returns:
        Copy of the document with ordered blocks replaced by KeyValues.
        Parts that are not well-formed are left for model validation.

    Raises:
        MappingFormatError: If an ordered block holds a non-string key or value
    """
    tables = document.get("tables")
    if not isinstance(tables, dict):
        return dict(document)

    order = 0
    numbered_tables = {}
    for name, table in tables.items():
        numbered_tables[name], order = _number_table(table, order)
    return {**document, "tables": numbered_tables}


def decode_mapping(document: dict[str, Any] | None) -> Mapping:
    """
    Build a normalized Mapping from a decoded document.

    Args:
        document: Document root as decoded from YAML (None for an empty file)

    Returns:
        Normalized Mapping

    Raises:
        MappingFormatError: If the document is not a valid mapping document
    """
    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise MappingFormatError(
            f"mapping document must be a mapping, got {type(document).__name__}"
        )

    try:
        mapping = Mapping.model_validate(assign_declaration_order(document))
    except ValidationError as e:
        raise MappingFormatError(f"invalid mapping document: {e}") from e

    return normalize_mapping(mapping)


def loads_mapping(text: str) -> Mapping:
    """
    Decode a mapping document from YAML text.

    Raises:
        MappingFormatError: If the text is not valid YAML or not a valid mapping
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MappingFormatError(f"mapping document is not valid YAML: {e}") from e
    return decode_mapping(document)


def load_mapping(path: str | Path | None = None) -> Mapping:
    """
    Read and decode a mapping file.

    Args:
        path: Mapping file path (default: TAG_MAPPING_FILE from settings)

    Returns:
        Normalized Mapping

    Raises:
        ValueError: If no path is given and none is configured
        OSError: If the file cannot be read
        MappingFormatError: If the file is not a valid mapping document
    """
    if path is None:
        path = get_settings().mapping_file
    if path is None:
        raise ValueError("No mapping file given and TAG_MAPPING_FILE is not set")

    path = Path(path)
    logger.info(f"Loading mapping from {path}")
    mapping = loads_mapping(path.read_text(encoding="utf-8"))
    logger.debug(
        f"Loaded {len(mapping.tables)} tables and "
        f"{len(mapping.generalized_tables)} generalized tables from {path}"
    )
    return mapping
