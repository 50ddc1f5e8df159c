#!/usr/bin/env python3
"""
Mapping check script.

Loads a mapping document, compiles it the same way the import pipeline does
and prints a per-geometry-kind summary of the result. Use it to validate a
mapping before starting an import.

The mapping path is taken from the command line, or from TAG_MAPPING_FILE.

Exit codes:
    0: Mapping compiled
    1: Mapping is invalid
    2: No mapping path given or configured
"""

import argparse
import logging
import sys
from typing import List, Optional

from tag_mapping import CompiledMapping, MappingFormatError, compile_mapping, load_mapping
from tag_mapping.models import CONCRETE_KINDS, get_settings


def summarize(compiled: CompiledMapping) -> List[str]:
    """
    Build the summary lines for a compiled mapping.

    Args:
        compiled: Compiled mapping

    Returns:
        Lines to print, one block per concrete geometry kind
    """
    lines = [f"tables: {len(compiled.mapping.tables)}"]
    for kind in CONCRETE_KINDS:
        index = compiled.tag_tables[kind]
        destinations = sum(
            len(dests) for by_value in index.values() for dests in by_value.values()
        )
        tables = [name for name, _ in compiled.mapping.tables_for(kind)]
        filters = sum(len(compiled.filters[name]) for name in tables)
        lines.append(
            f"{kind.value}: {len(tables)} tables, {len(index)} keys, "
            f"{destinations} destinations, {filters} filters, "
            f"{len(compiled.extra_tags[kind])} retained tags"
        )
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Validate and summarize a mapping file")
    parser.add_argument("mapping", nargs="?", help="Mapping file (default: TAG_MAPPING_FILE)")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    path = args.mapping or settings.mapping_file
    if path is None:
        print("ERROR: no mapping file given and TAG_MAPPING_FILE is not set", file=sys.stderr)
        return 2

    try:
        compiled = compile_mapping(load_mapping(path))
    except (MappingFormatError, OSError) as e:
        print(f"FAILED: {e}", file=sys.stderr)
        return 1

    for line in summarize(compiled):
        print(line)
    print("SUCCESS: mapping compiled")
    return 0


if __name__ == "__main__":
    sys.exit(main())
