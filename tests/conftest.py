"""
Shared pytest fixtures for mapping compiler tests.

Provides reusable mapping documents to avoid duplication across test files.
"""

import pytest

from tag_mapping import decode_mapping, loads_mapping


# =============================================================================
# Mapping Document Fixtures
# =============================================================================

@pytest.fixture
def roads_document():
    """Mapping document with two tables routing the same key/value."""
    return {
        "tables": {
            "roads": {
                "type": "linestring",
                "mapping": {"highway": ["primary", "secondary"]},
                "columns": [
                    {"name": "osm_id", "type": "id"},
                    {"name": "name", "type": "string", "key": "name"},
                ],
            },
            "main_roads": {
                "type": "linestring",
                "mapping": {"highway": ["primary"]},
                "columns": [{"name": "ref", "type": "string", "key": "ref"}],
            },
        },
    }


@pytest.fixture
def roads_mapping(roads_document):
    """Decoded and normalized mapping of roads_document."""
    return decode_mapping(roads_document)


@pytest.fixture
def sample_yaml():
    """Mapping document in YAML covering every block."""
    return """
tags:
  load_all: false
  include: [wikidata]
  exclude: [created_by]
areas:
  area_tags: [building, landuse]
  linear_tags: [highway, barrier]
use_single_id_space: true
generalized_tables:
  landusages_gen1:
    source: landusages
    tolerance: 50.0
    sql_filter: "ST_Area(geometry) > 50000"
tables:
  buildings:
    type: polygon
    mapping:
      building: [__any__]
    columns:
      - {name: osm_id, type: id}
      - {name: name, type: string, key: name}
    filters:
      reject:
        building: ["no", "none"]
  landusages:
    type: polygon
    mapping:
      landuse: [forest, park]
      leisure: [park]
    fields:
      - {name: type, type: mapping_value}
  roads:
    type: linestring
    mappings:
      railway:
        mapping:
          railway: [rail, tram]
      roads:
        mapping:
          highway: [primary, residential]
    columns:
      - {name: ref, type: string, key: ref}
      - {name: layer, type: wayzorder, keys: [layer, bridge, tunnel]}
    filters:
      require_regexp:
        ref: "^[A-Z]"
      exclude_tags:
        - [access, private]
  pois:
    type: point
    mapping:
      amenity: [cafe, pub]
    type_mappings:
      points:
        shop: [bakery]
      polygons:
        shop: [mall]
  features:
    type: geometry
    type_mappings:
      points:
        natural: [tree]
      linestrings:
        natural: [tree_row]
      polygons:
        natural: [wood]
"""


@pytest.fixture
def sample_mapping(sample_yaml):
    """Decoded and normalized mapping of sample_yaml."""
    return loads_mapping(sample_yaml)
