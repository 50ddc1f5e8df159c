"""
Unit tests for the mapping loader.

Tests document-wide declaration order, YAML decoding and error reporting.
"""

import pytest

from tag_mapping import MappingFormatError, decode_mapping, load_mapping, loads_mapping
from tag_mapping.loader import assign_declaration_order
from tag_mapping.models import GeometryKind, KeyValues, OrderedValue, get_settings


# =============================================================================
# Declaration Order Tests
# =============================================================================


class TestAssignDeclarationOrder:
    """Test that one counter runs across the whole document."""

    def test_counter_runs_across_tables(self, roads_document):
        """Test that the second table continues the first table's numbering."""
        numbered = assign_declaration_order(roads_document)
        roads = numbered["tables"]["roads"]["mapping"]
        main_roads = numbered["tables"]["main_roads"]["mapping"]

        assert roads["highway"] == (OrderedValue("primary", 0), OrderedValue("secondary", 1))
        assert main_roads["highway"] == (OrderedValue("primary", 2),)

    def test_blocks_numbered_in_authored_order(self):
        """Test that blocks within a table follow the authored key order."""
        numbered = assign_declaration_order(
            {
                "tables": {
                    "pois": {
                        "type_mappings": {"polygons": {"shop": ["mall"]}},
                        "filters": {"require": {"name": ["__any__"]}},
                        "mapping": {"amenity": ["cafe"]},
                        "type": "point",
                    }
                }
            }
        )
        table = numbered["tables"]["pois"]
        assert table["type_mappings"]["polygons"]["shop"][0].order == 0
        assert table["filters"]["require"]["name"][0].order == 1
        assert table["mapping"]["amenity"][0].order == 2

    def test_sub_mappings_numbered(self):
        """Test that sub-mapping blocks share the document counter."""
        numbered = assign_declaration_order(
            {
                "tables": {
                    "transport": {
                        "type": "linestring",
                        "mapping": {"highway": ["primary"]},
                        "mappings": {
                            "rail": {"mapping": {"railway": ["rail", "tram"]}},
                        },
                    }
                }
            }
        )
        rail = numbered["tables"]["transport"]["mappings"]["rail"]["mapping"]
        assert [v.order for v in rail["railway"]] == [1, 2]

    def test_input_not_modified(self, roads_document):
        """Test that the raw document is left untouched."""
        assign_declaration_order(roads_document)
        assert roads_document["tables"]["roads"]["mapping"] == {
            "highway": ["primary", "secondary"]
        }

    def test_non_ordered_parts_untouched(self):
        """Test that regexp filters and malformed parts are left for validation."""
        numbered = assign_declaration_order(
            {"tables": {"a": {"filters": {"reject_regexp": {"ref": "^x"}}}, "b": "oops"}}
        )
        assert numbered["tables"]["a"]["filters"]["reject_regexp"] == {"ref": "^x"}
        assert numbered["tables"]["b"] == "oops"

    def test_deterministic(self, sample_yaml):
        """Test that loading the same document twice gives identical orders."""
        assert loads_mapping(sample_yaml) == loads_mapping(sample_yaml)


# =============================================================================
# Decode Tests
# =============================================================================


class TestDecodeMapping:
    """Test decode_mapping and loads_mapping."""

    def test_decoded_mapping_is_normalized(self, roads_mapping):
        """Test that decoded tables carry their names."""
        assert roads_mapping.tables["roads"].name == "roads"
        assert roads_mapping.tables["main_roads"].type == GeometryKind.LINESTRING

    def test_yaml_document(self, sample_mapping):
        """Test decoding every block of a YAML document."""
        assert list(sample_mapping.tables) == [
            "buildings",
            "landusages",
            "roads",
            "pois",
            "features",
        ]
        assert sample_mapping.tags.include == ["wikidata"]
        assert sample_mapping.tags.exclude == ["created_by"]
        assert sample_mapping.areas.area_tags == ["building", "landuse"]
        assert sample_mapping.use_single_id_space is True
        assert sample_mapping.generalized_tables["landusages_gen1"].name == "landusages_gen1"
        assert sample_mapping.generalized_tables["landusages_gen1"].tolerance == 50.0

    def test_yaml_orders(self, sample_mapping):
        """Test the document-wide order of values in the YAML document."""
        buildings = sample_mapping.tables["buildings"]
        landusages = sample_mapping.tables["landusages"]
        roads = sample_mapping.tables["roads"]

        assert buildings.mapping["building"] == (OrderedValue("__any__", 0),)
        assert buildings.filters.reject["building"] == (
            OrderedValue("no", 1),
            OrderedValue("none", 2),
        )
        assert landusages.mapping["leisure"] == (OrderedValue("park", 5),)
        assert roads.mappings["roads"].mapping["highway"][0] == OrderedValue("primary", 8)

    def test_deprecated_fields_in_yaml(self, sample_mapping):
        """Test that `fields` is normalized to `columns`."""
        assert [c.name for c in sample_mapping.tables["landusages"].columns] == ["type"]

    def test_empty_document(self):
        """Test that an empty YAML document is an empty mapping."""
        mapping = loads_mapping("")
        assert mapping.tables == {}

    def test_document_not_a_mapping(self):
        """Test that a list document is rejected."""
        with pytest.raises(MappingFormatError, match="must be a mapping"):
            decode_mapping(["tables"])

    def test_invalid_yaml(self):
        """Test that YAML syntax errors are reported as format errors."""
        with pytest.raises(MappingFormatError, match="not valid YAML"):
            loads_mapping("tables: [unclosed")

    def test_unknown_table_type(self):
        """Test that an unknown table type aborts decoding."""
        with pytest.raises(MappingFormatError, match="unknown table type"):
            decode_mapping({"tables": {"t": {"type": "area"}}})

    def test_missing_table_type(self):
        """Test that a table without type aborts decoding."""
        with pytest.raises(MappingFormatError, match="invalid mapping document"):
            decode_mapping({"tables": {"t": {"mapping": {"amenity": ["cafe"]}}}})

    def test_non_string_value(self):
        """Test that YAML booleans in a mapping block abort decoding."""
        with pytest.raises(MappingFormatError, match="not a string"):
            loads_mapping("tables:\n  t:\n    type: polygon\n    mapping:\n      area: [yes]\n")

    def test_non_string_key(self):
        """Test that non-string keys in a filter block abort decoding."""
        with pytest.raises(MappingFormatError, match="not a string"):
            decode_mapping(
                {"tables": {"t": {"type": "point", "filters": {"require": {5: ["x"]}}}}}
            )

    def test_keyvalues_type(self, roads_mapping):
        """Test that mapping blocks decode to KeyValues."""
        assert isinstance(roads_mapping.tables["roads"].mapping, KeyValues)

    def test_empty_type_mappings_block(self):
        """Test that `type_mappings:` without body decodes to empty blocks."""
        mapping = loads_mapping(
            "tables:\n"
            "  t:\n"
            "    type: point\n"
            "    mapping:\n"
            "      amenity: [cafe]\n"
            "    type_mappings:\n"
        )
        table = mapping.tables["t"]
        assert table.type_mappings.for_kind(GeometryKind.POINT) == KeyValues()
        assert table.mapping["amenity"] == (OrderedValue("cafe", 0),)

    def test_empty_sub_mapping_body(self):
        """Test that a named sub-mapping without body decodes to an empty block."""
        mapping = loads_mapping(
            "tables:\n"
            "  t:\n"
            "    type: point\n"
            "    mappings:\n"
            "      x:\n"
            "      y:\n"
            "        mapping:\n"
            "          amenity: [cafe]\n"
        )
        mappings = mapping.tables["t"].mappings
        assert list(mappings) == ["x", "y"]
        assert mappings["x"].mapping == KeyValues()
        assert mappings["y"].mapping["amenity"] == (OrderedValue("cafe", 0),)


# =============================================================================
# File Loading Tests
# =============================================================================


class TestLoadMapping:
    """Test load_mapping from files and settings."""

    @pytest.fixture(autouse=True)
    def clear_settings_cache(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_load_from_path(self, tmp_path, sample_yaml):
        """Test loading a mapping file by path."""
        path = tmp_path / "mapping.yml"
        path.write_text(sample_yaml, encoding="utf-8")

        mapping = load_mapping(path)
        assert "roads" in mapping.tables

    def test_load_from_settings(self, tmp_path, sample_yaml, monkeypatch):
        """Test that the path defaults to TAG_MAPPING_FILE."""
        path = tmp_path / "mapping.yml"
        path.write_text(sample_yaml, encoding="utf-8")
        monkeypatch.setenv("TAG_MAPPING_FILE", str(path))

        mapping = load_mapping()
        assert "pois" in mapping.tables

    def test_no_path_configured(self, monkeypatch, tmp_path):
        """Test that loading without any path fails clearly."""
        monkeypatch.delenv("TAG_MAPPING_FILE", raising=False)
        monkeypatch.chdir(tmp_path)  # no .env here
        with pytest.raises(ValueError, match="TAG_MAPPING_FILE is not set"):
            load_mapping()

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises OSError."""
        with pytest.raises(OSError):
            load_mapping(tmp_path / "missing.yml")
