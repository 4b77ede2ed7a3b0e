"""Tests for path helpers."""
import pytest

from common.paths import join_path, nested_schemas, path_depth, split_path, walk_fields


class TestPathHelpers:
    """Joining and splitting dotted paths"""

    def test_join_at_root(self):
        assert join_path(None, "address") == "address"

    def test_join_nested(self):
        assert join_path("address", "city") == "address.city"

    def test_join_non_string_key(self):
        assert join_path("scores", 1) == "scores.1"

    @pytest.mark.parametrize("path, parts", [
        ("", []),
        ("a", ["a"]),
        ("a.b.c", ["a", "b", "c"]),
    ])
    def test_split(self, path, parts):
        assert split_path(path) == parts

    def test_depth(self):
        assert path_depth("a") == 1
        assert path_depth("items.sku") == 2


class TestWalkFields:
    """Walking a schema tree"""

    def test_order_is_depth_first(self, parser_factory, order_documents):
        parser = parser_factory(order_documents)
        paths = [f.path for f in walk_fields(parser)]

        assert paths == [
            "order_id",
            "customer",
            "customer.name",
            "customer.tier",
            "items",
            "items.sku",
            "items.qty",
            "items.discount",
            "tags",
        ]

    def test_nested_schemas_through_arrays(self, parser_factory):
        parser = parser_factory([{"grid": [[{"x": 1}], [{"y": 2}]]}])
        schemas = list(nested_schemas(parser["grid"]))

        assert len(schemas) == 1
        assert set(schemas[0].fields) == {"x", "y"}

    def test_scalar_field_has_no_nested_schemas(self, parser_factory):
        parser = parser_factory([{"a": 1}])
        assert list(nested_schemas(parser["a"])) == []
