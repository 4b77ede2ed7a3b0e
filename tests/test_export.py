"""Tests for schema serialization and DataFrame summaries."""
import json

import pandas as pd
import pytest

from export import duplicated_fields, sparse_fields, to_dataframe, to_dict, to_json
from export.frame import COLUMNS


class TestSerializer:
    """Dict / JSON rendering of a finalized schema"""

    def test_top_level_shape(self, parser_factory, pet_documents):
        result = to_dict(parser_factory(pet_documents))

        assert result["count"] == 2
        assert [f["name"] for f in result["fields"]] == ["name", "type"]

    def test_single_type_is_a_name(self, parser_factory, pet_documents):
        result = to_dict(parser_factory(pet_documents))
        assert result["fields"][0]["type"] == "String"

    def test_several_types_are_a_list(self, parser_factory, pet_documents):
        result = to_dict(parser_factory(pet_documents))
        field = result["fields"][1]

        assert field["type"] == ["String", "Null"]
        assert field["probability"] == 0.5
        assert [t["name"] for t in field["types"]] == ["String", "Null"]

    def test_scalar_type(self, parser_factory, pet_documents):
        result = to_dict(parser_factory(pet_documents))
        string_type = result["fields"][0]["types"][0]

        assert string_type == {
            "name": "String",
            "path": "name",
            "count": 2,
            "probability": 1.0,
            "values": ["Nori", "Rey"],
            "unique": 2,
            "has_duplicates": False,
        }

    def test_empty_values_omitted(self, parser_factory, pet_documents):
        result = to_dict(parser_factory(pet_documents))
        null_type = result["fields"][1]["types"][1]

        assert "values" not in null_type
        assert "lengths" not in null_type
        assert null_type["unique"] == 0

    def test_document_type(self, parser_factory):
        result = to_dict(parser_factory([{"a": {"b": 1}}, {"a": {"b": 1}}]))
        document = result["fields"][0]["types"][0]

        assert document["name"] == "Document"
        assert "unique" not in document
        assert "has_duplicates" not in document
        assert "values" not in document
        assert document["fields"][0]["path"] == "a.b"
        assert document["fields"][0]["has_duplicates"] is True

    def test_array_type(self, parser_factory):
        result = to_dict(parser_factory([{"tags": ["a", "b"]}, {"tags": ["a"]}]))
        array = result["fields"][0]["types"][0]

        assert array["lengths"] == [2, 1]
        assert array["average_length"] == 1.5
        assert array["values"] == ["a", "b", "a"]
        assert array["types"][0]["name"] == "String"
        assert array["types"][0]["count"] == 3
        assert array["has_duplicates"] is True

    def test_binary_is_base64(self, parser_factory):
        result = to_dict(parser_factory([{"blob": b"hi"}]))
        assert result["fields"][0]["types"][0]["values"] == ["aGk="]

    def test_non_finite_floats(self, parser_factory):
        parser = parser_factory([{"x": float("nan")}, {"x": float("inf")}, {"x": float("-inf")}])
        text = to_json(parser)

        values = json.loads(text)["fields"][0]["types"][0]["values"]
        assert values == ["NaN", "Infinity", "-Infinity"]

    def test_to_json_round_trips_through_json(self, parser_factory, order_documents):
        parser = parser_factory(order_documents)
        assert json.loads(parser.to_json(indent=2)) == parser.to_dict()


class TestDataFrame:
    """Tabular summary of a schema"""

    def test_columns(self, parser_factory, order_documents):
        df = to_dataframe(parser_factory(order_documents))
        assert list(df.columns) == COLUMNS

    def test_one_row_per_path_and_type(self, parser_factory, pet_documents):
        df = to_dataframe(parser_factory(pet_documents))

        assert len(df) == 3
        assert list(df['type']) == ["String", "String", "Null"]
        assert list(df['path']) == ["name", "type", "type"]

    def test_nested_rows(self, parser_factory, order_documents):
        df = to_dataframe(parser_factory(order_documents))
        paths = set(df['path'])

        assert {"customer.name", "customer.tier", "items.sku", "items.discount"} <= paths
        sku = df[df['path'] == "items.sku"].iloc[0]
        assert sku['depth'] == 2
        assert sku['field_count'] == 3

    def test_length_columns(self, parser_factory, order_documents):
        df = to_dataframe(parser_factory(order_documents))
        items = df[(df['path'] == "items") & (df['type'] == "Array")].iloc[0]

        assert items['min_length'] == 0
        assert items['max_length'] == 2
        assert items['average_length'] == pytest.approx(1.0)

    def test_nullable_columns(self, parser_factory, order_documents):
        df = to_dataframe(parser_factory(order_documents))
        customer = df[(df['path'] == "customer") & (df['type'] == "Document")].iloc[0]

        assert df['unique'].dtype == pd.Int64Dtype()
        assert pd.isna(customer['unique'])
        assert pd.isna(customer['min_length'])

    def test_empty_schema(self, parser_factory):
        df = to_dataframe(parser_factory([]))
        assert df.empty
        assert list(df.columns) == COLUMNS

    def test_sparse_fields(self, parser_factory, order_documents):
        sparse = sparse_fields(parser_factory(order_documents))

        assert list(sparse['path']) == ["items.discount", "customer.tier", "customer"]
        assert sparse.iloc[0]['field_probability'] == pytest.approx(1 / 3)

    def test_duplicated_fields(self, parser_factory, order_documents):
        duplicated = duplicated_fields(parser_factory(order_documents))
        assert set(duplicated['path']) == {"tags", "items", "items.sku"}
