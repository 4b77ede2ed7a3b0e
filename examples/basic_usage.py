#!/usr/bin/env python3
"""
Basic usage example for docschema.

This example infers a schema from a handful of in-memory documents and
prints it both as a table and as JSON. Documents can also be fed as JSON
text (SchemaParser.write_json) or raw BSON (SchemaParser.write_bson).

Run from the repository root:
    python examples/basic_usage.py
"""
import sys
import os

# Add parent directory to path for local development
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from infer import SchemaParser
from export import to_dataframe, sparse_fields, duplicated_fields


def main():
    # Sample documents, as they might come out of a collection export
    documents = [
        {
            "name": "Alice Smith",
            "email": "alice@example.com",
            "phone_number": 491234568789,
            "address": {"city": "Berlin", "postal_code": 10115},
            "tags": ["gold", "newsletter"],
        },
        {
            "name": "Bob Jones",
            "email": "bob@example.com",
            "phone_number": "+441234456789",
            "address": {"city": "London"},
            "tags": ["newsletter"],
        },
        {
            "name": "Carol White",
            "phone_number": None,
            "tags": [],
        },
    ]

    parser = SchemaParser()
    for document in documents:
        parser.observe(document)

    # Extended JSON works too: $oid becomes an ObjectId, $date a datetime
    parser.write_json(
        '{"name": "Dan Brown", "email": "dan@example.com", '
        '"last_login": {"$date": "2024-01-15T10:30:00Z"}}'
    )

    schema = parser.finalize()

    print("=" * 60)
    print("DOCSCHEMA - Schema Inference Example")
    print("=" * 60)

    df = to_dataframe(schema)
    display_cols = ['path', 'type', 'count', 'probability', 'unique', 'has_duplicates']
    print(df[display_cols].to_string(index=False))

    print("\nSparse fields:")
    print(sparse_fields(schema).to_string(index=False))

    print("\nFields with duplicate values:")
    print(duplicated_fields(schema)[['path', 'type', 'unique']].to_string(index=False))

    print("\nJSON:")
    print(schema.to_json(indent=2))


if __name__ == "__main__":
    main()
