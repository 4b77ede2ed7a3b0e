"""
Path utilities for schema trees.

Field paths use plain dot notation ("address.location.type"). Keys are
joined as-is: a key that itself contains a dot cannot be told apart from a
nesting boundary.
"""
from typing import Iterator, Optional


def join_path(parent: Optional[str], key) -> str:
    """
    Join a key onto a parent path.

    Example:
        >>> join_path(None, "address")
        'address'
        >>> join_path("address", "city")
        'address.city'
    """
    return f"{parent}.{key}" if parent else str(key)


def split_path(path: str) -> list[str]:
    return path.split(".") if path else []


def path_depth(path: str) -> int:
    """Nesting depth of a path; top-level fields have depth 1."""
    return len(split_path(path))


def nested_schemas(field) -> Iterator:
    """
    Yield the nested schemas reachable from one field.

    Covers Document types and Document elements inside Array types, at any
    depth of array nesting.
    """
    pending = list(field.types.values())
    while pending:
        field_type = pending.pop(0)
        if field_type.schema is not None:
            yield field_type.schema
        pending.extend(field_type.types.values())


def walk_fields(schema) -> Iterator:
    """
    Walk every field of a schema tree, parents before children.

    Args:
        schema: A SchemaParser.

    Yields:
        Each Field, depth first.
    """
    for field in schema.fields.values():
        yield field
        for nested in nested_schemas(field):
            yield from walk_fields(nested)
