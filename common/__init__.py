"""Common utilities shared across docschema modules."""
from .paths import join_path, split_path, path_depth, nested_schemas, walk_fields

__all__ = ['join_path', 'split_path', 'path_depth', 'nested_schemas', 'walk_fields']
