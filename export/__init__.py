"""
Docschema Export - render finalized schemas.

Example:
    >>> from export import to_json, to_dataframe
    >>>
    >>> print(to_json(parser.finalize(), indent=2))
    >>> df = to_dataframe(parser.finalize())
"""
from .serializer import to_dict, to_json, field_to_dict, type_to_dict, value_to_json
from .frame import to_dataframe, sparse_fields, duplicated_fields

__all__ = [
    'to_dict',
    'to_json',
    'field_to_dict',
    'type_to_dict',
    'value_to_json',
    'to_dataframe',
    'sparse_fields',
    'duplicated_fields',
]
