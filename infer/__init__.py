"""
Docschema Infer - probabilistic schema inference for document streams.

Observes decoded documents one at a time and builds a schema describing
every field path: which types occur, how often, and whether values repeat.

Example:
    >>> from infer import SchemaParser
    >>>
    >>> parser = SchemaParser()
    >>> parser.observe({"name": "Nori", "type": "Cat"})
    >>> parser.observe({"name": "Rey"})
    >>> schema = parser.finalize()
    >>> schema["type"].type_names
    ['String', 'Null']
"""
from .value import Value, ValueKind
from .field_type import FieldType, TypeName, classify
from .field import Field
from .parser import SchemaParser

__all__ = [
    'Value',
    'ValueKind',
    'FieldType',
    'TypeName',
    'classify',
    'Field',
    'SchemaParser',
]
