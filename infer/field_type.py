"""
Per-type statistics for one field path.

A FieldType collects everything known about one concrete value type seen
under a field path: how often it occurred, the scalar values it carried,
array lengths and, for nested documents, a nested SchemaParser.
"""
import datetime
import decimal
import re
import uuid
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional

import numpy as np
from bson.binary import Binary
from bson.code import Code
from bson.datetime_ms import DatetimeMS
from bson.decimal128 import Decimal128
from bson.int64 import Int64
from bson.objectid import ObjectId
from bson.regex import Regex
from bson.timestamp import Timestamp

from .value import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, Value


class TypeName(Enum):
    """Closed set of type names a value can be classified as."""
    STRING = "String"
    INT32 = "Int32"
    LONG = "Long"
    DOUBLE = "Double"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    BINARY = "BinData"
    DECIMAL_128 = "Decimal128"
    NULL = "Null"
    OBJECT_ID = "ObjectId"
    UTC_DATETIME = "UtcDatetime"
    TIMESTAMP = "Timestamp"
    REGEX = "Regex"
    JAVASCRIPT_CODE = "JavaScriptCode"
    JAVASCRIPT_CODE_WITH_SCOPE = "JavaScriptCodeWithScope"
    DOCUMENT = "Document"
    ARRAY = "Array"
    UNSUPPORTED = "Unsupported"


NUMERIC_TYPES = (TypeName.INT32, TypeName.LONG, TypeName.DOUBLE)


def classify(value: Any, merge_numeric: bool = False) -> TypeName:
    """
    Classify a decoded value.

    Every value maps to some TypeName; anything not representable in a
    document lands in UNSUPPORTED rather than raising.

    Args:
        value: A value taken from a decoded document.
        merge_numeric: If True, Int32, Long and Double all become Number.

    Returns:
        The TypeName for the value.
    """
    type_name = _native_type(value)
    if merge_numeric and type_name in NUMERIC_TYPES:
        return TypeName.NUMBER
    return type_name


def _native_type(value: Any) -> TypeName:
    if value is None:
        return TypeName.NULL
    if isinstance(value, bool):
        return TypeName.BOOLEAN
    if isinstance(value, Int64):
        return TypeName.LONG
    if isinstance(value, int):
        if INT32_MIN <= value <= INT32_MAX:
            return TypeName.INT32
        if INT64_MIN <= value <= INT64_MAX:
            return TypeName.LONG
        return TypeName.UNSUPPORTED
    if isinstance(value, float):
        return TypeName.DOUBLE
    if isinstance(value, (Decimal128, decimal.Decimal)):
        return TypeName.DECIMAL_128
    if isinstance(value, Code):
        if value.scope is not None:
            return TypeName.JAVASCRIPT_CODE_WITH_SCOPE
        return TypeName.JAVASCRIPT_CODE
    if isinstance(value, str):
        return TypeName.STRING
    if isinstance(value, ObjectId):
        return TypeName.OBJECT_ID
    if isinstance(value, (Binary, bytes, bytearray, uuid.UUID)):
        return TypeName.BINARY
    if isinstance(value, (datetime.datetime, DatetimeMS)):
        return TypeName.UTC_DATETIME
    if isinstance(value, Timestamp):
        return TypeName.TIMESTAMP
    if isinstance(value, (Regex, re.Pattern)):
        return TypeName.REGEX
    if isinstance(value, Mapping):
        return TypeName.DOCUMENT
    if isinstance(value, (list, tuple)):
        return TypeName.ARRAY
    return TypeName.UNSUPPORTED


class FieldType:
    """
    Statistics for one value type observed under one field path.

    Counts are split into ``observed`` (values actually seen) and
    ``missing`` (documents that lacked the field, imputed onto the Null type
    at finalize time). ``count`` is their sum.

    Example:
        >>> field_type = FieldType.create("address.city", "Berlin")
        >>> field_type.update("Hamburg")
        >>> field_type.update("Berlin")
        >>> field_type.finalize(3)
        >>> field_type.unique, field_type.has_duplicates
        (2, True)
    """

    def __init__(self, path: str, name: str, merge_numeric: bool = False):
        self.path = path
        self.name = name
        self.merge_numeric = merge_numeric
        self.observed = 0
        self.missing = 0
        self.probability = 0.0
        self.values: list[Value] = []
        self.lengths: list[int] = []
        self.unique: Optional[int] = None
        self.has_duplicates = False
        self.schema = None
        # element type name -> FieldType, for Array types only
        self.types: dict[str, FieldType] = {}

    @classmethod
    def create(cls, path: str, value: Any, merge_numeric: bool = False) -> "FieldType":
        """Create a FieldType from the first value seen for it."""
        field_type = cls(path, classify(value, merge_numeric).value, merge_numeric)
        field_type.update(value)
        return field_type

    @property
    def count(self) -> int:
        return self.observed + self.missing

    @property
    def is_document(self) -> bool:
        return self.name == TypeName.DOCUMENT.value

    @property
    def is_array(self) -> bool:
        return self.name == TypeName.ARRAY.value

    @property
    def average_length(self) -> Optional[float]:
        """Mean length of the arrays seen, or None for non-array types."""
        if not self.lengths:
            return None
        return float(np.mean(self.lengths))

    def update(self, value: Any) -> None:
        """Fold one more occurrence of this type into the statistics."""
        self.observed += 1

        if self.is_document:
            self._nested_schema().observe(value)
        elif self.is_array:
            self.lengths.append(len(value))
            for element in value:
                self._add_element(element)
        else:
            extracted = Value.from_raw(value, self.merge_numeric)
            if extracted is not None:
                self.values.append(extracted)

    def _nested_schema(self):
        if self.schema is None:
            from .parser import SchemaParser
            self.schema = SchemaParser(path=self.path, merge_numeric=self.merge_numeric)
        return self.schema

    def _add_element(self, element: Any) -> None:
        """Record one array element, flattened one level into ``values``."""
        element_type = classify(element, self.merge_numeric).value
        if element_type in self.types:
            self.types[element_type].update(element)
        else:
            self.types[element_type] = FieldType.create(
                self.path, element, self.merge_numeric
            )

        extracted = Value.from_raw(element, self.merge_numeric)
        if extracted is not None:
            self.values.append(extracted)

    def distinct_values(self) -> list[Value]:
        """Collected values, sorted and deduplicated."""
        return sorted(set(self.values))

    def finalize(self, parent_count: int) -> None:
        """
        Compute probability, uniqueness and duplicates.

        Args:
            parent_count: Number of occurrences of the parent field (or, for
                          array element types, the number of array elements).
        """
        self.probability = self.count / parent_count if parent_count else 0.0

        if self.is_document:
            self.schema.finalize()
            self.unique = None
            self.has_duplicates = self.schema.has_duplicates
            return

        element_count = sum(self.lengths)
        for element_type in self.types.values():
            element_type.finalize(element_count)

        self.unique = len(self.distinct_values())
        # document and array elements keep their values out of this list
        self.has_duplicates = len(self.values) != self.unique or any(
            t.has_duplicates for t in self.types.values() if t.is_document or t.is_array
        )

    def __repr__(self) -> str:
        return (
            f"FieldType(path='{self.path}', name='{self.name}', "
            f"count={self.count}, probability={self.probability:.2f})"
        )
