"""
Scalar values collected from documents.

A Value is the comparable, hashable form of one scalar pulled out of a
decoded document. Field types keep a list of them so uniqueness and
duplicates can be computed once all documents have been seen.
"""
import datetime
import decimal
import math
import re
import uuid
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import Any, Optional

from bson.binary import Binary
from bson.datetime_ms import DatetimeMS
from bson.decimal128 import Decimal128
from bson.int64 import Int64
from bson.objectid import ObjectId
from bson.regex import Regex
from bson.timestamp import Timestamp

INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1


class ValueKind(IntEnum):
    """Kinds of scalar value. The integer is the rank used across kinds."""
    NULL = 0
    BOOLEAN = 1
    INT32 = 2
    INT64 = 3
    DOUBLE = 4
    NUMBER = 5
    DECIMAL = 6
    STRING = 7
    BINARY = 8


NUMERIC_KINDS = (ValueKind.INT32, ValueKind.INT64, ValueKind.DOUBLE)


@total_ordering
@dataclass(frozen=True, eq=False)
class Value:
    """
    One scalar value with a total order.

    Values of the same kind compare natively (strings lexicographically,
    numbers numerically, False before True). Values of different kinds
    compare by kind rank, which only matters for arrays of mixed elements.

    NaN sorts after every other double, and all NaNs are equal to each other,
    so a list holding NaN still has a deterministic unique count.

    Merged numbers (kind NUMBER) compare by value alone, so 1 and 1.0 are the
    same value.

    Example:
        >>> sorted({Value.from_raw("b"), Value.from_raw("a"), Value.from_raw("a")})
        [Value(kind=<ValueKind.STRING: 7>, data='a'), Value(kind=<ValueKind.STRING: 7>, data='b')]
    """

    kind: ValueKind
    data: Any = None

    def sort_key(self) -> tuple:
        if self.kind in (ValueKind.DOUBLE, ValueKind.NUMBER) and isinstance(self.data, float) \
                and math.isnan(self.data):
            return (self.kind, 1, 0.0)
        if self.kind is ValueKind.DECIMAL:
            number = decimal.Decimal(self.data)
            if number.is_nan():
                return (self.kind, 1, decimal.Decimal(0))
            return (self.kind, 0, number)
        return (self.kind, 0, self.data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.sort_key() == other.sort_key()

    def __lt__(self, other: "Value") -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __hash__(self) -> int:
        return hash(self.sort_key())

    def to_python(self) -> Any:
        """Return the plain Python object this value wraps."""
        return self.data

    @classmethod
    def from_raw(cls, raw: Any, merge_numeric: bool = False) -> Optional["Value"]:
        """
        Extract a Value from a decoded document value.

        Documents, arrays and anything without a scalar form return None;
        their detail lives in nested schemas and element types instead.
        With merge_numeric, Int32, Int64 and double values all become NUMBER.
        """
        value = cls._extract(raw)
        if merge_numeric and value is not None and value.kind in NUMERIC_KINDS \
                and not isinstance(raw, Timestamp):
            return cls(ValueKind.NUMBER, value.data)
        return value

    @classmethod
    def _extract(cls, raw: Any) -> Optional["Value"]:
        if raw is None:
            return cls(ValueKind.NULL)
        if isinstance(raw, bool):
            return cls(ValueKind.BOOLEAN, raw)
        if isinstance(raw, Int64):
            return cls(ValueKind.INT64, int(raw))
        if isinstance(raw, int):
            if INT32_MIN <= raw <= INT32_MAX:
                return cls(ValueKind.INT32, raw)
            if INT64_MIN <= raw <= INT64_MAX:
                return cls(ValueKind.INT64, raw)
            return None
        if isinstance(raw, float):
            return cls(ValueKind.DOUBLE, raw)
        if isinstance(raw, (Decimal128, decimal.Decimal)):
            return cls(ValueKind.DECIMAL, str(raw))
        # Code subclasses str, so its text is collected like any string
        if isinstance(raw, str):
            return cls(ValueKind.STRING, str(raw))
        if isinstance(raw, ObjectId):
            return cls(ValueKind.STRING, str(raw))
        if isinstance(raw, (Binary, bytes, bytearray)):
            return cls(ValueKind.BINARY, bytes(raw))
        if isinstance(raw, uuid.UUID):
            return cls(ValueKind.BINARY, raw.bytes)
        if isinstance(raw, datetime.datetime):
            return cls(ValueKind.STRING, raw.isoformat())
        if isinstance(raw, DatetimeMS):
            return cls(ValueKind.STRING, str(int(raw)))
        if isinstance(raw, Timestamp):
            return cls(ValueKind.INT64, (raw.time << 32) | raw.inc)
        if isinstance(raw, (Regex, re.Pattern)):
            return cls(ValueKind.STRING, str(raw.pattern))
        return None
