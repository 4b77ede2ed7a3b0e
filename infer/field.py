"""Per-path statistics: one Field per key seen at a nesting level."""
from typing import Any

from .field_type import FieldType, TypeName, classify

NULL = TypeName.NULL.value


class Field:
    """
    Everything known about one field path across all documents.

    ``types`` maps type names to FieldType in first-seen order. Before
    finalize, ``count`` only counts documents that had the field; finalize
    imputes the rest onto the Null type so ``count`` matches the parent.
    """

    def __init__(self, name: str, path: str, merge_numeric: bool = False):
        self.name = name
        self.path = path
        self.merge_numeric = merge_numeric
        self.observed = 0
        self.missing = 0
        self.probability = 0.0
        self.has_duplicates = False
        self.types: dict[str, FieldType] = {}

    @property
    def count(self) -> int:
        return self.observed + self.missing

    @property
    def type_names(self) -> list[str]:
        return list(self.types)

    def type_of(self, value: Any) -> str:
        return classify(value, self.merge_numeric).value

    def update_or_create(self, value: Any) -> None:
        """Record one document's value for this field."""
        type_name = self.type_of(value)
        field_type = self.types.get(type_name)
        if field_type is None:
            self.types[type_name] = FieldType.create(self.path, value, self.merge_numeric)
        else:
            field_type.update(value)
        self.observed += 1

    def impute_missing(self, total: int) -> None:
        """
        Account for documents at this level that lacked the field.

        The deficit is set (not added) on the Null type, so running this
        again for the same total gives the same result.
        """
        deficit = max(total - self.observed, 0)
        null_type = self.types.get(NULL)

        if deficit:
            if null_type is None:
                null_type = FieldType(self.path, NULL, self.merge_numeric)
                self.types[NULL] = null_type
            null_type.missing = deficit
        elif null_type is not None:
            null_type.missing = 0
            if null_type.count == 0:
                del self.types[NULL]

        self.missing = deficit

    def finalize(self, parent_count: int) -> None:
        self.impute_missing(parent_count)
        for field_type in self.types.values():
            field_type.finalize(self.count)

        # fraction of documents that actually carried a value
        self.probability = self.observed / parent_count if parent_count else 0.0
        self.has_duplicates = any(t.has_duplicates for t in self.types.values())

    def __repr__(self) -> str:
        return (
            f"Field(path='{self.path}', count={self.count}, "
            f"types={self.type_names})"
        )
