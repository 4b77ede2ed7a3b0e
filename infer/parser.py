"""
Schema inference over a stream of documents.

SchemaParser is both the top-level entry point and the engine used for
every nested document: each Document type owns its own SchemaParser whose
count only covers the documents in which that sub-document was present.
"""
import logging
from collections.abc import Mapping
from typing import Any, Iterable, Optional

import bson
from bson import json_util
from bson.errors import BSONError

from common.paths import join_path, nested_schemas, split_path
from .field import Field

logger = logging.getLogger(__name__)


class SchemaParser:
    """
    Infers a probabilistic schema from documents observed one at a time.

    For every field path it tracks which types occur, how often, and
    whether the observed values contain duplicates. Nested documents get
    their own SchemaParser, recursively.

    Every collected scalar is kept until the parser is discarded, since
    uniqueness can only be decided once all values are known. Memory grows
    with the number of values observed.

    Example:
        >>> parser = SchemaParser()
        >>> parser.observe({"name": "Nori", "type": "Cat"})
        >>> parser.observe({"name": "Rey"})
        >>> schema = parser.finalize()
        >>> schema["type"].types["Null"].count
        1
    """

    def __init__(self, path: Optional[str] = None, merge_numeric: bool = False):
        """
        Initialize SchemaParser.

        Args:
            path: Base path of this parser. None for the top level; nested
                  parsers use the path of the field holding the document.
            merge_numeric: If True, Int32, Long and Double are reported as a
                          single Number type whose values compare by number,
                          so 1 and 1.0 count once.
        """
        self.path = path
        self.merge_numeric = merge_numeric
        self.count = 0
        self.fields: dict[str, Field] = {}
        self.has_duplicates = False

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: str) -> bool:
        return name in self.fields

    def __getitem__(self, name: str) -> Field:
        return self.fields[name]

    def observe(self, document: Mapping) -> None:
        """
        Fold one decoded document into the schema.

        Args:
            document: Mapping of field names to decoded values.
        """
        if not isinstance(document, Mapping):
            raise TypeError(
                f"Expected a mapping document, got {type(document).__name__}"
            )

        self.count += 1
        for key, value in document.items():
            field = self.fields.get(key)
            if field is None:
                field = Field(key, join_path(self.path, key), self.merge_numeric)
                self.fields[key] = field
            field.update_or_create(value)

    def finalize(self) -> "SchemaParser":
        """
        Impute missing fields and compute probabilities and duplicates.

        Safe to call more than once; each call recomputes from the raw
        observations, so repeated calls give the same numbers.

        Returns:
            This parser, ready for serialization.
        """
        for field in self.fields.values():
            field.finalize(self.count)

        self.has_duplicates = any(f.has_duplicates for f in self.fields.values())
        logger.debug(
            f"Finalized schema at '{self.path or '<root>'}': "
            f"{self.count} documents, {len(self.fields)} fields"
        )
        return self

    def field_at(self, path: str) -> Field:
        """
        Resolve a dotted path to its Field, descending through nested schemas.

        Raises:
            KeyError: If no field exists at the path.
        """
        parts = split_path(path)
        if not parts:
            raise KeyError(path)

        field = self.fields.get(parts[0])
        for part in parts[1:]:
            if field is None:
                break
            field = next(
                (s.fields[part] for s in nested_schemas(field) if part in s.fields),
                None,
            )

        if field is None:
            raise KeyError(path)
        return field

    def write_json(self, text: str) -> None:
        """
        Decode one JSON object and observe it.

        MongoDB Extended JSON is understood, so {"$oid": ...} becomes an
        ObjectId and {"$date": ...} a datetime.

        Raises:
            ValueError: If the text is not valid JSON or not a JSON object.
        """
        try:
            document = json_util.loads(text)
        except (ValueError, BSONError) as e:
            logger.error(f"Error decoding JSON document: {e}")
            raise

        if not isinstance(document, Mapping):
            raise ValueError(
                f"Expected a JSON object, got {type(document).__name__}"
            )
        self.observe(document)

    def write_json_lines(self, lines: Iterable[Any]) -> int:
        """
        Observe newline-delimited JSON, one document per line.

        Blank lines are skipped. Lines may be str or bytes.

        Returns:
            Number of documents observed.
        """
        written = 0
        for line in lines:
            if isinstance(line, bytes):
                line = line.decode("utf-8")
            if not line.strip():
                continue
            self.write_json(line)
            written += 1

        logger.debug(f"Observed {written} JSON lines")
        return written

    def write_bson(self, data: bytes) -> None:
        """
        Decode one raw BSON document and observe it.

        Raises:
            bson.errors.InvalidBSON: If the bytes are not a valid document.
        """
        try:
            document = bson.decode(data)
        except BSONError as e:
            logger.error(f"Error decoding BSON document: {e}")
            raise
        self.observe(document)

    def to_dict(self) -> dict:
        """Finalize and render the schema as plain Python data."""
        from export.serializer import to_dict
        return to_dict(self.finalize())

    def to_json(self, indent: Optional[int] = None) -> str:
        """Finalize and render the schema as JSON text."""
        from export.serializer import to_json
        return to_json(self.finalize(), indent=indent)

    def __repr__(self) -> str:
        return (
            f"SchemaParser(path={self.path!r}, count={self.count}, "
            f"fields={list(self.fields)})"
        )
