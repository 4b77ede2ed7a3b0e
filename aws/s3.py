"""S3 utilities for feeding stored documents into a schema."""
import boto3
import botocore
import gzip
import json
import logging
from collections.abc import Mapping
from typing import Any, Iterator, List, Optional

from bson import json_util
from bson.errors import BSONError

from infer import SchemaParser

logger = logging.getLogger(__name__)

GZIP_MAGIC = b'\x1f\x8b'


class S3Handler:
    """
    Utility class for reading documents from S3 and writing schemas back.

    Objects are read as newline-delimited JSON (MongoDB Extended JSON is
    understood). Gzipped objects are detected from their content, so
    "export.json.gz" and "export.json" are handled the same way.

    Args:
        bucket: S3 bucket name
        validate: Whether to validate bucket exists on init (default: True)

    Example:
        >>> handler = S3Handler("my-bucket")
        >>> schema = handler.infer_schema("exports/users/")
        >>> handler.write_schema(schema, "schemas/users.json")
    """

    def __init__(self, bucket: str, validate: bool = True):
        if not bucket:
            raise ValueError("bucket cannot be empty")

        self.bucket = bucket
        self.s3_client = boto3.client('s3')

        if validate:
            self._validate_bucket()

    def _validate_bucket(self):
        """Validate bucket exists and is accessible."""
        try:
            self.s3_client.head_bucket(Bucket=self.bucket)
        except botocore.exceptions.ClientError as e:
            error_code = e.response['Error']['Code']
            if error_code == '404':
                raise ValueError(f"Bucket '{self.bucket}' does not exist")
            elif error_code == '403':
                raise ValueError(f"No permission to access bucket '{self.bucket}'")
            raise

    def read_bytes(self, key: str) -> bytes:
        """
        Read an object from S3, decompressing it if it is gzipped.

        Args:
            key: S3 object key

        Returns:
            Raw (decompressed) object body
        """
        try:
            response = self.s3_client.get_object(Bucket=self.bucket, Key=key)
            body = response['Body'].read()
        except Exception as e:
            logger.error(f"Error reading s3://{self.bucket}/{key}: {e}")
            raise

        if body[:2] == GZIP_MAGIC:
            return gzip.decompress(body)
        return body

    def read_documents(self, key: str) -> Iterator[dict]:
        """
        Read newline-delimited JSON documents from one object.

        Args:
            key: S3 object key

        Yields:
            Decoded documents, one per non-blank line

        Raises:
            ValueError: If a line is not valid JSON or not a JSON object
        """
        text = self.read_bytes(key).decode('utf-8')
        for line_number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                document = json_util.loads(line)
            except (ValueError, BSONError) as e:
                logger.error(
                    f"Error decoding line {line_number} of s3://{self.bucket}/{key}: {e}"
                )
                raise

            if not isinstance(document, Mapping):
                logger.error(
                    f"Line {line_number} of s3://{self.bucket}/{key} is not a JSON object"
                )
                raise ValueError(
                    f"Expected a JSON object, got {type(document).__name__}"
                )
            yield document

    def list_objects(self, prefix: str = "", max_keys: int = 1000) -> List[str]:
        """
        List objects in bucket with optional prefix.

        Args:
            prefix: Key prefix to filter by
            max_keys: Maximum number of keys to return

        Returns:
            List of object keys
        """
        try:
            paginator = self.s3_client.get_paginator('list_objects_v2')
            keys = []

            for page in paginator.paginate(
                Bucket=self.bucket,
                Prefix=prefix,
                PaginationConfig={'MaxItems': max_keys}
            ):
                for obj in page.get('Contents', []):
                    keys.append(obj['Key'])

            return keys
        except Exception as e:
            logger.error(f"Error listing objects in s3://{self.bucket}/{prefix}: {e}")
            raise

    def infer_schema(
        self,
        prefix: str = "",
        parser: Optional[SchemaParser] = None,
        max_keys: int = 1000,
    ) -> SchemaParser:
        """
        Observe every document stored under a prefix.

        Args:
            prefix: Key prefix to read from
            parser: Parser to add documents to; a new one is created if None
            max_keys: Maximum number of objects to read

        Returns:
            The finalized parser
        """
        parser = parser if parser is not None else SchemaParser()
        keys = self.list_objects(prefix, max_keys=max_keys)

        for key in keys:
            before = parser.count
            for document in self.read_documents(key):
                parser.observe(document)
            logger.info(
                f"Observed {parser.count - before} documents from s3://{self.bucket}/{key}"
            )

        return parser.finalize()

    def write_schema(self, parser: SchemaParser, key: str, indent: Optional[int] = None):
        """
        Write a schema to S3 as JSON.

        Args:
            parser: Parser to finalize and serialize
            key: S3 object key
            indent: JSON indentation (default: None for compact)
        """
        if not key:
            raise ValueError("key cannot be empty")

        try:
            body = parser.to_json(indent=indent)
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body.encode('utf-8'),
                ContentType='application/json'
            )
            logger.info(f"Wrote schema to s3://{self.bucket}/{key}")
        except Exception as e:
            logger.error(f"Error writing schema to s3://{self.bucket}/{key}: {e}")
            raise

    def write_json(self, data: Any, key: str, indent: Optional[int] = None):
        """
        Write arbitrary JSON (e.g. a summary DataFrame's records) to S3.

        Args:
            data: Data to serialize as JSON
            key: S3 object key
            indent: JSON indentation (default: None for compact)
        """
        if not key:
            raise ValueError("key cannot be empty")

        try:
            body = json.dumps(data, indent=indent, default=str)
            self.s3_client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=body.encode('utf-8'),
                ContentType='application/json'
            )
            logger.info(f"Wrote JSON to s3://{self.bucket}/{key}")
        except Exception as e:
            logger.error(f"Error writing JSON to s3://{self.bucket}/{key}: {e}")
            raise
