"""
AWS Lambda handler that infers a schema for newly exported documents.

Reads newline-delimited JSON (optionally gzipped) from S3, infers the
schema of every object under the prefix named in the event, and writes the
schema plus a flat per-field summary back to S3.

Environment variables:
    INPUT_BUCKET: S3 bucket containing exported documents
    OUTPUT_BUCKET: S3 bucket for schema output

Event:
    {"prefix": "exports/users/2024/01/15/"}

Requirements:
    - docschema (this package)
"""
import os
import logging

from aws import S3Handler
from export import to_dataframe

logger = logging.getLogger()
logger.setLevel(logging.INFO)


def format_output_key(prefix: str, suffix: str) -> str:
    """Format output S3 key based on the input prefix."""
    name = prefix.strip('/').replace('/', '_') or 'root'
    return f"schemas/{name}.{suffix}"


def lambda_handler(event, context):
    """Main Lambda entry point."""
    input_bucket = os.environ.get('INPUT_BUCKET')
    output_bucket = os.environ.get('OUTPUT_BUCKET')

    if not input_bucket or not output_bucket:
        raise ValueError("INPUT_BUCKET and OUTPUT_BUCKET environment variables required")

    prefix = event.get('prefix', '')
    logger.info(f"Inferring schema for s3://{input_bucket}/{prefix}")

    try:
        input_handler = S3Handler(bucket=input_bucket)
        output_handler = S3Handler(bucket=output_bucket)

        schema = input_handler.infer_schema(prefix)
        output_handler.write_schema(schema, format_output_key(prefix, 'schema.json'))

        summary = to_dataframe(schema)
        output_handler.write_json(
            summary.astype(object).where(summary.notna(), None).to_dict(orient='records'),
            format_output_key(prefix, 'summary.json'),
        )

        return {
            'statusCode': 200,
            'documents': schema.count,
            'fields': len(summary['path'].unique()),
        }

    except Exception as e:
        logger.error(f"Lambda error: {e}")
        raise
