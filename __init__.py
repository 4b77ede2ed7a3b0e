"""
Docschema - Probabilistic schema inference for JSON and BSON documents.

Subpackages:
    - docschema.infer: Observe documents and build the schema tree
    - docschema.export: Render a schema as JSON or a pandas DataFrame
    - docschema.common: Path helpers shared across modules
    - docschema.aws: AWS utilities (reading documents from S3)

Example:
    >>> from infer import SchemaParser
    >>> from export import to_dataframe
    >>> from aws import S3Handler
"""
__version__ = "0.1.0"
