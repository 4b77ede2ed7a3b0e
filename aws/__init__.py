"""AWS utilities for reading documents and writing schemas."""
from .s3 import S3Handler

__all__ = ['S3Handler']
