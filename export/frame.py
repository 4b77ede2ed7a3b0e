"""
Tabular summaries of a schema tree.

Flattens a finalized SchemaParser into a pandas DataFrame with one row per
(field path, type), which is easier to filter and sort than the nested
tree when looking for sparse or duplicated fields.
"""
import logging

import numpy as np
import pandas as pd

from common.paths import path_depth, walk_fields

logger = logging.getLogger(__name__)

COLUMNS = [
    'path',
    'field',
    'type',
    'count',
    'probability',
    'field_count',
    'field_probability',
    'unique',
    'has_duplicates',
    'average_length',
    'min_length',
    'max_length',
    'depth',
]


def to_dataframe(schema) -> pd.DataFrame:
    """
    Flatten a finalized schema into one row per (path, type).

    Args:
        schema: A SchemaParser on which finalize() has been called.

    Returns:
        DataFrame with the columns in COLUMNS, in tree order.
    """
    rows = []
    for field in walk_fields(schema):
        for field_type in field.types.values():
            lengths = np.asarray(field_type.lengths, dtype=np.int64)
            rows.append({
                'path': field.path,
                'field': field.name,
                'type': field_type.name,
                'count': field_type.count,
                'probability': field_type.probability,
                'field_count': field.count,
                'field_probability': field.probability,
                'unique': field_type.unique,
                'has_duplicates': field_type.has_duplicates,
                'average_length': field_type.average_length,
                'min_length': int(lengths.min()) if lengths.size else pd.NA,
                'max_length': int(lengths.max()) if lengths.size else pd.NA,
                'depth': path_depth(field.path),
            })

    df = pd.DataFrame(rows, columns=COLUMNS)
    df['count'] = df['count'].astype('int64')
    df['field_count'] = df['field_count'].astype('int64')
    df['probability'] = df['probability'].astype(float)
    df['field_probability'] = df['field_probability'].astype(float)
    df['has_duplicates'] = df['has_duplicates'].astype(bool)
    df['unique'] = df['unique'].astype(pd.Int64Dtype())
    df['min_length'] = df['min_length'].astype(pd.Int64Dtype())
    df['max_length'] = df['max_length'].astype(pd.Int64Dtype())
    df['average_length'] = pd.to_numeric(df['average_length'], errors='coerce')
    logger.debug(f"Built schema summary with {len(df)} rows")
    return df


def sparse_fields(schema, threshold: float = 1.0) -> pd.DataFrame:
    """
    Fields present in fewer than ``threshold`` of their documents.

    Returns:
        One row per field path, sorted by field_probability ascending.
    """
    df = to_dataframe(schema)
    fields = df.drop_duplicates(subset=['path'])[['path', 'field_count', 'field_probability']]
    sparse = fields[fields['field_probability'] < threshold]
    return sparse.sort_values('field_probability').reset_index(drop=True)


def duplicated_fields(schema) -> pd.DataFrame:
    """Rows for (path, type) pairs whose values contain duplicates."""
    df = to_dataframe(schema)
    return df[df['has_duplicates']].reset_index(drop=True)
