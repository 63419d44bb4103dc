"""
Functions for loading rental listings from tabular files.
"""

import os
import logging
import pandas as pd

from ..core.data_model import Property
from ..pipeline_config import DATA_CONFIG, DataLoadError

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = ['latitude', 'longitude', 'rent_per_sqft', 'rent']
INTEGER_FIELDS = ['beds', 'baths', 'age_of_listing_in_days']
TEXT_FIELDS = ['address', 'location', 'city']


def _resolve_columns(df, columns):
    """
    Map field names to the actual DataFrame columns, ignoring case.

    Parameters
    ----------
    df : DataFrame
        Loaded data
    columns : dict
        Mapping of field name to expected source column name

    Returns
    -------
    dict
        Mapping of field name to the matching column, for fields present
    """
    lookup = {str(col).strip().lower(): col for col in df.columns}
    resolved = {}
    for field, source in columns.items():
        for candidate in (source, field):
            col = lookup.get(candidate.lower())
            if col is not None:
                resolved[field] = col
                break
    return resolved


def _integral(value):
    # fractional counts are treated like unparsable values
    if pd.isna(value) or not float(value).is_integer():
        return None
    return int(value)


def _optional(value, cast):
    if pd.isna(value):
        return None
    return cast(value)


def properties_from_dataframe(df, columns=None):
    """
    Convert a DataFrame of listings to Property objects.

    Numeric values that are missing or fail to parse become None, as do
    non-integral values in count fields (beds, baths, listing age).

    Parameters
    ----------
    df : DataFrame
        Listings data
    columns : dict, optional
        Mapping of field name to source column name (defaults to DATA_CONFIG)

    Returns
    -------
    list of Property
        One Property per row, in row order
    """
    columns = columns or DATA_CONFIG['columns']
    resolved = _resolve_columns(df, columns)

    if 'latitude' not in resolved and 'longitude' not in resolved:
        raise DataLoadError("Could not identify latitude and longitude columns")

    data = {}
    for field, col in resolved.items():
        if field in NUMERIC_FIELDS or field in INTEGER_FIELDS:
            data[field] = pd.to_numeric(df[col], errors='coerce')
        else:
            data[field] = df[col]

    properties = []
    for i in range(len(df)):
        kwargs = {}
        for field, series in data.items():
            value = series.iloc[i]
            if field in NUMERIC_FIELDS:
                kwargs[field] = _optional(value, float)
            elif field in INTEGER_FIELDS:
                kwargs[field] = _integral(value)
            else:
                kwargs[field] = _optional(value, str)
        properties.append(Property(**kwargs))

    return properties


def load_properties(filepath, columns=None):
    """
    Load listings from a CSV file.

    Parameters
    ----------
    filepath : str
        Path to the CSV file
    columns : dict, optional
        Mapping of field name to source column name

    Returns
    -------
    list of Property
        Loaded listings
    """
    if not os.path.exists(filepath):
        raise DataLoadError(f"File not found: {filepath}")

    _, ext = os.path.splitext(filepath)
    if ext.lower() not in ['.csv', '.txt']:
        raise DataLoadError(f"Unsupported file format: {ext}")

    try:
        df = pd.read_csv(filepath)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise DataLoadError(f"Could not read {filepath}: {e}") from e

    properties = properties_from_dataframe(df, columns)
    logger.debug(f"{len(properties)} listings loaded from {filepath}")
    return properties


__all__ = ['load_properties', 'properties_from_dataframe']
