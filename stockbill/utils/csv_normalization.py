"""CSV column and cell normalization utilities."""

from typing import Any, Optional

import numpy as np
import pandas as pd

def normalize_column_name(name: str) -> str:
    """Normalize a CSV column name.

    Collapses repeated whitespace and strips the ends; case is preserved.

    Examples:
        >>> normalize_column_name(" Selling  Price ")
        'Selling Price'
    """
    return ' '.join(str(name).split())

def normalize_dataframe_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Normalize all column names in a DataFrame."""
    return df.rename(columns=normalize_column_name)

def normalize_cell(value: Any) -> Any:
    """Turn pandas/numpy cell values into plain Python values.

    NaN-like values become None and numpy scalars become native numbers.
    Strings are stripped; blank strings become None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if pd.isna(value):
        return None
    if isinstance(value, (np.integer, np.floating)):
        return value.item()
    return value

def parse_int(value: Any) -> Optional[int]:
    """Parse a whole number cell, None when empty or not integral."""
    value = normalize_cell(value)
    if value is None:
        return None
    try:
        number = float(str(value).replace(',', ''))
    except ValueError:
        return None
    if not number.is_integer():
        return None
    return int(number)

