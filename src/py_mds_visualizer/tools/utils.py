"""
Utility functions for serializing callback results.
"""

import dataclasses
from typing import Any, Dict

import numpy as np
import pandas as pd


def _serialize_result(result: Any) -> Dict:
    """Safely serialize callback results to JSON-compatible format.

    Handles numpy arrays and scalars, pandas objects, dataclasses (view
    states, traces) and sparse matrices.

    Args:
        result: Any Python object to serialize

    Returns:
        JSON-compatible dictionary/list/primitive
    """
    if isinstance(result, dict):
        return {str(k): _serialize_result(v) for k, v in result.items()}
    elif isinstance(result, (list, tuple)):
        return [_serialize_result(item) for item in result]
    elif isinstance(result, np.ndarray):
        return result.tolist()
    elif isinstance(result, (np.integer, np.floating, np.bool_)):
        return result.item()
    elif isinstance(result, pd.Series):
        return result.tolist()
    elif isinstance(result, pd.DataFrame):
        return result.to_dict("records")
    elif dataclasses.is_dataclass(result) and not isinstance(result, type):
        return {f.name: _serialize_result(getattr(result, f.name)) for f in dataclasses.fields(result)}
    elif hasattr(result, "toarray"):
        # Sparse matrix
        return result.toarray().tolist()
    elif isinstance(result, (str, int, float, bool, type(None))):
        return result
    else:
        return str(result)
