"""Input validation with clear error messages."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
import pandas as pd


def _preview(items: Sequence) -> str:
    items = list(items)
    return f"{items[:5]}" + (f" (and {len(items) - 5} more)" if len(items) > 5 else "")


def validate_matrix(data: Any) -> np.ndarray:
    """Validate a 2-D numeric matrix and return it as a float64 array.

    Accepts a list of row lists, a 2-D numpy array, or a pandas DataFrame.
    NaN marks a missing cell; infinities are rejected.
    """
    if isinstance(data, pd.DataFrame):
        numeric_df = data.select_dtypes(include=[np.number])
        if numeric_df.shape[1] != data.shape[1]:
            non_numeric = [c for c in data.columns if c not in numeric_df.columns]
            raise TypeError(
                f"All columns must be numeric. Non-numeric columns: {_preview(non_numeric)}"
            )
        data = data.values
    elif isinstance(data, (str, bytes)) or not isinstance(data, (Sequence, np.ndarray)):
        raise TypeError(
            f"Expected a matrix (list of rows, 2-D array or DataFrame), "
            f"got {type(data).__name__}."
        )

    if not isinstance(data, np.ndarray):
        if len(data) == 0:
            raise ValueError("Matrix is empty. Provide at least one row and one column.")
        if not all(isinstance(row, (Sequence, np.ndarray)) for row in data):
            raise ValueError("Matrix must be 2-D: every row must be a sequence of numbers.")
        lengths = [len(row) for row in data]
        ragged = [i for i, n in enumerate(lengths) if n != lengths[0]]
        if ragged:
            raise ValueError(
                f"Matrix rows must all have the same length ({lengths[0]}). "
                f"Ragged rows: {_preview(ragged)}"
            )

    try:
        values = np.asarray(data, dtype=np.float64)
    except (TypeError, ValueError):
        raise TypeError("Matrix values must all be numeric.") from None

    if values.ndim != 2:
        raise ValueError(f"Matrix must be 2-D, got {values.ndim} dimension(s).")
    if values.shape[0] == 0 or values.shape[1] == 0:
        raise ValueError("Matrix is empty. Provide at least one row and one column.")
    if np.isinf(values).any():
        raise ValueError("Matrix contains infinite values. Use NaN for missing cells.")
    return values


def validate_labels(labels: Any, expected: int, axis_name: str) -> tuple[str, ...] | None:
    """Validate an optional label sequence against the matrix shape.

    Parameters
    ----------
    labels : sequence of labels, or None
    expected : number of rows or columns in the matrix
    axis_name : 'row' or 'column' for error messages
    """
    if labels is None:
        return None
    if isinstance(labels, (str, bytes)):
        raise TypeError(
            f"{axis_name} labels must be a sequence of strings, got a single string."
        )
    labels = tuple(str(label) for label in labels)
    if len(labels) != expected:
        raise ValueError(
            f"Got {len(labels)} {axis_name} labels for a matrix with "
            f"{expected} {axis_name}s."
        )
    return labels


def validate_colormap_name(name: str) -> str:
    """Validate that a matplotlib colormap name exists."""
    import matplotlib.pyplot as plt

    try:
        plt.get_cmap(name)
    except ValueError:
        raise ValueError(
            f"Unknown colormap '{name}'. Use a matplotlib colormap name "
            f"like 'Purples', 'Blues', 'Greens', 'Oranges', 'Reds' or 'Greys'."
        ) from None
    return name
