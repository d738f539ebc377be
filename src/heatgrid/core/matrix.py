"""FormattedMatrix: validated, immutable matrix container and its cell entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np
import pandas as pd

from .validation import validate_colormap_name, validate_labels, validate_matrix


@dataclass(frozen=True)
class MatrixEntry:
    """One matrix cell: column index ``x``, row index ``y`` and value ``z``."""

    x: int
    y: int
    z: float
    row_label: str | None = None
    col_label: str | None = None


@dataclass(frozen=True)
class FormattedMatrix:
    """Immutable matrix in entry-list form, one entry per cell in row-major order.

    Never patched in place: updates build a new instance.
    """

    entries: tuple[MatrixEntry, ...]
    nrow: int
    ncol: int
    zmin: float
    zmax: float
    rows: tuple[str, ...] | None = None
    columns: tuple[str, ...] | None = None
    colormap_name: str | None = None
    labels: bool | None = None

    @property
    def values(self) -> np.ndarray:
        """Float64 matrix (nrow, ncol) rebuilt from the entries."""
        return np.array([e.z for e in self.entries], dtype=np.float64).reshape(
            self.nrow, self.ncol
        )

    @property
    def shape(self) -> tuple[int, int]:
        return (self.nrow, self.ncol)

    def append(self, other: FormattedMatrix) -> FormattedMatrix:
        """Return a new matrix with the rows of ``other`` added below this one."""
        if other.ncol != self.ncol:
            raise ValueError(
                f"Cannot append a matrix with {other.ncol} columns to one with "
                f"{self.ncol} columns."
            )
        if (self.rows is None) != (other.rows is None):
            raise ValueError(
                "Cannot append: either both matrices have row labels or neither does."
            )
        rows = self.rows + other.rows if self.rows is not None else None
        values = np.vstack([self.values, other.values])
        return _build(
            values,
            rows=rows,
            columns=self.columns,
            colormap_name=self.colormap_name,
            labels=self.labels,
        )


def finite_range(values: np.ndarray) -> tuple[float, float]:
    """Return (min, max) of all finite values, or (0, 1) when there are none."""
    finite = values[np.isfinite(values)]
    if len(finite) == 0:
        return (0.0, 1.0)
    return (float(finite.min()), float(finite.max()))


def _build(
    values: np.ndarray,
    rows: tuple[str, ...] | None,
    columns: tuple[str, ...] | None,
    colormap_name: str | None,
    labels: bool | None,
) -> FormattedMatrix:
    nrow, ncol = values.shape
    entries = tuple(
        MatrixEntry(
            x=j,
            y=i,
            z=float(values[i, j]),
            row_label=rows[i] if rows is not None else None,
            col_label=columns[j] if columns is not None else None,
        )
        for i in range(nrow)
        for j in range(ncol)
    )
    zmin, zmax = finite_range(values)
    return FormattedMatrix(
        entries=entries,
        nrow=nrow,
        ncol=ncol,
        zmin=zmin,
        zmax=zmax,
        rows=rows,
        columns=columns,
        colormap_name=colormap_name,
        labels=labels,
    )


def _index_labels(index: pd.Index) -> list[str] | None:
    """DataFrame axis labels, or None for a default integer index."""
    if isinstance(index, pd.RangeIndex) and index.start == 0 and index.step == 1:
        return None
    return [str(v) for v in index]


def format_data(raw: Mapping[str, Any] | pd.DataFrame) -> FormattedMatrix:
    """Turn raw input into a FormattedMatrix.

    Parameters
    ----------
    raw : mapping or DataFrame
        Either ``{"matrix": [[...], ...], "rows": [...], "columns": [...],
        "colormap": "Purples", "labels": True}`` (everything but ``matrix``
        optional), or a numeric DataFrame whose non-default index and
        columns become the row and column labels.

    Raises
    ------
    TypeError
        Non-numeric values or an unsupported input type.
    ValueError
        Empty or ragged matrix, label counts that don't match the shape,
        or an unknown colormap name.
    """
    if isinstance(raw, pd.DataFrame):
        raw = {
            "matrix": raw,
            "rows": _index_labels(raw.index),
            "columns": _index_labels(raw.columns),
        }
    elif not isinstance(raw, Mapping):
        raise TypeError(
            f"Expected a mapping with a 'matrix' key or a DataFrame, "
            f"got {type(raw).__name__}."
        )
    if "matrix" not in raw:
        raise ValueError("Input is missing the 'matrix' key.")

    values = validate_matrix(raw["matrix"])
    nrow, ncol = values.shape
    rows = validate_labels(raw.get("rows"), nrow, "row")
    columns = validate_labels(raw.get("columns"), ncol, "column")

    colormap_name = raw.get("colormap")
    if colormap_name is not None:
        validate_colormap_name(colormap_name)

    labels = raw.get("labels")
    return _build(
        values,
        rows=rows,
        columns=columns,
        colormap_name=colormap_name,
        labels=bool(labels) if labels is not None else None,
    )
