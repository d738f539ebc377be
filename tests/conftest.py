"""Shared test fixtures for heatgrid."""

import numpy as np
import pandas as pd
import pytest

from heatgrid.core.matrix import format_data
from heatgrid.render.surface import RecordingSurface
from heatgrid.view import MatrixView, ViewOptions


@pytest.fixture
def square_matrix():
    """2x2 matrix without labels."""
    return format_data({"matrix": [[1, 2], [3, 4]]})


@pytest.fixture
def labeled_matrix():
    """3x4 matrix with row and column labels."""
    return format_data({
        "matrix": [
            [0.0, 1.0, 2.0, 3.0],
            [4.0, 5.0, 6.0, 7.0],
            [8.0, 9.0, 10.0, 11.0],
        ],
        "rows": ["gene_A", "gene_B", "gene_C"],
        "columns": ["s1", "s2", "s3", "s4"],
    })


@pytest.fixture
def nan_matrix():
    """Matrix with NaN cells."""
    return format_data({"matrix": [[1.0, np.nan, 3.0], [np.nan, 5.0, 6.0]]})


@pytest.fixture
def expression_df():
    """5x3 DataFrame with named index and columns."""
    rng = np.random.default_rng(42)
    return pd.DataFrame(
        rng.standard_normal((5, 3)),
        index=[f"gene_{i}" for i in range(5)],
        columns=["ctrl", "drug_A", "drug_B"],
    )


@pytest.fixture
def make_view():
    """Factory for an initialized MatrixView drawing on a RecordingSurface."""

    def _make(data, width=400.0, height=400.0, surface=None, **options):
        view = MatrixView(
            width,
            height,
            surface if surface is not None else RecordingSurface(),
            data,
            ViewOptions(**options),
        )
        view.init()
        return view

    return _make
