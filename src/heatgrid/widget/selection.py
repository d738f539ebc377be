"""SelectionState: single-slot row/column selection + callback registry."""

from __future__ import annotations

from typing import Callable, Any


SelectionCallback = Callable[[list, list], Any]


def _toggle(current: list[int], target: int) -> list[int]:
    """Selecting the selected index clears it; any other index replaces it."""
    if target in current:
        return []
    return [target]


class SelectionState:
    """Holds at most one selected row and one selected column.

    Callbacks registered with :meth:`on_select` receive
    ``(selected_rows, selected_cols)`` after every change.
    """

    def __init__(self) -> None:
        self._rows: list[int] = []
        self._cols: list[int] = []
        self._callbacks: list[SelectionCallback] = []

    @property
    def value(self) -> dict[str, list]:
        """Current selection as {rows: [...], cols: [...]}."""
        return {"rows": list(self._rows), "cols": list(self._cols)}

    @property
    def selected_rows(self) -> list[int]:
        return list(self._rows)

    @property
    def selected_cols(self) -> list[int]:
        return list(self._cols)

    def is_empty(self) -> bool:
        return not self._rows and not self._cols

    def is_lit(self, x: int, y: int) -> bool:
        """True if the cell at column ``x``, row ``y`` is in the spotlight."""
        return x in self._cols or y in self._rows

    def toggle_row(self, index: int) -> None:
        self.update(_toggle(self._rows, index), self._cols)

    def toggle_col(self, index: int) -> None:
        self.update(self._rows, _toggle(self._cols, index))

    def update(self, rows: list[int], cols: list[int]) -> None:
        """Replace the selection and notify all callbacks."""
        if len(rows) > 1 or len(cols) > 1:
            raise ValueError("At most one row and one column can be selected.")
        self._rows = list(rows)
        self._cols = list(cols)
        for cb in self._callbacks:
            cb(list(self._rows), list(self._cols))

    def clear(self) -> None:
        """Clear the selection."""
        self.update([], [])

    def on_select(self, callback: SelectionCallback) -> None:
        """Register a callback: fn(selected_rows, selected_cols)."""
        self._callbacks.append(callback)

    def __repr__(self) -> str:
        return f"SelectionState(rows={self._rows}, cols={self._cols})"
