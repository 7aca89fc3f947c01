"""Table renderer — folds a column model over a sequence of tax records."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from taxdesk.application.services.column_model import Column, header_labels, render_row_cells
from taxdesk.domain.entities import TaxRecord

EMPTY_MESSAGE = "No records found."


@dataclass(frozen=True)
class TableRow:
    """One rendered row. ``key`` is the record id, never the row position."""

    key: str
    cells: tuple[Any, ...]


class RowSequence:
    """Lazy, restartable sequence of rendered rows.

    Rows are produced on iteration and nothing is cached, so every pass
    re-renders from the records it was built with.
    """

    __slots__ = ("_columns", "_records")

    def __init__(self, columns: tuple[Column, ...], records: tuple[TaxRecord, ...]):
        self._columns = columns
        self._records = records

    def __iter__(self) -> Iterator[TableRow]:
        for record in self._records:
            yield TableRow(key=record.id, cells=render_row_cells(self._columns, record))

    def __len__(self) -> int:
        return len(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RowSequence):
            return NotImplemented
        return tuple(self) == tuple(other)

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"RowSequence(rows={len(self)})"


@dataclass(frozen=True)
class TableView:
    header: tuple[str, ...]
    rows: RowSequence
    empty_message: str | None = None

    @property
    def is_empty(self) -> bool:
        return len(self.rows) == 0


def render_table(columns: tuple[Column, ...], records: Sequence[TaxRecord]) -> TableView:
    """Render the header and body for ``records``.

    Zero records yields an explicit empty view (``is_empty`` with a message)
    rather than a header-only grid.
    """
    rows = RowSequence(columns, tuple(records))
    if len(rows) == 0:
        return TableView(header=header_labels(columns), rows=rows, empty_message=EMPTY_MESSAGE)
    return TableView(header=header_labels(columns), rows=rows)
