"""Column model — declarative description of how tax records become table rows.

A column model is an ordered tuple of column definitions. Each definition
is one of two tagged variants:

    AccessorColumn — reads one field off the record and formats it.
    ActionColumn   — reads the whole record and exposes row operations.

The model is plain data. It performs no I/O, holds no mutable state, and
can be reused against any collection without modification.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from taxdesk.domain.entities import TaxRecord


@dataclass(frozen=True)
class RowAction:
    """One operation offered on a table row."""

    kind: str
    record_id: str
    label: str


@dataclass(frozen=True)
class AccessorColumn:
    key: str
    header: str
    render: Callable[[Any], Any] = str


@dataclass(frozen=True)
class ActionColumn:
    header: str
    render: Callable[[TaxRecord], tuple[RowAction, ...]]
    id: str = "actions"


Column = AccessorColumn | ActionColumn


def render_cell(column: Column, record: TaxRecord) -> Any:
    """Apply one column definition to a record."""
    if isinstance(column, AccessorColumn):
        return column.render(getattr(record, column.key))
    return column.render(record)


def render_row_cells(columns: tuple[Column, ...], record: TaxRecord) -> tuple[Any, ...]:
    """Apply every column, in order, and collect the outputs positionally."""
    return tuple(render_cell(column, record) for column in columns)


def header_labels(columns: tuple[Column, ...]) -> tuple[str, ...]:
    return tuple(column.header for column in columns)


def _format_id(value: str) -> str:
    return f"#{value}"


def _edit_action(record: TaxRecord) -> tuple[RowAction, ...]:
    return (RowAction(kind="edit", record_id=record.id, label="Edit Record"),)


def tax_record_columns() -> tuple[Column, ...]:
    """Default column model for the tax records table."""
    return (
        AccessorColumn(key="id", header="ID", render=_format_id),
        AccessorColumn(key="name", header="Name"),
        AccessorColumn(key="country", header="Country"),
        ActionColumn(header="Actions", render=_edit_action),
    )
