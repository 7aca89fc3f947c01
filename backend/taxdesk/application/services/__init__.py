from .column_model import AccessorColumn, ActionColumn, Column, RowAction, tax_record_columns
from .table_renderer import RowSequence, TableRow, TableView, render_table
from .reconciliation import replace_record
from .edit_transaction_controller import EditTransactionController, SubmitResult, validate_edit
from .session_events import SessionEventBroadcaster
from .session_controller import TaxRecordSession

__all__ = [
    "AccessorColumn",
    "ActionColumn",
    "Column",
    "RowAction",
    "tax_record_columns",
    "RowSequence",
    "TableRow",
    "TableView",
    "render_table",
    "replace_record",
    "EditTransactionController",
    "SubmitResult",
    "validate_edit",
    "SessionEventBroadcaster",
    "TaxRecordSession",
]
