from .tax_record import TaxRecord, Country
from .edit_transaction import EditPhase, EditTransaction
from .session import LoadState, SubmitOutcome

__all__ = [
    "TaxRecord",
    "Country",
    "EditPhase",
    "EditTransaction",
    "LoadState",
    "SubmitOutcome",
]
