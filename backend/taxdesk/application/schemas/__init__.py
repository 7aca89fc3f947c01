from .tax_record import CountryPayload, TaxRecordPayload, TaxRecordUpdate
from .session import (
    CountryResponse,
    EditFieldsUpdate,
    EditTransactionResponse,
    SessionStatusResponse,
    SubmitResponse,
    TableResponse,
    TableRowResponse,
    TaxRecordResponse,
)

__all__ = [
    "CountryPayload",
    "TaxRecordPayload",
    "TaxRecordUpdate",
    "CountryResponse",
    "EditFieldsUpdate",
    "EditTransactionResponse",
    "SessionStatusResponse",
    "SubmitResponse",
    "TableResponse",
    "TableRowResponse",
    "TaxRecordResponse",
]
