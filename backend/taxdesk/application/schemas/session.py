"""Pydantic response and request schemas for the session API."""

from typing import Any

from pydantic import BaseModel


class SessionStatusResponse(BaseModel):
    """Load state of the table session."""

    state: str
    error: str | None
    total_records: int
    retry_available: bool


class TableRowResponse(BaseModel):
    key: str
    cells: list[Any]


class TableResponse(BaseModel):
    """Rendered table, or the explicit empty state."""

    header: list[str]
    rows: list[TableRowResponse]
    is_empty: bool
    empty_message: str | None
    actions_enabled: bool


class CountryResponse(BaseModel):
    id: str
    name: str
    code: str | None = None

    model_config = {"from_attributes": True}


class TaxRecordResponse(BaseModel):
    id: str
    name: str
    country: str
    created_at: str | None = None
    avatar: str | None = None

    model_config = {"from_attributes": True}


class EditTransactionResponse(BaseModel):
    """Current contents of the edit slot."""

    phase: str
    record_id: str | None = None
    name: str | None = None
    country: str | None = None
    validation_error: str | None = None
    can_cancel: bool = False
    can_submit: bool = False


class EditFieldsUpdate(BaseModel):
    """Working-field changes — omitted fields are left untouched."""

    name: str | None = None
    country: str | None = None


class SubmitResponse(BaseModel):
    outcome: str
    record: TaxRecordResponse | None = None
    transaction: EditTransactionResponse
