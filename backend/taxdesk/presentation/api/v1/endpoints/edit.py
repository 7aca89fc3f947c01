"""Edit transaction endpoints — open, change, submit and cancel one edit."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from taxdesk.application.schemas import (
    EditFieldsUpdate,
    EditTransactionResponse,
    SubmitResponse,
    TaxRecordResponse,
)
from taxdesk.application.services import EditTransactionController, TaxRecordSession
from taxdesk.domain.entities import EditPhase
from taxdesk.domain.exceptions import (
    EntityNotFoundError,
    SessionStateError,
    TransactionStateError,
)
from taxdesk.infrastructure.dependencies import get_tax_record_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Edit"])


def _to_response(editor: EditTransactionController) -> EditTransactionResponse:
    transaction = editor.transaction
    if transaction is None:
        return EditTransactionResponse(phase=EditPhase.CLOSED.value)
    return EditTransactionResponse(
        phase=transaction.phase.value,
        record_id=transaction.record_id,
        name=transaction.name,
        country=transaction.country,
        validation_error=transaction.validation_error,
        can_cancel=not transaction.is_submitting,
        can_submit=not transaction.is_submitting,
    )


@router.post("/records/{record_id}/edit", response_model=EditTransactionResponse)
async def open_edit(
    record_id: str,
    session: TaxRecordSession = Depends(get_tax_record_session),
) -> EditTransactionResponse:
    """Open the edit form for one record."""
    if session.editor.is_active:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Another record is already being edited",
        )
    try:
        await session.request_edit(record_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except (SessionStateError, TransactionStateError) as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _to_response(session.editor)


@router.get("/edit", response_model=EditTransactionResponse)
async def get_edit(
    session: TaxRecordSession = Depends(get_tax_record_session),
) -> EditTransactionResponse:
    return _to_response(session.editor)


@router.patch("/edit", response_model=EditTransactionResponse)
async def update_edit(
    data: EditFieldsUpdate,
    session: TaxRecordSession = Depends(get_tax_record_session),
) -> EditTransactionResponse:
    """Change the working name and/or country."""
    try:
        await session.update_edit(name=data.name, country=data.country)
    except TransactionStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _to_response(session.editor)


@router.post("/edit/submit", response_model=SubmitResponse)
async def submit_edit(
    session: TaxRecordSession = Depends(get_tax_record_session),
) -> SubmitResponse:
    """Validate and save the edit; failures are reported inline on the transaction."""
    try:
        result = await session.submit_edit()
    except TransactionStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    logger.debug("Edit submit finished with outcome %s", result.outcome.value)
    record = (
        TaxRecordResponse.model_validate(result.record, from_attributes=True)
        if result.record is not None
        else None
    )
    return SubmitResponse(
        outcome=result.outcome.value,
        record=record,
        transaction=_to_response(session.editor),
    )


@router.post("/edit/cancel", response_model=EditTransactionResponse)
async def cancel_edit(
    session: TaxRecordSession = Depends(get_tax_record_session),
) -> EditTransactionResponse:
    """Discard the edit. Refused while the save is in flight."""
    try:
        await session.cancel_edit()
    except TransactionStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _to_response(session.editor)
