"""Session endpoints — load state, retry, rendered table and live events."""

import dataclasses
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from taxdesk.application.schemas import (
    CountryResponse,
    SessionStatusResponse,
    TableResponse,
    TableRowResponse,
)
from taxdesk.application.services import SessionEventBroadcaster, TaxRecordSession
from taxdesk.domain.entities import LoadState
from taxdesk.domain.exceptions import SessionStateError
from taxdesk.infrastructure.dependencies import get_session_events, get_tax_record_session

router = APIRouter(tags=["Session"])


# ── Helpers ──────────────────────────────────────────────────────────

def _cell_to_json(cell: Any) -> Any:
    """Turn a rendered cell into plain JSON data."""
    if dataclasses.is_dataclass(cell) and not isinstance(cell, type):
        return dataclasses.asdict(cell)
    if isinstance(cell, (tuple, list)):
        return [_cell_to_json(c) for c in cell]
    return cell


def _to_status(session: TaxRecordSession) -> SessionStatusResponse:
    return SessionStatusResponse(
        state=session.state.value,
        error=session.error,
        total_records=session.total_records,
        retry_available=session.retry_available,
    )


# ── Endpoints ────────────────────────────────────────────────────────

@router.get("/session", response_model=SessionStatusResponse)
async def get_session_status(
    session: TaxRecordSession = Depends(get_tax_record_session),
) -> SessionStatusResponse:
    """Current load state, error banner text and record count."""
    return _to_status(session)


@router.post("/session/retry", response_model=SessionStatusResponse)
async def retry_load(
    session: TaxRecordSession = Depends(get_tax_record_session),
) -> SessionStatusResponse:
    """Re-run the full parallel load. Only available after a failed load."""
    try:
        await session.retry()
    except SessionStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _to_status(session)


@router.get("/table", response_model=TableResponse)
async def get_table(
    session: TaxRecordSession = Depends(get_tax_record_session),
) -> TableResponse:
    """Render the collection through the session's column model."""
    if session.state is not LoadState.READY:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Table is not available while session is {session.state.value}",
        )
    view = session.table()
    return TableResponse(
        header=list(view.header),
        rows=[
            TableRowResponse(key=row.key, cells=[_cell_to_json(c) for c in row.cells])
            for row in view.rows
        ],
        is_empty=view.is_empty,
        empty_message=view.empty_message,
        actions_enabled=not session.editor.is_active,
    )


@router.get("/countries", response_model=list[CountryResponse])
async def list_countries(
    session: TaxRecordSession = Depends(get_tax_record_session),
) -> list[CountryResponse]:
    """Choice list for the country field of the edit form."""
    return [CountryResponse.model_validate(c, from_attributes=True) for c in session.countries]


@router.get("/events")
async def stream_events(
    events: SessionEventBroadcaster = Depends(get_session_events),
) -> StreamingResponse:
    """Server-sent events for load state, edit state and replaced records."""
    return StreamingResponse(
        events.subscribe(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
