"""Tax record session — orchestrates load, edit routing and reconciliation."""

import asyncio
import logging

from taxdesk.application.interfaces import RecordStore
from taxdesk.application.services.column_model import Column, tax_record_columns
from taxdesk.application.services.edit_transaction_controller import (
    EditTransactionController,
    SubmitResult,
)
from taxdesk.application.services.reconciliation import replace_record
from taxdesk.application.services.session_events import SessionEventBroadcaster
from taxdesk.application.services.table_renderer import TableView, render_table
from taxdesk.domain.entities import Country, EditTransaction, LoadState, TaxRecord
from taxdesk.domain.exceptions import (
    EntityNotFoundError,
    RecordStoreError,
    SessionStateError,
)
from taxdesk.infrastructure.logging.colored_logger import SessionLogger, SessionStage

logger = logging.getLogger(__name__)
slog = SessionLogger(__name__)

LOAD_FAILED_MESSAGE = "There was a problem fetching the tax records."


class TaxRecordSession:
    """Owns the collection state, the country list and the edit slot.

    Collection state is an immutable tuple, swapped wholesale after a
    successful load and after each reconciled save. Nothing else writes it.
    """

    def __init__(
        self,
        store: RecordStore,
        events: SessionEventBroadcaster | None = None,
        columns: tuple[Column, ...] | None = None,
    ):
        self._store = store
        self._events = events
        self._columns = columns if columns is not None else tax_record_columns()
        self._records: tuple[TaxRecord, ...] = ()
        self._countries: tuple[Country, ...] = ()
        self._state = LoadState.IDLE
        self._error: str | None = None
        self._editor = EditTransactionController(store, on_saved=self._reconcile)

    # ── State ────────────────────────────────────────────────────────

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def records(self) -> tuple[TaxRecord, ...]:
        return self._records

    @property
    def countries(self) -> tuple[Country, ...]:
        return self._countries

    @property
    def total_records(self) -> int:
        return len(self._records)

    @property
    def retry_available(self) -> bool:
        return self._state is LoadState.ERROR

    @property
    def editor(self) -> EditTransactionController:
        return self._editor

    @property
    def transaction(self) -> EditTransaction | None:
        return self._editor.transaction

    # ── Load ─────────────────────────────────────────────────────────

    async def load(self) -> None:
        """Fetch records and countries concurrently; both must succeed.

        Failures are converted into the ERROR state with both collections
        left empty. Nothing is retried automatically.
        """
        if self._state is LoadState.LOADING:
            logger.debug("Load already in progress — ignoring")
            return

        self._state = LoadState.LOADING
        self._error = None
        self._records = ()
        self._countries = ()
        await self._publish_load_state()

        slog.step_start(SessionStage.LOAD, "Loading records and countries")
        records_result, countries_result = await asyncio.gather(
            self._store.list_records(),
            self._store.list_countries(),
            return_exceptions=True,
        )

        failures = [
            r for r in (records_result, countries_result) if isinstance(r, BaseException)
        ]
        if failures:
            for failure in failures:
                slog.step_error(SessionStage.LOAD, "Error loading data", error=failure)
            self._state = LoadState.ERROR
            self._error = LOAD_FAILED_MESSAGE
            await self._publish_load_state()
            unexpected = [f for f in failures if not isinstance(f, RecordStoreError)]
            if unexpected:
                raise unexpected[0]
            return

        self._records = tuple(records_result)
        self._countries = tuple(countries_result)
        self._state = LoadState.READY
        slog.step_complete(
            SessionStage.LOAD,
            "Data loaded",
            records=len(self._records),
            countries=len(self._countries),
        )
        await self._publish_load_state()

    async def retry(self) -> None:
        """Re-run the full parallel load. Only offered in the ERROR state."""
        if self._state is not LoadState.ERROR:
            raise SessionStateError("retry", self._state.value)
        logger.info("Retrying initial load")
        await self.load()

    # ── Rendering ────────────────────────────────────────────────────

    def table(self) -> TableView:
        return render_table(self._columns, self._records)

    # ── Editing ──────────────────────────────────────────────────────

    async def request_edit(self, record_id: str) -> EditTransaction:
        """Open the edit transaction for one record of the collection."""
        if self._state is not LoadState.READY:
            raise SessionStateError("edit", self._state.value)
        record = next((r for r in self._records if r.id == record_id), None)
        if record is None:
            raise EntityNotFoundError("TaxRecord", record_id)
        transaction = self._editor.open(record, self._countries)
        await self._publish_edit_state()
        return transaction

    async def update_edit(self, *, name: str | None = None, country: str | None = None) -> EditTransaction | None:
        if name is not None:
            self._editor.set_name(name)
        if country is not None:
            self._editor.set_country(country)
        await self._publish_edit_state()
        return self._editor.transaction

    async def cancel_edit(self) -> None:
        self._editor.cancel()
        await self._publish_edit_state()

    async def submit_edit(self) -> SubmitResult:
        result = await self._editor.submit()
        await self._publish_edit_state()
        return result

    async def _reconcile(self, updated: TaxRecord) -> None:
        """Swap the saved record into the collection, keeping order and length."""
        replaced = replace_record(self._records, updated)
        if replaced is self._records:
            logger.warning("Saved record %s is no longer in the collection — nothing replaced", updated.id)
            return
        self._records = replaced
        slog.step_complete(SessionStage.RECONCILE, "Record replaced", record_id=updated.id)
        await self._publish("record_replaced", {
            "id": updated.id,
            "name": updated.name,
            "country": updated.country,
        })

    # ── Events ───────────────────────────────────────────────────────

    async def _publish_load_state(self) -> None:
        await self._publish("load_state", {
            "state": self._state.value,
            "error": self._error,
            "total_records": self.total_records,
        })

    async def _publish_edit_state(self) -> None:
        transaction = self._editor.transaction
        await self._publish("edit_state", {
            "phase": self._editor.phase.value,
            "record_id": transaction.record_id if transaction else None,
            "validation_error": transaction.validation_error if transaction else None,
        })

    async def _publish(self, event_type: str, data: dict) -> None:
        if self._events is not None:
            await self._events.broadcast(event_type, data)
