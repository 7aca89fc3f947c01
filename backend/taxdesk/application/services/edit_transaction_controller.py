"""Edit transaction controller — owns the single "currently editing" slot.

Phases and transitions:

    CLOSED     --open(record)-->        OPEN
    OPEN       --set_name/country-->    OPEN        (validation error cleared)
    OPEN       --cancel()-->            CLOSED
    OPEN       --submit(), invalid-->   OPEN        (validation error set, no network call)
    OPEN       --submit(), valid-->     SUBMITTING
    SUBMITTING --update succeeded-->    CLOSED      (saved record reconciled first)
    SUBMITTING --update failed-->       OPEN        (working fields preserved)

Cancel is refused while SUBMITTING, and a second submit while SUBMITTING
is ignored, so at most one update call is in flight at any time.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from taxdesk.application.interfaces import RecordStore
from taxdesk.application.schemas.tax_record import TaxRecordUpdate
from taxdesk.domain.entities import (
    Country,
    EditPhase,
    EditTransaction,
    SubmitOutcome,
    TaxRecord,
)
from taxdesk.domain.exceptions import (
    RecordStoreError,
    TransactionStateError,
    ValidationError,
)
from taxdesk.infrastructure.logging.colored_logger import SessionLogger, SessionStage

logger = logging.getLogger(__name__)
slog = SessionLogger(__name__)

MISSING_FIELDS_MESSAGE = "Please fill in all fields"
UNKNOWN_COUNTRY_MESSAGE = "Please select a valid country"
SAVE_FAILED_MESSAGE = "Failed to save changes. Please try again."

SaveCallback = Callable[[TaxRecord], Awaitable[None]]


@dataclass(frozen=True)
class SubmitResult:
    outcome: SubmitOutcome
    record: TaxRecord | None = None
    error: Exception | None = None


def validate_edit(name: str, country: str, country_names: frozenset[str]) -> None:
    """Raise ValidationError unless the working fields may be submitted."""
    if not name.strip() or not country:
        raise ValidationError(MISSING_FIELDS_MESSAGE)
    if country not in country_names:
        raise ValidationError(UNKNOWN_COUNTRY_MESSAGE, field="country")


class EditTransactionController:
    """Single-slot edit state machine. Depends on the record store port (DI).

    ``on_saved`` receives the server's version of the record after a
    successful update and before the slot closes.
    """

    def __init__(self, store: RecordStore, on_saved: SaveCallback):
        self._store = store
        self._on_saved = on_saved
        self._transaction: EditTransaction | None = None

    @property
    def transaction(self) -> EditTransaction | None:
        return self._transaction

    @property
    def phase(self) -> EditPhase:
        if self._transaction is None:
            return EditPhase.CLOSED
        return self._transaction.phase

    @property
    def is_active(self) -> bool:
        return self._transaction is not None

    def open(self, record: TaxRecord, countries: tuple[Country, ...]) -> EditTransaction:
        if self.phase is EditPhase.SUBMITTING:
            raise TransactionStateError("open", self.phase.value)
        if self._transaction is not None:
            logger.info(
                "Replacing open edit of record %s with record %s",
                self._transaction.record_id,
                record.id,
            )
        self._transaction = EditTransaction.begin(record, countries)
        slog.step_start(SessionStage.EDIT, "Editing record", record_id=record.id)
        return self._transaction

    def set_name(self, name: str) -> None:
        transaction = self._require_open("edit name")
        transaction.name = name
        transaction.validation_error = None

    def set_country(self, country: str) -> None:
        transaction = self._require_open("edit country")
        transaction.country = country
        transaction.validation_error = None

    def cancel(self) -> None:
        if self._transaction is None:
            return
        if self._transaction.is_submitting:
            raise TransactionStateError("cancel", self.phase.value)
        logger.info("Edit of record %s cancelled", self._transaction.record_id)
        self._transaction = None

    async def submit(self) -> SubmitResult:
        transaction = self._transaction
        if transaction is None:
            raise TransactionStateError("submit", EditPhase.CLOSED.value)
        if transaction.is_submitting:
            logger.debug("Submit ignored: record %s already in flight", transaction.record_id)
            return SubmitResult(SubmitOutcome.IGNORED)

        try:
            validate_edit(transaction.name, transaction.country, transaction.country_names)
        except ValidationError as e:
            transaction.validation_error = e.message
            logger.info("Edit of record %s rejected: %s", transaction.record_id, e.message)
            return SubmitResult(SubmitOutcome.INVALID, error=e)

        transaction.phase = EditPhase.SUBMITTING
        payload = TaxRecordUpdate(name=transaction.name, country=transaction.country)
        try:
            with slog.timed_step(SessionStage.SAVE, "Saving record", record_id=transaction.record_id):
                saved = await self._store.update_record(transaction.record_id, payload)
        except RecordStoreError as e:
            transaction.phase = EditPhase.OPEN
            transaction.validation_error = SAVE_FAILED_MESSAGE
            return SubmitResult(SubmitOutcome.FAILED, error=e)
        except BaseException:
            # Includes cancellation; the slot must never stay SUBMITTING.
            transaction.phase = EditPhase.OPEN
            transaction.validation_error = SAVE_FAILED_MESSAGE
            raise

        try:
            await self._on_saved(saved)
        finally:
            self._transaction = None
        return SubmitResult(SubmitOutcome.SAVED, record=saved)

    def _require_open(self, operation: str) -> EditTransaction:
        if self._transaction is None or self._transaction.is_submitting:
            raise TransactionStateError(operation, self.phase.value)
        return self._transaction
