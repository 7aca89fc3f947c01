"""Domain entity for an in-progress edit of a single tax record."""

from dataclasses import dataclass
from enum import Enum

from .tax_record import Country, TaxRecord


class EditPhase(str, Enum):
    """Lifecycle states of the edit transaction slot."""

    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


@dataclass
class EditTransaction:
    """User is editing ``snapshot``.

    ``snapshot`` and ``countries`` are read-only views handed over when the
    transaction opens; only the working fields and the error change.
    """

    snapshot: TaxRecord
    countries: tuple[Country, ...]
    name: str
    country: str
    phase: EditPhase = EditPhase.OPEN
    validation_error: str | None = None

    @classmethod
    def begin(cls, record: TaxRecord, countries: tuple[Country, ...]) -> "EditTransaction":
        return cls(
            snapshot=record,
            countries=countries,
            name=record.name,
            country=record.country,
        )

    @property
    def record_id(self) -> str:
        return self.snapshot.id

    @property
    def country_names(self) -> frozenset[str]:
        return frozenset(c.name for c in self.countries)

    @property
    def is_submitting(self) -> bool:
        return self.phase is EditPhase.SUBMITTING
