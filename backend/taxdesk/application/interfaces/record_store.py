"""Abstract interface (port) for the remote tax record store."""

from abc import ABC, abstractmethod

from taxdesk.application.schemas.tax_record import TaxRecordUpdate
from taxdesk.domain.entities import Country, TaxRecord


class RecordStore(ABC):
    """Port for reading and replacing tax records — implemented in the infrastructure layer.

    Every failure surfaces as ``TransportError`` or ``DecodeError``; no
    implementation may return an empty value in place of a failure.
    Each call is a single attempt, retry policy belongs to the caller.
    """

    @abstractmethod
    async def list_records(self) -> list[TaxRecord]:
        """Read the whole records collection."""
        ...

    @abstractmethod
    async def list_countries(self) -> list[Country]:
        """Read the whole countries collection."""
        ...

    @abstractmethod
    async def update_record(self, record_id: str, data: TaxRecordUpdate) -> TaxRecord:
        """Replace ``name``/``country`` of one record and return the server's version."""
        ...
