"""MockAPI record store client — implements the RecordStore interface.

Reads the taxes and countries collections and replaces single tax records
on a mockapi.io-style REST backend using httpx. Every non-success response,
network failure or undecodable body is raised as a typed error; nothing
is retried.
"""

import logging
from collections import Counter
from typing import Any

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from taxdesk.application.interfaces.record_store import RecordStore
from taxdesk.application.schemas.tax_record import (
    CountryPayload,
    TaxRecordPayload,
    TaxRecordUpdate,
)
from taxdesk.domain.entities import Country, TaxRecord
from taxdesk.domain.exceptions import DecodeError, TransportError
from taxdesk.infrastructure.logging.colored_logger import SessionLogger, SessionStage

logger = logging.getLogger(__name__)
slog = SessionLogger(__name__)

_RECORD = TypeAdapter(TaxRecordPayload)
_RECORD_LIST = TypeAdapter(list[TaxRecordPayload])
_COUNTRY_LIST = TypeAdapter(list[CountryPayload])


class MockApiRecordStore(RecordStore):
    """Infrastructure adapter — connects to the records and countries resources.

    An injected ``httpx.AsyncClient`` is reused across calls; otherwise a
    short-lived client is created per call and closed afterwards.
    """

    def __init__(
        self,
        records_url: str,
        countries_url: str,
        timeout: float | None = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._records_url = records_url.rstrip("/")
        self._countries_url = countries_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def list_records(self) -> list[TaxRecord]:
        data = await self._request("GET", self._records_url, resource="taxes")
        payloads = self._decode(_RECORD_LIST, data, resource="taxes")
        duplicates = sorted(i for i, n in Counter(p.id for p in payloads).items() if n > 1)
        if duplicates:
            raise DecodeError("taxes", f"Duplicate record ids: {', '.join(duplicates)}")
        slog.step_complete(SessionStage.STORE, "Fetched tax records", count=len(payloads))
        return [p.to_entity() for p in payloads]

    async def list_countries(self) -> list[Country]:
        data = await self._request("GET", self._countries_url, resource="countries")
        payloads = self._decode(_COUNTRY_LIST, data, resource="countries")
        slog.step_complete(SessionStage.STORE, "Fetched countries", count=len(payloads))
        return [p.to_entity() for p in payloads]

    async def update_record(self, record_id: str, data: TaxRecordUpdate) -> TaxRecord:
        url = f"{self._records_url}/{record_id}"
        body = await self._request("PUT", url, resource="taxes", json=data.model_dump())
        payload = self._decode(_RECORD, body, resource="taxes")
        logger.info("Updated tax record %s", payload.id)
        return payload.to_entity()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        resource: str,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Issue one request and return the parsed JSON body of a 2xx response."""
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            try:
                response = await client.request(method, url, json=json)
            except httpx.HTTPError as e:
                raise TransportError(resource, None, f"{method} {url} failed: {e}") from e

            if not response.is_success:
                self._raise_transport_error(resource, response)

            try:
                return response.json()
            except ValueError as e:
                raise DecodeError(resource, f"Response body is not valid JSON: {e}") from e

        finally:
            if should_close:
                await client.aclose()

    @staticmethod
    def _decode(adapter: TypeAdapter, data: Any, *, resource: str) -> Any:
        """Validate a parsed body against the expected wire shape."""
        try:
            return adapter.validate_python(data)
        except PydanticValidationError as e:
            raise DecodeError(
                resource, f"Unexpected payload shape ({e.error_count()} error(s))"
            ) from e

    @staticmethod
    def _raise_transport_error(resource: str, response: httpx.Response) -> None:
        """Raise TransportError from a non-2xx httpx Response."""
        message = response.text.strip() or response.reason_phrase
        raise TransportError(resource, response.status_code, message)
