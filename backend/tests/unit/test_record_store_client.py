"""Unit tests for the MockApiRecordStore httpx adapter."""

import json
import logging

import httpx
import pytest

from taxdesk.application.schemas.tax_record import TaxRecordUpdate
from taxdesk.domain.entities import Country, TaxRecord
from taxdesk.domain.exceptions import DecodeError, TransportError
from taxdesk.infrastructure.mockapi import MockApiRecordStore

RECORDS_URL = "https://example.test/api/taxes"
COUNTRIES_URL = "https://example.test/api/countries"


# ── Helpers ──


def _make_store(handler) -> MockApiRecordStore:
    return MockApiRecordStore(
        records_url=RECORDS_URL,
        countries_url=COUNTRIES_URL,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def _fixed(status_code: int = 200, json_data=None, content: bytes | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=json_data)

    return handler


# ── Tests ──


@pytest.mark.asyncio
async def test_list_records_parses_payload():
    data = [
        {"id": "1", "name": "Alice", "country": "US", "createdAt": "2025-06-16T08:00:00.000Z", "avatar": "a.png"},
        {"id": "2", "name": "Bob", "country": "CA", "gender": "male"},
    ]
    store = _make_store(_fixed(json_data=data))

    records = await store.list_records()

    assert records == [
        TaxRecord(id="1", name="Alice", country="US", created_at="2025-06-16T08:00:00.000Z", avatar="a.png"),
        TaxRecord(id="2", name="Bob", country="CA"),
    ]


@pytest.mark.asyncio
async def test_list_countries_parses_payload():
    store = _make_store(_fixed(json_data=[{"id": "1", "name": "India", "code": "IN"}, {"id": "2", "name": "US"}]))

    countries = await store.list_countries()

    assert countries == [Country(id="1", name="India", code="IN"), Country(id="2", name="US")]


@pytest.mark.asyncio
async def test_list_requests_hit_configured_urls():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(f"{request.method} {request.url}")
        return httpx.Response(200, json=[])

    store = _make_store(handler)
    await store.list_records()
    await store.list_countries()

    assert seen == [f"GET {RECORDS_URL}", f"GET {COUNTRIES_URL}"]


@pytest.mark.asyncio
async def test_empty_list_is_a_success_not_a_failure():
    store = _make_store(_fixed(json_data=[]))
    assert await store.list_records() == []


@pytest.mark.asyncio
async def test_non_success_status_raises_transport_error():
    store = _make_store(_fixed(status_code=500, json_data={"message": "boom"}))

    with pytest.raises(TransportError) as exc_info:
        await store.list_records()

    assert exc_info.value.status_code == 500
    assert exc_info.value.resource == "taxes"


@pytest.mark.asyncio
async def test_network_failure_raises_transport_error_without_status():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    store = _make_store(handler)

    with pytest.raises(TransportError) as exc_info:
        await store.list_countries()

    assert exc_info.value.status_code is None
    assert exc_info.value.resource == "countries"


@pytest.mark.asyncio
async def test_invalid_json_raises_decode_error():
    store = _make_store(_fixed(content=b"<html>not json</html>"))

    with pytest.raises(DecodeError):
        await store.list_records()


@pytest.mark.asyncio
async def test_wrong_shape_raises_decode_error():
    store = _make_store(_fixed(json_data={"items": []}))

    with pytest.raises(DecodeError):
        await store.list_records()


@pytest.mark.asyncio
async def test_record_missing_field_raises_decode_error():
    store = _make_store(_fixed(json_data=[{"id": "1", "name": "Alice"}]))

    with pytest.raises(DecodeError):
        await store.list_records()


@pytest.mark.asyncio
async def test_duplicate_record_ids_raise_decode_error():
    data = [
        {"id": "1", "name": "Alice", "country": "US"},
        {"id": "2", "name": "Bob", "country": "CA"},
        {"id": "1", "name": "Alicia", "country": "IN"},
    ]
    store = _make_store(_fixed(json_data=data))

    with pytest.raises(DecodeError, match="Duplicate record ids: 1"):
        await store.list_records()


@pytest.mark.asyncio
async def test_successful_fetch_is_logged_as_store_step(caplog):
    data = [{"id": "1", "name": "Alice", "country": "US"}]
    store = _make_store(_fixed(json_data=data))

    with caplog.at_level(logging.INFO, logger="taxdesk.infrastructure.mockapi"):
        await store.list_records()

    assert any("[STORE]" in r.getMessage() and "count=1" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_update_record_sends_put_with_mutable_fields():
    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["url"] = str(request.url)
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "1", "name": "Alicia", "country": "CA", "createdAt": "x"})

    store = _make_store(handler)

    updated = await store.update_record("1", TaxRecordUpdate(name="Alicia", country="CA"))

    assert captured == {
        "method": "PUT",
        "url": f"{RECORDS_URL}/1",
        "body": {"name": "Alicia", "country": "CA"},
    }
    assert updated == TaxRecord(id="1", name="Alicia", country="CA", created_at="x")


@pytest.mark.asyncio
async def test_update_record_not_found_raises_transport_error():
    store = _make_store(_fixed(status_code=404, content=b'"Not found"'))

    with pytest.raises(TransportError) as exc_info:
        await store.update_record("999", TaxRecordUpdate(name="X", country="US"))

    assert exc_info.value.is_not_found


@pytest.mark.asyncio
async def test_update_record_bad_body_raises_decode_error():
    store = _make_store(_fixed(json_data=[{"id": "1"}]))

    with pytest.raises(DecodeError):
        await store.update_record("1", TaxRecordUpdate(name="X", country="US"))


@pytest.mark.asyncio
async def test_update_is_a_single_attempt():
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(503)

    store = _make_store(handler)

    with pytest.raises(TransportError):
        await store.update_record("1", TaxRecordUpdate(name="X", country="US"))

    assert calls == 1
