"""FastAPI dependency injection — wires infrastructure to the application layer."""

from functools import lru_cache

from taxdesk.application.services import SessionEventBroadcaster, TaxRecordSession
from taxdesk.config import get_settings
from taxdesk.infrastructure.mockapi import MockApiRecordStore


@lru_cache
def get_session_events() -> SessionEventBroadcaster:
    """Process-wide broadcaster for session change events."""
    return SessionEventBroadcaster()


@lru_cache
def get_tax_record_session() -> TaxRecordSession:
    """Process-wide table session wired to the configured record store.

    The session holds the single edit slot, so exactly one instance exists.
    """
    settings = get_settings()
    timeout = settings.http_timeout_seconds if settings.http_timeout_seconds > 0 else None
    store = MockApiRecordStore(
        records_url=settings.records_api_url,
        countries_url=settings.countries_api_url,
        timeout=timeout,
    )
    return TaxRecordSession(store, events=get_session_events())
