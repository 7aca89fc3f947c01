"""Domain entities — tax records and the countries they reference."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TaxRecord:
    """Core domain entity: one row of the tax table.

    Records are created by the remote service, never by this client.
    The only mutation is a full replace of ``name``/``country`` through
    an edit transaction, after which the server's representation wins.
    """

    id: str
    name: str
    country: str
    created_at: str | None = None
    avatar: str | None = None


@dataclass(frozen=True)
class Country:
    """Read-only choice-set item for the ``country`` field of a TaxRecord."""

    id: str
    name: str
    code: str | None = None
