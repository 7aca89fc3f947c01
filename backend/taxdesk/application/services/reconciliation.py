"""Reconciliation of a saved record into the collection state."""

from taxdesk.domain.entities import TaxRecord


def replace_record(records: tuple[TaxRecord, ...], updated: TaxRecord) -> tuple[TaxRecord, ...]:
    """Return ``records`` with the element whose id matches ``updated`` replaced.

    Length and order are preserved. If no element matches, the input is
    returned unchanged. The replace is blind: no staleness check against
    concurrent external edits is made here.
    """
    if not any(r.id == updated.id for r in records):
        return records
    return tuple(updated if r.id == updated.id else r for r in records)
