"""Unit tests for replace-by-id reconciliation."""

from taxdesk.application.services.reconciliation import replace_record
from taxdesk.domain.entities import TaxRecord

RECORDS = (
    TaxRecord(id="1", name="Alice", country="US"),
    TaxRecord(id="2", name="Bob", country="CA"),
    TaxRecord(id="3", name="Chandra", country="India"),
)


def test_replaces_matching_element_in_place():
    updated = TaxRecord(id="2", name="Robert", country="US")

    result = replace_record(RECORDS, updated)

    assert len(result) == len(RECORDS)
    assert [r.id for r in result] == ["1", "2", "3"]
    assert result[1] == updated
    assert result[0] is RECORDS[0]
    assert result[2] is RECORDS[2]


def test_every_position_can_be_targeted():
    for index, original in enumerate(RECORDS):
        updated = TaxRecord(id=original.id, name=original.name + "!", country="CA")
        result = replace_record(RECORDS, updated)

        assert result[index] == updated
        assert result[:index] == RECORDS[:index]
        assert result[index + 1:] == RECORDS[index + 1:]


def test_missing_id_is_a_no_op():
    result = replace_record(RECORDS, TaxRecord(id="42", name="Ghost", country="US"))
    assert result is RECORDS


def test_server_representation_wins_over_metadata():
    records = (TaxRecord(id="1", name="Alice", country="US", avatar="old.png"),)
    updated = TaxRecord(id="1", name="Alice", country="US", avatar=None)

    assert replace_record(records, updated) == (updated,)
