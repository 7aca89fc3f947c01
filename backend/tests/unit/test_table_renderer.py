"""Unit tests for the stateless table renderer."""

from taxdesk.application.services.column_model import AccessorColumn, tax_record_columns
from taxdesk.application.services.table_renderer import EMPTY_MESSAGE, TableRow, render_table
from taxdesk.domain.entities import TaxRecord

RECORDS = [
    TaxRecord(id="7", name="Alice", country="US"),
    TaxRecord(id="3", name="Bob", country="CA"),
    TaxRecord(id="5", name="Chandra", country="India"),
]


def test_header_has_one_label_per_column():
    view = render_table(tax_record_columns(), RECORDS)
    assert view.header == ("ID", "Name", "Country", "Actions")


def test_rows_follow_input_order_and_use_record_id_as_key():
    view = render_table(tax_record_columns(), RECORDS)

    rows = list(view.rows)

    assert [row.key for row in rows] == ["7", "3", "5"]
    assert [row.cells[1] for row in rows] == ["Alice", "Bob", "Chandra"]
    assert all(len(row.cells) == 4 for row in rows)


def test_empty_collection_signals_empty_state():
    view = render_table(tax_record_columns(), [])

    assert view.is_empty
    assert view.empty_message == EMPTY_MESSAGE
    assert list(view.rows) == []


def test_non_empty_collection_has_no_empty_message():
    view = render_table(tax_record_columns(), RECORDS)

    assert not view.is_empty
    assert view.empty_message is None


def test_rendering_twice_gives_identical_output():
    columns = tax_record_columns()

    first = render_table(columns, RECORDS)
    second = render_table(columns, list(RECORDS))

    assert first == second
    assert list(first.rows) == list(second.rows)


def test_equal_views_hash_equal():
    columns = tax_record_columns()

    first = render_table(columns, RECORDS)
    second = render_table(columns, list(RECORDS))

    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_row_sequence_is_restartable():
    view = render_table(tax_record_columns(), RECORDS)

    assert list(view.rows) == list(view.rows)
    assert len(view.rows) == 3


def test_rows_are_rendered_lazily():
    calls: list[str] = []

    def render(value: str) -> str:
        calls.append(value)
        return value

    view = render_table((AccessorColumn(key="name", header="Name", render=render),), RECORDS)
    assert calls == []

    first = next(iter(view.rows))

    assert first == TableRow(key="7", cells=("Alice",))
    assert calls == ["Alice"]


def test_renderer_does_not_hold_on_to_caller_list():
    records = list(RECORDS)
    view = render_table(tax_record_columns(), records)
    records.append(TaxRecord(id="9", name="Late", country="US"))

    assert len(view.rows) == 3
