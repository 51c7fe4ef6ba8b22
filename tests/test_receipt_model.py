"""Tests for the Receipt record: creation, overrides and serialization."""

from datetime import date, datetime, timezone

import pytest

from receiptline.domain.receipt import EmptyReceiptError, Receipt


def test_from_lines_trims_and_drops_empty_lines() -> None:
    receipt = Receipt.from_lines(["  Store A ", "", "   ", "Total $6.19"])

    assert receipt.lines == ("Store A", "Total $6.19")
    assert receipt.id.isalnum()
    assert receipt.created_at.tzinfo is not None
    assert not receipt.is_edited


def test_from_lines_rejects_receipt_without_text() -> None:
    with pytest.raises(EmptyReceiptError):
        Receipt.from_lines(["", "  "])


def test_ids_are_unique() -> None:
    assert Receipt.from_lines(["a"]).id != Receipt.from_lines(["a"]).id


def test_update_edits_sets_only_given_fields() -> None:
    receipt = Receipt.from_lines(["Store A", "Total 5.48"])

    receipt.update_edits(total="9.99")
    receipt.update_edits(store_name="Corner Shop")

    assert receipt.edited_total == "9.99"
    assert receipt.edited_store_name == "Corner Shop"
    assert receipt.edited_subtotal is None
    assert receipt.is_edited
    assert receipt.lines == ("Store A", "Total 5.48")


def test_empty_override_counts_as_absent() -> None:
    receipt = Receipt.from_lines(["Store A"])

    receipt.update_edits(tax="   ", store_name="")

    assert receipt.edited_tax is None
    assert receipt.edited_store_name is None
    assert not receipt.is_edited


def test_update_edits_rejects_unknown_fields_and_bad_dates() -> None:
    receipt = Receipt.from_lines(["Store A"])

    with pytest.raises(TypeError):
        receipt.update_edits(lines=["x"])
    with pytest.raises(TypeError):
        receipt.update_edits(date="2024-01-01")


def test_datetime_date_edit_is_stored_as_date() -> None:
    receipt = Receipt.from_lines(["Store A"])

    receipt.update_edits(date=datetime(2024, 2, 3, 10, 0))

    assert receipt.edited_date == date(2024, 2, 3)


def test_clear_edits_resets_every_override() -> None:
    receipt = Receipt.from_lines(["Store A"])
    receipt.update_edits(store_name="X", date=date(2024, 1, 1), subtotal="1", tax="2", total="3")

    receipt.clear_edits()

    assert not receipt.is_edited
    assert receipt.edited_date is None
    assert receipt.edited_total is None


def test_to_dict_omits_absent_overrides_and_round_trips() -> None:
    created = datetime(2024, 3, 14, 12, 30, tzinfo=timezone.utc)
    receipt = Receipt.from_lines(["Store A", "Total $6.19"], created_at=created)
    receipt.update_edits(total="9.99", date=date(2024, 3, 15))

    data = receipt.to_dict()

    assert data == {
        "id": receipt.id,
        "created_at": "2024-03-14T12:30:00+00:00",
        "lines": ["Store A", "Total $6.19"],
        "edited_date": "2024-03-15",
        "edited_total": "9.99",
    }
    restored = Receipt.from_dict(data)
    assert restored == receipt
