"""
인라인 편집 상태 전이 테스트
"""
from __future__ import annotations

import pytest

from bakery_dashboard.domain import (
    VIEWING,
    ApplicationError,
    EditStateError,
    Editing,
    Failed,
    InventoryPosition,
    Saving,
    TransportError,
    Viewing,
    begin_edit,
    cancel,
    retry,
    save_failed,
    save_succeeded,
    submit,
    update_draft,
)


@pytest.fixture
def position():
    return InventoryPosition("g-1", "Bagel", 40, 20, 5.0, 7)


def test_begin_edit_uses_stored_values(position):
    editing = begin_edit(position)
    assert editing == Editing(draft_quantity="40", draft_threshold="20")


def test_begin_edit_blank_threshold():
    editing = begin_edit(InventoryPosition("g", "g", 1, None, 0.0, 7))
    assert editing.draft_threshold == ""


def test_happy_path(position):
    editing = update_draft(begin_edit(position), quantity="55")
    saving = submit(editing)

    assert isinstance(saving, Saving)
    assert saving.quantity == 55
    assert saving.restock_threshold == 20
    assert save_succeeded(saving) == VIEWING


def test_blank_threshold_means_automatic(position):
    saving = submit(update_draft(begin_edit(position), threshold="  "))
    assert isinstance(saving, Saving)
    assert saving.restock_threshold is None


@pytest.mark.parametrize("bad", ["-1", "abc", "", "2.5"])
def test_invalid_quantity_stays_editing(position, bad):
    result = submit(update_draft(begin_edit(position), quantity=bad))

    assert isinstance(result, Editing)
    assert result.field_errors["quantity"] == "Quantity must be a non-negative number"
    assert "restock_threshold" not in result.field_errors


def test_both_fields_reported(position):
    result = submit(update_draft(begin_edit(position), quantity="-3", threshold="x"))
    assert set(result.field_errors) == {"quantity", "restock_threshold"}


def test_changing_a_field_clears_its_error(position):
    invalid = submit(update_draft(begin_edit(position), quantity="-3", threshold="x"))
    fixed = update_draft(invalid, quantity="3")

    assert set(fixed.field_errors) == {"restock_threshold"}


def test_application_failure_keeps_drafts(position):
    saving = submit(update_draft(begin_edit(position), quantity="12"))
    error = ApplicationError("Quantity too large", status=400, details=["max 999"])

    failed = save_failed(saving, error)

    assert failed == Failed(
        message="Quantity too large",
        draft_quantity="12",
        draft_threshold="20",
        details=("max 999",),
    )
    assert retry(failed) == Editing(draft_quantity="12", draft_threshold="20")


def test_transport_failure_message(position):
    saving = submit(begin_edit(position))
    failed = save_failed(saving, TransportError("Cannot connect"))
    assert failed.message == "Cannot connect"
    assert failed.details == ()


def test_cancel_from_editing_and_failed(position):
    editing = begin_edit(position)
    assert isinstance(cancel(editing), Viewing)

    failed = save_failed(submit(editing), RuntimeError("boom"))
    assert failed.message == "boom"
    assert cancel(failed) == VIEWING


@pytest.mark.parametrize(
    "transition",
    [
        lambda s: submit(s),
        lambda s: save_succeeded(s),
        lambda s: save_failed(s, RuntimeError("x")),
        lambda s: retry(s),
        lambda s: update_draft(s, quantity="1"),
    ],
)
def test_illegal_from_viewing(transition):
    with pytest.raises(EditStateError):
        transition(VIEWING)


def test_cannot_cancel_while_saving(position):
    saving = submit(begin_edit(position))
    with pytest.raises(EditStateError):
        cancel(saving)


def test_cannot_submit_twice(position):
    saving = submit(begin_edit(position))
    with pytest.raises(EditStateError):
        submit(saving)
