"""
인라인 재고 편집 상태

Each inventory row is in exactly one of four states::

    Viewing --begin_edit--> Editing --submit--> Saving --save_succeeded--> Viewing
                               ^  |                |
                               |  +--(invalid)-----+ (stays Editing with field errors)
                               |                   +--save_failed--> Failed
                               +-------retry------------------------+

The displayed quantity only changes after the save round-trip succeeds and
the inventory is fetched again; ``Saving`` carries the values being sent,
not values shown as current.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple, Union

from .exceptions import ApiError, EditStateError, ValidationError
from .models import InventoryPosition
from .validation import FIELD_QUANTITY, FIELD_RESTOCK_THRESHOLD, parse_non_negative_int


@dataclass(frozen=True)
class Viewing:
    """Row shows stored values."""


@dataclass(frozen=True)
class Editing:
    """Row shows input boxes; ``field_errors`` maps field name to message."""

    draft_quantity: str
    draft_threshold: str
    field_errors: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Saving:
    """Save request in flight with already-validated values."""

    quantity: int
    restock_threshold: Optional[int]
    draft_quantity: str
    draft_threshold: str


@dataclass(frozen=True)
class Failed:
    """The save request was rejected or never reached the server."""

    message: str
    draft_quantity: str
    draft_threshold: str
    details: Tuple[str, ...] = ()


RowEditState = Union[Viewing, Editing, Saving, Failed]

VIEWING = Viewing()


def begin_edit(position: InventoryPosition) -> Editing:
    """Start editing with the stored values as drafts (blank threshold = auto)."""
    threshold = position.restock_threshold
    return Editing(
        draft_quantity=str(position.current_quantity),
        draft_threshold="" if threshold is None else str(threshold),
    )


def update_draft(
    state: RowEditState,
    *,
    quantity: Optional[str] = None,
    threshold: Optional[str] = None,
) -> Editing:
    """Replace one or both drafts; errors for changed fields are cleared."""
    if not isinstance(state, Editing):
        raise EditStateError(f"cannot change drafts while {type(state).__name__}")

    errors = dict(state.field_errors)
    if quantity is not None:
        errors.pop(FIELD_QUANTITY, None)
    if threshold is not None:
        errors.pop(FIELD_RESTOCK_THRESHOLD, None)

    return Editing(
        draft_quantity=state.draft_quantity if quantity is None else quantity,
        draft_threshold=state.draft_threshold if threshold is None else threshold,
        field_errors=errors,
    )


def submit(state: RowEditState) -> Union[Saving, Editing]:
    """
    Validate the drafts.

    Returns:
        ``Saving`` when both fields are valid, otherwise ``Editing`` with
        per-field messages (the caller must not send a request)

    Raises:
        EditStateError: the row is not being edited
    """
    if not isinstance(state, Editing):
        raise EditStateError(f"cannot save while {type(state).__name__}")

    errors: dict[str, str] = {}
    quantity: Optional[int] = None
    threshold: Optional[int] = None

    try:
        quantity = parse_non_negative_int(state.draft_quantity, FIELD_QUANTITY)
    except ValidationError as exc:
        errors[FIELD_QUANTITY] = str(exc)

    try:
        threshold = parse_non_negative_int(
            state.draft_threshold, FIELD_RESTOCK_THRESHOLD, allow_blank=True
        )
    except ValidationError as exc:
        errors[FIELD_RESTOCK_THRESHOLD] = str(exc)

    if errors or quantity is None:
        return Editing(
            draft_quantity=state.draft_quantity,
            draft_threshold=state.draft_threshold,
            field_errors=errors,
        )

    return Saving(
        quantity=quantity,
        restock_threshold=threshold,
        draft_quantity=state.draft_quantity,
        draft_threshold=state.draft_threshold,
    )


def save_succeeded(state: RowEditState) -> Viewing:
    if not isinstance(state, Saving):
        raise EditStateError(f"no save in flight (state: {type(state).__name__})")
    return VIEWING


def save_failed(state: RowEditState, error: Exception) -> Failed:
    """Keep the drafts so the user can retry without retyping."""
    if not isinstance(state, Saving):
        raise EditStateError(f"no save in flight (state: {type(state).__name__})")

    details: Tuple[str, ...] = ()
    if isinstance(error, ApiError):
        message = error.message
        details = tuple(error.detail_lines())
    else:
        message = str(error) or "Failed to update inventory"

    return Failed(
        message=message,
        draft_quantity=state.draft_quantity,
        draft_threshold=state.draft_threshold,
        details=details,
    )


def retry(state: RowEditState) -> Editing:
    if not isinstance(state, Failed):
        raise EditStateError(f"nothing to retry (state: {type(state).__name__})")
    return Editing(draft_quantity=state.draft_quantity, draft_threshold=state.draft_threshold)


def cancel(state: RowEditState) -> Viewing:
    """Drop the drafts. A save already in flight cannot be cancelled."""
    if isinstance(state, Saving):
        raise EditStateError("cannot cancel while saving")
    return VIEWING
