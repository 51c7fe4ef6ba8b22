"""Data models for receipt scanning."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any

EDIT_FIELDS = (
    "edited_store_name",
    "edited_date",
    "edited_subtotal",
    "edited_tax",
    "edited_total",
)


class EmptyReceiptError(ValueError):
    """Raised when a receipt would be created without any usable line."""


@dataclass(frozen=True)
class BoundingBox:
    """Normalized [0, 1] box; larger y is higher on the image."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TextFragment:
    """A single OCR-recognized text span with its position."""

    text: str
    bounding_box: BoundingBox
    confidence: float | None = None

    @property
    def anchor_y(self) -> float:
        # Bottom edge of the box in the y-up convention.
        return self.bounding_box.y

    @property
    def anchor_x(self) -> float:
        return self.bounding_box.x


@dataclass(frozen=True)
class LogicalLine:
    """One visual row, fragments ordered left to right."""

    fragments: tuple[TextFragment, ...]

    @property
    def text(self) -> str:
        return " ".join(fragment.text.strip() for fragment in self.fragments)


class LineKind(Enum):
    NORMAL = "normal"
    SUBTOTAL = "subtotal"
    TOTAL = "total"


@dataclass(frozen=True)
class TypedLine:
    """A line annotated with its kind and label-stripped text."""

    original: str
    text: str
    kind: LineKind


@dataclass(frozen=True)
class ExtractedFields:
    """Machine-extracted receipt fields. None means nothing was found."""

    store_name: str
    subtotal: str | None = None
    tax: str | None = None
    total: str | None = None
    date: date | None = None


def _new_receipt_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _canonical_text(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


@dataclass
class Receipt:
    """
    A scanned receipt: immutable OCR lines plus optional user overrides.

    ``lines`` is fixed at creation. Edits only ever touch the ``edited_*``
    fields, through update_edits() and clear_edits().
    """

    lines: tuple[str, ...]
    id: str = field(default_factory=_new_receipt_id)
    created_at: datetime = field(default_factory=_utcnow)
    edited_store_name: str | None = None
    edited_date: date | None = None
    edited_subtotal: str | None = None
    edited_tax: str | None = None
    edited_total: str | None = None

    def __post_init__(self) -> None:
        self.lines = tuple(self.lines)
        self.edited_store_name = _canonical_text(self.edited_store_name)
        self.edited_subtotal = _canonical_text(self.edited_subtotal)
        self.edited_tax = _canonical_text(self.edited_tax)
        self.edited_total = _canonical_text(self.edited_total)

    @classmethod
    def from_lines(cls, lines: list[str] | tuple[str, ...], created_at: datetime | None = None) -> Receipt:
        """
        Create a receipt from raw recognized lines.

        Lines are trimmed and empty ones discarded.

        Raises:
            EmptyReceiptError: if no non-empty line remains
        """
        cleaned = tuple(line.strip() for line in lines if line and line.strip())
        if not cleaned:
            raise EmptyReceiptError("Receipt has no non-empty lines")
        if created_at is None:
            return cls(lines=cleaned)
        return cls(lines=cleaned, created_at=created_at)

    @property
    def is_edited(self) -> bool:
        return any(getattr(self, name) not in (None, "") for name in EDIT_FIELDS)

    def update_edits(self, **edits: Any) -> None:
        """
        Set override fields. Keys are the edit field names without the
        ``edited_`` prefix (store_name, date, subtotal, tax, total).

        Empty strings are stored as absent. Fields not given stay unchanged.
        """
        for key, value in edits.items():
            name = f"edited_{key}"
            if name not in EDIT_FIELDS:
                raise TypeError(f"Unknown receipt edit field: {key}")
            if name == "edited_date":
                if value is not None and not isinstance(value, date):
                    raise TypeError("edited date must be a datetime.date")
                if isinstance(value, datetime):
                    value = value.date()
                self.edited_date = value
            else:
                setattr(self, name, _canonical_text(value))

    def clear_edits(self) -> None:
        """Reset every override field to absent."""
        for name in EDIT_FIELDS:
            setattr(self, name, None)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for storage. Absent overrides are omitted."""
        data: dict[str, Any] = {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "lines": list(self.lines),
        }
        for name in EDIT_FIELDS:
            value = getattr(self, name)
            if value in (None, ""):
                continue
            data[name] = value.isoformat() if isinstance(value, date) else value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Receipt:
        """Rebuild a receipt previously produced by to_dict()."""
        edited_date = data.get("edited_date") or None
        return cls(
            lines=tuple(data.get("lines", [])),
            id=data["id"],
            created_at=datetime.fromisoformat(data["created_at"]),
            edited_store_name=data.get("edited_store_name"),
            edited_date=date.fromisoformat(edited_date) if edited_date else None,
            edited_subtotal=data.get("edited_subtotal"),
            edited_tax=data.get("edited_tax"),
            edited_total=data.get("edited_total"),
        )
