# src/core/models.py - v1
"""Core domain models: Record, RecordReference, Asset, Profile, Location.

``Record`` is the backend-neutral shape every record store adapter speaks.
``Profile`` and ``Location`` are read models decoded from records; they are
never written back directly. Writes go through ``Record`` so that the
presence fields are only touched by ``jurados.presence.state``.
"""

from __future__ import annotations

import base64
import uuid
from enum import Enum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

USERS_RECORD_TYPE = "Users"
PROFILE_RECORD_TYPE = "Profile"
LOCATION_RECORD_TYPE = "Location"

# Field on the identity record that points at the user's Profile.
USER_PROFILE_KEY = "user_profile"

_REF_TAG = "__ref__"
_ASSET_TAG = "__asset__"


def new_record_id() -> str:
    """Allocate an opaque record id for a record created client-side."""
    return uuid.uuid4().hex


# === Record primitives ===


class ReferenceAction(str, Enum):
    """What happens to the referenced record when the holder is deleted."""

    NONE = "none"
    CASCADE = "cascade"


class RecordReference(BaseModel):
    """Foreign key from one record to another."""

    model_config = ConfigDict(frozen=True)

    record_id: str
    action: ReferenceAction = ReferenceAction.NONE


class Asset(BaseModel):
    """Binary blob stored alongside a record (avatars, banners)."""

    model_config = ConfigDict(frozen=True)

    data: bytes
    content_type: str = "image/jpeg"

    @property
    def size(self) -> int:
        return len(self.data)


class Record(BaseModel):
    """A typed record as stored by the record store."""

    record_type: str
    record_id: str = Field(default_factory=new_record_id)
    fields: dict[str, Any] = Field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a field. ``None`` removes it, as the store has no null values."""
        if value is None:
            self.fields.pop(key, None)
        else:
            self.fields[key] = value

    def reference(self, key: str) -> RecordReference | None:
        value = self.fields.get(key)
        return value if isinstance(value, RecordReference) else None

    def asset(self, key: str) -> Asset | None:
        value = self.fields.get(key)
        return value if isinstance(value, Asset) else None

    def text(self, key: str, default: str = "N/A") -> str:
        value = self.fields.get(key)
        return value if isinstance(value, str) else default

    def references(self) -> list[RecordReference]:
        return [v for v in self.fields.values() if isinstance(v, RecordReference)]

    # --- Document encoding (JSON-safe) ---

    def to_document(self) -> dict[str, Any]:
        """Encode as a JSON-safe document for document databases."""
        return {
            "record_type": self.record_type,
            "record_id": self.record_id,
            "fields": {k: _encode_value(v) for k, v in self.fields.items()},
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Record:
        """Decode a document produced by ``to_document``.

        Raises:
            ValueError: If the document is malformed.
        """
        try:
            record_type = doc["record_type"]
            record_id = doc["record_id"]
            raw_fields = doc.get("fields") or {}
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed record document: {e}") from e
        if not isinstance(raw_fields, dict):
            raise ValueError("Malformed record document: fields is not a mapping")
        return cls(
            record_type=record_type,
            record_id=record_id,
            fields={k: _decode_value(v) for k, v in raw_fields.items()},
        )


def _encode_value(value: Any) -> Any:
    if isinstance(value, RecordReference):
        return {_REF_TAG: value.record_id, "action": value.action.value}
    if isinstance(value, Asset):
        return {
            _ASSET_TAG: base64.b64encode(value.data).decode("ascii"),
            "content_type": value.content_type,
        }
    return value


def _decode_value(value: Any) -> Any:
    if isinstance(value, dict):
        if _REF_TAG in value:
            return RecordReference(
                record_id=value[_REF_TAG],
                action=ReferenceAction(value.get("action", "none")),
            )
        if _ASSET_TAG in value:
            return Asset(
                data=base64.b64decode(value[_ASSET_TAG]),
                content_type=value.get("content_type", "image/jpeg"),
            )
    return value


class RecordFailure(BaseModel):
    """One record of a multi-record result that could not be fetched or decoded."""

    record_id: str | None = None
    reason: str


class QueryResult(BaseModel):
    """Records matched by a query plus the per-record failures that were skipped."""

    records: list[Record] = Field(default_factory=list)
    failures: list[RecordFailure] = Field(default_factory=list)


# === Read models ===


class Profile(BaseModel):
    """An app user's public profile."""

    KEY_FULL_NAME: ClassVar[str] = "full_name"
    KEY_PROFESSION: ClassVar[str] = "profession"
    KEY_BIOGRAPHY: ClassVar[str] = "biography"
    KEY_AVATAR: ClassVar[str] = "avatar"
    # Reference to the Location the profile is checked in at.
    KEY_PRESENT_AT: ClassVar[str] = "present_at"
    # Query-only duplicate of KEY_PRESENT_AT: set iff the reference is set.
    KEY_PRESENT: ClassVar[str] = "present"
    PRESENT_MARKER: ClassVar[int] = 1

    profile_id: str
    full_name: str = "N/A"
    profession: str = "N/A"
    biography: str = "N/A"
    avatar: Asset | None = None
    present_at: str | None = None

    @classmethod
    def from_record(cls, record: Record) -> Profile:
        """Decode a Profile record.

        Raises:
            ValueError: If the record is not a Profile record.
        """
        if record.record_type != PROFILE_RECORD_TYPE:
            raise ValueError(
                f"Expected {PROFILE_RECORD_TYPE} record, got {record.record_type!r}"
            )
        reference = record.reference(cls.KEY_PRESENT_AT)
        if record.get(cls.KEY_PRESENT) != cls.PRESENT_MARKER:
            # Half-written presence reads as checked out.
            reference = None
        return cls(
            profile_id=record.record_id,
            full_name=record.text(cls.KEY_FULL_NAME),
            profession=record.text(cls.KEY_PROFESSION),
            biography=record.text(cls.KEY_BIOGRAPHY),
            avatar=record.asset(cls.KEY_AVATAR),
            present_at=reference.record_id if reference else None,
        )

    @property
    def is_present(self) -> bool:
        return self.present_at is not None

    @property
    def has_avatar(self) -> bool:
        return self.avatar is not None

    @property
    def first_name(self) -> str:
        parts = self.full_name.split()
        return parts[0] if parts else self.full_name

    @property
    def initials(self) -> str:
        """First letters of the first and last name ("Fernando Jurado" -> "FJ")."""
        parts = self.full_name.split()
        if not parts:
            return ""
        if len(parts) == 1:
            return parts[0][0]
        return f"{parts[0][0]}{parts[-1][0]}"


class GeoPoint(BaseModel):
    latitude: float = 0.0
    longitude: float = 0.0


class Location(BaseModel):
    """A Jurado's Burger restaurant. Read-only reference data."""

    KEY_NAME: ClassVar[str] = "name"
    KEY_ADDRESS: ClassVar[str] = "address"
    KEY_DESCRIPTION: ClassVar[str] = "description"
    KEY_WEBSITE: ClassVar[str] = "website"
    KEY_PHONE: ClassVar[str] = "phone"
    KEY_COORDINATE: ClassVar[str] = "coordinate"
    KEY_AVATAR: ClassVar[str] = "avatar"
    KEY_BANNER: ClassVar[str] = "banner"

    location_id: str
    name: str = "N/A"
    address: str = "N/A"
    description: str = "N/A"
    website: str = "N/A"
    phone: str = "N/A"
    coordinate: GeoPoint = Field(default_factory=GeoPoint)
    avatar: Asset | None = None
    banner: Asset | None = None

    @classmethod
    def from_record(cls, record: Record) -> Location:
        """Decode a Location record.

        Raises:
            ValueError: If the record is not a Location record or its
                coordinate is malformed.
        """
        if record.record_type != LOCATION_RECORD_TYPE:
            raise ValueError(
                f"Expected {LOCATION_RECORD_TYPE} record, got {record.record_type!r}"
            )
        raw_coordinate = record.get(cls.KEY_COORDINATE)
        coordinate = (
            GeoPoint.model_validate(raw_coordinate)
            if raw_coordinate is not None
            else GeoPoint()
        )
        return cls(
            location_id=record.record_id,
            name=record.text(cls.KEY_NAME),
            address=record.text(cls.KEY_ADDRESS),
            description=record.text(cls.KEY_DESCRIPTION),
            website=record.text(cls.KEY_WEBSITE),
            phone=record.text(cls.KEY_PHONE),
            coordinate=coordinate,
            avatar=record.asset(cls.KEY_AVATAR),
            banner=record.asset(cls.KEY_BANNER),
        )

    @property
    def phone_url(self) -> str | None:
        """``tel://`` URL for the location's phone, or None when unknown."""
        digits = "".join(self.phone.split())
        if not digits or digits == "N/A":
            return None
        return f"tel://{digits}"
