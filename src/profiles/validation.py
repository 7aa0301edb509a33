# src/profiles/validation.py - v1
"""Profile draft validation, checked before any store I/O."""

from __future__ import annotations

from pydantic import BaseModel

DEFAULT_BIO_MIN_LENGTH = 90
DEFAULT_BIO_MAX_LENGTH = 150


class ProfileDraft(BaseModel):
    """Edited profile fields as entered by the user."""

    full_name: str = ""
    profession: str = ""
    biography: str = ""
    avatar_image: bytes | None = None


def validate_draft(draft: ProfileDraft, min_bio_length: int = DEFAULT_BIO_MIN_LENGTH) -> list[str]:
    """Return validation errors; an empty list means the draft is valid.

    Whitespace is trimmed before every check.
    """
    errors: list[str] = []
    if not draft.full_name.strip():
        errors.append("full name is required")
    if not draft.profession.strip():
        errors.append("profession is required")
    if len(draft.biography.strip()) < min_bio_length:
        errors.append(f"biography must be at least {min_bio_length} characters")
    return errors


def truncate_biography(text: str, max_length: int = DEFAULT_BIO_MAX_LENGTH) -> str:
    """Clip a biography being edited to ``max_length`` characters."""
    return text[:max_length]


def remaining_characters(text: str, max_length: int = DEFAULT_BIO_MAX_LENGTH) -> int:
    return max(0, max_length - len(text))
