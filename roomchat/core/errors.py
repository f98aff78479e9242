# roomchat/core/errors.py

from __future__ import annotations

from pydantic.alias_generators import to_camel


class RoomChatError(Exception):
    """Base class for domain errors. Carries the HTTP status it maps to."""

    status_code: int = 500

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message or self.__class__.__name__


class ValidationError(RoomChatError):
    """A required field is missing or empty. Caller error, never retried."""

    status_code = 400


class NotFound(RoomChatError):
    status_code = 404


class StoreUnavailable(RoomChatError):
    """The key-value store failed to read or write."""

    status_code = 503


class DecodeError(RoomChatError):
    """A stored value does not match the expected schema."""

    status_code = 500


def require(**fields: str | None) -> None:
    """Raise ValidationError naming (by wire name) every field that is missing or blank."""
    missing = [to_camel(name) for name, value in fields.items() if not value or not str(value).strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
