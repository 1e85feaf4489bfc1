"""Exceptions raised by the RLCS client."""

from __future__ import annotations


class RLCSError(Exception):
    """Base exception for all rlcs errors.

    The command layer catches this class and turns it into an exit code.
    """


class DateParseError(RLCSError):
    """A date or timestamp field did not match the wire format."""

    def __init__(self, entity_id: str, field: str, value: object, message: str | None = None) -> None:
        self.entity_id = entity_id
        self.field = field
        self.value = value
        super().__init__(message or f"failed to parse {field} {value!r} of {entity_id!r}")

    def wrap(self, context: str) -> DateParseError:
        """Return a copy whose message is prefixed with an outer entity."""
        return DateParseError(self.entity_id, self.field, self.value, f"{context}: {self}")


class ConfigurationError(RLCSError):
    """Conflicting or invalid options, raised before any request is sent."""


class NotFoundError(RLCSError):
    """The API answered 404 for a tournament or match."""


class TransportError(RLCSError):
    """Any other failed request: network error, non-2xx status, bad body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
