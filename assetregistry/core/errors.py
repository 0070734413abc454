"""Registry error taxonomy.

Every failure a caller can trigger maps to one ``RegistryError`` subclass
carrying a stable ``kind`` and the HTTP status the adapter responds with.
Anything else escaping the registry is an internal fault.
"""

from __future__ import annotations


class RegistryError(RuntimeError):
    """Base class for caller-visible registry failures."""

    kind: str = "registry_error"
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(RegistryError):
    """Malformed or missing request fields."""

    kind = "invalid_input"
    status_code = 400


class UnauthorizedError(RegistryError):
    """Actor is not the asset's current owner."""

    kind = "unauthorized"
    status_code = 403


class AssetNotFoundError(RegistryError):
    """No record at the requested id."""

    kind = "not_found"
    status_code = 404


class InvalidStateError(RegistryError):
    """Operation is illegal for the asset's current status."""

    kind = "invalid_state"
    status_code = 400


class RateLimitedError(RegistryError):
    """Creator exceeded the request quota for the current window."""

    kind = "rate_limited"
    status_code = 429


class DuplicateIdError(RegistryError):
    """An asset with this id already exists. Should be unreachable."""

    kind = "duplicate_id"
    status_code = 500
