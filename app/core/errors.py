"""Error taxonomy shared by the gateway, the ranking engine and the services.

Errors are raised inside a component and returned (not raised) at its
boundary, wrapped in a result object. Routers translate them to HTTP.
"""

from typing import Optional


class RankingError(Exception):
    """Base class. `code` carries the backend error code when there is one."""

    error_type = "error"

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        if self.code:
            return f"{self.message} (code={self.code})"
        return self.message


class ConfigurationError(RankingError):
    """Required connection parameters are missing. Never retried."""

    error_type = "configuration"


class TransportError(RankingError):
    """The store could not complete a call (network/backend fault, timeout)."""

    error_type = "transport"


class ConflictError(RankingError):
    """A write was rejected by the store's own constraints."""

    error_type = "conflict"


class ValidationError(RankingError):
    """Caller input rejected before any persistence call."""

    error_type = "validation"


class InvalidSlotError(ValidationError):
    error_type = "invalid_slot"

    def __init__(self, slot_key: str):
        super().__init__(f"Unknown full-course slot: {slot_key!r}")
        self.slot_key = slot_key


class NotFoundError(RankingError):
    error_type = "not_found"


class PartialRecalculationError(RankingError):
    """
    The item was saved but at least one follow-on rank/image update failed.

    `failures` lists the underlying errors so callers can log them; the UI
    only needs to know that rankings may be briefly stale.
    """

    error_type = "partial_recalculation"

    def __init__(self, message: str, failures: Optional[list[RankingError]] = None):
        super().__init__(message)
        self.failures = failures or []


# HTTP status used by the routers when an operation fails with one of these errors
HTTP_STATUS_BY_ERROR_TYPE = {
    ConfigurationError.error_type: 503,
    TransportError.error_type: 502,
    ConflictError.error_type: 409,
    ValidationError.error_type: 422,
    InvalidSlotError.error_type: 422,
    NotFoundError.error_type: 404,
}


def http_status_for(error: RankingError) -> int:
    return HTTP_STATUS_BY_ERROR_TYPE.get(error.error_type, 500)
