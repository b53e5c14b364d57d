"""Application exception types."""

from app.schemas.error import ErrorResponse


class ApiError(Exception):
    """Structured API error that maps directly to contract error payloads."""

    def __init__(self, status_code: int, code: str, message: str, details: dict | None = None) -> None:
        self.status_code = status_code
        self.payload = ErrorResponse(code=code, message=message, details=details)
        super().__init__(message)


class Unauthenticated(ApiError):
    """Identity claims are absent, unverifiable or malformed."""

    def __init__(self, message: str = "Invalid or missing bearer token") -> None:
        super().__init__(status_code=401, code="UNAUTHORIZED", message=message)


class Forbidden(ApiError):
    """Authenticated caller is not allowed to perform the action.

    ``reason`` is kept for logging only; the response body stays generic.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(status_code=403, code="FORBIDDEN", message="Insufficient permissions")


class NotFound(ApiError):
    def __init__(self) -> None:
        super().__init__(status_code=404, code="RESOURCE_NOT_FOUND", message="Resource not found")


class SlugAllocationExhausted(ApiError):
    """Suffix search or conflict retries ran past their ceiling."""

    def __init__(self, candidate: str, attempts: int) -> None:
        super().__init__(
            status_code=500,
            code="SLUG_ALLOCATION_EXHAUSTED",
            message="Could not allocate a unique slug",
            details={"candidate": candidate, "attempts": attempts},
        )


class SlugConflictError(Exception):
    """Raised by storage when a write violates the scope-level slug unique constraint."""

    def __init__(self, slug: str, scope: str | None) -> None:
        self.slug = slug
        self.scope = scope
        super().__init__(f"slug already taken in scope: {slug}")


__all__ = [
    "ApiError",
    "Forbidden",
    "NotFound",
    "SlugAllocationExhausted",
    "SlugConflictError",
    "Unauthenticated",
]
