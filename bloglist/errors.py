"""
Error hierarchy for the blog list service.

Every failure a caller can trigger is a ``BloglistError`` subclass that
carries a machine-readable ``kind`` and the HTTP status the transport
layer answers with.  Services raise them; ``error_handlers`` turns them
into ``{"error": message, "kind": kind}`` responses.
"""


class BloglistError(Exception):
    """Base class for all recoverable domain errors."""

    kind: str = "error"
    http_status: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": self.message, "kind": self.kind}


class ValidationError(BloglistError):
    """Missing or malformed fields, short credentials, duplicate username."""

    kind = "validation_error"
    http_status = 400


class MissingToken(BloglistError):
    """A protected operation was attempted without a bearer token."""

    kind = "missing_token"
    http_status = 401

    def __init__(self, message: str = "token missing") -> None:
        super().__init__(message)


class InvalidToken(BloglistError):
    """A bearer token was presented but could not be verified."""

    kind = "invalid_token"
    http_status = 401

    def __init__(self, message: str = "token invalid") -> None:
        super().__init__(message)


class InvalidCredentials(BloglistError):
    kind = "invalid_credentials"
    http_status = 401

    def __init__(self, message: str = "invalid username or password") -> None:
        super().__init__(message)


class Forbidden(BloglistError):
    kind = "forbidden"
    http_status = 403


class NotFound(BloglistError):
    kind = "not_found"
    http_status = 404


class DuplicateUsername(ValidationError):
    def __init__(self, message: str = "expected `username` to be unique") -> None:
        super().__init__(message)
