"""Error taxonomy shared by services and routes.

Every error carries the HTTP status it maps to and a public message. The
exception handlers in ``app.main`` turn them into ``{"error": message}``
responses.
"""


class AppError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        return self.message


class ConfigurationError(AppError):
    """Missing credentials or identifiers in the configuration."""

    status_code = 500


class AuthError(AppError):
    """Missing or rejected bearer token."""

    status_code = 401


class NotFoundError(AppError):
    """Keyword, field, row or document absent."""

    status_code = 404


class ValidationError(AppError):
    """Malformed request."""

    status_code = 400


class UpstreamError(AppError):
    """Remote API failure.

    The detailed message is logged; clients receive ``public``.
    """

    status_code = 500

    def __init__(self, message: str, public: str = "Upstream service error"):
        super().__init__(message)
        self.public = public

    @property
    def public_message(self) -> str:
        return self.public


class CombinationParseError(AppError):
    """Picture-batch response did not contain enough combinations."""

    status_code = 500
