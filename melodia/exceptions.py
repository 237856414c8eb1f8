"""Custom exceptions for the Melodia API.

Every error carries the HTTP status it maps to. Messages are written for
the client; internal causes stay in the server log.
"""


class MelodiaError(Exception):
    """Base error rendered as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str = None, status_code: int = None):
        if status_code is not None:
            self.status_code = status_code
        self.message = message or 'Internal server error'
        super().__init__(self.message)


class ValidationError(MelodiaError):
    """Malformed or missing request fields."""

    status_code = 400

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message)


class AuthenticationError(MelodiaError):
    """Missing, invalid or expired session token."""

    status_code = 401

    def __init__(self, message: str = None):
        super().__init__(message or 'Authentication required')


class NotFoundOrForbidden(MelodiaError):
    """Resource absent or not owned by the caller. The two are never distinguished."""

    status_code = 404

    def __init__(self, message: str = None):
        super().__init__(message or 'Playlist not found')


class ConflictError(MelodiaError):
    """Uniqueness violation. Reported as a plain 400."""

    status_code = 400


class DuplicateEmail(ConflictError):
    """Email already registered."""

    def __init__(self, email: str = None):
        self.email = email
        super().__init__('Unable to register with the provided details')
