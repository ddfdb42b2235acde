from fastapi import status


class AuthError(Exception):
    """Base class for credential failures. Rendered as 401 with a short reason."""
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class MissingCredentials(AuthError):
    message = "Authorization header is required"


class InvalidOrExpiredToken(AuthError):
    message = "Invalid or expired token"
