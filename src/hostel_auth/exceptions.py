"""Authentication exceptions.

These exceptions are raised by the hostel_auth package and should be
caught and handled by the application layer (AuthenticationService) or
the API dependencies.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a session token is invalid or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class ExpiredTokenError(InvalidTokenError):
    """Raised when a session token was valid but its expiry has passed."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet the length policy."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)
