"""Domain-specific error types for the auth module."""


class ConfigurationError(Exception):
    """No usable credentials were configured for any auth strategy."""


class IdentityError(Exception):
    """The identity service could not issue a token.

    Attributes:
        status_code: HTTP status code from the token endpoint, 0 if none.
    """

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code
