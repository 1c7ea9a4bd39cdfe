class BackendError(Exception):
    """Raised when the backend store rejects a query or a mutation.

    The message is the store's own wording and is shown to the user verbatim.
    """

    def __init__(self, message: str, table: str = None):
        super().__init__(message)
        self.message = message
        self.table = table


class FormValidationError(ValueError):
    """A required form field is missing or malformed. Raised before any backend call."""


class AuthError(Exception):
    """Sign-in or sign-up rejected by the auth backend."""
