# bloodbridge/core/errors.py
GENERIC_MESSAGE = "Something went wrong. Please try again."


class BloodBridgeError(Exception):
    """Base for every error surfaced to the user."""

    def __init__(self, message: str = GENERIC_MESSAGE):
        super().__init__(message)
        self.message = message


class ProviderError(BloodBridgeError):
    """The provider rejected a request, or could not be reached."""

    def __init__(self, message: str = GENERIC_MESSAGE, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ConsistencyError(BloodBridgeError):
    """Identity exists but its role-specific profile does not."""
