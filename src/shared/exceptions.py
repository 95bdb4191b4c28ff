"""Business errors shared by every bounded context.

They extend protean's exception taxonomy, so anything that already knows how
to handle ``ValidationError``, ``InvalidStateError`` or
``InvalidOperationError`` handles these too. ``shared.api`` maps each one to
an HTTP status.
"""

from protean.exceptions import InvalidOperationError, InvalidStateError, ValidationError


class EmptyCartError(ValidationError):
    def __init__(self, message: str = "Cannot check out an empty cart"):
        super().__init__({"cart": [message]})


class DuplicateEmailError(InvalidStateError):
    def __init__(self, message: str = "An account with this email already exists"):
        super().__init__(message)


class InvalidTransitionError(InvalidStateError):
    """The order's status machine does not allow the requested move."""


class InvalidCredentialsError(InvalidOperationError):
    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class UnauthenticatedError(InvalidOperationError):
    def __init__(self, message: str = "Please sign in to continue"):
        super().__init__(message)
