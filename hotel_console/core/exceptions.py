class HotelConsoleException(Exception):
    """Base exception for the hotel console"""

    pass


class UnauthorizedException(HotelConsoleException):
    """Raised when JWT validation fails"""

    pass


class NotFoundException(HotelConsoleException):
    """Raised when resource not found"""

    pass


class ForbiddenException(HotelConsoleException):
    """Raised when an operation crosses a hotel boundary"""

    pass


class ValidationException(HotelConsoleException):
    """Raised for business logic validation errors"""

    pass


class InvalidSelectionException(HotelConsoleException):
    """
    Raised when a privilege operation is missing a required key.

    An empty hotel, role or user selection is a caller bug, not a
    "no permission" state, so it must never resolve to the zero privilege.
    """

    def __init__(self, missing: str):
        self.missing = missing
        super().__init__(f"Invalid selection: {missing} is required")


class ConflictException(HotelConsoleException):
    """Raised when a versioned save is based on a stale document"""

    pass


class PersistenceFailureException(HotelConsoleException):
    """Raised when loading or saving a privilege document did not complete"""

    pass
