class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    """Malformed input that passed the schema layer (e.g. non-positive ticket count)"""


class InvalidStateError(DomainError):
    """Entity is not in a state that permits the operation"""


class AlreadyCancelledError(InvalidStateError):
    def __init__(self, message: str = 'Booking is already cancelled') -> None:
        super().__init__(message)


class InsufficientInventoryError(DomainError):
    def __init__(self, message: str = 'Not enough tickets available') -> None:
        super().__init__(message)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str = 'Access denied') -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str = 'Not authenticated') -> None:
        super().__init__(message, 401)


class InternalError(CustomBaseError):
    """Infrastructure failure; the detail is logged, never sent to the client"""

    def __init__(self, detail: str = '') -> None:
        self.detail = detail
        super().__init__('Internal server error', 500)
