class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class ConcurrencyConflictError(ConflictError):
    """Raised by a repository when an optimistic version check fails."""

    def __init__(self, message: str = 'Concurrent modification detected') -> None:
        super().__init__(message)


class DuplicateKeyError(ConflictError):
    """Raised by a repository when a unique key is already taken."""

    def __init__(self, message: str, *, key: str) -> None:
        self.key = key
        super().__init__(message)
