"""
Domain exceptions for the lifecycle engine

Raised by the business layer; callers map them to their own transport.
Every exception carries a short machine-readable error_code.
"""


class LifecycleError(Exception):
    """Base exception for all lifecycle engine errors"""
    error_code = 'INTERNAL_ERROR'

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code


class ValidationError(LifecycleError):
    """Raised for malformed or out-of-range input, always before any write"""
    error_code = 'BAD_REQUEST'


class NotFoundError(LifecycleError):
    """Raised when a referenced asset, user, schedule or issue does not exist"""
    error_code = 'NOT_FOUND'


class ConflictError(LifecycleError):
    """Raised on uniqueness violations"""
    error_code = 'CONFLICT'
