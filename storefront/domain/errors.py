# storefront/domain/errors.py


class DomainError(Exception):
    """Base class for errors raised by the storefront services."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """Malformed or out-of-range input, never retried."""

    status_code = 400


class NotFoundError(DomainError):
    status_code = 404


class ConflictError(DomainError):
    """Coupon exhausted, lost compare-and-increment, illegal status change."""

    status_code = 409
