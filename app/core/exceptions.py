class BillingException(Exception):
    """Base exception for the billing service"""

    pass


class UnauthorizedException(BillingException):
    """Raised when JWT validation fails or the caller has no usable identity"""

    pass


class NotFoundException(BillingException):
    """Raised when resource not found"""

    pass


class ForbiddenException(BillingException):
    """Raised when the access resolver denies the requested scope"""

    pass


class ValidationException(BillingException):
    """Raised for business logic validation errors"""

    pass


class PersistenceException(BillingException):
    """Raised when a store read or write fails; callers must fail closed"""

    pass
