"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidAmountError(DomainException):
    """Amount is not a positive currency value with cent precision"""

    pass


class InvalidTransactionDataError(DomainException):
    """Transaction data is malformed or invalid"""

    pass


class InvalidProjectionInputError(DomainException):
    """Projection inputs are negative, out of bounds, or not numeric"""

    pass


class UnknownRiskProfileError(DomainException):
    """Risk profile name is not one of the fixed profiles"""

    pass
