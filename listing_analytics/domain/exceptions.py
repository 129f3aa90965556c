"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """A single input value violates its precondition"""

    pass


class NoMatchingRuleError(InvalidInputError):
    """No negotiation rule matched the offer"""

    pass


class InsufficientDataError(DomainException):
    """Not enough data points to compute a meaningful result"""

    pass


class InsufficientComparablesError(InsufficientDataError):
    """Comparable sales are missing or unusable"""

    pass
