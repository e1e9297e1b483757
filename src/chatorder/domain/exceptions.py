"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input was malformed or a business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist (or is not visible to the caller)."""


class ConflictError(DomainException):
    """The request conflicts with the current state, e.g. paying twice."""


class InvalidStateError(DomainException):
    """The order is not in a state that allows the requested operation."""


class InvalidTransitionError(InvalidStateError):
    """A status transition that the order lifecycle does not permit."""


class GatewayError(DomainException):
    """The payment gateway was unreachable or answered with an unexpected shape."""
