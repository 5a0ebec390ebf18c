"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantityError(ValidationError):
    """A sale quantity is not a positive integer."""


class InvalidAmountError(ValidationError):
    """A restock amount is not a positive integer."""


class InsufficientStockError(ValidationError):
    """A product does not have enough stock on hand."""


class ProductInUseError(ValidationError):
    """A product cannot be removed while sales still reference it."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    pass


class SaleNotFoundError(EntityNotFoundError):
    pass


class CustomerNotFoundError(EntityNotFoundError):
    pass
