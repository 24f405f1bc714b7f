"""Errors raised by the storefront domain.

Handlers let these propagate; the CLI turns any ``DomainException`` into a
one-line error message and a non-zero exit code.
"""


class DomainException(Exception):
    """Root of every error a handler may raise on bad input or state."""


class ValidationError(DomainException):
    """Input or a state change broke a catalog, cart or order rule."""


class EntityNotFoundError(DomainException):
    """No product, category, order or cart line with that key."""


class SlugConflictError(DomainException):
    """A slug is already claimed by another record."""


class CategoryCycleError(ValidationError):
    """A category would become its own ancestor."""
