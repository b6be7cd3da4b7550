"""
Error kinds raised by the service layer.

Services raise these unchanged and never retry; the HTTP layer maps
them to status codes in ``main.create_app``.
"""


class ServiceError(Exception):
    """Base class for errors surfaced by services."""


class NotFoundError(ServiceError):
    """The requested record does not exist."""


class ForbiddenError(ServiceError):
    """The caller lacks the relationship the operation requires."""


class PersistenceError(ServiceError):
    """The store rejected a write or reported no effect for an existing record."""
