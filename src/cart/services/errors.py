from __future__ import annotations


class ServiceError(Exception):
    """Base class for domain/service layer failures."""


class NotFoundError(ServiceError):
    """Raised when a requested entity does not exist."""

    def __init__(self, message: str):
        self._message = message
        super().__init__(message)

    @property
    def message(self) -> str:
        return self._message

    def __str__(self) -> str:
        return self._message

    @classmethod
    def for_resource(cls, resource: str, identifier: str) -> NotFoundError:
        return cls(f"{resource} '{identifier}' not found")


class BadRequestError(ServiceError):
    """Raised when request data is semantically invalid for the service."""


class ConfigurationError(Exception):
    """Raised at startup when settings or backing services cannot be resolved."""
