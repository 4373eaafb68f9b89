from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from ..common.validators import FieldError


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when a candidate entity violates one or more field rules."""

    def __init__(self, errors: Sequence["FieldError"]):
        self.errors = list(errors)
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in self.errors))


class NotFoundError(DomainError):
    """Raised when the requested record does not exist."""


class OperationCancelled(Exception):
    """Raised when a store operation is aborted through its cancellation token.

    Not a DomainError: a cancelled request says nothing about the data.
    """
