"""Service Result: the single result-or-error type returned by the facade.

Invariants:
    - Exactly one of (value, error) is meaningful: error is None <=> ok
    - A successful result may carry value=None ("not found" is a value, not an error)
    - unwrap() re-raises the carried MailingListError unchanged

Design Decisions:
    - Result type over raising through the facade: each front-end maps one
      shape onto its wire format (REST raises into the global handler,
      JSON-RPC builds an error object) without duplicating error logic
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from mailing_list.core.errors import MailingListError

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """Outcome of one facade operation."""
    value: T | None = None
    error: MailingListError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T | None) -> "ServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: MailingListError) -> "ServiceResult[T]":
        return cls(error=error)

    def unwrap(self) -> T | None:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value
