"""Request Enforcement: pure precondition checks run before any store access.

Invariants:
    - Pure functions: no IO, no logging, raise InputValidationError or return a value
    - page and count must both be >= 1
    - email must be non-blank; surrounding whitespace is stripped, case preserved

Design Decisions:
    - Raise instead of returning an error dict: the facade folds every
      MailingListError into a ServiceResult in one place
    - Email case is preserved: the stored email is the natural key exactly as given
"""

from mailing_list.core.domain_types import Email, PageRequest
from mailing_list.core.errors import InputValidationError


def validate_page_request(page: int, count: int) -> PageRequest:
    """Reject non-positive page/count. Out-of-range pages are NOT rejected."""
    if page <= 0 or count <= 0:
        raise InputValidationError(
            "page and count fields are required and must be greater than 0",
            field="page" if page <= 0 else "count",
        )
    return PageRequest(page=page, count=count)


def validate_email(email: str) -> Email:
    """Strip and reject blank emails."""
    cleaned = email.strip() if isinstance(email, str) else ""
    if not cleaned:
        raise InputValidationError(
            "email is required and cannot be blank", field="email",
        )
    return Email(cleaned)
