"""Domain Types: the Subscriber value and pagination request.

Invariants:
    - confirmed_at is epoch seconds; NEVER_CONFIRMED (0) means "never confirmed", never None
    - opt_out is always a bool; True means soft-deleted (row retained)
    - id is None only for a Subscriber that has not been read back from the store
    - PageRequest.limit and offset never exceed MAX_SQL_INTEGER when bound into SQL

Design Decisions:
    - Frozen dataclasses over ORM objects in the service layer: values never
      lazy-load or mutate after the session closes (ADR: core never imports shell)
    - NewType over wrapper classes: zero runtime cost, full type-checker support
"""

from dataclasses import dataclass
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SubscriberId = NewType("SubscriberId", int)
Email = NewType("Email", str)


# ─── Value Types ─────────────────────────────────────────────────

NEVER_CONFIRMED: int = 0

# largest value a signed 64-bit SQL INTEGER bind accepts
MAX_SQL_INTEGER: int = 2**63 - 1


@dataclass(frozen=True)
class Subscriber:
    """A mailing-list entry keyed by email."""
    id: SubscriberId | None
    email: Email
    confirmed_at: int = NEVER_CONFIRMED
    opt_out: bool = False


@dataclass(frozen=True)
class PageRequest:
    """1-indexed page of `count` rows. Bounds are checked by enforce_requests."""
    page: int
    count: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.count

    @property
    def limit(self) -> int:
        return min(self.count, MAX_SQL_INTEGER)

    @property
    def is_beyond_storage(self) -> bool:
        """No table can hold this many rows, so the page is necessarily empty."""
        return self.offset > MAX_SQL_INTEGER
