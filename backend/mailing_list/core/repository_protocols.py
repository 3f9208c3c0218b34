"""Boundary Protocols: contract between the service facade and the store.

Invariants:
    - Facade NEVER imports the concrete store: dependency arrows point inward only
    - get() returns None for a missing email; it never raises for absence
    - delete() on a missing email succeeds silently (zero rows affected)
    - Every failure surfaces as a MailingListError subclass; no retries

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async methods: implementations do IO; the facade awaits them directly
"""

from typing import Protocol

from mailing_list.core.domain_types import Email, PageRequest, Subscriber


class SubscriberRepository(Protocol):
    """Contract for subscriber persistence: implemented by infrastructure."""
    async def create(self, email: Email) -> None: ...
    async def get(self, email: Email) -> Subscriber | None: ...
    async def update(self, subscriber: Subscriber) -> None: ...
    async def delete(self, email: Email) -> None: ...
    async def list_active(self, page_request: PageRequest) -> list[Subscriber]: ...
