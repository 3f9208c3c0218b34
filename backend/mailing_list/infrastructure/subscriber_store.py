"""Subscriber Store: SQL operations over the subscribers table.

Invariants:
    - Each operation runs in its own session and commits independently (no cross-call atomicity)
    - create() inserts (email, 0, false); a duplicate email raises ConflictError
    - update() is a full-overwrite upsert keyed on email: both fields always written
    - delete() only sets opt_out = true; a missing email is a silent no-op
    - list_active() returns opt_out = false rows ordered by id ASC; bounds are trusted
    - A page whose offset no SQL INTEGER can bind is empty, never an error
    - No retries: every failure propagates as the manager mapped it

Design Decisions:
    - Dialect-native INSERT ... ON CONFLICT over select-then-write: the upsert is
      a single statement, so concurrent writers cannot interleave between check and write
    - Mutating calls hold manager.write_lock() for the whole session (SQLite only)
"""

import logging

from sqlalchemy import select, update as sql_update
from sqlalchemy.dialects import postgresql, sqlite

from mailing_list.core.domain_types import (
    Email, NEVER_CONFIRMED, PageRequest, Subscriber,
)
from mailing_list.infrastructure.database import DatabaseSessionManager
from mailing_list.models.subscriber import Subscriber as SubscriberModel

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class SubscriberStore:
    """Implements SubscriberRepository against the shared session manager."""

    def __init__(self, manager: DatabaseSessionManager):
        self._db = manager

    async def create(self, email: Email) -> None:
        async with self._db.write_lock():
            async with self._db.session() as db:
                db.add(SubscriberModel(
                    email=email, confirmed_at=NEVER_CONFIRMED, opt_out=False,
                ))
                await db.commit()

    async def get(self, email: Email) -> Subscriber | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(SubscriberModel).where(SubscriberModel.email == email),
            )
            row = result.scalar_one_or_none()
            return row.to_value() if row else None

    async def update(self, subscriber: Subscriber) -> None:
        """Insert or fully replace confirmed_at and opt_out for subscriber.email."""
        insert = _UPSERT_INSERTS[self._db.engine.dialect.name]
        stmt = insert(SubscriberModel).values(
            email=subscriber.email,
            confirmed_at=subscriber.confirmed_at,
            opt_out=subscriber.opt_out,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[SubscriberModel.email],
            set_={
                "confirmed_at": stmt.excluded.confirmed_at,
                "opt_out": stmt.excluded.opt_out,
            },
        )
        async with self._db.write_lock():
            async with self._db.session() as db:
                await db.execute(stmt)
                await db.commit()

    async def delete(self, email: Email) -> None:
        """Soft delete. Zero matched rows is success."""
        async with self._db.write_lock():
            async with self._db.session() as db:
                result = await db.execute(
                    sql_update(SubscriberModel)
                    .where(SubscriberModel.email == email)
                    .values(opt_out=True),
                )
                await db.commit()
        if result.rowcount == 0:
            logger.debug("Delete matched no rows", extra={"email": email})

    async def list_active(self, page_request: PageRequest) -> list[Subscriber]:
        if page_request.is_beyond_storage:
            return []
        async with self._db.session() as db:
            result = await db.execute(
                select(SubscriberModel)
                .where(SubscriberModel.opt_out.is_(False))
                .order_by(SubscriberModel.id.asc())
                .limit(page_request.limit)
                .offset(page_request.offset)
            )
            return [row.to_value() for row in result.scalars().all()]
