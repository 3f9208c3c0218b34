"""Subscriber ORM: the single persisted table.

Invariants:
    - id is an INTEGER primary key, auto-assigned and never reused (sqlite_autoincrement)
    - email is UNIQUE and NOT NULL: the natural key for lookups and upserts
    - confirmed_at is epoch seconds, NOT NULL; 0 means never confirmed
    - opt_out is NOT NULL; rows are soft-deleted, never removed

Design Decisions:
    - Integer epoch over DateTime: the zero sentinel has no timezone ambiguity
    - BigInteger for confirmed_at: survives 2038 on PostgreSQL int4
"""

from sqlalchemy import BigInteger, Boolean, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from mailing_list.core.domain_types import (
    Email, NEVER_CONFIRMED, Subscriber as SubscriberValue, SubscriberId,
)
from mailing_list.db.base import Base


class Subscriber(Base):
    """Mailing-list subscriber row."""
    __tablename__ = "subscribers"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    confirmed_at: Mapped[int] = mapped_column(
        BigInteger, nullable=False, default=NEVER_CONFIRMED,
    )
    opt_out: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )

    def to_value(self) -> SubscriberValue:
        """Detach into an immutable domain value."""
        return SubscriberValue(
            id=SubscriberId(self.id),
            email=Email(self.email),
            confirmed_at=self.confirmed_at,
            opt_out=self.opt_out,
        )
