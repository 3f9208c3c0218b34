"""Subscriber Schemas: wire models shared by the REST routes and JSON-RPC params.

Invariants:
    - SubscriberResponse mirrors the domain value field-for-field
    - confirmed_at is epoch seconds >= 0 (0 = never confirmed)
    - SubscriberUpdate carries BOTH fields: updates are full overwrites, never patches

Design Decisions:
    - Page/count are plain ints here (no ge=1): the facade owns that rule so both
      front-ends reject bad bounds with the same VALIDATION_ERROR envelope
    - strict bool for opt_out: "yes"/"1" strings are rejected, not coerced
"""

from pydantic import BaseModel, ConfigDict, Field, StrictBool

from mailing_list.core.domain_types import Subscriber


class SubscriberCreate(BaseModel):
    """Create request: only the natural key."""
    email: str = Field(min_length=1, max_length=320)


class SubscriberUpdate(BaseModel):
    """Full-overwrite update body (email comes from the path)."""
    confirmed_at: int = Field(0, ge=0)
    opt_out: StrictBool = False


class SubscriberResponse(BaseModel):
    """Public subscriber representation."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    confirmed_at: int
    opt_out: bool

    @classmethod
    def from_value(cls, subscriber: Subscriber | None) -> "SubscriberResponse | None":
        return cls.model_validate(subscriber) if subscriber else None


class SubscriberPage(BaseModel):
    """One page of active (not opted-out) subscribers, ordered by id."""
    subscribers: list[SubscriberResponse]
    page: int
    count: int

    @classmethod
    def from_values(
        cls, subscribers: list[Subscriber], page: int, count: int,
    ) -> "SubscriberPage":
        return cls(
            subscribers=[SubscriberResponse.model_validate(s) for s in subscribers],
            page=page, count=count,
        )


# --- JSON-RPC params ---------------------------------------------------------

class EmailParams(BaseModel):
    """Params for create/get/delete."""
    model_config = ConfigDict(extra="forbid")

    email: str = Field(min_length=1, max_length=320)


class UpdateParams(EmailParams):
    """Params for update_subscriber: all three fields required."""
    confirmed_at: int = Field(ge=0)
    opt_out: StrictBool


class PageParams(BaseModel):
    """Params for list_subscribers."""
    model_config = ConfigDict(extra="forbid")

    page: int
    count: int
