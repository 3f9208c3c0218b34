"""Subscriber Routes: REST front-end over the subscriber facade.

Invariants:
    - Every handler is one facade call; failures re-raise via ServiceResult.unwrap()
      into the global MailingListError handler
    - GET/DELETE on an unknown email return 200 with null, not 404 (absence is a value)
    - PUT is a full-overwrite upsert: it may create the subscriber

Design Decisions:
    - Pagination bounds are NOT declared on Query(ge=1): the facade rejects them,
      so REST and JSON-RPC report the same VALIDATION_ERROR envelope
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from mailing_list.schemas.subscriber import (
    SubscriberCreate, SubscriberPage, SubscriberResponse, SubscriberUpdate,
)
from mailing_list.services.subscriber_service import (
    SubscriberService, get_subscriber_service,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/subscribers", tags=["subscribers"])


@router.post(
    "", response_model=SubscriberResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_subscriber(
    body: SubscriberCreate,
    service: SubscriberService = Depends(get_subscriber_service),
):
    """Create a subscriber (unconfirmed, opted in)."""
    result = await service.create_subscriber(body.email)
    return SubscriberResponse.from_value(result.unwrap())


@router.get("", response_model=SubscriberPage)
async def list_subscribers(
    page: int = Query(1),
    count: int = Query(10),
    service: SubscriberService = Depends(get_subscriber_service),
):
    """List active subscribers ordered by id."""
    result = await service.list_subscribers(page, count)
    return SubscriberPage.from_values(result.unwrap(), page, count)


@router.get("/{email}", response_model=SubscriberResponse | None)
async def get_subscriber(
    email: str, service: SubscriberService = Depends(get_subscriber_service),
):
    """Get a subscriber by email, or null."""
    result = await service.get_subscriber(email)
    return SubscriberResponse.from_value(result.unwrap())


@router.put("/{email}", response_model=SubscriberResponse)
async def update_subscriber(
    email: str,
    body: SubscriberUpdate,
    service: SubscriberService = Depends(get_subscriber_service),
):
    """Overwrite confirmed_at and opt_out (insert if absent)."""
    result = await service.update_subscriber(
        email, body.confirmed_at, body.opt_out,
    )
    return SubscriberResponse.from_value(result.unwrap())


@router.delete("/{email}", response_model=SubscriberResponse | None)
async def delete_subscriber(
    email: str, service: SubscriberService = Depends(get_subscriber_service),
):
    """Opt the subscriber out. Unknown email returns null."""
    result = await service.delete_subscriber(email)
    return SubscriberResponse.from_value(result.unwrap())
