"""Subscriber Service: protocol-agnostic facade shared by the REST and JSON-RPC front-ends.

Invariants:
    - Input is validated BEFORE the store is touched (page/count >= 1, non-blank email)
    - Every MailingListError becomes ServiceResult.failure: never raised, never swallowed
    - "Not found" is ServiceResult.success(None) for get and delete
    - Mutations read the row back so callers receive the stored state, not their input

Design Decisions:
    - Facade is stateless over a SubscriberRepository: one instance per request is cheap,
      all shared state (engine, write lock) lives in the session manager
    - update_subscriber keeps full-overwrite upsert semantics: it may create a row,
      including one already opted out (kept as a full-overwrite upsert)
"""

import logging

from fastapi import Depends

from mailing_list.core.domain_types import Subscriber
from mailing_list.core.enforce_requests import validate_email, validate_page_request
from mailing_list.core.errors import MailingListError
from mailing_list.core.repository_protocols import SubscriberRepository
from mailing_list.core.service_result import ServiceResult
from mailing_list.infrastructure.database import (
    DatabaseSessionManager, get_db_manager,
)
from mailing_list.infrastructure.subscriber_store import SubscriberStore

logger = logging.getLogger(__name__)


class SubscriberService:
    """create / get / update / delete / list over one repository."""

    def __init__(self, store: SubscriberRepository):
        self._store = store

    async def create_subscriber(self, email: str) -> ServiceResult[Subscriber]:
        try:
            email = validate_email(email)
            logger.info(f"CreateSubscriber: {email}", extra={"email": email})
            await self._store.create(email)
            return ServiceResult.success(await self._store.get(email))
        except MailingListError as e:
            return self._fail("create", e, email)

    async def get_subscriber(self, email: str) -> ServiceResult[Subscriber]:
        try:
            email = validate_email(email)
            logger.info(f"GetSubscriber: {email}", extra={"email": email})
            return ServiceResult.success(await self._store.get(email))
        except MailingListError as e:
            return self._fail("get", e, email)

    async def update_subscriber(
        self, email: str, confirmed_at: int, opt_out: bool,
    ) -> ServiceResult[Subscriber]:
        try:
            email = validate_email(email)
            logger.info(f"UpdateSubscriber: {email}", extra={"email": email})
            await self._store.update(Subscriber(
                id=None, email=email,
                confirmed_at=confirmed_at, opt_out=opt_out,
            ))
            return ServiceResult.success(await self._store.get(email))
        except MailingListError as e:
            return self._fail("update", e, email)

    async def delete_subscriber(self, email: str) -> ServiceResult[Subscriber]:
        try:
            email = validate_email(email)
            logger.info(f"DeleteSubscriber: {email}", extra={"email": email})
            await self._store.delete(email)
            return ServiceResult.success(await self._store.get(email))
        except MailingListError as e:
            return self._fail("delete", e, email)

    async def list_subscribers(
        self, page: int, count: int,
    ) -> ServiceResult[list[Subscriber]]:
        try:
            page_request = validate_page_request(page, count)
            logger.info(f"ListSubscribers: page={page} count={count}")
            return ServiceResult.success(
                await self._store.list_active(page_request),
            )
        except MailingListError as e:
            return self._fail("list", e)

    def _fail(
        self, operation: str, error: MailingListError, email: str | None = None,
    ) -> ServiceResult:
        error.context.operation = error.context.operation or operation
        error.context.email = error.context.email or email
        logger.warning(
            f"{operation} failed: {error.message}",
            extra={
                "error_code": error.code, "operation": operation, "email": email,
            },
        )
        return ServiceResult.failure(error)


def get_subscriber_service(
    manager: DatabaseSessionManager = Depends(get_db_manager),
) -> SubscriberService:
    """FastAPI dependency: facade over the process-wide session manager."""
    return SubscriberService(SubscriberStore(manager))
