"""Subscriber Service: facade validation, not-found normalization, and error wrapping.

Tests cover:
    - Validation failures never reach the store
    - Store errors are returned as ServiceResult failures (never raised)
    - Unknown emails are successful None results
    - The end-to-end lifecycle scenario against a real store
"""

from unittest.mock import AsyncMock

import pytest

from mailing_list.core.errors import (
    ConflictError, ErrorCategory, InputValidationError, PersistenceError,
)
from mailing_list.services.subscriber_service import SubscriberService


def _make_mock_store():
    store = AsyncMock()
    store.get.return_value = None
    store.list_active.return_value = []
    return store


@pytest.mark.parametrize("page,count", [(0, 5), (1, 0)])
async def test_list_validation_never_touches_store(page, count):
    store = _make_mock_store()
    result = await SubscriberService(store).list_subscribers(page, count)
    assert not result.ok
    assert isinstance(result.error, InputValidationError)
    store.list_active.assert_not_called()


async def test_blank_email_never_touches_store():
    store = _make_mock_store()
    result = await SubscriberService(store).create_subscriber("   ")
    assert result.error.category == ErrorCategory.VALIDATION
    store.create.assert_not_called()


async def test_store_persistence_error_is_wrapped_not_raised():
    store = _make_mock_store()
    store.get.side_effect = PersistenceError("disk I/O error", "execute")
    result = await SubscriberService(store).get_subscriber("a@x.com")
    assert not result.ok
    assert isinstance(result.error, PersistenceError)
    assert result.error.context.operation == "get"
    assert result.error.context.email == "a@x.com"


async def test_update_passes_full_subscriber_to_store():
    store = _make_mock_store()
    await SubscriberService(store).update_subscriber(" a@x.com ", 100, True)
    sent = store.update.call_args.args[0]
    assert sent.email == "a@x.com"
    assert sent.confirmed_at == 100
    assert sent.opt_out is True


async def test_get_unknown_email_is_success_none(service):
    result = await service.get_subscriber("nobody@x.com")
    assert result.ok
    assert result.value is None


async def test_delete_unknown_email_is_success_none(service):
    result = await service.delete_subscriber("nobody@x.com")
    assert result.ok
    assert result.value is None


async def test_duplicate_create_returns_conflict(service):
    assert (await service.create_subscriber("a@x.com")).ok
    result = await service.create_subscriber("a@x.com")
    assert isinstance(result.error, ConflictError)
    assert result.error.to_response()["error"]["context"]["operation"] == "create"


async def test_list_on_empty_store_is_empty(service):
    result = await service.list_subscribers(1, 1)
    assert result.ok
    assert result.value == []


async def test_lifecycle_scenario(service):
    created = (await service.create_subscriber("a@x.com")).unwrap()
    assert (created.email, created.confirmed_at, created.opt_out) == ("a@x.com", 0, False)

    got = (await service.get_subscriber("a@x.com")).unwrap()
    assert got == created

    updated = (await service.update_subscriber("a@x.com", 100, False)).unwrap()
    assert updated.confirmed_at == 100
    assert (await service.get_subscriber("a@x.com")).unwrap().confirmed_at == 100

    deleted = (await service.delete_subscriber("a@x.com")).unwrap()
    assert deleted.opt_out is True
    assert deleted.confirmed_at == 100

    still_there = (await service.get_subscriber("a@x.com")).unwrap()
    assert still_there.opt_out is True
    assert (await service.list_subscribers(1, 10)).unwrap() == []
