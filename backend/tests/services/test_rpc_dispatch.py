"""RPC Dispatch: tests for explicit JSON-RPC method routing.

Tests cover:
    - Unknown methods return METHOD_NOT_FOUND listing the registered methods
    - Envelope and params validation map to INVALID_REQUEST / INVALID_PARAMS
    - Notifications execute but return None
    - Facade errors map by category with the shared envelope in data
"""

from unittest.mock import AsyncMock

from mailing_list.core.errors import ConflictError, PersistenceError
from mailing_list.core.service_result import ServiceResult
from mailing_list.schemas.rpc import (
    CONFLICT_ERROR, INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST,
    METHOD_NOT_FOUND, PERSISTENCE_ERROR,
)
from mailing_list.services.rpc_dispatch import RpcDispatch


def _call(method, params=None, request_id=1) -> dict:
    payload = {"jsonrpc": "2.0", "method": method, "id": request_id}
    if params is not None:
        payload["params"] = params
    return payload


def test_all_five_methods_registered():
    dispatch = RpcDispatch(AsyncMock())
    assert dispatch.method_names == [
        "create_subscriber", "delete_subscriber", "get_subscriber",
        "list_subscribers", "update_subscriber",
    ]


async def test_unknown_method_returns_method_not_found():
    response = await RpcDispatch(AsyncMock()).handle(_call("drop_table"))
    assert response["error"]["code"] == METHOD_NOT_FOUND
    assert response["id"] == 1
    assert response["error"]["data"]["available_methods"] == [
        "create_subscriber", "delete_subscriber", "get_subscriber",
        "list_subscribers", "update_subscriber",
    ]


async def test_wrong_version_is_invalid_request():
    payload = {"jsonrpc": "1.0", "method": "get_subscriber", "id": 7}
    response = await RpcDispatch(AsyncMock()).handle(payload)
    assert response["error"]["code"] == INVALID_REQUEST
    assert response["id"] == 7


async def test_non_object_is_invalid_request():
    response = await RpcDispatch(AsyncMock()).handle(42)
    assert response["error"]["code"] == INVALID_REQUEST
    assert response["id"] is None


async def test_positional_params_rejected():
    response = await RpcDispatch(AsyncMock()).handle(
        _call("get_subscriber", ["a@x.com"]),
    )
    assert response["error"]["code"] == INVALID_PARAMS


async def test_missing_param_reports_field():
    response = await RpcDispatch(AsyncMock()).handle(
        _call("update_subscriber", {"email": "a@x.com", "opt_out": False}),
    )
    assert response["error"]["code"] == INVALID_PARAMS
    assert any(d["field"] == "confirmed_at" for d in response["error"]["data"])


async def test_notification_returns_none_but_executes():
    service = AsyncMock()
    service.delete_subscriber.return_value = ServiceResult.success(None)
    payload = {"jsonrpc": "2.0", "method": "delete_subscriber", "params": {"email": "a@x.com"}}
    assert await RpcDispatch(service).handle(payload) is None
    service.delete_subscriber.assert_awaited_once_with("a@x.com")


async def test_conflict_maps_to_conflict_code_with_envelope():
    service = AsyncMock()
    service.create_subscriber.return_value = ServiceResult.failure(ConflictError("dup"))
    response = await RpcDispatch(service).handle(
        _call("create_subscriber", {"email": "a@x.com"}),
    )
    assert response["error"]["code"] == CONFLICT_ERROR
    assert response["error"]["message"] == "dup"
    assert response["error"]["data"]["code"] == "CONFLICT"


async def test_persistence_error_maps_to_persistence_code():
    service = AsyncMock()
    service.get_subscriber.return_value = ServiceResult.failure(
        PersistenceError("disk", "execute"),
    )
    response = await RpcDispatch(service).handle(
        _call("get_subscriber", {"email": "a@x.com"}),
    )
    assert response["error"]["code"] == PERSISTENCE_ERROR
    assert response["error"]["data"]["category"] == "database"


async def test_unexpected_exception_is_internal_error_without_details():
    service = AsyncMock()
    service.get_subscriber.side_effect = RuntimeError("secret internals")
    response = await RpcDispatch(service).handle(
        _call("get_subscriber", {"email": "a@x.com"}),
    )
    assert response["error"]["code"] == INTERNAL_ERROR
    assert "secret" not in response["error"]["message"]


async def test_list_result_shape(service):
    await service.create_subscriber("a@x.com")
    response = await RpcDispatch(service).handle(
        _call("list_subscribers", {"page": 1, "count": 10}, request_id="req-1"),
    )
    assert response["id"] == "req-1"
    assert response["result"]["page"] == 1
    assert [s["email"] for s in response["result"]["subscribers"]] == ["a@x.com"]
