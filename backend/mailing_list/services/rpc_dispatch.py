"""RPC Dispatch: explicit routing from JSON-RPC method name to facade call.

Invariants:
    - Every method->handler mapping is visible: no getattr magic, no auto-discovery
    - Unknown methods return METHOD_NOT_FOUND listing the registered names (never raise)
    - Params are named-only and validated per method before the facade is called
    - Facade failures map by ErrorCategory; data carries the shared error envelope
    - Notifications are executed but produce no response object (None)

Design Decisions:
    - Explicit dict over getattr: every mapping visible in one place
    - Results use the same Pydantic shapes as the REST routes, so both
      front-ends serialize a subscriber identically
    - Unexpected exceptions become INTERNAL_ERROR without internal details
"""

import logging
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ValidationError

from mailing_list.core.errors import ErrorCategory, MailingListError
from mailing_list.core.service_result import ServiceResult
from mailing_list.schemas.rpc import (
    CONFLICT_ERROR, INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST,
    METHOD_NOT_FOUND, PERSISTENCE_ERROR, RpcRequest, rpc_error, rpc_result,
)
from mailing_list.schemas.subscriber import (
    EmailParams, PageParams, SubscriberPage, SubscriberResponse, UpdateParams,
)
from mailing_list.services.subscriber_service import SubscriberService

logger = logging.getLogger(__name__)

_CATEGORY_CODES = {
    ErrorCategory.VALIDATION: INVALID_PARAMS,
    ErrorCategory.CONFLICT: CONFLICT_ERROR,
    ErrorCategory.DATABASE: PERSISTENCE_ERROR,
}

Handler = Callable[[Any], Awaitable[Any]]


class RpcDispatch:
    """Routes method -> (params model, handler). Explicit registration."""

    def __init__(self, service: SubscriberService):
        self._service = service

        # every mapping explicit: adding a method requires editing this dict
        self._methods: dict[str, tuple[type[BaseModel], Handler]] = {
            "create_subscriber": (EmailParams, self._create),
            "get_subscriber": (EmailParams, self._get),
            "update_subscriber": (UpdateParams, self._update),
            "delete_subscriber": (EmailParams, self._delete),
            "list_subscribers": (PageParams, self._list),
        }

    @property
    def method_names(self) -> list[str]:
        return sorted(self._methods)

    async def handle(self, payload: Any) -> dict | None:
        """Handle one request object. Returns a response dict, or None for notifications."""
        try:
            request = RpcRequest.model_validate(payload)
        except ValidationError:
            request_id = payload.get("id") if isinstance(payload, dict) else None
            if not isinstance(request_id, (str, int)):
                request_id = None
            return rpc_error(request_id, INVALID_REQUEST, "Invalid Request")

        response = await self._execute(request)
        return None if request.is_notification else response

    async def _execute(self, request: RpcRequest) -> dict:
        entry = self._methods.get(request.method)
        if not entry:
            return rpc_error(
                request.id, METHOD_NOT_FOUND,
                f"Method '{request.method}' does not exist.",
                data={"available_methods": self.method_names},
            )
        params_model, handler = entry
        if isinstance(request.params, list):
            return rpc_error(
                request.id, INVALID_PARAMS, "Params must be a named object",
            )
        try:
            params = params_model.model_validate(request.params or {})
        except ValidationError as e:
            return rpc_error(
                request.id, INVALID_PARAMS, "Invalid params",
                data=[
                    {
                        "field": ".".join(str(loc) for loc in err["loc"]),
                        "message": err["msg"],
                        "type": err["type"],
                    }
                    for err in e.errors()
                ],
            )

        logger.info(
            f"RPC {request.method}", extra={"rpc_method": request.method},
        )
        try:
            return rpc_result(request.id, await handler(params))
        except MailingListError as e:
            return self._error_response(request.id, e)
        except Exception as e:
            logger.error(
                f"Unhandled exception in RPC {request.method}: {e}",
                exc_info=True, extra={"rpc_method": request.method},
            )
            return rpc_error(
                request.id, INTERNAL_ERROR, "An unexpected error occurred",
            )

    def _error_response(self, request_id, error: MailingListError) -> dict:
        code = _CATEGORY_CODES.get(error.category, INTERNAL_ERROR)
        return rpc_error(
            request_id, code, error.message,
            data=error.to_response()["error"],
        )

    # ─── Handlers ────────────────────────────────────────────────

    async def _create(self, params: EmailParams) -> dict | None:
        return _one(await self._service.create_subscriber(params.email))

    async def _get(self, params: EmailParams) -> dict | None:
        return _one(await self._service.get_subscriber(params.email))

    async def _update(self, params: UpdateParams) -> dict | None:
        return _one(await self._service.update_subscriber(
            params.email, params.confirmed_at, params.opt_out,
        ))

    async def _delete(self, params: EmailParams) -> dict | None:
        return _one(await self._service.delete_subscriber(params.email))

    async def _list(self, params: PageParams) -> dict:
        result = await self._service.list_subscribers(params.page, params.count)
        return SubscriberPage.from_values(
            result.unwrap(), params.page, params.count,
        ).model_dump()


def _one(result: ServiceResult) -> dict | None:
    """unwrap() raises the carried error into _execute's mapping."""
    response = SubscriberResponse.from_value(result.unwrap())
    return response.model_dump() if response else None
