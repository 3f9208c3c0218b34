"""JSON-RPC Route: single POST endpoint carrying JSON-RPC 2.0 requests and batches.

Invariants:
    - Protocol errors are HTTP 200 with a JSON-RPC error object
    - Unparseable body → PARSE_ERROR; empty batch → INVALID_REQUEST
    - A body made only of notifications → HTTP 204 with no content
"""

import json
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from mailing_list.schemas.rpc import INVALID_REQUEST, PARSE_ERROR, rpc_error
from mailing_list.services.rpc_dispatch import RpcDispatch
from mailing_list.services.subscriber_service import (
    SubscriberService, get_subscriber_service,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/rpc", tags=["rpc"])


def get_rpc_dispatch(
    service: SubscriberService = Depends(get_subscriber_service),
) -> RpcDispatch:
    return RpcDispatch(service)


@router.post("")
async def handle_rpc(
    request: Request, dispatch: RpcDispatch = Depends(get_rpc_dispatch),
):
    """Decode one request or a batch and dispatch each object in order."""
    try:
        payload = json.loads(await request.body())
    except ValueError:
        logger.warning("RPC parse error", extra={"path": request.url.path})
        return JSONResponse(rpc_error(None, PARSE_ERROR, "Parse error"))

    if isinstance(payload, list):
        if not payload:
            return JSONResponse(
                rpc_error(None, INVALID_REQUEST, "Invalid Request"),
            )
        responses = [
            response for response in
            [await dispatch.handle(item) for item in payload]
            if response is not None
        ]
        return JSONResponse(responses) if responses else Response(status_code=204)

    response = await dispatch.handle(payload)
    return JSONResponse(response) if response is not None else Response(status_code=204)
