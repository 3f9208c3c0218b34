"""JSON-RPC 2.0 Schemas: request envelope and error/response builders.

Invariants:
    - jsonrpc must be exactly "2.0"
    - A request WITHOUT an "id" member is a notification and gets no response
    - Error responses always carry code + message; data is optional

Design Decisions:
    - Envelope validated with Pydantic, params validated per-method by the dispatcher:
      an invalid envelope is -32600, invalid params is -32602 (distinct failure classes)
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
CONFLICT_ERROR = -32009
PERSISTENCE_ERROR = -32010

RequestId = str | int | None


class RpcRequest(BaseModel):
    """JSON-RPC 2.0 request object."""
    model_config = ConfigDict(extra="forbid")

    jsonrpc: Literal["2.0"]
    method: str
    params: dict[str, Any] | list[Any] | None = None
    id: RequestId = None

    @property
    def is_notification(self) -> bool:
        return "id" not in self.model_fields_set


def rpc_result(request_id: RequestId, result: Any) -> dict:
    return {"jsonrpc": "2.0", "result": result, "id": request_id}


def rpc_error(
    request_id: RequestId, code: int, message: str, data: Any = None,
) -> dict:
    error: dict = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "error": error, "id": request_id}
