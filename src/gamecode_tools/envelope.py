"""Request and response envelopes for the JSON-RPC wire protocol."""

from __future__ import annotations

import json
from typing import Any, NoReturn

from pydantic import BaseModel, ConfigDict, Field

from gamecode_tools.errors import (
    ErrorPayload,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    RpcError,
)

PROTOCOL_VERSION = "2.0"
VERSION_FIELD = "protocol_version"


class RawRequest(BaseModel):
    """Request envelope with parameters left as an untyped JSON value."""

    model_config = ConfigDict(extra="ignore")

    protocol_version: str
    method: str
    params: Any = Field(default_factory=dict)
    id: Any = None


class ErrorObject(BaseModel):
    """The ``error`` member of a failure envelope."""

    code: int
    message: str
    data: Any = None

    def to_dict(self) -> ErrorPayload:
        payload: ErrorPayload = {"code": self.code, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class SuccessResponse(BaseModel):
    """Envelope carrying a method result."""

    protocol_version: str = PROTOCOL_VERSION
    result: Any
    id: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            VERSION_FIELD: self.protocol_version,
            "result": self.result,
            "id": self.id,
        }


class ErrorResponse(BaseModel):
    """Envelope carrying an error object."""

    protocol_version: str = PROTOCOL_VERSION
    error: ErrorObject
    id: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            VERSION_FIELD: self.protocol_version,
            "error": self.error.to_dict(),
            "id": self.id,
        }


Response = SuccessResponse | ErrorResponse


def success(result: Any, request_id: Any) -> SuccessResponse:
    """Create a success envelope echoing ``request_id``."""
    return SuccessResponse(result=result, id=request_id)


def failure(error: RpcError, request_id: Any) -> ErrorResponse:
    """Create a failure envelope from an :class:`RpcError`."""
    return ErrorResponse(error=ErrorObject(**error.to_dict()), id=request_id)


def invalid_request(message: str, request_id: Any) -> ErrorResponse:
    """Create an invalid request (-32600) envelope."""
    return failure(InvalidRequestError(message), request_id)


def method_not_found(method: str, request_id: Any) -> ErrorResponse:
    """Create a method not found (-32601) envelope."""
    return failure(MethodNotFoundError(method), request_id)


def parse_envelope(text: str | bytes) -> dict[str, Any]:
    """Parse request text into a JSON object.

    Args:
        text: Request body as a string or UTF-8 encoded bytes.

    Raises:
        ParseError: If the text is not strict JSON, nests too deeply or is not
            a JSON object. In each case no request id can be recovered.

    Returns:
        The decoded JSON object.

    """
    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(str(exc)) from exc
    except RecursionError as exc:
        raise ParseError("document nests too deeply") from exc
    if not isinstance(document, dict):
        raise ParseError(
            f"expected a JSON object, got {type(document).__name__}"
        )
    return document


def _reject_constant(name: str) -> NoReturn:
    raise ParseError(f"non-standard constant {name}")


def serialize_response(response: Response) -> str:
    """Serialize an envelope to compact JSON text.

    Raises:
        ValueError: If the envelope holds NaN or infinite floats.

    """
    return json.dumps(
        response.to_dict(),
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
