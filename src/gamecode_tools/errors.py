"""Error taxonomy shared by the dispatcher and the tools."""

from __future__ import annotations

from enum import IntEnum
from typing import NoReturn, NotRequired, TypedDict


class ErrorCode(IntEnum):
    """Reserved JSON-RPC error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    IO_ERROR = -32000
    PERMISSION_DENIED = -32001


class ErrorPayload(TypedDict):
    """Wire shape of the ``error`` member of a failure envelope."""

    code: int
    message: str
    data: NotRequired[object]


class RpcError(Exception):
    """Base error carrying a protocol error code and optional data."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    prefix: str = ""

    def __init__(self, message: str, data: object | None = None) -> None:
        """Create an error with a human-readable message."""
        super().__init__(message)
        self.message = message
        self.data = data

    @property
    def wire_message(self) -> str:
        """Message as it appears on the wire, including the category prefix."""
        return f"{self.prefix}{self.message}"

    def to_dict(self) -> ErrorPayload:
        """Return the structured error payload."""
        payload: ErrorPayload = {"code": int(self.code), "message": self.wire_message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class ParseError(RpcError):
    """The request text is not a JSON object."""

    code = ErrorCode.PARSE_ERROR
    prefix = "Parse error: "


class InvalidRequestError(RpcError):
    """The envelope is well-formed JSON but not a valid request."""

    code = ErrorCode.INVALID_REQUEST
    prefix = "Invalid request: "


class MethodNotFoundError(RpcError):
    """No handler is registered under the requested method name."""

    code = ErrorCode.METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        super().__init__("Method not found")
        self.method = method


class InvalidParamsError(RpcError):
    """Parameters do not match the shape a tool expects."""

    code = ErrorCode.INVALID_PARAMS
    prefix = "Invalid params: "


class ToolIOError(RpcError):
    """I/O failure surfaced from a tool."""

    code = ErrorCode.IO_ERROR
    prefix = "I/O error: "


class PermissionDeniedError(RpcError):
    """Permission or authorization failure surfaced from a tool."""

    code = ErrorCode.PERMISSION_DENIED
    prefix = "Permission denied: "


class ToolError(RpcError):
    """Any other tool-level failure."""

    code = ErrorCode.INTERNAL_ERROR


def error_from_exception(exc: BaseException) -> RpcError:
    """Map an arbitrary exception onto the error taxonomy."""
    if isinstance(exc, RpcError):
        return exc
    if isinstance(exc, PermissionError):
        return PermissionDeniedError(str(exc))
    if isinstance(exc, OSError):
        return ToolIOError(str(exc))
    return ToolError(str(exc) or type(exc).__name__)


def raise_invalid_params(message: str, data: object | None = None) -> NoReturn:
    """Raise an :class:`InvalidParamsError` with an optional payload."""
    raise InvalidParamsError(message, data=data)
