"""Text-level encode/decode for params, content and whole messages."""

import json
from typing import Any, Dict, Optional, Type, Union

import structlog
from pydantic import ValidationError

from .. import metrics
from .content import Content, dump_content, parse_content
from .errors import DecodeError, ErrorCode
from .messages import MCPMessage, MCPNotification, MCPRequest, MCPResponse
from .params import ExtensibleParams, NotificationParams

logger = structlog.get_logger()

RawJSON = Union[str, bytes, bytearray]

_COMPACT = (",", ":")


def load_json(raw: RawJSON, kind: str = "message") -> Any:
    """Parse JSON text, raising ``DecodeError`` when it is not valid JSON."""
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        metrics.decode_failures.labels(kind=kind, reason="invalid_json").inc()
        logger.warning("Invalid JSON", kind=kind, error=str(e))
        raise DecodeError(f"Invalid JSON: {e}", ErrorCode.PARSE_ERROR)


def dump_json(data: Any, indent: Optional[int] = None, sort_keys: bool = False) -> str:
    separators = None if indent is not None else _COMPACT
    return json.dumps(data, indent=indent, sort_keys=sort_keys, separators=separators)


def encode_params(params: ExtensibleParams) -> str:
    """Encode params as a flat JSON object; empty params give ``{}``."""
    return dump_json(params.to_wire())


def decode_params(
    raw: Optional[RawJSON],
    params_class: Type[ExtensibleParams] = NotificationParams,
) -> ExtensibleParams:
    """Decode a flat JSON object into params.

    ``None``, ``null`` and ``{}`` give params with empty ``meta`` and
    ``additional_fields``. A ``_meta`` that is not an object is dropped.
    Text that is not JSON, or JSON that is not an object, raises
    ``DecodeError``.
    """
    data = None if raw is None else load_json(raw, kind="params")
    return params_class.from_wire(data)


def encode_content(content: Content) -> str:
    return dump_json(dump_content(content))


def decode_content(raw: Union[RawJSON, Dict[str, Any]]) -> Content:
    """Decode one content value, dispatching on its ``type``."""
    data = load_json(raw, kind="content") if isinstance(raw, (str, bytes, bytearray)) else raw
    return parse_content(data)


def parse_message(data: Dict[str, Any]) -> MCPMessage:
    """Classify a decoded JSON-RPC object and validate it.

    Objects with ``id`` and ``method`` are requests, ``id`` alone marks a
    response and ``method`` alone a notification.
    """
    if not isinstance(data, dict):
        metrics.decode_failures.labels(kind="message", reason="not_object").inc()
        raise DecodeError("Message must be a JSON object", ErrorCode.INVALID_REQUEST)

    if data.get("jsonrpc") != "2.0":
        metrics.decode_failures.labels(kind="message", reason="version").inc()
        raise DecodeError("Invalid JSON-RPC version", ErrorCode.INVALID_REQUEST)

    if "id" in data:
        message_class = MCPRequest if "method" in data else MCPResponse
    elif "method" in data:
        message_class = MCPNotification
    else:
        metrics.decode_failures.labels(kind="message", reason="structure").inc()
        raise DecodeError("Invalid message structure", ErrorCode.INVALID_REQUEST)

    try:
        message = message_class.model_validate(data)
    except ValidationError as e:
        metrics.decode_failures.labels(kind="message", reason="validation").inc()
        logger.error("Message validation failed", error=str(e))
        raise DecodeError(
            "Invalid request",
            ErrorCode.INVALID_REQUEST,
            e.errors(include_url=False, include_context=False)
        )

    logger.debug(
        "Message decoded",
        message_type=message_class.__name__,
        method=data.get("method")
    )
    return message


def decode_message(raw: RawJSON) -> MCPMessage:
    return parse_message(load_json(raw))


def dump_message(message: MCPMessage) -> Dict[str, Any]:
    """Wire form of a message; empty request/notification params are omitted."""
    return message.model_dump(exclude_none=True)


def encode_message(message: MCPMessage) -> str:
    return dump_json(dump_message(message))
