"""JSON-RPC error codes and the exceptions raised by the wire codec."""

from enum import IntEnum
from typing import Any, Dict, List, Optional


class ErrorCode(IntEnum):
    """JSON-RPC 2.0 error codes."""
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class WireError(Exception):
    """Base exception for wire encoding errors."""
    def __init__(
        self,
        message: str,
        code: int = ErrorCode.INVALID_REQUEST,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.errors = errors or []


class DecodeError(WireError):
    """Raised when a payload cannot be decoded."""
    def __init__(
        self,
        message: str,
        code: int = ErrorCode.PARSE_ERROR,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message, code, errors)


class UnknownContentTypeError(DecodeError):
    """Raised when a content discriminator is missing or not recognised."""
    def __init__(self, content_type: Any):
        super().__init__(
            f"Unknown content type: {content_type!r}", ErrorCode.INVALID_PARAMS
        )
        self.content_type = content_type


class ContentDecodeError(DecodeError):
    """Raised when a known content variant fails field validation."""
    def __init__(self, content_type: str, errors: List[Dict[str, Any]]):
        super().__init__(
            f"Invalid {content_type} content", ErrorCode.INVALID_PARAMS, errors
        )
        self.content_type = content_type
