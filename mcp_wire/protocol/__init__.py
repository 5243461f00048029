"""JSON-RPC 2.0 wire types and codec for MCP."""

from .codec import (
    decode_content,
    decode_message,
    decode_params,
    encode_content,
    encode_message,
    encode_params,
    parse_message,
)
from .content import (
    Annotations,
    AudioContent,
    BlobResourceContents,
    Content,
    EmbeddedResource,
    ImageContent,
    TextContent,
    TextResourceContents,
    new_audio_content,
    new_embedded_resource,
    new_image_content,
    new_text_content,
)
from .errors import (
    ContentDecodeError,
    DecodeError,
    ErrorCode,
    UnknownContentTypeError,
    WireError,
)
from .messages import (
    MCPError,
    MCPMessage,
    MCPMethods,
    MCPNotification,
    MCPRequest,
    MCPResponse,
    ProgressNotification,
    ToolCallResult,
)
from .params import (
    META_KEY,
    ExtensibleParams,
    NotificationParams,
    RequestParams,
    Result,
)

__all__ = [
    "decode_content",
    "decode_message",
    "decode_params",
    "encode_content",
    "encode_message",
    "encode_params",
    "parse_message",
    "Annotations",
    "AudioContent",
    "BlobResourceContents",
    "Content",
    "EmbeddedResource",
    "ImageContent",
    "TextContent",
    "TextResourceContents",
    "new_audio_content",
    "new_embedded_resource",
    "new_image_content",
    "new_text_content",
    "ContentDecodeError",
    "DecodeError",
    "ErrorCode",
    "UnknownContentTypeError",
    "WireError",
    "MCPError",
    "MCPMessage",
    "MCPMethods",
    "MCPNotification",
    "MCPRequest",
    "MCPResponse",
    "ProgressNotification",
    "ToolCallResult",
    "META_KEY",
    "ExtensibleParams",
    "NotificationParams",
    "RequestParams",
    "Result",
]
