"""MCP message types and JSON-RPC 2.0 protocol definitions."""

from typing import Any, Dict, List, Optional, Union
from pydantic import (
    BaseModel,
    Field,
    field_serializer,
    field_validator,
    model_serializer,
)

from .content import Content, dump_content
from .errors import WireError
from .params import NotificationParams, ProgressToken, RequestParams, Result

Cursor = str


class MCPError(BaseModel):
    """JSON-RPC 2.0 error object."""
    code: int
    message: str
    data: Optional[Dict[str, Any]] = None

    @classmethod
    def from_exception(cls, error: WireError) -> "MCPError":
        """Build an error object from a wire exception."""
        data = {"validation_errors": error.errors} if error.errors else None
        return cls(code=error.code, message=error.message, data=data)


class MCPMessage(BaseModel):
    """Base MCP message."""
    jsonrpc: str = Field(default="2.0", pattern=r"^2\.0$")


class _ParamsMessage(MCPMessage):
    """Message whose ``params`` are omitted from the wire when empty."""

    @field_serializer("params", check_fields=False)
    def _encode_params(self, params) -> Dict[str, Any]:
        return params.to_wire()

    @model_serializer(mode="wrap")
    def _omit_empty_params(self, handler) -> Dict[str, Any]:
        data = handler(self)
        if not data.get("params"):
            data.pop("params", None)
        return data


class MCPRequest(_ParamsMessage):
    """JSON-RPC 2.0 request message."""
    id: Union[str, int]
    method: str
    params: RequestParams = Field(default_factory=RequestParams)

    @field_validator("params", mode="before")
    @classmethod
    def _decode_params(cls, value: Any) -> Any:
        if isinstance(value, RequestParams):
            return value
        return RequestParams.from_wire(value)


class MCPResponse(MCPMessage):
    """JSON-RPC 2.0 response message."""
    id: Union[str, int]
    result: Optional[Result] = None
    error: Optional[MCPError] = None

    @field_validator("result", mode="before")
    @classmethod
    def _decode_result(cls, value: Any) -> Any:
        if value is None or isinstance(value, Result):
            return value
        return Result.from_wire(value)

    @field_serializer("result")
    def _encode_result(self, result: Optional[Result]) -> Optional[Dict[str, Any]]:
        return result.to_wire() if result is not None else None

    def model_post_init(self, __context: Any) -> None:
        """Validate that either result or error is present, but not both."""
        if self.result is None and self.error is None:
            raise ValueError("Either 'result' or 'error' must be present")
        if self.result is not None and self.error is not None:
            raise ValueError("Both 'result' and 'error' cannot be present")


class MCPNotification(_ParamsMessage):
    """JSON-RPC 2.0 notification message."""
    method: str
    params: NotificationParams = Field(default_factory=NotificationParams)

    @field_validator("params", mode="before")
    @classmethod
    def _decode_params(cls, value: Any) -> Any:
        if isinstance(value, NotificationParams):
            return value
        return NotificationParams.from_wire(value)


# MCP-specific method names
class MCPMethods:
    """Standard MCP method names."""
    # Server lifecycle
    INITIALIZE = "initialize"
    INITIALIZED = "notifications/initialized"
    PING = "ping"

    # Tools
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"

    # Resources
    RESOURCES_LIST = "resources/list"
    RESOURCES_READ = "resources/read"

    # Notifications
    CANCELLED = "notifications/cancelled"
    PROGRESS = "notifications/progress"
    MESSAGE = "notifications/message"
    RESOURCES_UPDATED = "notifications/resources/updated"
    TOOLS_LIST_CHANGED = "notifications/tools/list_changed"


class ToolCallResult(BaseModel):
    """Tool call response result."""
    content: List[Content]
    isError: bool = False

    def to_result(self, meta: Optional[Dict[str, Any]] = None) -> Result:
        """Wrap as a response result, optionally with ``_meta``."""
        return Result(
            meta=dict(meta or {}),
            additional_fields={
                "content": [dump_content(item) for item in self.content],
                "isError": self.isError,
            },
        )

    @classmethod
    def from_result(cls, result: Result) -> "ToolCallResult":
        """Read a tool call result back out of a response result."""
        return cls.model_validate(result.additional_fields)


class ProgressNotification(BaseModel):
    """Progress notification parameters."""
    progressToken: ProgressToken
    progress: float
    total: Optional[float] = None

    def to_notification(self, meta: Optional[Dict[str, Any]] = None) -> MCPNotification:
        """Build the ``notifications/progress`` message."""
        params = NotificationParams(
            meta=dict(meta or {}),
            additional_fields=self.model_dump(exclude_none=True),
        )
        return MCPNotification(method=MCPMethods.PROGRESS, params=params)
