"""Content variants (text, image, audio, embedded resource)."""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

import structlog
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_serializer,
)

from .. import metrics
from .errors import ContentDecodeError, DecodeError, ErrorCode, UnknownContentTypeError

logger = structlog.get_logger()

CONTENT_TYPE_TEXT = "text"
CONTENT_TYPE_IMAGE = "image"
CONTENT_TYPE_AUDIO = "audio"
CONTENT_TYPE_EMBEDDED_RESOURCE = "embedded_resource"

CONTENT_TYPES = (
    CONTENT_TYPE_TEXT,
    CONTENT_TYPE_IMAGE,
    CONTENT_TYPE_AUDIO,
    CONTENT_TYPE_EMBEDDED_RESOURCE,
)

Role = Literal["user", "assistant"]


class Annotations(BaseModel):
    """Hints about who content is for and how important it is."""
    audience: Optional[List[Role]] = None
    priority: Optional[float] = None


class ResourceContents(BaseModel):
    """Contents of a resource; unknown fields are carried through."""
    model_config = ConfigDict(extra="allow")

    uri: str
    mimeType: Optional[str] = None

    @model_serializer(mode="wrap")
    def _keep_extra_fields(self, handler) -> Dict[str, Any]:
        data = handler(self)
        data.update(self.model_extra or {})
        return data


class TextResourceContents(ResourceContents):
    text: str


class BlobResourceContents(ResourceContents):
    blob: str  # base64


class TextContent(BaseModel):
    """Text content."""
    type: Literal["text"] = Field(default=CONTENT_TYPE_TEXT, frozen=True)
    text: str
    annotations: Optional[Annotations] = None


class ImageContent(BaseModel):
    """Image content."""
    type: Literal["image"] = Field(default=CONTENT_TYPE_IMAGE, frozen=True)
    data: str  # base64
    mimeType: str
    annotations: Optional[Annotations] = None


class AudioContent(BaseModel):
    """Audio content."""
    type: Literal["audio"] = Field(default=CONTENT_TYPE_AUDIO, frozen=True)
    data: str  # base64
    mimeType: str
    annotations: Optional[Annotations] = None


class EmbeddedResource(BaseModel):
    """A resource embedded in a message."""
    type: Literal["embedded_resource"] = Field(
        default=CONTENT_TYPE_EMBEDDED_RESOURCE, frozen=True
    )
    resource: Union[TextResourceContents, BlobResourceContents]
    annotations: Optional[Annotations] = None


Content = Annotated[
    Union[TextContent, ImageContent, AudioContent, EmbeddedResource],
    Field(discriminator="type"),
]

_content_adapter = TypeAdapter(Content)


def new_text_content(text: str) -> TextContent:
    return TextContent(text=text)


def new_image_content(data: str, mime_type: str) -> ImageContent:
    return ImageContent(data=data, mimeType=mime_type)


def new_audio_content(data: str, mime_type: str) -> AudioContent:
    return AudioContent(data=data, mimeType=mime_type)


def new_embedded_resource(
    resource: Union[TextResourceContents, BlobResourceContents, Dict[str, Any]]
) -> EmbeddedResource:
    return EmbeddedResource(resource=resource)


def parse_content(data: Dict[str, Any]) -> Content:
    """Select the content variant named by ``type`` and validate into it.

    A missing or unrecognised ``type`` is rejected rather than mapped onto a
    default variant.
    """
    if not isinstance(data, dict):
        metrics.decode_failures.labels(kind="content", reason="not_object").inc()
        raise DecodeError(
            f"Content must be a JSON object, got {type(data).__name__}",
            ErrorCode.INVALID_PARAMS
        )

    content_type = data.get("type")
    if content_type not in CONTENT_TYPES:
        metrics.decode_failures.labels(kind="content", reason="unknown_type").inc()
        logger.warning("Unknown content type", content_type=content_type)
        raise UnknownContentTypeError(content_type)

    try:
        content = _content_adapter.validate_python(data)
    except ValidationError as e:
        metrics.decode_failures.labels(kind="content", reason="validation").inc()
        logger.warning(
            "Content validation failed",
            content_type=content_type,
            errors=e.errors(include_url=False, include_context=False)
        )
        raise ContentDecodeError(content_type, e.errors(include_url=False, include_context=False))

    metrics.content_decoded.labels(type=content_type).inc()
    return content


def dump_content(content: Content) -> Dict[str, Any]:
    """Serialize a content variant; unset optional fields are left out.

    An empty ``audience`` list is kept, so "annotations with no audience"
    stays distinct from "no annotations". Unknown resource fields are
    written back as-is, nulls included.
    """
    return content.model_dump(exclude_none=True)
