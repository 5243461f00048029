"""Params objects that split the reserved ``_meta`` key from caller fields.

On the wire a params object is one flat JSON object. The ``_meta`` key is
reserved for protocol metadata; every other key belongs to the caller and
must survive a decode/encode cycle untouched, including keys this library
knows nothing about.
"""

from typing import Any, Dict, Optional, Tuple, Type, TypeVar, Union

import structlog
from pydantic import BaseModel, ConfigDict, Field

from .. import metrics
from .errors import DecodeError, ErrorCode

logger = structlog.get_logger()

META_KEY = "_meta"
PROGRESS_TOKEN_KEY = "progressToken"

ProgressToken = Union[str, int]
ParamsT = TypeVar("ParamsT", bound="ExtensibleParams")


def split_reserved_key(
    wire: Dict[str, Any],
    meta: Optional[Dict[str, Any]] = None,
    additional_fields: Optional[Dict[str, Any]] = None,
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Split a flat wire object into metadata and additional fields.

    Entries of an object-valued ``_meta`` are merged into ``meta``, so
    splitting onto pre-populated mappings accumulates. A ``_meta`` holding
    anything other than an object is malformed metadata: it is dropped and
    the rest of the object is still decoded. All other keys are copied
    verbatim into ``additional_fields``.
    """
    meta = {} if meta is None else meta
    additional_fields = {} if additional_fields is None else additional_fields

    for key, value in wire.items():
        if key != META_KEY:
            additional_fields[key] = value
        elif isinstance(value, dict):
            meta.update(value)
        else:
            logger.debug(
                "Discarding malformed _meta",
                value_type=type(value).__name__
            )
            metrics.malformed_meta_dropped.inc()

    return meta, additional_fields


def merge_reserved_key(
    meta: Optional[Dict[str, Any]],
    additional_fields: Optional[Dict[str, Any]],
) -> Dict[str, Any]:
    """Flatten metadata and additional fields into one wire object.

    ``meta`` owns the reserved key whenever it is non-empty. A ``_meta``
    entry found in ``additional_fields`` is emitted only when ``meta`` is
    empty. That fallback keeps stray data instead of dropping it; it is not
    a canonical state and a decode of the result moves it into ``meta``.
    """
    wire = dict(additional_fields or {})
    if meta:
        wire[META_KEY] = dict(meta)
    return wire


class ExtensibleParams(BaseModel):
    """Reserved metadata plus arbitrary caller-defined fields."""
    model_config = ConfigDict(extra="forbid")

    meta: Dict[str, Any] = Field(default_factory=dict)
    additional_fields: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_wire(cls: Type[ParamsT], data: Optional[Dict[str, Any]]) -> ParamsT:
        """Build params from a decoded JSON object (or ``None``)."""
        params = cls()
        params.update_from_wire(data)
        return params

    def update_from_wire(self: ParamsT, data: Optional[Dict[str, Any]]) -> ParamsT:
        """Decode a wire object onto this value in place.

        ``None`` and ``{}`` leave the value unchanged. Metadata entries are
        merged into the existing ``meta``.
        """
        if data is None:
            return self

        if not isinstance(data, dict):
            metrics.decode_failures.labels(kind="params", reason="not_object").inc()
            raise DecodeError(
                f"{type(self).__name__} must be a JSON object, "
                f"got {type(data).__name__}",
                ErrorCode.INVALID_PARAMS
            )

        split_reserved_key(data, self.meta, self.additional_fields)
        metrics.params_decoded.labels(kind=type(self).__name__).inc()
        return self

    def to_wire(self) -> Dict[str, Any]:
        """Flatten into a wire object; empty params give ``{}``."""
        return merge_reserved_key(self.meta, self.additional_fields)

    def is_empty(self) -> bool:
        return not self.to_wire()


class NotificationParams(ExtensibleParams):
    """Params of a JSON-RPC notification."""


class RequestParams(ExtensibleParams):
    """Params of a JSON-RPC request."""

    @property
    def progress_token(self) -> Optional[ProgressToken]:
        """Progress token requested by the caller, if any."""
        return self.meta.get(PROGRESS_TOKEN_KEY)

    def set_progress_token(self, token: ProgressToken) -> None:
        self.meta[PROGRESS_TOKEN_KEY] = token


class Result(ExtensibleParams):
    """Result payload of a JSON-RPC response."""
