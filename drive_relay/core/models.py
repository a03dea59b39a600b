"""
Domain models for the upload relay.

These models have no dependencies on FastAPI or the Google client
libraries. An UploadRequest is what the route hands to the core, an
UploadResult is what comes back. Neither outlives a single request.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional, Union

DEFAULT_MIME_TYPE = "application/octet-stream"

# Metadata is forwarded, never interpreted, so any JSON value is accepted.
JsonValue = Union[dict[str, Any], list[Any], str, int, float, bool, None]


@dataclass(frozen=True)
class UploadRequest:
    """
    One uploaded file plus the caller's metadata.

    The filename is kept exactly as the caller supplied it and becomes
    the Drive file name.
    """
    content: bytes
    filename: str
    mime_type: str = DEFAULT_MIME_TYPE
    metadata: JsonValue = field(default_factory=dict)

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def description(self) -> str:
        """Metadata as compact JSON, stored as the Drive file description."""
        return serialize_metadata(self.metadata)


@dataclass(frozen=True)
class UploadResult:
    """Identifier and browsable link of the created Drive file."""
    file_id: str
    web_view_link: str

    @classmethod
    def from_drive_response(cls, data: dict[str, Any]) -> "UploadResult":
        """Build from a files.create response limited to 'id, webViewLink'."""
        return cls(
            file_id=data.get("id") or "",
            web_view_link=data.get("webViewLink") or "",
        )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_metadata(raw: Optional[str]) -> JsonValue:
    """
    Parse the optional 'meta' form field.

    Lenient on purpose: an absent, empty or malformed value becomes {}
    and the upload continues. NaN and Infinity count as malformed since
    they cannot be serialized back into valid JSON.
    """
    if not raw:
        return {}

    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return {}


def serialize_metadata(metadata: JsonValue) -> str:
    return json.dumps(metadata, separators=(",", ":"), ensure_ascii=False)
