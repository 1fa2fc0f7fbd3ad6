"""Image upload helpers: base64 payloads and data-URL previews."""

from __future__ import annotations

import base64
from dataclasses import dataclass


__all__ = [
    "ImageUpload",
    "ImageEncodingError",
    "encode_base64",
    "strip_data_url_prefix",
    "to_data_url",
]


DEFAULT_MIME_TYPE = "application/octet-stream"


class ImageEncodingError(ValueError):
    """Raised when an image cannot be turned into a base64 payload."""


@dataclass(frozen=True)
class ImageUpload:
    """An image picked from disk or captured by the camera."""

    name: str
    mime_type: str
    content: bytes

    @property
    def is_image(self) -> bool:
        return self.mime_type.lower().startswith("image/")

    @property
    def size_bytes(self) -> int:
        return len(self.content)


def encode_base64(content: bytes) -> str:
    """Encode raw bytes as a bare base64 string (no data-URL prefix)."""
    if not content:
        raise ImageEncodingError("Unable to convert file to base64: file is empty")
    return base64.b64encode(content).decode("ascii")


def to_data_url(upload: ImageUpload) -> str:
    """Build a ``data:`` URL suitable for an inline preview."""
    mime_type = upload.mime_type or DEFAULT_MIME_TYPE
    return f"data:{mime_type};base64,{encode_base64(upload.content)}"


def strip_data_url_prefix(value: str) -> str:
    """
    Return the payload part of a data URL.

    Strings that are not data URLs are returned unchanged.
    """
    if value.startswith("data:"):
        _, _, payload = value.partition(",")
        return payload
    return value
