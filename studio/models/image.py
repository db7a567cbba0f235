"""Inline image attachment."""

import base64
import binascii
import re
from dataclasses import dataclass

from ..errors import BadRequest


DATA_URI_RE = re.compile(r"^data:(image/[^;]+);base64,(.+)$", re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class ImagePart:
    """Base64 image data with its mime type."""

    mime_type: str
    data: str  # base64 text, no data: prefix

    @classmethod
    def from_payload(cls, blob: dict) -> "ImagePart":
        """Parse ``{mimeType, data}`` or ``{inlineData: {mimeType, data}}``."""
        if not isinstance(blob, dict):
            raise BadRequest("Image part must be an object")
        inline = blob.get("inlineData", blob)
        if not isinstance(inline, dict):
            raise BadRequest("Image part 'inlineData' must be an object")
        data = inline.get("data")
        if not data:
            raise BadRequest("Image part is missing 'data'")
        return cls.from_base64(data, inline.get("mimeType"))

    @classmethod
    def from_base64(cls, data: str, mime_type: str | None = None) -> "ImagePart":
        """Accept raw base64 or a data: URI (whose mime type wins)."""
        if not isinstance(data, str):
            raise BadRequest("Image 'data' must be a base64 string")
        if mime_type is not None and not isinstance(mime_type, str):
            raise BadRequest("Image 'mimeType' must be a string")
        match = DATA_URI_RE.match(data.strip())
        if match:
            return cls(mime_type=match.group(1).lower(), data=match.group(2))
        return cls(mime_type=mime_type or "image/png", data=data)

    def to_bytes(self) -> bytes:
        try:
            # remove whitespace/newlines just in case
            return base64.b64decode("".join(self.data.split()), validate=True)
        except (binascii.Error, ValueError) as e:
            raise BadRequest(f"Invalid base64 image data: {e}") from e

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"
