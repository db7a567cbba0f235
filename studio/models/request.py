"""CreativeRequest model - input for image generation."""

from dataclasses import dataclass, field

from ..errors import BadRequest
from .enums import Engine, Focus, Mode
from .image import ImagePart


@dataclass
class CreativeRequest:
    """A structured image request. Built per request and discarded."""

    mode: Mode
    prompt: str = ""
    aspect_ratio: str = "1:1"
    focus: Focus = Focus.PACKAGING
    poster_headline: str | None = None
    mockup_type: str | None = None
    brand_name: str | None = None
    brand_description: str | None = None
    engine: Engine = Engine.GEMINI
    openai_api_key: str | None = None  # passed through, never stored
    reference_images: list[ImagePart] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: dict) -> "CreativeRequest":
        """Build from the ``image`` request payload (camelCase wire keys)."""
        if not isinstance(payload, dict):
            raise BadRequest("Payload must be an object")

        blobs = payload.get("imageBlobs") or payload.get("referenceImages") or []
        if not isinstance(blobs, list):
            raise BadRequest("imageBlobs must be a list")

        return cls(
            mode=Mode.parse(payload.get("mode")),
            prompt=payload.get("prompt") or "",
            aspect_ratio=payload.get("aspectRatio") or "1:1",
            focus=Focus.parse(payload.get("aiFocus") or payload.get("focus")),
            poster_headline=payload.get("posterHeadline"),
            mockup_type=payload.get("mockupType"),
            brand_name=payload.get("brandName"),
            brand_description=payload.get("brandDescription"),
            engine=Engine.parse(payload.get("engine")),
            openai_api_key=payload.get("openaiApiKey"),
            reference_images=[ImagePart.from_payload(b) for b in blobs],
        )
