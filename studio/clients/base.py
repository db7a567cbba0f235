"""Interface shared by image providers."""

from typing import Protocol

from ..models import ImagePart, ProviderResult


class ImageProvider(Protocol):
    """Anything that turns a prompt plus attachments into a ProviderResult.

    Implementations never raise for downstream failures; they return
    ``ProviderResult.failure`` instead.
    """

    name: str

    def generate(
        self,
        prompt: str,
        attachments: list[ImagePart],
        aspect_ratio: str | None = None,
    ) -> ProviderResult:
        ...
