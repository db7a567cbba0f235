"""DALL-E client - alternate text-to-image provider."""

from openai import APIStatusError, OpenAI, OpenAIError

from ..errors import MissingCredential, NoImageReturned, ProviderRejected
from ..models import ImagePart, ProviderResult


PROVIDER_NAME = "dalle"

# Nearest supported output size per aspect ratio
DALLE_SIZES: dict[str, str] = {
    "1:1": "1024x1024",
    "9:16": "1024x1792",
    "16:9": "1792x1024",
    "4:5": "1024x1024",
}
DEFAULT_SIZE = "1024x1024"


def size_for(aspect_ratio: str | None) -> str:
    """Output size for a ratio, 1024x1024 when unknown."""
    return DALLE_SIZES.get(aspect_ratio or "", DEFAULT_SIZE)


class DalleClient:
    """Client for DALL-E 3 image generation with a caller-supplied key."""

    name = PROVIDER_NAME

    def __init__(self, api_key: str | None, model: str = "dall-e-3", client=None):
        if not api_key:
            raise MissingCredential("OpenAI API Key is required for DALL-E.")
        self._client = client or OpenAI(api_key=api_key)
        self.model = model

    def generate(
        self,
        prompt: str,
        attachments: list[ImagePart] | None = None,
        aspect_ratio: str | None = None,
    ) -> ProviderResult:
        """
        Generate an image from text only.

        Args:
            prompt: Final prompt text
            attachments: Ignored, DALL-E is text-to-image only
            aspect_ratio: Mapped to the nearest supported size

        Returns:
            ProviderResult with a provider-hosted https URL, or the ProviderError
        """
        try:
            response = self._client.images.generate(
                model=self.model,
                prompt=prompt,
                n=1,
                size=size_for(aspect_ratio),
                quality="hd",
                style="vivid",
            )
        except APIStatusError as e:
            detail = e.body.get("message") if isinstance(e.body, dict) else None
            return ProviderResult.failure(
                ProviderRejected(PROVIDER_NAME, f"OpenAI Error: {detail or e.message}")
            )
        except OpenAIError as e:
            return ProviderResult.failure(ProviderRejected(PROVIDER_NAME, f"OpenAI Error: {e}"))

        if response.data and response.data[0].url:
            return ProviderResult.success(response.data[0].url)
        return ProviderResult.failure(NoImageReturned(PROVIDER_NAME, "DALL-E did not return an image."))
