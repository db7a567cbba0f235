"""Gemini client - default multimodal image provider."""

import base64

from google import genai
from google.genai import types

from ..errors import NoImageReturned, ProviderError, ProviderRejected
from ..models import ImagePart, ProviderResult
from ..prompts import load_prompt


PROVIDER_NAME = "gemini"

# Aspect ratios the image model accepts in ImageConfig
SUPPORTED_ASPECT_RATIOS = {"1:1", "4:5", "9:16", "16:9"}

# Finish reasons that mean the model stopped normally
NORMAL_FINISH_REASONS = {"STOP", "FINISH_REASON_UNSPECIFIED"}

# Finish reasons reported as a safety block; any other abnormal stop is "stopped early"
SAFETY_FINISH_REASONS = {"SAFETY", "IMAGE_SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII"}


def to_part(image: ImagePart) -> types.Part:
    """SDK part for an inline image."""
    return types.Part.from_bytes(data=image.to_bytes(), mime_type=image.mime_type)


class GeminiClient:
    """Client for generating images and JSON via Google's Gemini models."""

    name = PROVIDER_NAME

    def __init__(
        self,
        api_key: str,
        image_model: str = "gemini-2.5-flash-image",
        text_model: str = "gemini-2.5-flash",
        client=None,
    ):
        self.client = client or genai.Client(api_key=api_key)
        self.image_model = image_model
        self.text_model = text_model

    def generate(
        self,
        prompt: str,
        attachments: list[ImagePart],
        aspect_ratio: str | None = None,
    ) -> ProviderResult:
        """
        Generate an image from a prompt plus reference images.

        Args:
            prompt: Final prompt text
            attachments: Reference images, sent after the prompt in order
            aspect_ratio: Passed to ImageConfig when the model supports it

        Returns:
            ProviderResult with a data: URI, or the ProviderError
        """
        contents = [prompt] + [to_part(a) for a in attachments]

        image_config = None
        if aspect_ratio in SUPPORTED_ASPECT_RATIOS:
            image_config = types.ImageConfig(aspect_ratio=aspect_ratio)

        config = types.GenerateContentConfig(
            system_instruction=load_prompt("image_system"),
            response_modalities=["IMAGE", "TEXT"],
            image_config=image_config,
        )
        return self._generate_image(contents, config, "AI did not return an image.")

    def touch_up(self, image: ImagePart) -> ProviderResult:
        """Re-render a finished image with the fixed enhancement instruction."""
        contents = [load_prompt("final_render"), to_part(image)]
        config = types.GenerateContentConfig(
            system_instruction=load_prompt("final_render_system"),
            response_modalities=["IMAGE", "TEXT"],
        )
        return self._generate_image(contents, config, "AI did not return a final render image.")

    def generate_json(
        self,
        contents,
        schema: dict | None = None,
        system_instruction: str | None = None,
        **options,
    ) -> str:
        """
        Request schema-constrained JSON output and return the raw text.

        Args:
            contents: Prompt strings, SDK parts or multi-turn ``types.Content``
            schema: Response schema
            system_instruction: Optional system instruction text
            **options: Extra GenerateContentConfig fields (temperature, top_p, ...)

        Raises:
            ProviderRejected: The SDK call failed or the answer was blocked
        """
        try:
            config = types.GenerateContentConfig(
                system_instruction=system_instruction,
                response_mime_type="application/json",
                response_schema=schema,
                **options,
            )
            response = self.client.models.generate_content(
                model=self.text_model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            raise ProviderRejected(PROVIDER_NAME, f"Gemini request failed: {e}") from e

        text = self._collect_text(response)
        if not text:
            reason = self._stop_reason(response)
            if reason and self._blocked_for_safety(response):
                raise ProviderRejected(
                    PROVIDER_NAME,
                    f"AI returned no text: blocked by safety filters (finish reason: {reason}).",
                )
            if reason:
                raise ProviderRejected(
                    PROVIDER_NAME,
                    f"AI returned no text: model stopped early (finish reason: {reason}).",
                )
            raise ProviderRejected(PROVIDER_NAME, "AI returned an empty response.")
        return text

    def _generate_image(self, contents: list, config, empty_message: str) -> ProviderResult:
        """Call the image model and turn the response into a ProviderResult."""
        try:
            response = self.client.models.generate_content(
                model=self.image_model,
                contents=contents,
                config=config,
            )
        except Exception as e:
            return ProviderResult.failure(
                ProviderRejected(PROVIDER_NAME, f"Gemini request failed: {e}")
            )

        image_ref = self._extract_image(response)
        if image_ref:
            return ProviderResult.success(image_ref)
        return ProviderResult.failure(self._explain_missing_image(response, empty_message))

    def _explain_missing_image(self, response, empty_message: str) -> ProviderError:
        """Build the error for a response without image data."""
        text = self._collect_text(response)
        reason = self._stop_reason(response)

        if reason and self._blocked_for_safety(response):
            if text:
                message = (
                    f'AI failed to create image: "{text}" '
                    f"(blocked by safety filters, finish reason: {reason})"
                )
            else:
                message = f"AI did not return an image: blocked by safety filters (finish reason: {reason})."
            return ProviderRejected(PROVIDER_NAME, message)

        if reason:
            if text:
                message = f'AI failed to create image: "{text}" (model stopped early, finish reason: {reason})'
            else:
                message = f"AI did not return an image: model stopped early (finish reason: {reason})."
            return NoImageReturned(PROVIDER_NAME, message)

        if text:
            return NoImageReturned(PROVIDER_NAME, f'AI failed to create image: "{text}"')
        return NoImageReturned(PROVIDER_NAME, empty_message)

    @staticmethod
    def _extract_image(response) -> str | None:
        """First inline image of the first candidate, as a data: URI."""
        if not response.candidates:
            return None
        content = response.candidates[0].content
        for part in (content.parts if content and content.parts else []):
            inline = part.inline_data
            if inline and inline.data and (inline.mime_type or "image/png").startswith("image/"):
                data = inline.data
                if isinstance(data, bytes):
                    data = base64.b64encode(data).decode("ascii")
                return f"data:{inline.mime_type or 'image/png'};base64,{data}"
        return None

    @staticmethod
    def _collect_text(response) -> str:
        """Join text parts of the first candidate."""
        if not response.candidates:
            return ""
        content = response.candidates[0].content
        if not content or not content.parts:
            return ""
        return "".join(part.text for part in content.parts if part.text).strip()

    @staticmethod
    def _stop_reason(response) -> str | None:
        """Name of a non-normal finish or block reason, or None."""
        feedback = getattr(response, "prompt_feedback", None)
        block_reason = getattr(feedback, "block_reason", None) if feedback else None
        if block_reason:
            return getattr(block_reason, "name", str(block_reason))

        if not response.candidates:
            return None
        finish_reason = response.candidates[0].finish_reason
        if finish_reason is None:
            return None
        name = getattr(finish_reason, "name", str(finish_reason))
        return None if name in NORMAL_FINISH_REASONS else name

    @staticmethod
    def _blocked_for_safety(response) -> bool:
        """True for a prompt block or a safety-related finish reason."""
        feedback = getattr(response, "prompt_feedback", None)
        if feedback and getattr(feedback, "block_reason", None):
            return True
        if not response.candidates:
            return False
        finish_reason = response.candidates[0].finish_reason
        return getattr(finish_reason, "name", str(finish_reason)) in SAFETY_FINISH_REASONS
