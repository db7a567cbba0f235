"""Provider dispatcher - routes generation calls to one provider per request."""

import json
from collections.abc import Callable
from io import BytesIO
from typing import Any

from google.genai import types
from PIL import Image, UnidentifiedImageError

from ..clients.base import ImageProvider
from ..clients.dalle import DalleClient
from ..clients.gemini import GeminiClient, to_part
from ..errors import BadRequest, InvalidProviderJSON
from ..models import CreativeRequest, Engine, GenerationResult, ImagePart
from ..prompts import builder
from ..prompts.analysis import analysis_request


# generationConfig keys forwarded to GenerateContentConfig
GENERATION_CONFIG_FIELDS = {
    "temperature": "temperature",
    "topP": "top_p",
    "topK": "top_k",
    "maxOutputTokens": "max_output_tokens",
    "candidateCount": "candidate_count",
    "stopSequences": "stop_sequences",
    "seed": "seed",
    "presencePenalty": "presence_penalty",
    "frequencyPenalty": "frequency_penalty",
}


def parse_json(text: str, provider_name: str = "gemini") -> Any:
    """
    Parse a schema-constrained text response.

    Markdown code fences around the JSON are tolerated.

    Raises:
        InvalidProviderJSON: Text is not valid JSON (carries the raw text)
    """
    candidate = text.strip()
    if candidate.startswith("```"):
        candidate = candidate.strip("`")
        if candidate.lower().startswith("json"):
            candidate = candidate[4:]
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise InvalidProviderJSON(provider_name, text) from e


def sniff_mime_type(raw: bytes) -> str:
    """Detect an image mime type with Pillow."""
    try:
        with Image.open(BytesIO(raw)) as img:
            return Image.MIME.get(img.format, "image/png")
    except UnidentifiedImageError as e:
        raise BadRequest("Final render input is not a readable image") from e


class Dispatcher:
    """Invoke exactly one provider per call and normalize its result."""

    def __init__(
        self,
        gemini: GeminiClient,
        dalle_factory: Callable[[str | None], ImageProvider] = DalleClient,
    ):
        self.gemini = gemini
        self.dalle_factory = dalle_factory

    def dispatch(
        self,
        prompt: str,
        attachments: list[ImagePart],
        engine: Engine = Engine.GEMINI,
        aspect_ratio: str | None = None,
        openai_api_key: str | None = None,
    ) -> GenerationResult:
        """
        Send a final prompt to the selected provider.

        Raises:
            MissingCredential: DALL-E selected without a caller key
            ProviderError: The provider call failed
        """
        if engine is Engine.DALLE:
            # Raises MissingCredential before any network call
            provider = self.dalle_factory(openai_api_key)
        else:
            provider = self.gemini

        result = provider.generate(prompt, attachments, aspect_ratio=aspect_ratio)
        return result.unwrap()

    def generate_image(self, request: CreativeRequest) -> GenerationResult:
        """Build the prompt for a creative request and dispatch it."""
        prompt, attachments = builder.build(request)
        print(
            f"Generating image: mode={request.mode.value}, engine={request.engine.value}, "
            f"ratio={request.aspect_ratio}, references={len(attachments)}",
            flush=True,
        )
        return self.dispatch(
            prompt,
            attachments,
            engine=request.engine,
            aspect_ratio=request.aspect_ratio,
            openai_api_key=request.openai_api_key,
        )

    def final_render(self, base64_data: str, mime_type: str | None = None) -> GenerationResult:
        """Touch up a finished image with the default provider."""
        if not base64_data:
            raise BadRequest("Missing 'base64Data' for final render")
        image = ImagePart.from_base64(base64_data, mime_type)
        if not mime_type and not base64_data.startswith("data:"):
            image = ImagePart(mime_type=sniff_mime_type(image.to_bytes()), data=image.data)
        return self.gemini.touch_up(image).unwrap()

    def generate_ideas(self, model_payload: Any) -> Any:
        """
        Run a caller-built generation payload and parse the JSON answer.

        Accepts a prompt string, a list of parts, or a Gemini request object
        ``{contents, generationConfig, systemInstruction}``. Turns keep their
        roles and generationConfig options are forwarded.
        """
        if not model_payload:
            raise BadRequest("Missing 'modelPayload' for ideas")

        options = {}
        system_instruction = None
        if isinstance(model_payload, dict) and "contents" in model_payload:
            options = _generation_options(model_payload.get("generationConfig"))
            system_instruction = _instruction_text(model_payload.get("systemInstruction"))
            contents = _to_contents(model_payload.get("contents"))
        else:
            contents = _to_contents(model_payload)

        if not contents:
            raise BadRequest("modelPayload has no contents")

        text = self.gemini.generate_json(contents, system_instruction=system_instruction, **options)
        print(f"AI response for ideas ({len(text)} chars)", flush=True)
        return parse_json(text, self.gemini.name)

    def analyze(self, image_parts: list, analysis_type: str | None) -> Any:
        """OCR or classify the given images with a fixed instruction."""
        if not image_parts:
            raise BadRequest("Missing 'imageParts' for analysis")
        images = [ImagePart.from_payload(p) for p in image_parts]
        instruction, schema = analysis_request(analysis_type)

        contents = [instruction] + [to_part(img) for img in images]
        text = self.gemini.generate_json(contents, schema=schema)
        return parse_json(text, self.gemini.name)


def _instruction_text(value) -> str | None:
    """System instruction as text: a string or ``{parts: [{text}]}``."""
    if not value:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return "\n".join(p.get("text", "") for p in value.get("parts", []) if isinstance(p, dict)) or None
    raise BadRequest("systemInstruction must be a string or an object with parts")


def _generation_options(value) -> dict:
    """Map a camelCase generationConfig onto GenerateContentConfig fields."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise BadRequest("generationConfig must be an object")
    options = {GENERATION_CONFIG_FIELDS[key]: v for key, v in value.items() if key in GENERATION_CONFIG_FIELDS}
    if "responseSchema" in value:
        options["schema"] = value["responseSchema"]
    return options


def _to_contents(value) -> list:
    """Gemini-style contents as prompt strings, SDK parts or role-tagged turns."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, dict):
        value = [value]
    if not isinstance(value, list):
        raise BadRequest("Unsupported modelPayload contents")

    contents = []
    for item in value:
        if isinstance(item, str):
            contents.append(item)
        elif isinstance(item, dict) and "parts" in item:
            contents.append(_to_content(item))
        else:
            contents.append(_to_part(item))
    return contents


def _to_content(turn: dict) -> types.Content:
    """One ``{role, parts}`` turn."""
    role = turn.get("role") or "user"
    if role not in ("user", "model"):
        raise BadRequest(f"Unsupported content role: {role}")
    parts = turn["parts"]
    if isinstance(parts, (str, dict)):
        parts = [parts]
    if not isinstance(parts, list) or not parts:
        raise BadRequest("Content 'parts' must be a non-empty list")
    return types.Content(role=role, parts=[_to_part(p) for p in parts])


def _to_part(item) -> types.Part:
    if isinstance(item, str):
        return types.Part(text=item)
    if isinstance(item, dict) and "text" in item:
        if not isinstance(item["text"], str):
            raise BadRequest("Part 'text' must be a string")
        return types.Part(text=item["text"])
    if isinstance(item, dict) and "inlineData" in item:
        return to_part(ImagePart.from_payload(item))
    raise BadRequest("Unsupported modelPayload part")
