"""Test doubles for the provider SDKs and canned responses."""

from __future__ import annotations

import base64
from io import BytesIO
from types import SimpleNamespace

import httpx
import openai
from google.genai import types
from PIL import Image

from studio.errors import ProviderError
from studio.models import ImagePart, ProviderResult


def make_image_bytes(fmt: str = "PNG", color: str = "blue") -> bytes:
    """Small real image encoded with Pillow."""
    buf = BytesIO()
    Image.new("RGB", (4, 4), color).save(buf, format=fmt)
    return buf.getvalue()


PNG_BYTES = make_image_bytes("PNG")
PNG_B64 = base64.b64encode(PNG_BYTES).decode("ascii")
JPEG_B64 = base64.b64encode(make_image_bytes("JPEG")).decode("ascii")


def png_part() -> ImagePart:
    return ImagePart(mime_type="image/png", data=PNG_B64)


# ===== Gemini =====

def image_response(data: bytes = b"generated", mime_type: str = "image/png") -> types.GenerateContentResponse:
    """Response whose first candidate carries one inline image."""
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(
                    role="model",
                    parts=[types.Part(inline_data=types.Blob(data=data, mime_type=mime_type))],
                ),
                finish_reason=types.FinishReason.STOP,
            )
        ]
    )


def text_response(
    text: str | None = None,
    finish_reason: types.FinishReason = types.FinishReason.STOP,
) -> types.GenerateContentResponse:
    """Response with only text (or nothing) in the first candidate."""
    parts = [types.Part(text=text)] if text else []
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=parts),
                finish_reason=finish_reason,
            )
        ]
    )


def blocked_prompt_response() -> types.GenerateContentResponse:
    """Response with no candidates because the prompt was blocked."""
    return types.GenerateContentResponse(
        candidates=[],
        prompt_feedback=types.GenerateContentResponsePromptFeedback(
            block_reason=types.BlockedReason.SAFETY,
        ),
    )


class FakeModels:
    """Stands in for ``genai.Client().models``."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls: list[dict] = []

    def generate_content(self, *, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeGenaiClient:
    """Queue of canned responses (or exceptions) for generate_content."""

    def __init__(self, *responses):
        self.models = FakeModels(responses)

    @property
    def calls(self) -> list[dict]:
        return self.models.calls


# ===== OpenAI =====

class FakeImages:
    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    def generate(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return self.response


class FakeOpenAI:
    """Stands in for ``OpenAI(api_key=...)``."""

    def __init__(self, url: str | None = "https://images.example.com/out.png", error: Exception | None = None):
        data = [SimpleNamespace(url=url)] if url else []
        self.images = FakeImages(SimpleNamespace(data=data), error)


def openai_status_error(status: int = 400, message: str = "Your request was rejected") -> openai.APIStatusError:
    """An SDK status error as raised for a non-success HTTP response."""
    request = httpx.Request("POST", "https://api.openai.com/v1/images/generations")
    response = httpx.Response(status, request=request)
    return openai.BadRequestError(
        f"Error code: {status}",
        response=response,
        body={"message": message, "type": "invalid_request_error"},
    )


# ===== Providers =====

class StubProvider:
    """Provider returning a canned ProviderResult and recording calls."""

    def __init__(self, result: ProviderResult, name: str = "stub"):
        self.result = result
        self.name = name
        self.calls: list[dict] = []

    def generate(self, prompt, attachments, aspect_ratio=None):
        self.calls.append({"prompt": prompt, "attachments": attachments, "aspect_ratio": aspect_ratio})
        return self.result

    @classmethod
    def succeeding(cls, image_ref: str = "data:image/png;base64,AAAA", name: str = "stub"):
        return cls(ProviderResult.success(image_ref), name)

    @classmethod
    def failing(cls, message: str = "boom", name: str = "stub"):
        return cls(ProviderResult.failure(ProviderError(name, message)), name)
