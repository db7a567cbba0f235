"""Shared pytest fixtures."""

import pytest

from studio.clients import GeminiClient
from studio.models import CreativeRequest, Focus, Mode

from .fakes import FakeGenaiClient


@pytest.fixture
def make_gemini():
    """Factory: GeminiClient backed by a queue of canned SDK responses."""

    def _make(*responses) -> GeminiClient:
        return GeminiClient(api_key="test-key", client=FakeGenaiClient(*responses))

    return _make


@pytest.fixture
def product_photo_request() -> CreativeRequest:
    """Product photo of a blue bottle, square, product focus, no references."""
    return CreativeRequest(
        mode=Mode.PRODUCT_PHOTO,
        prompt="a blue bottle on marble",
        aspect_ratio="1:1",
        focus=Focus.PRODUCT,
    )
