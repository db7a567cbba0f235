"""Tests for request parsing and result types."""

import pytest

from studio.errors import BadRequest, ProviderError
from studio.models import (
    CreativeRequest,
    Engine,
    Focus,
    GenerationResult,
    ImagePart,
    Mode,
    ProviderResult,
)

from .fakes import PNG_B64, PNG_BYTES


class TestEnums:
    @pytest.mark.parametrize("value,expected", [
        ("Poster", Mode.POSTER),
        ("Poster / Desain", Mode.POSTER),
        ("MockupPackaging", Mode.MOCKUP_PACKAGING),
        ("Mockup Packaging", Mode.MOCKUP_PACKAGING),
        ("ProductPhoto", Mode.PRODUCT_PHOTO),
        ("Foto Produk", Mode.PRODUCT_PHOTO),
        ("something else", Mode.PRODUCT_PHOTO),
        (None, Mode.PRODUCT_PHOTO),
    ])
    def test_mode_parse(self, value, expected):
        assert Mode.parse(value) is expected

    @pytest.mark.parametrize("value,expected", [
        ("dalle", Engine.DALLE),
        ("DALLE", Engine.DALLE),
        ("gemini", Engine.GEMINI),
        ("", Engine.GEMINI),
        (None, Engine.GEMINI),
    ])
    def test_engine_parse(self, value, expected):
        assert Engine.parse(value) is expected


class TestImagePart:
    def test_from_mime_and_data(self):
        part = ImagePart.from_payload({"mimeType": "image/jpeg", "data": PNG_B64})
        assert part == ImagePart("image/jpeg", PNG_B64)

    def test_from_inline_data(self):
        part = ImagePart.from_payload({"inlineData": {"mimeType": "image/webp", "data": PNG_B64}})
        assert part.mime_type == "image/webp"

    def test_data_uri_mime_wins(self):
        part = ImagePart.from_base64(f"data:image/png;base64,{PNG_B64}", "image/jpeg")
        assert part.mime_type == "image/png"
        assert part.data == PNG_B64

    def test_missing_data(self):
        with pytest.raises(BadRequest):
            ImagePart.from_payload({"mimeType": "image/png"})

    def test_inline_data_must_be_object(self):
        with pytest.raises(BadRequest, match="inlineData"):
            ImagePart.from_payload({"inlineData": None})

    def test_data_must_be_string(self):
        with pytest.raises(BadRequest, match="base64 string"):
            ImagePart.from_payload({"mimeType": "image/png", "data": ["abc"]})

    def test_mime_type_must_be_string(self):
        with pytest.raises(BadRequest, match="mimeType"):
            ImagePart.from_base64(PNG_B64, 42)

    def test_to_bytes(self):
        assert ImagePart("image/png", PNG_B64).to_bytes() == PNG_BYTES

    def test_invalid_base64(self):
        with pytest.raises(BadRequest, match="Invalid base64"):
            ImagePart("image/png", "not base64 !!").to_bytes()


class TestCreativeRequest:
    def test_from_payload_wire_keys(self):
        request = CreativeRequest.from_payload({
            "mode": "Poster / Desain",
            "prompt": "summer sale",
            "posterHeadline": "50% OFF",
            "aspectRatio": "4:5",
            "aiFocus": "keduanya",
            "engine": "dalle",
            "openaiApiKey": "sk-test",
            "imageBlobs": [{"mimeType": "image/png", "data": PNG_B64}],
        })

        assert request.mode is Mode.POSTER
        assert request.poster_headline == "50% OFF"
        assert request.aspect_ratio == "4:5"
        assert request.focus is Focus.BOTH
        assert request.engine is Engine.DALLE
        assert request.openai_api_key == "sk-test"
        assert len(request.reference_images) == 1

    def test_defaults(self):
        request = CreativeRequest.from_payload({})

        assert request.mode is Mode.PRODUCT_PHOTO
        assert request.focus is Focus.PACKAGING
        assert request.engine is Engine.GEMINI
        assert request.aspect_ratio == "1:1"
        assert request.reference_images == []

    def test_image_blobs_must_be_list(self):
        with pytest.raises(BadRequest):
            CreativeRequest.from_payload({"imageBlobs": "abc"})


class TestResults:
    def test_success_unwraps(self):
        result = ProviderResult.success("https://images.example.com/a.png")
        assert result.ok
        assert result.unwrap() == GenerationResult("https://images.example.com/a.png")

    def test_failure_raises_its_error(self):
        error = ProviderError("gemini", "nope")
        result = ProviderResult.failure(error)

        assert not result.ok
        with pytest.raises(ProviderError) as exc_info:
            result.unwrap()
        assert exc_info.value is error

    def test_inline_vs_remote(self):
        assert GenerationResult("data:image/png;base64,AAAA").is_inline
        assert not GenerationResult("https://images.example.com/a.png").is_inline

    def test_to_dict(self):
        assert GenerationResult("data:x").to_dict() == {"imageRef": "data:x", "imageUrl": "data:x"}
