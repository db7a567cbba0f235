"""Data models."""

from .enums import Engine, Focus, Mode
from .image import ImagePart
from .request import CreativeRequest
from .result import GenerationResult, ProviderResult

__all__ = [
    "CreativeRequest",
    "Engine",
    "Focus",
    "GenerationResult",
    "ImagePart",
    "Mode",
    "ProviderResult",
]
