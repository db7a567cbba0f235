"""API clients for external services."""

from .base import ImageProvider
from .dalle import DalleClient
from .gemini import GeminiClient

__all__ = ["DalleClient", "GeminiClient", "ImageProvider"]
