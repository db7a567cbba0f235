"""Generation results."""

from dataclasses import dataclass

from ..errors import ProviderError


@dataclass(frozen=True)
class GenerationResult:
    """Opaque image reference.

    Either a ``data:`` URI (inline bytes, lives as long as the response) or an
    ``https:`` URL hosted by the provider (may expire).
    """

    image_ref: str

    @property
    def is_inline(self) -> bool:
        return self.image_ref.startswith("data:")

    def to_dict(self) -> dict:
        # imageUrl kept for existing frontends
        return {"imageRef": self.image_ref, "imageUrl": self.image_ref}


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of one provider call: an image ref or an error, never both."""

    image_ref: str | None = None
    error: ProviderError | None = None

    @classmethod
    def success(cls, image_ref: str) -> "ProviderResult":
        return cls(image_ref=image_ref)

    @classmethod
    def failure(cls, error: ProviderError) -> "ProviderResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None and self.image_ref is not None

    def unwrap(self) -> GenerationResult:
        """Return the result or raise the provider error."""
        if self.error is not None:
            raise self.error
        if self.image_ref is None:
            raise ProviderError("unknown", "Provider returned neither an image nor an error")
        return GenerationResult(image_ref=self.image_ref)
