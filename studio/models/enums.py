"""Request enums and the wire values they accept."""

from enum import Enum


class Mode(Enum):
    """What kind of creative to produce."""

    POSTER = "Poster"
    MOCKUP_PACKAGING = "MockupPackaging"
    PRODUCT_PHOTO = "ProductPhoto"

    @classmethod
    def parse(cls, value: str | None) -> "Mode":
        """Parse enum names or the UI labels. Unknown -> PRODUCT_PHOTO."""
        return _MODE_ALIASES.get(value or "", cls.PRODUCT_PHOTO)


class Focus(Enum):
    """Which subject a product image should feature."""

    PACKAGING = "packaging"
    PRODUCT = "product"
    BOTH = "both"

    @classmethod
    def parse(cls, value: str | None) -> "Focus":
        """Parse English or Indonesian values. Unknown -> PACKAGING."""
        return _FOCUS_ALIASES.get((value or "").lower(), cls.PACKAGING)


class Engine(Enum):
    """Provider selector."""

    GEMINI = "gemini"  # default multimodal model, server-held key
    DALLE = "dalle"    # alternate image model, caller-supplied key

    @classmethod
    def parse(cls, value: str | None) -> "Engine":
        if (value or "").lower() == "dalle":
            return cls.DALLE
        return cls.GEMINI


_MODE_ALIASES = {
    "Poster": Mode.POSTER,
    "Poster / Desain": Mode.POSTER,
    "MockupPackaging": Mode.MOCKUP_PACKAGING,
    "Mockup Packaging": Mode.MOCKUP_PACKAGING,
    "ProductPhoto": Mode.PRODUCT_PHOTO,
    "Foto Produk": Mode.PRODUCT_PHOTO,
}

_FOCUS_ALIASES = {
    "packaging": Focus.PACKAGING,
    "kemasan": Focus.PACKAGING,
    "product": Focus.PRODUCT,
    "produk": Focus.PRODUCT,
    "both": Focus.BOTH,
    "keduanya": Focus.BOTH,
}
