"""Errors raised while serving a studio request.

Every error is terminal for the request it belongs to. The handler turns
them into ``{"error": message}`` responses using ``status_code``.
"""


class StudioError(Exception):
    """Base class for request errors."""

    status_code = 500


class ConfigurationError(StudioError):
    """Server-held credential is missing."""

    status_code = 500


class BadRequest(StudioError):
    """Malformed request body or payload."""

    status_code = 400


class UnknownRequestType(BadRequest):
    """Unrecognized ``type`` discriminator."""

    def __init__(self, request_type):
        self.request_type = request_type
        super().__init__("Invalid request type")


class MissingCredential(StudioError):
    """Caller omitted a credential the selected provider needs."""

    status_code = 400


class ProviderError(StudioError):
    """A downstream provider call failed."""

    def __init__(self, provider_name: str, message: str):
        self.provider_name = provider_name
        self.message = message
        super().__init__(message)


class ProviderRejected(ProviderError):
    """Provider returned a non-success status or a safety stop reason."""
    pass


class NoImageReturned(ProviderError):
    """Provider succeeded but sent no image data."""
    pass


class InvalidProviderJSON(ProviderError):
    """Schema-constrained text response could not be parsed."""

    def __init__(self, provider_name: str, raw_text: str):
        self.raw_text = raw_text
        super().__init__(provider_name, f"AI returned invalid JSON. Raw response: {raw_text}")
