"""Fixed instructions and response schemas for image analysis."""

from . import load_prompt


BRANDING_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "brandName": {"type": "STRING", "nullable": True},
    },
    "required": ["brandName"],
}

CONTENT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "hasPackaging": {"type": "BOOLEAN"},
        "hasRawProduct": {"type": "BOOLEAN"},
    },
    "required": ["hasPackaging", "hasRawProduct"],
}


def analysis_request(analysis_type: str | None) -> tuple[str, dict]:
    """Instruction and schema for an analysis type.

    'branding' extracts the brand name by OCR; anything else classifies
    packaging vs raw product.
    """
    if analysis_type == "branding":
        return load_prompt("analyze_branding"), BRANDING_SCHEMA
    return load_prompt("analyze_content"), CONTENT_SCHEMA
