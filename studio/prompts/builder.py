"""Prompt builder - turns a CreativeRequest into a single instruction string."""

from ..models import CreativeRequest, Focus, ImagePart, Mode


ASPECT_RATIO_LABELS: dict[str, str] = {
    "1:1": "square (1:1)",
    "4:5": "portrait (4:5)",
    "9:16": "tall portrait (9:16)",
    "16:9": "widescreen landscape (16:9)",
}

FOCUS_DIRECTIVES: dict[Focus, str] = {
    Focus.PRODUCT: (
        "Additional direction: Focus ONLY on the raw product or main subject, "
        "ignoring all packaging."
    ),
    Focus.BOTH: (
        "CRITICAL direction: Display the product packaging AND the raw product "
        "together in a realistic, artistic scene."
    ),
    Focus.PACKAGING: (
        "Additional direction: Focus ONLY on the product packaging. "
        "Do not show the raw product separately."
    ),
}

OUTPUT_RULE = (
    "**[LAW 2: OUTPUT]** Respond with exactly one generated image and nothing else. "
    "No captions, descriptions, or conversational text."
)


def describe_aspect_ratio(aspect_ratio: str) -> str | None:
    """Descriptive label for a ratio key, or None if unknown."""
    return ASPECT_RATIO_LABELS.get(aspect_ratio)


def focus_directive(focus: Focus | str | None) -> str:
    """Directive for a focus value. Anything unrecognized gets the packaging one."""
    if not isinstance(focus, Focus):
        focus = Focus.parse(focus)
    return FOCUS_DIRECTIVES[focus]


def build_brief(request: CreativeRequest) -> str:
    """Mode-specific creative brief."""
    if request.mode is Mode.POSTER:
        brief = (
            f'Creative brief for a poster: "{request.prompt}". '
            f'Headline Text: "{request.poster_headline or ""}".'
        )
        # Focus only matters when there is a product photo to focus on
        if request.reference_images:
            brief += " " + focus_directive(request.focus)
        return brief

    if request.mode is Mode.MOCKUP_PACKAGING:
        return (
            f'Creative brief for a packaging mockup: Brand Name: "{request.brand_name or ""}". '
            f"Design a '{request.mockup_type or ''}' packaging for this product "
            f'based on the description: "{request.brand_description or ""}".'
        )

    brief = f'Creative brief: "{request.prompt}".'
    return brief + " " + focus_directive(request.focus)


def build(request: CreativeRequest) -> tuple[str, list[ImagePart]]:
    """
    Build the final prompt and attachments for an image request.

    Args:
        request: Parsed image request

    Returns:
        (prompt_text, attachments) - attachments are the reference images in order
    """
    label = describe_aspect_ratio(request.aspect_ratio)
    if label is None:
        label = request.aspect_ratio or "the requested ratio"

    prompt_text = "\n\n".join([
        f"**[LAW 1: ASPECT RATIO] The final image MUST BE {label}.**",
        build_brief(request),
        OUTPUT_RULE,
    ])
    return prompt_text, list(request.reference_images)
