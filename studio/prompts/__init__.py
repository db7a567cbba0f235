"""Prompt text and prompt assembly."""

from pathlib import Path

PROMPTS_DIR = Path(__file__).parent


def load_prompt(name: str) -> str:
    """
    Load a fixed instruction by name.

    Args:
        name: File stem under studio/prompts, e.g. 'image_system'

    Returns:
        The prompt text.

    Raises:
        FileNotFoundError: If prompt file doesn't exist.
    """
    path = PROMPTS_DIR / f"{name}.txt"
    if not path.exists():
        raise FileNotFoundError(f"Prompt file not found: {path}")
    return path.read_text(encoding="utf-8").strip()
