"""Instruction text sent to the description model.

The description model is asked for a fixed number of meme descriptions, one
per line, each starting with the marker phrase ``Square image.`` so the image
model renders a square picture. The marker is stripped again before a
description is shown to the user (see ``lawmemes.ui.formatting``).

Usage
-----
::

    prompt = compose_description_prompt("Judicial review of parking fines", count=4)
"""

from __future__ import annotations

MARKER_PHRASE = "Square image"

_INSTRUCTIONS = (
    "You are a NZ law meme generator. Create {count} different humorous, witty, and creative "
    "meme descriptions related to law, legal concepts, lawyers, judges, courtrooms, or legal "
    "proceedings. Each description should be clear and detailed enough to create a unique and "
    "entertaining visual meme. Make sure to include very different formats, including cartoons, "
    "pictures with text, doge, and 4-panel comics. Do not include more than 12 words for the text "
    "content of each meme (the description should be much more than 12 words). Respond with "
    "exactly {count} descriptions, each on a new line, without any additional text, numbering, "
    "or formatting. Make sure to include details of the user's prompt, like names, places or "
    "concepts given in every meme description. Each description MUST state at the beginning "
    "'{marker}.'"
)


def build_instructions(count: int) -> str:
    """Return the meme-writer instructions for ``count`` descriptions."""
    if count < 1:
        raise ValueError(f"Description count must be at least 1, got {count}")
    return _INSTRUCTIONS.format(count=count, marker=MARKER_PHRASE)


def compose_description_prompt(topic: str, count: int) -> str:
    """Combine the instructions with the user's topic.

    Args:
        topic: Free text supplied by the user
        count: Number of descriptions to request

    Returns:
        Prompt text for the description model
    """
    return f"{build_instructions(count)}\n\nTopic: {topic}"


def split_descriptions(text: str, limit: int) -> list[str]:
    """Split a model reply into at most ``limit`` non-blank descriptions.

    Args:
        text: Raw reply with one description per line
        limit: Maximum number of descriptions to keep

    Returns:
        Descriptions in reply order
    """
    lines = [line.strip() for line in text.splitlines()]
    return [line for line in lines if line][:limit]
