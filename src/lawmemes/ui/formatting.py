"""Text formatting helpers for the gallery and status displays."""

import html
import re

from .models import FILENAME_DESCRIPTION_LENGTH, IMAGE_EXTENSION, PRODUCT_TAG

# "Square image" with any (or no) spacing, optional . , or : and trailing spaces
_MARKER_PATTERN = re.compile(r"^\s*square\s*image\b\s*[.:,]?\s*", re.IGNORECASE)
_FILENAME_INVALID = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE_RUN = re.compile(r"\s+")


def strip_marker_phrase(description: str) -> str:
    """Remove the leading "Square image" marker from a description.

    Handles "Square image. X", "square image, X", "SQUARE IMAGE: X",
    "SquareImage X" and irregular spacing such as "Square  image   X".
    Text without the marker is only trimmed.

    Args:
        description: Raw description from the description model

    Returns:
        Description text suitable for display
    """
    return _MARKER_PATTERN.sub("", description, count=1).strip()


def download_filename(index: int, description: str | None = None) -> str:
    """Derive a download filename for a gallery item.

    The description is lower-cased, stripped of everything except letters,
    digits, whitespace and hyphens, hyphenated and cut to 30 characters.
    Without a description the 1-based item number is used.

    Args:
        index: Zero-based gallery index
        description: Raw description, if any

    Returns:
        Filename such as ``law-meme-a-judge-hammering-a-gavel-with.png``
    """
    if description:
        cleaned = _FILENAME_INVALID.sub("", description.lower()).strip()
        cleaned = _WHITESPACE_RUN.sub("-", cleaned)[:FILENAME_DESCRIPTION_LENGTH]
        stem = f"{PRODUCT_TAG}-{cleaned}"
    else:
        stem = f"{PRODUCT_TAG}-{index + 1}"
    return f"{stem}{IMAGE_EXTENSION}"


def grid_alt_text(index: int) -> str:
    """Generic label for a grid cell image."""
    return f"Generated artwork {index + 1}"


def enlarged_alt_text(index: int, description: str | None = None) -> str:
    """Label for the enlarged image: the raw description or a generic fallback."""
    return description or f"Enlarged artwork {index + 1}"


def format_caption(description: str | None) -> str:
    """Markdown caption shown under the enlarged image."""
    if not description:
        return ""
    return f"**Prompt:** {strip_marker_phrase(description)}"


def format_error(message: str | None) -> str:
    """Markdown for the error banner (empty when there is no error)."""
    if not message:
        return ""
    return f"❌ {message}"


def render_progress_bar(progress: float) -> str:
    """HTML progress bar for a value between 0 and 100."""
    clamped = max(0.0, min(100.0, progress))
    return (
        '<div class="progress-track" data-testid="loading-container">'
        f'<div class="progress-fill" style="width: {clamped:.1f}%" '
        f'data-testid="loading-progress" aria-valuenow="{clamped:.0f}" '
        'aria-valuemin="0" aria-valuemax="100" role="progressbar"></div>'
        "</div>"
    )


def render_title(title: str) -> str:
    """HTML for the clickable app title (the front-end script reloads on click)."""
    return (
        f'<h1 id="app-title" title="Refresh page" data-testid="app-title">'
        f"{html.escape(title)}</h1>"
    )
