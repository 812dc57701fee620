"""Data models for Law Meme Generator UI state."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class GenerationPhase(str, Enum):
    """Lifecycle of one generation cycle."""

    IDLE = "idle"
    LOADING = "loading"
    SHOWING_RESULTS = "showing-results"
    ERROR = "error"


@dataclass
class GenerationState:
    """State of the current generation cycle.

    Owned by the orchestrator. A new instance replaces the old one on every
    submission, so results never accumulate across cycles.

    While loading, ``descriptions`` holds every received description and
    ``images`` stays empty. Once results are published both lists hold only
    the successful pairs and have the same length.
    """

    phase: GenerationPhase = GenerationPhase.IDLE
    topic: str = ""
    descriptions: list[str] = field(default_factory=list)
    images: list[str] = field(default_factory=list)
    progress: float = 0.0
    error: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.phase is GenerationPhase.LOADING

    @property
    def has_results(self) -> bool:
        return self.phase is GenerationPhase.SHOWING_RESULTS


@dataclass(frozen=True)
class GalleryItem:
    """A successfully generated (image, description) pair."""

    image: str  # base64 PNG payload
    description: str | None = None


@dataclass
class GalleryState:
    """Gallery contents and the enlarged selection.

    Owned by the gallery presenter. ``enlarged_index`` is either None or a
    valid index into ``items``.

    Attributes
    ----------
    items : list[GalleryItem]
        Displayed items in grid order
    enlarged_index : int | None
        Index of the enlarged item, if any
    download_paths : dict[int, str]
        Materialized download file per item index
    """

    items: list[GalleryItem] = field(default_factory=list)
    enlarged_index: int | None = None
    download_paths: dict[int, str] = field(default_factory=dict)

    def select(self, index: int) -> int | None:
        """Toggle the enlarged selection.

        Selecting the enlarged item again clears the selection; selecting a
        different item switches to it directly.

        Args:
            index: Grid index of the clicked item

        Returns:
            The new enlarged index (None when cleared)

        Raises:
            IndexError: If index is outside the displayed items
        """
        if index < 0 or index >= len(self.items):
            raise IndexError(f"Gallery index {index} out of range (0-{len(self.items) - 1})")

        self.enlarged_index = None if self.enlarged_index == index else index
        return self.enlarged_index

    def close(self) -> None:
        """Clear the enlarged selection."""
        self.enlarged_index = None

    @property
    def enlarged_item(self) -> GalleryItem | None:
        if self.enlarged_index is None:
            return None
        return self.items[self.enlarged_index]


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each browser session gets its own UIState, so concurrent users never
    share generation results or selections.

    Attributes
    ----------
    client : Any | None
        GeminiClient instance, created lazily from config
    generation : GenerationState
        Current generation cycle (owned by the orchestrator)
    gallery : GalleryState
        Displayed items and enlarged selection (owned by the gallery presenter)
    credential_error : str | None
        Setup instructions when no API key is configured
    """

    client: Any | None = None  # GeminiClient instance
    generation: GenerationState = field(default_factory=GenerationState)
    gallery: GalleryState = field(default_factory=GalleryState)
    credential_error: str | None = None

    def is_initialized(self) -> bool:
        """Check whether a client is available for submissions."""
        return self.client is not None

    def __repr__(self) -> str:
        return (
            f"UIState(initialized={self.is_initialized()}, "
            f"phase={self.generation.phase.value}, "
            f"items={len(self.gallery.items)})"
        )


# User-facing messages
GENERATION_FAILED_MESSAGE = "Failed to generate images. Please try again."

# Filename and payload constants
PRODUCT_TAG = "law-meme"
IMAGE_EXTENSION = ".png"
IMAGE_MIME_TYPE = "image/png"
FILENAME_DESCRIPTION_LENGTH = 30

# Input box grows up to this many visible lines, then scrolls
INPUT_MAX_LINES = 6

GRID_COLUMNS = 2
