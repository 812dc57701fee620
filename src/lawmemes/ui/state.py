"""State management utilities for the Law Meme Generator UI.

This module handles lazy initialization of the per-session UI state and the
transition functions of the generation state machine::

    idle ──submit──▶ loading ──publish──▶ showing-results
                        │                      │
                        └──fail──▶ error ◀─────┘ (next submit starts loading again)

Every transition replaces or updates ``state.generation`` in one place so
the orchestrator never flips individual flags by hand.
"""

import logging

from lawmemes.core.config import LawMemesConfig, MissingCredentialError, config
from lawmemes.core.gemini_client import GeminiClient

from .media import discard_downloads
from .models import GalleryItem, GalleryState, GenerationPhase, GenerationState, UIState

logger = logging.getLogger(__name__)


def initialize_ui_state(
    state: UIState | None = None, settings: LawMemesConfig | None = None
) -> UIState:
    """Initialize or ensure UI state is ready.

    Creates the Gemini client on first use. When no API key is configured
    the client stays unset and ``credential_error`` carries the setup
    instructions instead.

    Args:
        state: Existing UIState or None
        settings: Configuration to use (default: global config)

    Returns:
        Initialized UIState instance
    """
    settings = settings or config

    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if state.is_initialized():
        logger.debug("UIState already initialized")
        return state

    try:
        state.client = GeminiClient.from_config(settings)
        state.credential_error = None
        logger.info(f"UIState initialization complete: {state}")
    except MissingCredentialError as e:
        logger.error(f"Gemini API key is not configured: {e}")
        state.credential_error = str(e)

    return state


def begin_generation(state: UIState, topic: str) -> UIState:
    """Enter the loading phase for a new cycle.

    Clears the previous cycle's results and error, resets the gallery
    (dropping any enlarged selection and deleting its download files) and
    sets progress to 0.
    """
    state.generation = GenerationState(phase=GenerationPhase.LOADING, topic=topic, progress=0.0)
    _reset_gallery(state)
    return state


def record_descriptions(state: UIState, descriptions: list[str], checkpoint: float) -> UIState:
    """Store received descriptions and jump progress to the checkpoint."""
    state.generation.descriptions = list(descriptions)
    state.generation.images = []
    state.generation.progress = float(checkpoint)
    return state


def set_progress(state: UIState, progress: float) -> UIState:
    """Update the progress indicator, clamped to 0-100."""
    state.generation.progress = max(0.0, min(100.0, float(progress)))
    return state


def publish_results(state: UIState, images: list[str], error: str | None = None) -> UIState:
    """Publish the successful subset of a finished cycle.

    Keeps only indices whose image is non-empty and filters the
    descriptions with the same mask, so both lists stay aligned. The
    gallery is replaced in the same step.

    Args:
        state: UI state in the loading phase
        images: One entry per description, ``""`` for failed calls
        error: Optional message to show alongside the results

    Returns:
        Updated state in the showing-results (or error) phase
    """
    descriptions = state.generation.descriptions
    if len(images) != len(descriptions):
        raise ValueError(
            f"Expected {len(descriptions)} image results, got {len(images)}"
        )

    pairs = [(image, desc) for image, desc in zip(images, descriptions) if image]
    valid_images = [image for image, _ in pairs]
    valid_descriptions = [desc for _, desc in pairs]

    state.generation = GenerationState(
        phase=GenerationPhase.ERROR if error else GenerationPhase.SHOWING_RESULTS,
        topic=state.generation.topic,
        descriptions=valid_descriptions,
        images=valid_images,
        progress=100.0,
        error=error,
    )
    state.gallery = GalleryState(
        items=[GalleryItem(image=image, description=desc) for image, desc in pairs]
    )
    logger.info(f"Published {len(pairs)}/{len(images)} generated images")
    return state


def fail_generation(state: UIState, message: str) -> UIState:
    """End the cycle with a user-visible error and no results."""
    state.generation = GenerationState(
        phase=GenerationPhase.ERROR,
        topic=state.generation.topic,
        progress=0.0,
        error=message,
    )
    _reset_gallery(state)
    return state


def cleanup_ui_state(state: UIState) -> None:
    """Release the session's HTTP resources and download files.

    Args:
        state: UI state to clean up
    """
    logger.info("Cleaning up UIState resources")

    if state.client is not None:
        try:
            state.client.session.close()
        except Exception as e:
            logger.error(f"Error closing HTTP session: {e}")

    state.client = None
    state.generation = GenerationState()
    _reset_gallery(state)


def _reset_gallery(state: UIState) -> None:
    """Replace the gallery, deleting files written for the old one."""
    discard_downloads(state.gallery.download_paths.values())
    state.gallery = GalleryState()
