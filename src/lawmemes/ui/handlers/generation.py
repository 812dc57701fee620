"""Topic submission and configuration-check handlers."""

import logging
from collections.abc import Iterator

import gradio as gr

from lawmemes.core.config import LawMemesConfig, config

from ..formatting import format_error, render_progress_bar
from ..models import GENERATION_FAILED_MESSAGE, UIState
from ..orchestrator import should_submit, submit_topic
from ..state import fail_generation, initialize_ui_state
from .gallery import prepare_downloads, render_enlarged, render_gallery

logger = logging.getLogger(__name__)


def check_configuration(state: UIState | None) -> tuple[str, UIState]:
    """Initialize the session on page load and report missing credentials.

    Args:
        state: UI state

    Returns:
        Tuple of (error_markdown, updated_state)
    """
    state = initialize_ui_state(state)
    return format_error(state.credential_error), state


def render_generation(state: UIState, slot_count: int) -> tuple:
    """Build every output update for the current generation state.

    Args:
        state: UI state
        slot_count: Number of gallery cells

    Returns:
        Tuple of (progress_update, error_update, *grid_updates, *overlay_updates, state)
    """
    generation = state.generation
    progress_update = gr.update(
        value=render_progress_bar(generation.progress),
        visible=generation.is_loading,
    )
    error_update = gr.update(value=format_error(generation.error), visible=bool(generation.error))

    return (
        progress_update,
        error_update,
        *render_gallery(state, slot_count),
        *render_enlarged(state),
        state,
    )


def submit_handler(
    topic: str, state: UIState | None, settings: LawMemesConfig | None = None
) -> Iterator[tuple]:
    """Run a generation cycle and stream its progress to the UI.

    Empty topics and submissions while a cycle is loading leave every
    output untouched.

    Args:
        topic: Text from the topic input
        state: UI state
        settings: Configuration to use (default: global config)

    Yields:
        Output tuples in the order built by :func:`render_generation`
    """
    settings = settings or config
    slot_count = settings.max_descriptions
    state = initialize_ui_state(state, settings)

    if not should_submit(topic, state):
        yield (*_unchanged(slot_count), state)
        return

    try:
        for state in submit_topic(topic, state, settings):
            if state.generation.has_results:
                prepare_downloads(state, settings.downloads_dir)
            yield render_generation(state, slot_count)

    except Exception as e:
        # Unexpected error
        logger.error(f"Error generating images: {e}", exc_info=True)
        fail_generation(state, GENERATION_FAILED_MESSAGE)
        yield render_generation(state, slot_count)


def _unchanged(slot_count: int) -> list:
    """No-op updates for every output except the state."""
    grid_outputs = 1 + 3 * slot_count
    overlay_outputs = 4
    return [gr.update() for _ in range(2 + grid_outputs + overlay_outputs)]
