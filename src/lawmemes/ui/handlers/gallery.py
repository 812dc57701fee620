"""Gallery grid, enlarge overlay, and download handlers."""

import logging
from collections.abc import Callable
from pathlib import Path

import gradio as gr

from lawmemes.core.config import config

from ..formatting import enlarged_alt_text, format_caption, grid_alt_text
from ..media import build_download_payload, materialize_download
from ..models import UIState

logger = logging.getLogger(__name__)


def prepare_downloads(state: UIState, downloads_dir: Path | None = None) -> UIState:
    """Write each displayed item to a download file, once per item.

    The written file also backs the grid and enlarged images, so every item
    the gallery shows has a path after this call.

    Args:
        state: UI state with published gallery items
        downloads_dir: Parent directory for download files (default: from config)

    Returns:
        Updated state with ``gallery.download_paths`` filled in
    """
    downloads_dir = downloads_dir or config.downloads_dir
    gallery = state.gallery

    for index in range(len(gallery.items)):
        if index in gallery.download_paths:
            continue
        payload = build_download_payload(gallery, index)
        path = materialize_download(payload, downloads_dir)
        gallery.download_paths[index] = str(path)

    return state


def render_gallery(state: UIState, slot_count: int) -> list:
    """Build updates for the grid container and every cell.

    Cells beyond the number of displayed items are hidden and cleared.

    Args:
        state: UI state
        slot_count: Number of cells in the grid

    Returns:
        Updates matching ``GalleryUI.get_grid_outputs()``
    """
    gallery = state.gallery
    show_grid = state.generation.has_results and bool(gallery.items)
    updates: list = [gr.update(visible=show_grid)]

    for index in range(slot_count):
        path = gallery.download_paths.get(index) if index < len(gallery.items) else None
        if path:
            updates.extend(
                [
                    gr.update(visible=True),
                    gr.update(value=path, label=grid_alt_text(index)),
                    gr.update(value=path),
                ]
            )
        else:
            updates.extend([gr.update(visible=False), gr.update(value=None), gr.update(value=None)])

    return updates


def render_enlarged(state: UIState) -> list:
    """Build updates for the enlarged overlay.

    Returns:
        Updates matching ``GalleryUI.get_enlarged_outputs()``
    """
    gallery = state.gallery
    item = gallery.enlarged_item

    if item is None:
        return [
            gr.update(visible=False),
            gr.update(value=None),
            gr.update(value="", visible=False),
            gr.update(value=None),
        ]

    index = gallery.enlarged_index
    path = gallery.download_paths.get(index)
    caption = format_caption(item.description)
    return [
        gr.update(visible=True),
        gr.update(value=path, label=enlarged_alt_text(index, item.description)),
        gr.update(value=caption, visible=bool(caption)),
        gr.update(value=path),
    ]


def select_gallery_item(index: int, state: UIState) -> tuple:
    """Toggle the enlarged view for the clicked grid cell.

    Args:
        index: Grid index of the clicked cell
        state: UI state

    Returns:
        Tuple of overlay updates followed by the updated state
    """
    try:
        enlarged = state.gallery.select(index)
        logger.debug(f"Gallery selection is now {enlarged}")
    except IndexError as e:
        logger.warning(f"Ignoring gallery selection: {e}")
        state.gallery.close()

    return (*render_enlarged(state), state)


def close_enlarged_view(state: UIState) -> tuple:
    """Close the enlarged view (close button or backdrop click).

    Returns:
        Tuple of overlay updates followed by the updated state
    """
    state.gallery.close()
    return (*render_enlarged(state), state)


def make_select_handler(index: int) -> Callable[[UIState], tuple]:
    """Create a select handler bound to one grid cell.

    Args:
        index: Grid index of the cell

    Returns:
        Handler taking the UI state
    """

    def handler(state: UIState) -> tuple:
        return select_gallery_item(index, state)

    handler.__name__ = f"select_gallery_item_{index}"
    return handler
