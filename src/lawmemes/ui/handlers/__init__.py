"""UI event handlers organized by feature area.

- generation: Configuration check and topic submission
- gallery: Grid rendering, enlarge overlay, and downloads
"""

from .gallery import (
    close_enlarged_view,
    make_select_handler,
    prepare_downloads,
    render_enlarged,
    render_gallery,
    select_gallery_item,
)
from .generation import (
    check_configuration,
    render_generation,
    submit_handler,
)

__all__ = [
    # Generation handlers
    "check_configuration",
    "render_generation",
    "submit_handler",
    # Gallery handlers
    "close_enlarged_view",
    "make_select_handler",
    "prepare_downloads",
    "render_enlarged",
    "render_gallery",
    "select_gallery_item",
]
