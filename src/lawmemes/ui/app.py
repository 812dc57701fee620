"""Gradio UI for the Law Meme Generator."""

import logging
from pathlib import Path

import gradio as gr

from lawmemes.core.config import config

from .components import GalleryUI
from .handlers import (
    check_configuration,
    close_enlarged_view,
    make_select_handler,
    submit_handler,
)
from .formatting import render_progress_bar, render_title
from .models import INPUT_MAX_LINES, UIState
from .state import cleanup_ui_state

# Configure logging
logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"
APP_TITLE = "Law Meme Generator"


def load_static_asset(name: str) -> str:
    """Read a front-end asset shipped in ``ui/static``."""
    return (STATIC_DIR / name).read_text(encoding="utf-8")


def create_ui() -> tuple[gr.Blocks, str, str]:
    """Create the Gradio UI.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string, custom JS string)
    """
    custom_css = load_static_asset("gallery.css")
    custom_js = load_static_asset("gallery.js")

    app = gr.Blocks(title=APP_TITLE)

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState(), delete_callback=cleanup_ui_state)

        gr.HTML(render_title(APP_TITLE))

        topic_input = gr.Textbox(
            placeholder="Input a topic or idea for an NZ law meme",
            show_label=False,
            lines=1,
            max_lines=INPUT_MAX_LINES,
            autofocus=True,
            elem_id="meme-input",
        )

        error_output = gr.Markdown(value="", elem_id="error-message")

        progress_output = gr.HTML(
            value=render_progress_bar(0),
            visible=False,
            elem_id="loading-progress-bar",
        )

        gallery = GalleryUI(slot_count=config.max_descriptions)

        # Enter submits, Shift+Enter inserts a line break
        topic_input.submit(
            fn=submit_handler,
            inputs=[topic_input, ui_state],
            outputs=[progress_output, error_output, *gallery.get_all_outputs(), ui_state],
            trigger_mode="once",
            show_progress="hidden",
        )

        enlarged_outputs = [*gallery.get_enlarged_outputs(), ui_state]

        for cell in gallery.cells:
            cell.image.select(
                fn=make_select_handler(cell.index),
                inputs=[ui_state],
                outputs=enlarged_outputs,
                show_progress="hidden",
            )

        gallery.enlarged.close.click(
            fn=close_enlarged_view,
            inputs=[ui_state],
            outputs=enlarged_outputs,
            show_progress="hidden",
        )

        # Report a missing API key as soon as the page loads
        app.load(
            fn=check_configuration,
            inputs=[ui_state],
            outputs=[error_output, ui_state],
        )

    return app, custom_css, custom_js


def main():
    """Main entry point for the application."""
    logger.info("Starting Law Meme Generator...")
    logger.info(f"Configuration: {config.model_dump(exclude={'gemini_api_key'})}")

    if not config.has_api_key:
        logger.warning("No Gemini API key configured; submissions will be refused")

    app, custom_css, custom_js = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
        js=custom_js,
        allowed_paths=[str(config.downloads_dir)],
    )


if __name__ == "__main__":
    main()
