"""Reusable UI components for the Law Meme Generator Gradio interface."""

import gradio as gr

from .formatting import grid_alt_text
from .models import GRID_COLUMNS


class GalleryCellUI:
    """One grid cell: the generated image plus a hover download button.

    The download button is a separate component from the image, so clicking
    it downloads the file without triggering the image's enlarge handler.
    """

    def __init__(self, index: int):
        """Initialize a gallery cell.

        Args:
            index: Zero-based grid position of this cell
        """
        self.index = index

        with gr.Column(
            visible=False,
            min_width=0,
            elem_id=f"image-item-{index}",
            elem_classes=["meme-cell"],
        ) as self.container:
            self.image = gr.Image(
                label=grid_alt_text(index),
                show_label=False,
                type="filepath",
                interactive=False,
                elem_classes=["meme-cell-image"],
            )
            self.download = gr.DownloadButton(
                "⬇",
                value=None,
                size="sm",
                elem_id=f"download-button-{index}",
                elem_classes=["meme-cell-download"],
            )

    def get_output_components(self) -> list[gr.components.Component]:
        """Return components updated when the gallery is rendered.

        Returns:
            List of (container, image, download) components
        """
        return [self.container, self.image, self.download]


class EnlargedViewUI:
    """Full-screen overlay showing one enlarged image with its prompt.

    The backdrop covers the page; the front-end script forwards clicks that
    land on the backdrop (outside the content and action areas) to the close
    button, so clicking the image or caption leaves the overlay open.
    """

    def __init__(self):
        with gr.Group(visible=False, elem_id="enlarged-backdrop") as self.backdrop:
            with gr.Row(elem_id="enlarged-actions"):
                self.download = gr.DownloadButton(
                    "⬇",
                    value=None,
                    size="sm",
                    elem_id="enlarged-download-button",
                )
                self.close = gr.Button("✕", size="sm", elem_id="close-button")

            with gr.Column(elem_id="enlarged-container"):
                self.image = gr.Image(
                    show_label=False,
                    type="filepath",
                    interactive=False,
                    elem_id="enlarged-image",
                )
                self.caption = gr.Markdown(
                    value="",
                    visible=False,
                    elem_id="enlarged-description",
                )

    def get_output_components(self) -> list[gr.components.Component]:
        """Return components updated when the selection changes.

        Returns:
            List of (backdrop, image, caption, download) components
        """
        return [self.backdrop, self.image, self.caption, self.download]


class GalleryUI:
    """Fixed two-column grid of gallery cells plus the enlarged overlay.

    One cell is created per possible description, laid out row by row so
    the grid order always matches the item index.
    """

    def __init__(self, slot_count: int, columns: int = GRID_COLUMNS):
        """Initialize the gallery.

        Args:
            slot_count: Maximum number of items the gallery can show
            columns: Cells per row
        """
        self.slot_count = slot_count
        self.cells: list[GalleryCellUI] = []

        with gr.Column(visible=False, elem_id="meme-grid") as self.grid:
            for row_start in range(0, slot_count, columns):
                with gr.Row(equal_height=True):
                    for index in range(row_start, min(row_start + columns, slot_count)):
                        self.cells.append(GalleryCellUI(index))

        self.enlarged = EnlargedViewUI()

    def get_grid_outputs(self) -> list[gr.components.Component]:
        """Return the grid container followed by every cell's components."""
        outputs: list[gr.components.Component] = [self.grid]
        for cell in self.cells:
            outputs.extend(cell.get_output_components())
        return outputs

    def get_enlarged_outputs(self) -> list[gr.components.Component]:
        """Return the overlay components."""
        return self.enlarged.get_output_components()

    def get_all_outputs(self) -> list[gr.components.Component]:
        """Return grid outputs followed by overlay outputs."""
        return self.get_grid_outputs() + self.get_enlarged_outputs()
