"""Image payload decoding and browser download preparation.

A download is described platform-neutrally by :class:`DownloadPayload`
(filename plus base64 data, exposed as a ``data:`` URI). The Gradio front
end cannot click a synthetic anchor, so :func:`materialize_download` writes
the payload to a file with the computed name; a ``DownloadButton`` pointing
at that file triggers the browser download.
"""

import base64
import binascii
import io
import logging
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from .formatting import download_filename
from .models import IMAGE_MIME_TYPE, GalleryState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DownloadPayload:
    """Everything needed to trigger a download of one gallery image."""

    filename: str
    image_data: str  # base64

    @property
    def data_uri(self) -> str:
        """Inline form of the payload for front ends that can follow a data URI.

        The Gradio UI serves downloads from files instead (see
        :func:`materialize_download`).
        """
        return f"data:{IMAGE_MIME_TYPE};base64,{self.image_data}"

    def to_bytes(self) -> bytes:
        """Decode the base64 payload.

        Raises:
            ValueError: If the payload is not valid base64
        """
        try:
            return base64.b64decode(self.image_data, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 image payload for {self.filename}: {e}") from e


def decode_image(image_data: str) -> Image.Image:
    """Decode a base64 payload into a PIL image.

    Raises:
        ValueError: If the payload is not valid base64 or not an image
    """
    try:
        raw = base64.b64decode(image_data, validate=True)
        image = Image.open(io.BytesIO(raw))
        image.load()
    except (binascii.Error, OSError) as e:
        raise ValueError(f"Could not decode image payload: {e}") from e
    return image


def build_download_payload(gallery: GalleryState, index: int) -> DownloadPayload:
    """Build the download payload for the item at ``index``.

    Raises:
        IndexError: If index is outside the displayed items
    """
    if index < 0 or index >= len(gallery.items):
        raise IndexError(f"Gallery index {index} out of range (0-{len(gallery.items) - 1})")

    item = gallery.items[index]
    return DownloadPayload(
        filename=download_filename(index, item.description),
        image_data=item.image,
    )


def materialize_download(payload: DownloadPayload, directory: Path) -> Path:
    """Write a payload to disk under its download filename.

    Each payload gets its own subdirectory so two items with the same
    filename never overwrite each other.

    Args:
        payload: Download to write
        directory: Parent directory for download files

    Returns:
        Path of the written file
    """
    target_dir = Path(directory) / uuid.uuid4().hex
    target_dir.mkdir(parents=True, exist_ok=True)

    path = target_dir / payload.filename
    path.write_bytes(payload.to_bytes())
    logger.debug(f"Prepared download {path}")
    return path


def discard_downloads(paths) -> None:
    """Delete download files written by :func:`materialize_download`.

    Each file lives in its own subdirectory, which is removed with it.

    Args:
        paths: File paths previously returned by ``materialize_download``
    """
    for path in paths:
        target_dir = Path(path).parent
        try:
            shutil.rmtree(target_dir)
        except FileNotFoundError:
            continue
        except OSError as e:
            logger.warning(f"Could not remove download directory {target_dir}: {e}")
        else:
            logger.debug(f"Removed download directory {target_dir}")
