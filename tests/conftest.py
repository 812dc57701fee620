"""Shared pytest fixtures for Law Meme Generator tests."""

import base64
import io
import shutil
import tempfile
from pathlib import Path
from typing import Generator
from unittest.mock import Mock

import pytest
from PIL import Image

from lawmemes.core.config import LawMemesConfig
from lawmemes.ui.models import GalleryItem, GalleryState, GenerationPhase, GenerationState, UIState


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> LawMemesConfig:
    """Create a test configuration with a fake key and no delays.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        LawMemesConfig instance for testing
    """
    return LawMemesConfig(
        _env_file=None,
        gemini_api_key="test-gemini-key",
        downloads_dir=str(temp_dir / "downloads"),
        progress_tick_seconds=0.01,
        result_reveal_delay=0,
    )


@pytest.fixture
def sample_image_b64() -> str:
    """Return a small red PNG as base64."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color="red").save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


@pytest.fixture
def other_image_b64() -> str:
    """Return a small blue PNG as base64."""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color="blue").save(buffer, format="PNG")
    return base64.b64encode(buffer.getvalue()).decode("ascii")


@pytest.fixture
def sample_descriptions() -> list[str]:
    """Descriptions as the description model returns them."""
    return [
        "Square image. A judge hammering a gavel with 'Motion Denied' text",
        "Square image. Lawyer drowning in paperwork labelled 'Discovery'",
        "Square image. Law student surrounded by books at 3am",
        "Square image. Attorney objecting dramatically in the High Court",
    ]


@pytest.fixture
def fake_client(sample_descriptions, sample_image_b64) -> Mock:
    """A GeminiClient stand-in that always succeeds."""
    client = Mock()
    client.generate_meme_descriptions.return_value = list(sample_descriptions)
    client.generate_image.return_value = sample_image_b64
    return client


@pytest.fixture
def ui_state(fake_client) -> UIState:
    """Create an initialized UI state backed by the fake client."""
    return UIState(client=fake_client)


@pytest.fixture
def gallery_items(sample_image_b64, other_image_b64) -> list[GalleryItem]:
    """Three displayable gallery items; the last has no description."""
    return [
        GalleryItem(image=sample_image_b64, description="Square image. A judge hammering a gavel"),
        GalleryItem(image=other_image_b64, description="Square image, Lawyer drowning in paperwork"),
        GalleryItem(image=sample_image_b64, description=None),
    ]


@pytest.fixture
def results_state(gallery_items) -> UIState:
    """UI state showing published results."""
    state = UIState(client=Mock())
    state.generation = GenerationState(
        phase=GenerationPhase.SHOWING_RESULTS,
        topic="court",
        descriptions=[item.description for item in gallery_items],
        images=[item.image for item in gallery_items],
        progress=100.0,
    )
    state.gallery = GalleryState(items=list(gallery_items))
    return state

