"""Tests for lawmemes.core.config - configuration management.

Tests cover:
- Default values for the configuration fields.
- Environment variable overrides via the LAWMEMES_ prefix and GEMINI_API_KEY.
- Automatic creation of the downloads directory.
- Credential checks (require_api_key / MissingCredentialError).
- Pydantic validation constraints.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from lawmemes.core.config import (
    MISSING_CREDENTIAL_MESSAGE,
    LawMemesConfig,
    MissingCredentialError,
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove configuration variables that would leak into the defaults."""
    for name in (
        "GEMINI_API_KEY",
        "LAWMEMES_GEMINI_API_KEY",
        "LAWMEMES_MAX_DESCRIPTIONS",
        "LAWMEMES_GRADIO_SERVER_PORT",
        "LAWMEMES_PARALLEL_IMAGE_REQUESTS",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConfigDefaults:
    """Verify that LawMemesConfig provides sensible defaults."""

    def test_default_api_key_is_empty(self, clean_env, temp_dir: Path):
        cfg = LawMemesConfig(_env_file=None, downloads_dir=str(temp_dir))
        assert cfg.gemini_api_key == ""
        assert cfg.has_api_key is False

    def test_default_models(self, test_config: LawMemesConfig):
        assert test_config.description_model == "gemini-2.0-flash"
        assert test_config.image_model == "gemini-2.0-flash-exp-image-generation"

    def test_default_base_url(self, test_config: LawMemesConfig):
        assert test_config.gemini_base_url == "https://generativelanguage.googleapis.com/v1beta"

    def test_default_generation_settings(self, clean_env, temp_dir: Path):
        cfg = LawMemesConfig(_env_file=None, downloads_dir=str(temp_dir))
        assert cfg.max_descriptions == 4
        assert cfg.progress_checkpoint == 30
        assert cfg.result_reveal_delay == 0.5
        assert cfg.parallel_image_requests is False

    def test_default_server_port(self, clean_env, temp_dir: Path):
        cfg = LawMemesConfig(_env_file=None, downloads_dir=str(temp_dir))
        assert cfg.gradio_server_port == 7860
        assert cfg.gradio_share is False


class TestConfigEnvironment:
    """Verify environment variable loading."""

    def test_prefixed_api_key(self, clean_env, monkeypatch, temp_dir: Path):
        monkeypatch.setenv("LAWMEMES_GEMINI_API_KEY", "prefixed-key")
        cfg = LawMemesConfig(_env_file=None, downloads_dir=str(temp_dir))
        assert cfg.gemini_api_key == "prefixed-key"

    def test_plain_gemini_api_key(self, clean_env, monkeypatch, temp_dir: Path):
        monkeypatch.setenv("GEMINI_API_KEY", "plain-key")
        cfg = LawMemesConfig(_env_file=None, downloads_dir=str(temp_dir))
        assert cfg.gemini_api_key == "plain-key"

    def test_prefixed_generation_setting(self, clean_env, monkeypatch, temp_dir: Path):
        monkeypatch.setenv("LAWMEMES_MAX_DESCRIPTIONS", "2")
        monkeypatch.setenv("LAWMEMES_PARALLEL_IMAGE_REQUESTS", "true")
        cfg = LawMemesConfig(_env_file=None, downloads_dir=str(temp_dir))
        assert cfg.max_descriptions == 2
        assert cfg.parallel_image_requests is True


class TestConfigDirectoryCreation:
    """Verify that LawMemesConfig creates the downloads directory."""

    def test_downloads_dir_created(self, test_config: LawMemesConfig):
        assert test_config.downloads_dir.exists()
        assert test_config.downloads_dir.is_dir()

    def test_creates_nested_directories(self, temp_dir: Path):
        deep = temp_dir / "a" / "b" / "downloads"
        cfg = LawMemesConfig(_env_file=None, downloads_dir=str(deep))
        assert cfg.downloads_dir == deep
        assert deep.is_dir()


class TestRequireApiKey:
    """Tests for the credential check."""

    def test_returns_key(self, test_config: LawMemesConfig):
        assert test_config.require_api_key() == "test-gemini-key"

    def test_strips_whitespace(self, temp_dir: Path):
        cfg = LawMemesConfig(_env_file=None, gemini_api_key="  key  ", downloads_dir=str(temp_dir))
        assert cfg.require_api_key() == "key"

    def test_missing_key_raises(self, clean_env, temp_dir: Path):
        cfg = LawMemesConfig(_env_file=None, downloads_dir=str(temp_dir))
        with pytest.raises(MissingCredentialError) as exc_info:
            cfg.require_api_key()
        assert str(exc_info.value) == MISSING_CREDENTIAL_MESSAGE

    def test_blank_key_counts_as_missing(self, temp_dir: Path):
        cfg = LawMemesConfig(_env_file=None, gemini_api_key="   ", downloads_dir=str(temp_dir))
        assert cfg.has_api_key is False
        with pytest.raises(MissingCredentialError):
            cfg.require_api_key()

    def test_missing_credential_is_value_error(self):
        assert issubclass(MissingCredentialError, ValueError)


class TestConfigValidation:
    """Verify pydantic constraints."""

    def test_max_descriptions_range(self, temp_dir: Path):
        with pytest.raises(ValidationError):
            LawMemesConfig(_env_file=None, max_descriptions=0, downloads_dir=str(temp_dir))
        with pytest.raises(ValidationError):
            LawMemesConfig(_env_file=None, max_descriptions=9, downloads_dir=str(temp_dir))

    def test_checkpoint_below_100(self, temp_dir: Path):
        with pytest.raises(ValidationError):
            LawMemesConfig(_env_file=None, progress_checkpoint=100, downloads_dir=str(temp_dir))

    def test_port_range(self, temp_dir: Path):
        with pytest.raises(ValidationError):
            LawMemesConfig(_env_file=None, gradio_server_port=80, downloads_dir=str(temp_dir))

    def test_log_level_literal(self, temp_dir: Path):
        with pytest.raises(ValidationError):
            LawMemesConfig(_env_file=None, log_level="VERBOSE", downloads_dir=str(temp_dir))
