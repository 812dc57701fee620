"""Configuration management for the Law Meme Generator.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the LAWMEMES_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (LAWMEMES_* prefix)
2. .env file in the project root
3. Default values defined in LawMemesConfig

The Gemini API key is the only required value. It is read from
``LAWMEMES_GEMINI_API_KEY`` or, for convenience, the plain ``GEMINI_API_KEY``
variable that most Gemini tooling already uses.

Example .env file:
    LAWMEMES_GEMINI_API_KEY=your-key-here
    LAWMEMES_MAX_DESCRIPTIONS=4
    LAWMEMES_PARALLEL_IMAGE_REQUESTS=false
    LAWMEMES_LOG_LEVEL=DEBUG

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
This ensures a single source of truth for all configuration values across
the application.

Usage Example
-------------
    from lawmemes.core.config import config

    print(config.description_model)
    config.require_api_key()  # raises MissingCredentialError when unset

Progress Settings
-----------------
The progress bar is split into two phases. The description request fills the
bar up to ``progress_checkpoint`` (30%) and the image requests share the
remaining 70% equally. While the description request is in flight, the bar
ramps toward the checkpoint every ``progress_tick_seconds``.
"""

import tempfile
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MISSING_CREDENTIAL_MESSAGE = (
    "API key is missing. Please check your .env file and make sure "
    "LAWMEMES_GEMINI_API_KEY (or GEMINI_API_KEY) is set. "
    "Get a key from: https://aistudio.google.com/apikey"
)


class MissingCredentialError(ValueError):
    """Raised when the Gemini API key is not configured.

    The message is written for the end user and explains how to fix the
    configuration. It is never retried automatically.
    """

    def __init__(self, message: str = MISSING_CREDENTIAL_MESSAGE):
        super().__init__(message)


class LawMemesConfig(BaseSettings):
    """Main configuration for the Law Meme Generator.

    Attributes
    ----------
    Gemini Settings:
        gemini_api_key : str
            API key for the Gemini generateContent endpoint (required)
        gemini_base_url : str
            Base URL of the Gemini REST API
        description_model : str
            Text model used to write meme descriptions
        image_model : str
            Image model used to render one meme per description
        request_timeout : float
            Timeout in seconds for each HTTP request

    Generation Settings:
        max_descriptions : int
            Number of meme descriptions requested and kept (1-8)
        progress_checkpoint : int
            Progress value reached once descriptions are received
        progress_tick_seconds : float
            Interval between progress ramp updates while waiting for descriptions
        result_reveal_delay : float
            Pause at 100% before the gallery is revealed
        parallel_image_requests : bool
            Issue image requests concurrently instead of one at a time
        max_parallel_requests : int
            Worker count when parallel image requests are enabled

    Paths:
        downloads_dir : Path
            Directory where download files are materialized for the browser

    UI Settings:
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root logging level
        gradio_server_name : str
            Server bind address (0.0.0.0 for local network)
        gradio_server_port : int
            Server port (1024-65535)
        gradio_share : bool
            Create public gradio.live link (keep False for local-only)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LAWMEMES_",
        case_sensitive=False,
        extra="ignore",
    )

    # Gemini settings
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("gemini_api_key", "LAWMEMES_GEMINI_API_KEY", "GEMINI_API_KEY"),
        description="API key for the Gemini generateContent endpoint",
    )
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Base URL of the Gemini REST API",
    )
    description_model: str = Field(
        default="gemini-2.0-flash",
        description="Text model that writes the meme descriptions",
    )
    image_model: str = Field(
        default="gemini-2.0-flash-exp-image-generation",
        description="Image model that renders each meme",
    )
    request_timeout: float = Field(
        default=120.0,
        gt=0,
        description="Timeout in seconds for each HTTP request",
    )

    # Generation settings
    max_descriptions: int = Field(default=4, ge=1, le=8)
    progress_checkpoint: int = Field(
        default=30,
        ge=0,
        lt=100,
        description="Progress reached once descriptions are received",
    )
    progress_tick_seconds: float = Field(default=0.1, gt=0)
    result_reveal_delay: float = Field(
        default=0.5,
        ge=0,
        description="Pause at 100% before the gallery is revealed",
    )
    parallel_image_requests: bool = Field(
        default=False,
        description="Issue image requests concurrently instead of one at a time",
    )
    max_parallel_requests: int = Field(default=4, ge=1, le=16)

    # Paths
    downloads_dir: Path = Field(
        default=Path(tempfile.gettempdir()) / "lawmemes" / "downloads",
        description="Directory where download files are written",
    )

    # UI settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    gradio_server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    gradio_server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    gradio_share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the downloads directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)
        self.downloads_dir.mkdir(parents=True, exist_ok=True)

    @property
    def has_api_key(self) -> bool:
        """Whether a non-blank API key is configured."""
        return bool(self.gemini_api_key and self.gemini_api_key.strip())

    def require_api_key(self) -> str:
        """Return the configured API key.

        Returns:
            The stripped API key

        Raises:
            MissingCredentialError: If no API key is configured
        """
        if not self.has_api_key:
            raise MissingCredentialError()
        return self.gemini_api_key.strip()


# Global configuration instance
# Loaded once from environment variables (LAWMEMES_* prefix) and the .env file.
config = LawMemesConfig()
