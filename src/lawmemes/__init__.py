"""Law Meme Generator - Gemini-powered NZ law meme gallery."""

__version__ = "0.1.0"

from lawmemes.core.config import LawMemesConfig, MissingCredentialError, config
from lawmemes.core.gemini_client import GeminiClient

__all__ = [
    "GeminiClient",
    "LawMemesConfig",
    "MissingCredentialError",
    "config",
]
