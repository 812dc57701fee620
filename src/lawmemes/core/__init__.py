"""Core functionality: configuration and the Gemini client.

- **LawMemesConfig / config**: Pydantic Settings configuration (LAWMEMES_ prefix)
- **GeminiClient**: HTTP client for the description and image models
- **models**: Pydantic models for the generateContent wire format
- **prompts**: Instruction text for the description model

The core package has no UI dependencies; the Gradio layer lives in
``lawmemes.ui``.
"""

from .config import LawMemesConfig, MissingCredentialError, config
from .gemini_client import GeminiClient, GeminiRequestError

__all__ = [
    "GeminiClient",
    "GeminiRequestError",
    "LawMemesConfig",
    "MissingCredentialError",
    "config",
]
