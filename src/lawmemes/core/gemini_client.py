"""HTTP client for the Gemini ``generateContent`` endpoint.

The client exposes the two calls the application needs:

- :meth:`GeminiClient.generate_meme_descriptions` asks the text model for a
  handful of meme descriptions about a topic.
- :meth:`GeminiClient.generate_image` asks the image model to render one
  description and returns the base64 payload.

Both public calls degrade instead of raising: a transport failure, an HTTP
error status, or a response that cannot be parsed is logged and reported as
an empty result (``[]`` or ``""``). Callers treat an empty result as a
failure of that call. The private :meth:`GeminiClient._generate_content`
raises :class:`GeminiRequestError` for the same conditions.
"""

import logging

import requests
from pydantic import ValidationError

from .config import LawMemesConfig, MissingCredentialError
from .models import GenerateContentRequest, GenerateContentResponse
from .prompts import compose_description_prompt, split_descriptions

logger = logging.getLogger(__name__)


class GeminiRequestError(RuntimeError):
    """A generateContent call failed in transport, status, or schema."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GeminiClient:
    """Client for the Gemini text and image models.

    Attributes:
        api_key: Gemini API key, sent in the ``x-goog-api-key`` header
        base_url: Base URL of the REST API
        description_model: Text model identifier
        image_model: Image model identifier
        timeout: Per-request timeout in seconds
        session: Shared ``requests.Session``
    """

    IMAGE_MODALITIES = ["Text", "Image"]

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        description_model: str = "gemini-2.0-flash",
        image_model: str = "gemini-2.0-flash-exp-image-generation",
        timeout: float = 120.0,
        session: requests.Session | None = None,
    ):
        """Initialize the client.

        Args:
            api_key: Gemini API key
            base_url: Base URL of the REST API
            description_model: Text model identifier
            image_model: Image model identifier
            timeout: Per-request timeout in seconds
            session: Optional session (a new one is created if omitted)

        Raises:
            MissingCredentialError: If the API key is empty
        """
        if not api_key or not api_key.strip():
            raise MissingCredentialError()

        self.api_key = api_key.strip()
        self.base_url = base_url.rstrip("/")
        self.description_model = description_model
        self.image_model = image_model
        self.timeout = timeout
        self.session = session or requests.Session()
        logger.info(
            f"Initialized Gemini client (descriptions: {self.description_model}, "
            f"images: {self.image_model})"
        )

    @classmethod
    def from_config(
        cls, settings: LawMemesConfig, session: requests.Session | None = None
    ) -> "GeminiClient":
        """Create a client from application settings.

        Raises:
            MissingCredentialError: If the settings carry no API key
        """
        return cls(
            api_key=settings.require_api_key(),
            base_url=settings.gemini_base_url,
            description_model=settings.description_model,
            image_model=settings.image_model,
            timeout=settings.request_timeout,
            session=session,
        )

    def endpoint(self, model: str) -> str:
        """Return the generateContent URL for ``model``."""
        return f"{self.base_url}/models/{model}:generateContent"

    def generate_meme_descriptions(self, topic: str, count: int = 4) -> list[str]:
        """Ask the text model for meme descriptions about ``topic``.

        Args:
            topic: Free text supplied by the user
            count: Number of descriptions to request and keep

        Returns:
            Up to ``count`` descriptions, or an empty list on any failure
        """
        request = GenerateContentRequest.from_text(compose_description_prompt(topic, count))

        try:
            response = self._generate_content(self.description_model, request)
        except GeminiRequestError as e:
            logger.error(f"Error generating meme descriptions: {e}")
            return []

        text = response.first_text()
        if not text:
            logger.warning("No text found in description response, returning empty list")
            return []

        descriptions = split_descriptions(text, count)
        logger.info(f"Received {len(descriptions)} meme descriptions")
        return descriptions

    def generate_image(self, description: str) -> str:
        """Ask the image model to render ``description``.

        Args:
            description: Full meme description, marker phrase included

        Returns:
            Base64-encoded image payload, or an empty string on any failure
        """
        request = GenerateContentRequest.from_text(
            description, response_modalities=self.IMAGE_MODALITIES
        )

        try:
            response = self._generate_content(self.image_model, request)
        except GeminiRequestError as e:
            logger.error(f"Error generating image: {e}")
            return ""

        inline_data = response.first_inline_data()
        if inline_data is None:
            logger.warning("No image found in response, returning empty string")
            return ""

        logger.info(f"Received image ({len(inline_data.data)} base64 chars, {inline_data.mime_type})")
        return inline_data.data

    def _generate_content(
        self, model: str, request: GenerateContentRequest
    ) -> GenerateContentResponse:
        """POST a generateContent request and parse the response.

        Raises:
            GeminiRequestError: On transport failure, error status, or invalid JSON/schema
        """
        url = self.endpoint(model)
        logger.debug(f"Calling Gemini model {model}")

        try:
            response = self.session.post(
                url,
                json=request.to_payload(),
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise GeminiRequestError(f"Gemini API returned HTTP {status}: {e}", status) from e
        except requests.exceptions.RequestException as e:
            raise GeminiRequestError(f"Failed to reach Gemini API: {e}") from e

        try:
            return GenerateContentResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise GeminiRequestError(f"Invalid response from Gemini API: {e}") from e

    def __repr__(self) -> str:
        return (
            f"GeminiClient(description_model='{self.description_model}', "
            f"image_model='{self.image_model}')"
        )
