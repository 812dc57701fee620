"""Pydantic models for the Gemini ``generateContent`` wire format.

Only the subset of the schema this application reads or writes is modelled.
Field names follow Python conventions and map to the camelCase JSON keys via
aliases; unknown keys in responses are ignored so schema additions on the
service side do not break parsing.

Models
------
GenerateContentRequest
    Request body: one user ``Content`` with text parts, plus an optional
    ``GenerationConfig`` that asks the image model for image output.
GenerateContentResponse
    Response body: a list of ``Candidate`` objects, each holding ``Content``
    made of ``Part`` objects carrying either text or ``InlineData``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class InlineData(_WireModel):
    """Binary payload embedded in a response part.

    Attributes:
        mime_type: MIME type of the payload (e.g. ``image/png``).
        data: Base64-encoded payload.
    """

    mime_type: str = Field(default="image/png", alias="mimeType")
    data: str = Field(default="")


class Part(_WireModel):
    """One piece of content: text, inline binary data, or both absent."""

    text: str | None = None
    inline_data: InlineData | None = Field(default=None, alias="inlineData")


class Content(_WireModel):
    """Ordered list of parts with an optional role."""

    role: str | None = None
    parts: list[Part] = Field(default_factory=list)


class Candidate(_WireModel):
    """A single generated candidate.

    ``content`` may be missing when the service blocks a response, so it
    defaults to an empty ``Content``.
    """

    content: Content = Field(default_factory=Content)
    finish_reason: str | None = Field(default=None, alias="finishReason")


class GenerationConfig(_WireModel):
    """Generation options sent with a request."""

    response_modalities: list[str] | None = Field(default=None, alias="responseModalities")


class GenerateContentRequest(_WireModel):
    """Request body for ``models/{model}:generateContent``."""

    contents: list[Content]
    generation_config: GenerationConfig | None = Field(default=None, alias="generationConfig")

    @classmethod
    def from_text(
        cls, text: str, response_modalities: list[str] | None = None
    ) -> GenerateContentRequest:
        """Build a single-turn request carrying one text part.

        Args:
            text: Prompt text
            response_modalities: Output modalities to request, or None for text only

        Returns:
            Request model ready for ``to_payload()``
        """
        generation_config = None
        if response_modalities:
            generation_config = GenerationConfig(response_modalities=response_modalities)
        return cls(
            contents=[Content(parts=[Part(text=text)])],
            generation_config=generation_config,
        )

    def to_payload(self) -> dict:
        """Serialize to the JSON body expected by the service."""
        return self.model_dump(by_alias=True, exclude_none=True)


class GenerateContentResponse(_WireModel):
    """Response body for ``models/{model}:generateContent``."""

    candidates: list[Candidate] = Field(default_factory=list)

    @property
    def parts(self) -> list[Part]:
        """Parts of the first candidate, or an empty list."""
        if not self.candidates:
            return []
        return self.candidates[0].content.parts

    def first_text(self) -> str | None:
        """Return the first non-empty text part of the first candidate."""
        for part in self.parts:
            if part.text:
                return part.text
        return None

    def first_inline_data(self) -> InlineData | None:
        """Return the first part carrying a non-empty inline payload."""
        for part in self.parts:
            if part.inline_data is not None and part.inline_data.data:
                return part.inline_data
        return None
