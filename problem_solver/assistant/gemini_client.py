"""Google Gemini client used by the prompt assembler."""

import logging

from google import genai
from google.genai import types

from problem_solver.assistant.config import AssistantConfig
from problem_solver.assistant.exceptions import ModelInvocationError
from problem_solver.assistant.prompt import InlineDataPart, PromptPart

logger = logging.getLogger(__name__)


def to_genai_part(part: PromptPart) -> types.Part:
    """Convert one prompt part to its google-genai representation."""
    if isinstance(part, InlineDataPart):
        return types.Part(
            inline_data=types.Blob(data=part.raw_bytes(), mime_type=part.mime_type)
        )
    return types.Part(text=part.text)


class GeminiClient:
    """Async wrapper around ``google.genai.Client``.

    Sends one ordered list of prompt parts as a single user turn and returns
    the reply text. Every failure surfaces as ModelInvocationError.
    """

    def __init__(self, config: AssistantConfig) -> None:
        self._config = config
        self._client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        """Get or create the underlying SDK client."""
        if self._client is None:
            try:
                self._client = genai.Client(api_key=self._config.api_key)
                logger.info("Gemini client initialized")
            except Exception as e:
                raise ModelInvocationError(f"Failed to create Gemini client: {e}") from e
        return self._client

    async def generate(self, model_name: str, parts: list[PromptPart]) -> str:
        """Generate a completion for the given prompt parts.

        Args:
            model_name: Gemini model identifier.
            parts: Ordered prompt parts.

        Returns:
            The plain-text reply.

        Raises:
            ModelInvocationError: If the call fails or the reply has no text.
        """
        client = self._get_client()
        contents = [types.Content(role="user", parts=[to_genai_part(p) for p in parts])]

        try:
            response = await client.aio.models.generate_content(
                model=model_name,
                contents=contents,
            )
            text = response.text
        except Exception as e:
            raise ModelInvocationError(f"Content generation failed: {e}") from e

        if text is None:
            raise ModelInvocationError("Gemini returned no text")
        return text
