"""Prompt assembler: one chat turn in, one model reply out.

The assembler is stateless between requests. It owns the temporary upload
for the duration of a call and always deletes it before returning.
"""

import logging
from typing import Protocol

from problem_solver.assistant.config import AssistantConfig
from problem_solver.assistant.prompt import (
    ModelTier,
    PromptPart,
    PromptRequest,
    build_prompt_parts,
)

logger = logging.getLogger(__name__)


class ModelClient(Protocol):
    """Anything able to turn prompt parts into reply text."""

    async def generate(self, model_name: str, parts: list[PromptPart]) -> str: ...


class PromptAssembler:
    """Builds prompts and invokes the generative model."""

    def __init__(self, config: AssistantConfig, model_client: ModelClient) -> None:
        """Initialize the assembler.

        Args:
            config: Configuration loaded at startup.
            model_client: Model collaborator, normally a GeminiClient.
        """
        self._config = config
        self._model_client = model_client

    @property
    def config(self) -> AssistantConfig:
        return self._config

    def model_name_for(self, tier: ModelTier) -> str:
        """Return the model identifier for a tier."""
        if tier is ModelTier.ADVANCED:
            return self._config.advanced_model
        return self._config.fast_model

    async def build_and_invoke(self, request: PromptRequest) -> str:
        """Assemble the prompt for a request and return the model's reply.

        Args:
            request: The chat turn.

        Returns:
            Plain-text reply from the model.

        Raises:
            PDFParseError: If a PDF attachment cannot be read.
            ModelInvocationError: If the model call fails.
        """
        try:
            model_name = self.model_name_for(request.model_tier)
            parts = build_prompt_parts(request)
            logger.info(f"Invoking {model_name} with {len(parts)} prompt part(s)")
            return await self._model_client.generate(model_name, parts)
        finally:
            if request.attachment is not None:
                request.attachment.discard()
