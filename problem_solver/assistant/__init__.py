"""Prompt assembly and Gemini invocation.

Turns one chat request (text, model tier, optional attachment) into a single
ordered list of prompt parts, submits it to Gemini and unwraps the reply.

Responsibilities:
    - Configuration loaded once at startup
    - Model tier selection
    - PDF context and inline image parts
    - Temporary upload cleanup

Keeps the HTTP layer free of any google-genai details.
"""

from problem_solver.assistant.assembler import PromptAssembler
from problem_solver.assistant.config import AssistantConfig, get_assistant_config
from problem_solver.assistant.exceptions import AssistantError, ModelInvocationError
from problem_solver.assistant.gemini_client import GeminiClient
from problem_solver.assistant.prompt import ModelTier, PromptRequest, StoredAttachment

__all__ = [
    "AssistantConfig",
    "AssistantError",
    "GeminiClient",
    "ModelInvocationError",
    "ModelTier",
    "PromptAssembler",
    "PromptRequest",
    "StoredAttachment",
    "get_assistant_config",
]
