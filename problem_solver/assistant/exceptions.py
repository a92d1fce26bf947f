"""Exceptions raised by the assistant package."""


class AssistantError(Exception):
    """Base exception for prompt assembly and model invocation failures."""


class ModelInvocationError(AssistantError):
    """Raised when the Gemini call fails or returns no usable text.

    Quota, authentication, network and content-policy failures are not told
    apart; callers only need to know the turn failed.
    """
