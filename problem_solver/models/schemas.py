from pydantic import BaseModel, Field


class ChatResponse(BaseModel):
    """Response from the chat endpoint.

    Attributes:
        text: The assistant's answer, markdown with LaTeX math.
    """

    text: str = Field(..., description="The assistant's response")


class ErrorResponse(BaseModel):
    """Error body returned with any non-2xx status."""

    error: str
