"""Prompt construction for the problem-solving assistant.

The model always sees the system instructions first and the user's question
last; attachment context (PDF text or an inline image) sits in between.
"""

import base64
import logging
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel

from problem_solver.parsing.pdf_parser import parse_pdf

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
IMAGE_MIME_PREFIX = "image/"

SYSTEM_PROMPT = """You are an expert Engineering Problem Solver AI.
Your goal is to provide accurate, step-by-step solutions to complex engineering problems.
Use LaTeX for all mathematical formulas (wrap them in $ for inline or $$ for blocks).
Be precise and professional.
If a file (PDF text or image) is provided, use it to answer the question."""


class ModelTier(str, Enum):
    """Model tier selected by the user."""

    FAST = "fast"
    ADVANCED = "advanced"

    @classmethod
    def from_form_value(cls, value: str | None) -> "ModelTier":
        """Map the ``model`` form field to a tier.

        Only ``"pro"`` selects the advanced tier; anything else, including a
        missing value, falls back to the fast tier.
        """
        if value is not None and value.strip().lower() == "pro":
            return cls.ADVANCED
        return cls.FAST


class TextPart(BaseModel):
    """Plain text prompt segment."""

    kind: Literal["text"] = "text"
    text: str


class InlineDataPart(BaseModel):
    """Binary prompt segment carried inline as base64."""

    kind: Literal["inline_data"] = "inline_data"
    mime_type: str
    data: str

    def raw_bytes(self) -> bytes:
        return base64.b64decode(self.data)


PromptPart = TextPart | InlineDataPart


class StoredAttachment(BaseModel):
    """An uploaded file staged on disk for the duration of one request.

    Attributes:
        path: Temporary file written by the upload endpoint.
        mime_type: MIME type reported by the client.
        original_name: Filename as chosen by the user.
    """

    path: Path
    mime_type: str
    original_name: str

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith(IMAGE_MIME_PREFIX)

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()

    def discard(self) -> None:
        """Delete the temporary file if it still exists."""
        self.path.unlink(missing_ok=True)


class PromptRequest(BaseModel):
    """One chat turn as received by the server.

    Attributes:
        user_text: The user's question, possibly empty.
        model_tier: Which model tier to invoke.
        attachment: Optional staged upload.
    """

    user_text: str = ""
    model_tier: ModelTier = ModelTier.FAST
    attachment: StoredAttachment | None = None


def build_prompt_parts(request: PromptRequest) -> list[PromptPart]:
    """Assemble the ordered prompt parts for a request.

    Args:
        request: The chat turn to assemble.

    Returns:
        System prompt, optional attachment context, then the user question.

    Raises:
        PDFParseError: If a PDF attachment cannot be read.
    """
    parts: list[PromptPart] = [TextPart(text=SYSTEM_PROMPT)]

    attachment = request.attachment
    if attachment is not None:
        if attachment.is_pdf:
            pdf_content = parse_pdf(attachment.read_bytes())
            logger.info(
                f"Extracted {pdf_content.pages} page(s) from {attachment.original_name}"
            )
            parts.append(TextPart(text=f"Context from PDF: {pdf_content.text}"))
        elif attachment.is_image:
            encoded = base64.b64encode(attachment.read_bytes()).decode("ascii")
            parts.append(InlineDataPart(mime_type=attachment.mime_type, data=encoded))
        else:
            logger.info(
                f"Ignoring attachment {attachment.original_name} "
                f"with unsupported type {attachment.mime_type}"
            )

    parts.append(TextPart(text=f"User Question: {request.user_text}"))
    return parts
