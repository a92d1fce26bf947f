"""Assistant configuration with environment variable loading.

Pydantic-based configuration for the Gemini-backed assistant. Built once at
process startup and handed to the prompt assembler; request handlers never
read the environment themselves.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB


class AssistantConfig(BaseModel):
    """Configuration for the problem-solving assistant.

    Attributes:
        api_key: Gemini API key.
        fast_model: Model used for the "flash" tier.
        advanced_model: Model used for the "pro" tier.
        upload_dir: Directory holding per-request temporary uploads.
        max_upload_bytes: Largest attachment accepted by the upload endpoint.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""),
        description="API key for Google Gemini",
    )
    fast_model: str = Field(
        default_factory=lambda: os.getenv("GEMINI_FAST_MODEL", "gemini-1.5-flash"),
        description="Lightweight model for quick answers",
    )
    advanced_model: str = Field(
        default_factory=lambda: os.getenv("GEMINI_ADVANCED_MODEL", "gemini-1.5-pro"),
        description="Higher-capability model for harder problems",
    )
    upload_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("UPLOAD_DIR", "uploads")),
        description="Where uploaded attachments are staged",
    )
    max_upload_bytes: int = Field(
        default=MAX_UPLOAD_BYTES,
        ge=1,
        description="Maximum attachment size in bytes",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("GEMINI_API_KEY is required. Set it in the environment or .env")
        return v.strip()


def get_assistant_config() -> AssistantConfig:
    """Create assistant configuration from environment.

    Returns:
        Configured AssistantConfig instance.

    Raises:
        ValueError: If GEMINI_API_KEY is not set.
    """
    return AssistantConfig()
