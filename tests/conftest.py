"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - assistant_config: Configuration with a dummy key and a tmp upload dir
    - model_client: Recording stand-in for the Gemini client
    - assembler: PromptAssembler wired to the fake model client
    - app / async_client: FastAPI app and HTTPX client for API testing
    - make_pdf: Builds small text PDFs in memory
"""

from collections.abc import AsyncGenerator, Callable
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from problem_solver.api.app import create_app
from problem_solver.api.chat import get_prompt_assembler
from problem_solver.assistant.assembler import PromptAssembler
from problem_solver.assistant.config import AssistantConfig
from problem_solver.assistant.prompt import PromptPart


class FakeModelClient:
    """Records every call and returns a canned reply or raises ``error``."""

    def __init__(self, reply: str = "$$2+2=4$$") -> None:
        self.reply = reply
        self.error: Exception | None = None
        self.calls: list[tuple[str, list[PromptPart]]] = []

    async def generate(self, model_name: str, parts: list[PromptPart]) -> str:
        self.calls.append((model_name, parts))
        if self.error is not None:
            raise self.error
        return self.reply

    @property
    def last_parts(self) -> list[PromptPart]:
        return self.calls[-1][1]


def build_pdf(*page_texts: str) -> bytes:
    """Build a minimal PDF with one page per text, using Helvetica."""
    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"",  # pages tree, filled in below
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    kids = []
    for text in page_texts:
        page_num = len(objects) + 1
        content_num = page_num + 1
        kids.append(f"{page_num} 0 R")
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                "/Resources << /Font << /F1 3 0 R >> >> "
                f"/Contents {content_num} 0 R >>"
            ).encode()
        )
        stream = f"BT /F1 18 Tf 72 720 Td ({text}) Tj ET".encode() if text else b""
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )
    objects[1] = f"<< /Type /Pages /Kids [{' '.join(kids)}] /Count {len(kids)} >>".encode()

    output = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(output))
        output += f"{number} 0 obj\n".encode() + body + b"\nendobj\n"

    xref_offset = len(output)
    output += f"xref\n0 {len(objects) + 1}\n".encode()
    output += b"0000000000 65535 f \n"
    for offset in offsets:
        output += f"{offset:010d} 00000 n \n".encode()
    output += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode()
    return bytes(output)


@pytest.fixture
def make_pdf() -> Callable[..., bytes]:
    """Return the in-memory PDF builder."""
    return build_pdf


@pytest.fixture
def upload_dir(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def assistant_config(upload_dir: Path) -> AssistantConfig:
    """Configuration that never touches the real environment."""
    return AssistantConfig(
        api_key="test-gemini-key",
        fast_model="gemini-1.5-flash",
        advanced_model="gemini-1.5-pro",
        upload_dir=upload_dir,
    )


@pytest.fixture
def model_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture
def assembler(assistant_config: AssistantConfig, model_client: FakeModelClient) -> PromptAssembler:
    return PromptAssembler(assistant_config, model_client)


@pytest.fixture
def app(assistant_config: AssistantConfig, assembler: PromptAssembler) -> FastAPI:
    """FastAPI app whose chat route uses the fake-backed assembler."""
    application = create_app(assistant_config)
    application.dependency_overrides[get_prompt_assembler] = lambda: assembler
    return application


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
