"""Startup wiring: the assembler is built once by the app lifespan.

No dependency overrides here, so the chat route sees exactly what startup
stored on ``app.state``.
"""

from unittest.mock import patch

from httpx import ASGITransport, AsyncClient

from problem_solver.api.app import build_prompt_assembler, create_app
from problem_solver.assistant.assembler import PromptAssembler
from problem_solver.assistant.config import AssistantConfig
from problem_solver.assistant.gemini_client import GeminiClient


class TestBuildPromptAssembler:
    def test_uses_given_config(self, assistant_config: AssistantConfig) -> None:
        assembler = build_prompt_assembler(assistant_config)

        assert isinstance(assembler, PromptAssembler)
        assert assembler.config is assistant_config

    def test_reads_environment(self) -> None:
        with patch.dict("os.environ", {"GEMINI_API_KEY": "env-key"}, clear=True):
            assembler = build_prompt_assembler()

        assert assembler is not None
        assert assembler.config.api_key == "env-key"

    def test_missing_api_key_returns_none(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            assert build_prompt_assembler() is None


class TestLifespan:
    async def test_startup_stores_assembler(self, assistant_config: AssistantConfig) -> None:
        app = create_app(assistant_config)

        async with app.router.lifespan_context(app):
            assembler = app.state.prompt_assembler
            assert isinstance(assembler, PromptAssembler)
            assert assembler.config is assistant_config

    async def test_startup_assembler_serves_chat(
        self, assistant_config: AssistantConfig, model_client
    ) -> None:
        """The route uses the assembler built at startup."""
        app = create_app(assistant_config)

        with patch.object(GeminiClient, "generate", new=model_client.generate):
            async with app.router.lifespan_context(app):
                transport = ASGITransport(app=app)
                async with AsyncClient(transport=transport, base_url="http://test") as client:
                    response = await client.post("/api/chat", data={"message": "Hi"})

        assert response.status_code == 200
        assert response.json() == {"text": "$$2+2=4$$"}
        assert model_client.calls[0][0] == "gemini-1.5-flash"

    async def test_missing_api_key_disables_chat(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            app = create_app()

            async with app.router.lifespan_context(app):
                assert app.state.prompt_assembler is None

                transport = ASGITransport(app=app)
                async with AsyncClient(transport=transport, base_url="http://test") as client:
                    chat = await client.post("/api/chat", data={"message": "Hi"})
                    health = await client.get("/health")

        assert chat.status_code == 500
        assert chat.json() == {"error": "Failed to process request"}
        assert health.status_code == 200
