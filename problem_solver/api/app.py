"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from problem_solver.api.chat import router as chat_router
from problem_solver.assistant.assembler import PromptAssembler
from problem_solver.assistant.config import AssistantConfig, get_assistant_config
from problem_solver.assistant.gemini_client import GeminiClient

logger = logging.getLogger(__name__)


def build_prompt_assembler(config: AssistantConfig | None = None) -> PromptAssembler | None:
    """Create the prompt assembler from configuration.

    Returns:
        The assembler, or None when no valid configuration is available.
    """
    try:
        config = config or get_assistant_config()
    except ValidationError as e:
        logger.error(f"Assistant configuration is invalid, chat is disabled: {e}")
        return None
    return PromptAssembler(config, GeminiClient(config))


def create_app(config: AssistantConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Optional assistant configuration. Loaded from the
                environment at startup if not provided.

    Returns:
        Configured FastAPI application instance.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """Build the prompt assembler once before serving traffic."""
        logger.info("Starting Problem Solver API...")
        app.state.prompt_assembler = build_prompt_assembler(config)
        yield
        logger.info("Shutting down Problem Solver API...")

    application = FastAPI(
        title="Problem Solver API",
        description=(
            "Engineering problem-solving assistant backed by Google Gemini. "
            "Accepts a question with an optional PDF or image attachment and "
            "returns a step-by-step answer with LaTeX formulas."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "problem-solver"}

    return application


app = create_app()
