"""Main application entry point.

Integrated mode serves the API and the NiceGUI chat page from one uvicorn
server on PORT. Separate mode runs the API on PORT and the UI on UI_PORT as
two child processes. Environment variables are loaded from .env file.
"""

import logging
import os
import subprocess
import sys
import time

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class ServerSettings(BaseModel):
    """Process-level settings read from the environment."""

    run_mode: str = Field(default_factory=lambda: os.getenv("RUN_MODE", "integrated").lower())
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(default_factory=lambda: int(os.getenv("PORT", "8000")), ge=1, le=65535)
    ui_port: int = Field(default_factory=lambda: int(os.getenv("UI_PORT", "8080")), ge=1, le=65535)
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "info").lower())
    api_base_url: str = Field(default_factory=lambda: os.getenv("API_BASE_URL", ""))

    def resolved_api_base_url(self) -> str:
        """URL the chat page uses to reach the API."""
        return self.api_base_url or f"http://localhost:{self.port}"


def api_command(settings: ServerSettings) -> list[str]:
    return [
        sys.executable,
        "-m",
        "uvicorn",
        "problem_solver.api.app:app",
        "--host",
        settings.host,
        "--port",
        str(settings.port),
        "--log-level",
        settings.log_level,
    ]


def ui_command() -> list[str]:
    return [sys.executable, "-c", "from problem_solver.ui.chat_page import main; main()"]


def ui_environment(settings: ServerSettings) -> dict[str, str]:
    """Environment for the UI process: its own port and where the API lives."""
    return {
        **os.environ,
        "UI_PORT": str(settings.ui_port),
        "API_BASE_URL": settings.resolved_api_base_url(),
    }


def run_integrated(settings: ServerSettings) -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles /api routes, NiceGUI handles the UI.
    Both accessible on the same port.
    """
    # The chat page reads API_BASE_URL when it is imported.
    os.environ["API_BASE_URL"] = settings.resolved_api_base_url()

    import uvicorn
    from nicegui import ui

    from problem_solver.api.app import create_app
    from problem_solver.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="Problem Solver",
        favicon="🛠️",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "problem-solver-secret"),
    )

    logger.info(f"Starting integrated server on http://localhost:{settings.port}")
    logger.info(f"API docs available at http://localhost:{settings.port}/docs")
    logger.info(f"Chat UI available at http://localhost:{settings.port}/")

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


def run_separate(settings: ServerSettings) -> None:
    """Run FastAPI and NiceGUI as separate servers.

    Stops both when either exits or on Ctrl+C.
    """
    logger.info(f"Starting FastAPI on http://localhost:{settings.port}")
    logger.info(f"Starting NiceGUI on http://localhost:{settings.ui_port}")

    api_proc = subprocess.Popen(api_command(settings))
    ui_proc = subprocess.Popen(ui_command(), env=ui_environment(settings))

    try:
        while api_proc.poll() is None and ui_proc.poll() is None:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in (api_proc, ui_proc):
            proc.terminate()
        for proc in (api_proc, ui_proc):
            proc.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run FastAPI and NiceGUI on different ports.
    Default is integrated mode.
    """
    settings = ServerSettings()

    logger.info(f"Starting Problem Solver in {settings.run_mode} mode")

    if settings.run_mode == "separate":
        run_separate(settings)
    else:
        run_integrated(settings)


if __name__ == "__main__":
    main()
