"""Unit tests for process settings and the separate-mode launch commands."""

from unittest.mock import patch

from problem_solver.main import ServerSettings, api_command, ui_command, ui_environment


class TestServerSettings:
    def test_defaults(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            settings = ServerSettings()

        assert settings.run_mode == "integrated"
        assert settings.port == 8000
        assert settings.ui_port == 8080
        assert settings.resolved_api_base_url() == "http://localhost:8000"

    def test_reads_environment(self) -> None:
        env = {"RUN_MODE": "Separate", "PORT": "9100", "UI_PORT": "9200", "LOG_LEVEL": "DEBUG"}
        with patch.dict("os.environ", env, clear=True):
            settings = ServerSettings()

        assert settings.run_mode == "separate"
        assert (settings.port, settings.ui_port) == (9100, 9200)
        assert settings.log_level == "debug"
        assert settings.resolved_api_base_url() == "http://localhost:9100"

    def test_explicit_api_base_url_wins(self) -> None:
        settings = ServerSettings(port=9100, api_base_url="http://api.internal:7000")

        assert settings.resolved_api_base_url() == "http://api.internal:7000"


class TestSeparateModeCommands:
    def test_api_command_honours_port_without_reload(self) -> None:
        settings = ServerSettings(host="127.0.0.1", port=9100, log_level="warning")

        command = api_command(settings)

        assert command[-6:] == ["--host", "127.0.0.1", "--port", "9100", "--log-level", "warning"]
        assert "--reload" not in command
        assert "problem_solver.api.app:app" in command

    def test_ui_process_gets_its_port_and_api_url(self) -> None:
        settings = ServerSettings(port=9100, ui_port=9200, api_base_url="")

        with patch.dict("os.environ", {"GEMINI_API_KEY": "k"}, clear=True):
            env = ui_environment(settings)

        assert env["UI_PORT"] == "9200"
        assert env["API_BASE_URL"] == "http://localhost:9100"
        assert env["GEMINI_API_KEY"] == "k"
        assert "problem_solver.ui.chat_page" in ui_command()[-1]
