"""Tests for the command-line interface."""
import logging

import pytest
from pytest_httpx import HTTPXMock
from rich.console import Console
from typer.testing import CliRunner

from heavengpt import __version__
from heavengpt.cli import app as cli_app

runner = CliRunner()


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    """Keep table cells and error lines on one line."""
    monkeypatch.setattr(cli_app, "console", Console(width=200))
    for name in ("HEAVENGPT_BASE_URL", "HEAVENGPT_MODEL", "HEAVENGPT_INCLUDE_HISTORY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def ask_args(base_url, log_path):
    def _args(*extra):
        return ["ask", "Say hello", "--base-url", base_url, "--log-file", str(log_path), *extra]

    return _args


class TestAskCommand:
    def test_prints_reply(self, httpx_mock: HTTPXMock, endpoint, hello_payload, ask_args):
        httpx_mock.add_response(url=endpoint, method="POST", json=hello_payload)

        result = runner.invoke(cli_app.app, ask_args())

        assert result.exit_code == 0
        assert "Hello" in result.output
        assert "assistant" in result.output

    def test_raw_output(self, httpx_mock: HTTPXMock, endpoint, ask_args):
        httpx_mock.add_response(
            url=endpoint,
            json={"choices": [{"message": {"role": "assistant", "content": "```py\nx = 1\n```"}}]},
        )

        result = runner.invoke(cli_app.app, ask_args("--raw"))

        assert result.exit_code == 0
        assert "```py" in result.output

    def test_model_override_is_sent(self, httpx_mock: HTTPXMock, endpoint, hello_payload, ask_args):
        httpx_mock.add_response(url=endpoint, json=hello_payload)

        runner.invoke(cli_app.app, ask_args("--model", "local-model"))

        assert b'"model":"local-model"' in httpx_mock.get_request().content

    def test_server_error_exits_non_zero(self, httpx_mock: HTTPXMock, endpoint, ask_args, log_path):
        httpx_mock.add_response(url=endpoint, status_code=500, text="boom")

        result = runner.invoke(cli_app.app, ask_args())

        assert result.exit_code == 1
        assert "Error: Server returned status 500" in result.output
        assert "[ERROR] [Session]" in log_path.read_text()

    def test_no_choices(self, httpx_mock: HTTPXMock, endpoint, ask_args):
        httpx_mock.add_response(url=endpoint, json={"choices": []})

        result = runner.invoke(cli_app.app, ask_args())

        assert result.exit_code == 0
        assert "no choices" in result.output

    def test_invalid_base_url(self, log_path):
        result = runner.invoke(
            cli_app.app, ["ask", "hi", "--base-url", "example.com", "--log-file", str(log_path)]
        )

        assert result.exit_code == 1
        assert "Invalid URL" in result.output


class TestSegmentsCommand:
    def test_lists_segments(self, tmp_path, sample_reply):
        path = tmp_path / "reply.txt"
        path.write_text(sample_reply, encoding="utf-8")

        result = runner.invoke(cli_app.app, ["segments", str(path)])

        assert result.exit_code == 0
        assert "code (python)" in result.output
        assert "code (bash)" in result.output
        assert "def add(a, b):" in result.output

    def test_blank_file(self, tmp_path):
        path = tmp_path / "blank.txt"
        path.write_text("  \n", encoding="utf-8")

        result = runner.invoke(cli_app.app, ["segments", str(path)])

        assert result.exit_code == 0
        assert "No segments" in result.output

    def test_render(self, tmp_path, sample_reply):
        path = tmp_path / "reply.txt"
        path.write_text(sample_reply, encoding="utf-8")

        result = runner.invoke(cli_app.app, ["segments", str(path), "--render"])

        assert result.exit_code == 0
        assert "return a + b" in result.output


def test_version():
    result = runner.invoke(cli_app.app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def fake_tui(monkeypatch):
    """Replace the Textual app and record the root handlers it would run under."""
    seen = {}

    async def _run(session, log_level=None):
        seen["handlers"] = list(logging.getLogger().handlers)
        seen["log_level"] = log_level
        await session.close()

    monkeypatch.setattr("heavengpt.ui.run_textual_tui", _run)
    return seen


def _console_handlers(handlers):
    return [h for h in handlers if type(h) is logging.StreamHandler]


class TestChatCommand:
    def test_no_console_logging_under_tui(self, fake_tui, restore_root_logging, base_url, log_path):
        result = runner.invoke(
            cli_app.app, ["chat", "--base-url", base_url, "--log-file", str(log_path), "-l", "info"]
        )

        assert result.exit_code == 0
        assert fake_tui["log_level"] == "info"
        assert _console_handlers(fake_tui["handlers"]) == []
        assert any(isinstance(h, logging.NullHandler) for h in fake_tui["handlers"])

    def test_verbose_logs_to_file(self, fake_tui, restore_root_logging, base_url, log_path):
        result = runner.invoke(
            cli_app.app, ["-v", "chat", "--base-url", base_url, "--log-file", str(log_path)]
        )

        assert result.exit_code == 0
        assert _console_handlers(fake_tui["handlers"]) == []
        files = [h for h in fake_tui["handlers"] if isinstance(h, logging.FileHandler)]
        assert [h.baseFilename for h in files] == [str(log_path.with_name(cli_app.DEBUG_LOG_NAME))]
        assert restore_root_logging.level == logging.DEBUG

    def test_other_commands_log_to_console(self, restore_root_logging, tmp_path):
        path = tmp_path / "reply.txt"
        path.write_text("plain", encoding="utf-8")

        result = runner.invoke(cli_app.app, ["-v", "segments", str(path)])

        assert result.exit_code == 0
        assert len(_console_handlers(restore_root_logging.handlers)) == 1
