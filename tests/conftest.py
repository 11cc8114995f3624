"""Pytest configuration and shared fixtures."""
import os

import pytest

from heavengpt.chat import ChatSession, Conversation, HttpChatTransport, RequestBuilder
from heavengpt.diagnostics import DiagnosticLog

SYSTEM_PROMPT = "You are a test assistant."


@pytest.fixture(scope="session")
def base_url():
    """Base URL served by httpx_mock in unit tests."""
    return "https://chat.example.com"


@pytest.fixture(scope="session")
def endpoint(base_url):
    return f"{base_url}/chat/completions"


@pytest.fixture(scope="session")
def live_base_url():
    """Real endpoint for integration tests, if configured."""
    return os.getenv("HEAVENGPT_BASE_URL")


@pytest.fixture
def hello_payload():
    """Minimal well-formed completion response."""
    return {"choices": [{"message": {"role": "assistant", "content": "Hello"}}]}


@pytest.fixture
def builder():
    return RequestBuilder(system_prompt=SYSTEM_PROMPT)


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "logs" / "heavengpt.log"


@pytest.fixture
def diagnostic_log(log_path):
    return DiagnosticLog(log_path)


@pytest.fixture
def session(base_url, builder, diagnostic_log):
    """Session wired to the HTTP transport and a temporary log file."""
    transport = HttpChatTransport(base_url)
    return ChatSession(transport, builder, Conversation(), log=diagnostic_log)


@pytest.fixture
def sample_reply():
    """Assistant text with prose and two fenced code blocks."""
    return (
        "Here is a function:\n"
        "```python\n"
        "def add(a, b):\n"
        "    return a + b\n"
        "```\n"
        "And the shell command:\n"
        "```bash\n"
        "python -m pytest\n"
        "```\n"
        "That's all."
    )
