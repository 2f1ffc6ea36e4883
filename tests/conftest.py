import os

# Must run before the app (and its module-level settings) is imported.
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ["LOG_DIR"] = ""

from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.factories import make_result


@pytest.fixture
def fake_genai_client(monkeypatch):
    """Install a mocked Gemini client as the shared client."""
    fake = MagicMock()
    fake.aio.models.generate_content = AsyncMock(return_value=make_result(["Hello there"]))
    monkeypatch.setattr("relay.llm._client", fake)
    return fake
