from unittest.mock import MagicMock

import pytest

from core.config import get_settings
from tests.helpers import make_response


@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Deterministic configuration for every test."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-gemini-key")
    monkeypatch.setenv("OPENAI_API_KEY", "test-openai-key")
    monkeypatch.setenv("GITHUB_CLIENT_ID", "test-client-id")
    monkeypatch.setenv("GITHUB_CLIENT_SECRET", "test-client-secret")
    monkeypatch.setenv("GITHUB_API_BASE", "https://api.github.com")
    monkeypatch.setenv("GITHUB_MAX_TRIES", "1")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def github_api(monkeypatch):
    """
    Routes patched requests.get calls by URL suffix.

    Usage: github_api({"/user": make_response(...), ...}); returns the mock.
    Unrouted URLs answer 404.
    """
    def install(routes):
        def fake_get(url, headers=None, params=None, timeout=None):
            for suffix, response in routes.items():
                if url.endswith(suffix):
                    if isinstance(response, Exception):
                        raise response
                    return response
            return make_response(404, {"message": "Not Found"})

        mock_get = MagicMock(side_effect=fake_get)
        monkeypatch.setattr("core.github_client.requests.get", mock_get)
        return mock_get

    return install
