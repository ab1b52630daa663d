"""HTTP-level tests through FastAPI's TestClient."""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

import main
from core import github_oauth
from core.errors import ConfigurationError
from main import app
from routers import generate
from tests.helpers import USER_JSON, make_response, readme_body, repo_json

AUTH = {"Authorization": "Bearer gho_test"}


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def fake_llms(monkeypatch):
    gemini = MagicMock(return_value="# 💼 The Octocat\n\nGenerated by Gemini")
    gpt = MagicMock(return_value="# The Octocat의 포트폴리오")
    monkeypatch.setattr(generate.gemini_backend.handler, "call_gemini", gemini)
    monkeypatch.setattr(generate.openai_backend.handler, "call_openai", gpt)
    return gemini, gpt


def test_root(client):
    assert client.get("/").status_code == 200
    assert client.get("/ping").json() == {"status": "ok"}


class TestGitHubRoutes:

    def test_user_requires_token(self, client, github_api):
        mock_get = github_api({})
        response = client.get("/api/github/user")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert mock_get.call_count == 0

    def test_user_and_repositories(self, client, github_api):
        github_api({
            "/user": make_response(200, USER_JSON),
            "/users/octocat/repos": make_response(200, [repo_json("hello")]),
        })
        response = client.get("/api/github/user", headers=AUTH)

        assert response.status_code == 200
        body = response.json()
        assert body["user"]["login"] == "octocat"
        assert body["repositories"][0]["name"] == "hello"
        assert body["repositories"][0]["stars"] == 3

    def test_user_upstream_failure(self, client, github_api):
        github_api({"/user": make_response(500, text="oops")})
        response = client.get("/api/github/user", headers=AUTH)
        assert response.status_code == 500
        assert "error" in response.json()

    @pytest.mark.parametrize("body", [{}, {"owner": "octocat"}, {"repo": "hello"}, {"owner": "", "repo": ""}])
    def test_readme_missing_fields_is_400_without_network(self, client, github_api, body):
        mock_get = github_api({})
        response = client.post("/api/github/readme", json=body, headers=AUTH)
        assert response.status_code == 400
        assert response.json() == {"error": "Owner and repo are required"}
        assert mock_get.call_count == 0

    def test_readme_requires_token(self, client, github_api):
        mock_get = github_api({})
        response = client.post("/api/github/readme", json={"owner": "octocat", "repo": "hello"})
        assert response.status_code == 401
        assert mock_get.call_count == 0

    def test_readme_found(self, client, github_api):
        github_api({"/repos/octocat/hello/readme": make_response(200, readme_body("Hello World"))})
        response = client.post("/api/github/readme", json={"owner": "octocat", "repo": "hello"}, headers=AUTH)
        assert response.status_code == 200
        body = response.json()
        assert body["hasReadme"] is True
        assert body["content"] == "Hello World"
        assert body["downloadUrl"].endswith("README.md")

    def test_readme_not_found_is_success(self, client, github_api):
        github_api({})
        response = client.post("/api/github/readme", json={"owner": "octocat", "repo": "empty"}, headers=AUTH)
        assert response.status_code == 200
        assert response.json() == {"content": None, "hasReadme": False}

    def test_readme_invalid_json_body(self, client, github_api):
        github_api({})
        response = client.post(
            "/api/github/readme",
            content="not json",
            headers={**AUTH, "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert "error" in response.json()


class TestGenerateRoutes:

    @pytest.mark.parametrize("path", ["/api/ai/generate-portfolio", "/api/ai/generate-portfolio-gpt"])
    def test_missing_portfolio_data_is_400_without_llm_call(self, client, fake_llms, path):
        response = client.post(path, json={})
        assert response.status_code == 400
        assert response.json() == {"error": "Portfolio data is required"}
        for llm in fake_llms:
            assert llm.call_count == 0

    def test_generation_failure_is_500(self, client, monkeypatch):
        from core.errors import GenerationError

        failing = MagicMock(side_effect=GenerationError("Failed to generate portfolio"))
        monkeypatch.setattr(generate.gemini_backend.handler, "call_gemini", failing)
        response = client.post(
            "/api/ai/generate-portfolio",
            json={"portfolioData": {"user": USER_JSON, "repositories": []}},
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate portfolio"}


class TestEndToEnd:

    def test_two_repositories_through_both_backends(self, client, github_api, fake_llms):
        github_api({
            "/user": make_response(200, USER_JSON),
            "/users/octocat/repos": make_response(200, [repo_json("hello"), repo_json("empty")]),
            "/repos/octocat/hello/readme": make_response(200, readme_body("Hello World\nSample project")),
            "/repos/octocat/empty/readme": make_response(404, {"message": "Not Found"}),
        })

        data = client.get("/api/github/portfolio-data", headers=AUTH).json()["portfolioData"]

        assert len(data["repositories"]) == 2
        first, second = data["repositories"]
        assert first["hasReadme"] is True
        assert first["readme"].startswith("Hello World")
        assert second["hasReadme"] is False
        assert second["readme"] is None

        gemini = client.post("/api/ai/generate-portfolio", json={"portfolioData": data}).json()
        assert gemini["success"] is True
        assert gemini["portfolio"]
        assert gemini["projectCount"] == 2
        assert gemini["user"]["login"] == "octocat"

        gpt = client.post("/api/ai/generate-portfolio-gpt", json={"portfolioData": data}).json()
        assert gpt["success"] is True
        assert gpt["portfolio"]
        assert gpt["projectCount"] == 2
        assert gpt["aiModel"] == "GPT-4o"

        gemini_prompt = fake_llms[0].call_args.args[0]
        assert "README 요약: Hello World" in gemini_prompt


class TestOAuthRoutes:

    def test_login_url(self, client):
        response = client.get("/api/auth/github/login", params={"redirect_uri": "http://localhost:3000/cb"})
        body = response.json()
        assert response.status_code == 200
        assert body["auth_url"].startswith("https://github.com/login/oauth/authorize?")
        assert "client_id=test-client-id" in body["auth_url"]
        assert f"state={body['state']}" in body["auth_url"]

    def test_callback_exchanges_code(self, client, monkeypatch):
        post = MagicMock(return_value=make_response(200, {
            "access_token": "gho_new", "token_type": "bearer", "scope": "read:user",
        }))
        monkeypatch.setattr(github_oauth.requests, "post", post)

        response = client.post("/api/auth/github/callback", json={"code": "abc"})

        assert response.status_code == 200
        assert response.json()["access_token"] == "gho_new"
        assert post.call_args.kwargs["data"]["client_secret"] == "test-client-secret"

    def test_callback_rejected_code(self, client, monkeypatch):
        post = MagicMock(return_value=make_response(200, {"error": "bad_verification_code"}))
        monkeypatch.setattr(github_oauth.requests, "post", post)

        response = client.post("/api/auth/github/callback", json={"code": "stale"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid or expired authorization code"}

    def test_callback_requires_code(self, client, monkeypatch):
        post = MagicMock()
        monkeypatch.setattr(github_oauth.requests, "post", post)
        response = client.post("/api/auth/github/callback", json={})
        assert response.status_code == 400
        assert post.call_count == 0


class TestStartup:

    @pytest.fixture
    def configured(self, monkeypatch):
        # main.settings was built at import time, so pin every secret explicitly
        monkeypatch.setattr(main.settings, "gemini_api_key", "test-gemini-key")
        monkeypatch.setattr(main.settings, "openai_api_key", "test-openai-key")
        monkeypatch.setattr(main.settings, "github_client_id", "test-client-id")
        monkeypatch.setattr(main.settings, "github_client_secret", "test-client-secret")
        return main.settings

    def test_starts_when_all_secrets_are_set(self, configured):
        with TestClient(app) as client:
            assert client.get("/ping").status_code == 200

    @pytest.mark.parametrize("secret", [
        "gemini_api_key", "openai_api_key", "github_client_id", "github_client_secret",
    ])
    def test_missing_secret_aborts_startup(self, configured, monkeypatch, secret):
        monkeypatch.setattr(configured, secret, None)
        with pytest.raises(ConfigurationError) as exc:
            with TestClient(app):
                pass
        assert secret.upper() in exc.value.message
