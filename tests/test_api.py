"""Tests for the Career Craft API."""

from __future__ import annotations

import base64
import json
from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from career_craft.api.dependencies import get_llm_service
from career_craft.api.main import app
from career_craft.api.routes import resumes as resumes_routes
from career_craft.services.extraction import ExtractionError
from career_craft.services.llm_providers import LLMError, LLMProvider
from career_craft.services.llm_service import LLMService
from career_craft.services.resume_document import compose_resume_pdf

TAILORED = {"tailored_resume": "Jane Doe\nSKILLS\nPython", "explanation": "Focused on Python."}


class ScriptedProvider(LLMProvider):
    def __init__(self, response: str) -> None:
        self.response = response
        self.prompts: list[str] = []

    def send_prompt(self, prompt: str, config: dict) -> str:
        self.prompts.append(prompt)
        return self.response


class FailingProvider(LLMProvider):
    def send_prompt(self, prompt: str, config: dict) -> str:
        raise LLMError("Gemini API call failed: quota exceeded")


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


@pytest.fixture
def provider() -> Iterator[ScriptedProvider]:
    """Serve a scripted LLM answer to the tailoring endpoint."""
    scripted = ScriptedProvider(json.dumps(TAILORED))
    app.dependency_overrides[get_llm_service] = lambda: LLMService(scripted)
    yield scripted
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_healthy_status(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestAppConfiguration:
    """Tests for the FastAPI app configuration."""

    def test_app_title(self) -> None:
        assert app.title == "Career Craft API"

    def test_app_version(self) -> None:
        assert app.version == "0.1.0"

    def test_cors_middleware_is_configured(self) -> None:
        middleware_classes = [m.cls.__name__ for m in app.user_middleware]
        assert "CORSMiddleware" in middleware_classes

    def test_unknown_route_returns_404(self, client: TestClient) -> None:
        assert client.get("/nonexistent").status_code == 404


class TestLayoutEndpoint:
    """Tests for POST /api/resumes/layout."""

    def test_returns_pages_of_commands(self, client: TestClient, sample_resume: str) -> None:
        response = client.post("/api/resumes/layout", json={"resume_text": sample_resume})

        assert response.status_code == 200
        data = response.json()
        assert data["page_count"] == len(data["pages"]) == 1
        assert data["page_width"] == 210.0
        first_page = data["pages"][0]
        assert first_page["commands"][0]["kind"] == "rect"
        texts = [command["text"] for command in first_page["commands"] if command["kind"] == "text"]
        assert "Jane Doe" in texts

    def test_photo_is_returned_as_base64(
        self, client: TestClient, sample_resume: str, png_bytes: bytes
    ) -> None:
        uri = "data:image/png;base64," + base64.b64encode(png_bytes).decode()

        response = client.post(
            "/api/resumes/layout", json={"resume_text": sample_resume, "photo_data_uri": uri}
        )

        images = [
            command for command in response.json()["pages"][0]["commands"] if command["kind"] == "image"
        ]
        assert len(images) == 1
        assert base64.b64decode(images[0]["data"]) == png_bytes

    def test_bad_photo_is_ignored(self, client: TestClient, sample_resume: str) -> None:
        response = client.post(
            "/api/resumes/layout",
            json={"resume_text": sample_resume, "photo_data_uri": "data:image/png;base64,@@"},
        )

        assert response.status_code == 200
        kinds = {command["kind"] for command in response.json()["pages"][0]["commands"]}
        assert "image" not in kinds

    def test_spanish_titles(self, client: TestClient) -> None:
        response = client.post(
            "/api/resumes/layout",
            json={"resume_text": "Juan\nHABILIDADES\nPython", "language": "es"},
        )

        commands = response.json()["pages"][0]["commands"]
        assert any(command.get("text") == "HABILIDADES" for command in commands)

    def test_empty_text_is_rejected(self, client: TestClient) -> None:
        assert client.post("/api/resumes/layout", json={"resume_text": ""}).status_code == 422


class TestDownloadEndpoints:
    """Tests for the PDF and text downloads."""

    def test_pdf_download(self, client: TestClient, sample_resume: str) -> None:
        response = client.post("/api/resumes/pdf", json={"resume_text": sample_resume})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="Jane_Doe_resume_' in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_text_download_is_unmodified(self, client: TestClient, sample_resume: str) -> None:
        response = client.post("/api/resumes/text", json={"resume_text": sample_resume})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.headers["content-disposition"].endswith('.txt"')
        assert response.text == sample_resume


class TestTailorEndpoint:
    """Tests for POST /api/resumes/tailor."""

    def test_tailors_resume(self, client: TestClient, provider: ScriptedProvider) -> None:
        response = client.post(
            "/api/resumes/tailor",
            json={"job_description": "Python developer", "resume_text": "Jane Doe, Python"},
        )

        assert response.status_code == 200
        assert response.json() == TAILORED
        assert "Python developer" in provider.prompts[0]

    def test_missing_sources_are_rejected(
        self, client: TestClient, provider: ScriptedProvider
    ) -> None:
        response = client.post("/api/resumes/tailor", json={"resume_text": "Jane Doe"})

        assert response.status_code == 422
        assert provider.prompts == []

    def test_job_offer_url_is_fetched(
        self, client: TestClient, provider: ScriptedProvider, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fetched: list[str] = []

        def fake_fetch(url: str) -> str:
            fetched.append(url)
            return "Go developer wanted"

        monkeypatch.setattr(resumes_routes, "fetch_text_from_url", fake_fetch)

        response = client.post(
            "/api/resumes/tailor",
            json={"job_offer_url": "https://jobs.example.com/42", "resume_text": "Jane Doe"},
        )

        assert response.status_code == 200
        assert fetched == ["https://jobs.example.com/42"]
        assert "Go developer wanted" in provider.prompts[0]

    def test_unreachable_job_offer_returns_422(
        self, client: TestClient, provider: ScriptedProvider, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def fake_fetch(url: str) -> str:
            raise ExtractionError("Failed to fetch URL: 404 Not Found")

        monkeypatch.setattr(resumes_routes, "fetch_text_from_url", fake_fetch)

        response = client.post(
            "/api/resumes/tailor",
            json={"job_offer_url": "https://jobs.example.com/404", "resume_text": "Jane Doe"},
        )

        assert response.status_code == 422
        assert "404" in response.json()["detail"]

    def test_resume_pdf_is_extracted(
        self, client: TestClient, provider: ScriptedProvider, sample_resume: str
    ) -> None:
        pdf = base64.b64encode(compose_resume_pdf(sample_resume, "en")).decode()

        response = client.post(
            "/api/resumes/tailor",
            json={
                "job_description": "Python developer",
                "resume_file_data_uri": f"data:application/pdf;base64,{pdf}",
            },
        )

        assert response.status_code == 200
        assert "Jane Doe" in provider.prompts[0]

    def test_non_pdf_resume_file_is_rejected(
        self, client: TestClient, provider: ScriptedProvider
    ) -> None:
        response = client.post(
            "/api/resumes/tailor",
            json={
                "job_description": "Python developer",
                "resume_file_data_uri": "data:text/plain;base64,SmFuZQ==",
            },
        )

        assert response.status_code == 422

    def test_llm_failure_returns_502(self, client: TestClient) -> None:
        app.dependency_overrides[get_llm_service] = lambda: LLMService(FailingProvider())
        try:
            response = client.post(
                "/api/resumes/tailor",
                json={"job_description": "Python developer", "resume_text": "Jane Doe"},
            )
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 502
        assert "quota exceeded" in response.json()["detail"]

    def test_unconfigured_provider_returns_503(
        self, client: TestClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LLM_PROVIDER", "nope")

        response = client.post(
            "/api/resumes/tailor",
            json={"job_description": "Python developer", "resume_text": "Jane Doe"},
        )

        assert response.status_code == 503
