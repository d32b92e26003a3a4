"""Tests for the CVInsight API application and its stateless routes."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from cvinsight.api.dependencies import get_materializer
from cvinsight.api.main import app


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the API."""
    return TestClient(app)


@pytest.fixture
def fake_pdf(fake_materializer) -> Iterator:
    app.dependency_overrides[get_materializer] = lambda: fake_materializer
    yield fake_materializer
    app.dependency_overrides.clear()


@pytest.fixture
def broken_pdf(failing_materializer) -> Iterator:
    app.dependency_overrides[get_materializer] = lambda: failing_materializer
    yield failing_materializer
    app.dependency_overrides.clear()


class TestHealthEndpoint:
    """Tests for the health check endpoint."""

    def test_health_returns_healthy_status(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_health_response_is_json(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.headers["content-type"] == "application/json"


class TestAppConfiguration:
    """Tests for the FastAPI app configuration."""

    def test_app_title(self) -> None:
        assert app.title == "CVInsight API"

    def test_app_version(self) -> None:
        assert app.version == "0.1.0"

    def test_cors_middleware_is_configured(self) -> None:
        middleware_classes = [m.cls.__name__ for m in app.user_middleware]
        assert "CORSMiddleware" in middleware_classes

    def test_unknown_route_returns_404(self, client: TestClient) -> None:
        assert client.get("/nonexistent").status_code == 404


class TestTemplatesEndpoint:
    def test_lists_catalog_in_order(self, client: TestClient) -> None:
        response = client.get("/api/templates")
        assert response.status_code == 200
        data = response.json()
        assert [t["id"] for t in data] == ["temp-1", "temp-2", "temp-3", "temp-4"]
        assert data[2]["theme"] == "green"
        assert data[2]["layout"] == "modern"
        assert data[0]["is_premium"] is False

    def test_layout_filter(self, client: TestClient) -> None:
        response = client.get("/api/templates", params={"layout": "modern"})
        assert [t["id"] for t in response.json()] == ["temp-3"]

    def test_layout_without_templates(self, client: TestClient) -> None:
        response = client.get("/api/templates", params={"layout": "creative"})
        assert response.status_code == 200
        assert response.json() == []

    def test_unknown_layout_rejected(self, client: TestClient) -> None:
        response = client.get("/api/templates", params={"layout": "fancy"})
        assert response.status_code == 422
        assert "Unknown layout" in response.json()["detail"]


class TestRenderEndpoint:
    payload = {
        "about": {"name": "Jane Doe", "role": "Engineer"},
        "work_list": [{"position": "Engineer", "company": "Acme", "start_date": "2020-01"}],
        "skills": [{"name": "Python"}],
        "selected_template": "temp-2",
    }

    def test_tex_output(self, client: TestClient) -> None:
        response = client.post("/api/render", params={"format": "tex"}, json=self.payload)
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "Jane Doe" in response.text
        assert r"\section{RELEVANT PROJECTS / WORK EXPERIENCE}" in response.text

    def test_unknown_template_renders_default(self, client: TestClient) -> None:
        default = client.post("/api/render", params={"format": "tex"}, json={**self.payload, "selected_template": "temp-1"})
        unknown = client.post("/api/render", params={"format": "tex"}, json={**self.payload, "selected_template": "bogus"})
        assert unknown.status_code == 200
        assert unknown.text == default.text

    def test_empty_document_renders_placeholders(self, client: TestClient) -> None:
        response = client.post("/api/render", params={"format": "tex"}, json={})
        assert "Your Name" in response.text

    def test_pdf_output(self, client: TestClient, fake_pdf) -> None:
        response = client.post("/api/render", json=self.payload)
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == 'attachment; filename="Jane_Doe_Resume.pdf"'
        assert response.content == b"%PDF-1.4 fake content"
        assert "Jane Doe" in fake_pdf.sources[0]
        assert all(a.released for a in fake_pdf.artifacts)

    def test_compile_failure_is_502(self, client: TestClient, broken_pdf) -> None:
        response = client.post("/api/render", json=self.payload)
        assert response.status_code == 502
        assert "LaTeX compilation failed" in response.json()["detail"]

    def test_unknown_format_rejected(self, client: TestClient) -> None:
        response = client.post("/api/render", params={"format": "docx"}, json=self.payload)
        assert response.status_code == 422


class TestProfileValidation:
    def test_valid_profile(self, client: TestClient) -> None:
        response = client.post(
            "/api/profile/validate",
            json={
                "firstName": "Ada",
                "lastName": "Lovelace",
                "gender": "female",
                "socialLinks": {"github": "https://github.com/ada"},
                "address": {"country": "France", "city": "Paris", "postalCode": "75015"},
            },
        )
        assert response.status_code == 200
        assert response.json() == {"valid": True, "errors": {}}

    def test_errors_reported_per_field(self, client: TestClient) -> None:
        response = client.post(
            "/api/profile/validate",
            json={
                "firstName": "A",
                "phone": "call me",
                "socialLinks": {"facebook": "nope"},
                "address": {"postalCode": "#"},
            },
        )
        body = response.json()
        assert body["valid"] is False
        assert body["errors"] == {
            "firstName": "First name must be at least 2 characters",
            "phone": "Invalid phone number format",
            "facebook": "Invalid Facebook URL",
            "postalCode": "Postal code contains invalid characters",
        }
