"""Tests for main FastAPI application."""

import logging
import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient

from curl_logger.config import Settings
from curl_logger.main import create_app
from curl_logger.middleware import CurlLoggingMiddleware


class TestMainApp:
    """Test main FastAPI application."""

    @pytest.fixture
    def app(self):
        return create_app()

    @pytest.fixture
    def client(self, app):
        """Create test client."""
        return TestClient(app)

    def test_create_app(self, app):
        """Test app creation."""
        assert app.title == "curl-logger"
        assert app.version == "1.0.0"
        assert app.docs_url == "/docs"
        assert app.redoc_url == "/redoc"
        assert app.openapi_url == "/openapi.json"

    def test_middleware_installed(self, app):
        """Test the curl logging middleware is installed by default."""
        assert any(m.cls is CurlLoggingMiddleware for m in app.user_middleware)

    def test_middleware_disabled(self):
        """Test the middleware can be switched off in settings."""
        with patch("curl_logger.main.get_settings", return_value=Settings(curl_logging_enabled=False)):
            app = create_app()

        assert not any(m.cls is CurlLoggingMiddleware for m in app.user_middleware)

    def test_root_endpoint(self, client):
        """Test root endpoint."""
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["service"] == "curl-logger"
        assert data["docs"] == "/docs"
        assert data["health"] == "/health"

    def test_liveness_check(self, client):
        """Test liveness endpoint."""
        response = client.get("/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive", "service": "curl-logger"}

    def test_health_check(self, client):
        """Test health endpoint reports capture state."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["curl_logging"] == "enabled"

    def test_echo_endpoint(self, client):
        """Test the echo endpoint sees the body after capture."""
        response = client.post("/echo", params={"x": "1"}, content=b'hi "there"')

        assert response.status_code == 200
        data = response.json()
        assert data["method"] == "POST"
        assert data["path"] == "/echo"
        assert data["query"] == {"x": ["1"]}
        assert data["size"] == 10
        assert data["sha256"] == "accbe7c3a78093a4d5bbe15b7ff176c828973b7d018b5a887d821eb588298a73"
        assert data["text"] == 'hi "there"'

    def test_echo_endpoint_without_body(self, client):
        """Test the echo endpoint with no body."""
        response = client.get("/echo")

        data = response.json()
        assert data["size"] == 0
        assert data["text"] is None

    def test_echo_json(self, client):
        """Test the JSON echo endpoint parses the replayed body."""
        response = client.post("/echo/json", json={"items": [1, 2, 3]})

        assert response.status_code == 200
        assert response.json() == {"received": {"items": [1, 2, 3]}}

    def test_echo_json_invalid(self, client):
        """Test invalid JSON returns a problem response."""
        response = client.post("/echo/json", content=b"{not json")

        assert response.status_code == 400
        assert response.headers["content-type"] == "application/problem+json"
        data = response.json()
        assert data["title"] == "Invalid JSON Body"
        assert data["type"] == "urn:curl-logger:problem:invalid-json-body"
        assert data["instance"] == "/echo/json"

    def test_not_found_problem(self, client):
        """Test unknown routes return problem details."""
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/problem+json"
        assert response.json()["title"] == "Not Found"

    def test_method_not_allowed(self, client):
        """Test wrong methods return problem details."""
        response = client.delete("/echo/json")

        assert response.status_code == 405
        assert response.json()["title"] == "Method Not Allowed"

    def test_lifespan_logging(self, app, caplog):
        """Test startup and shutdown are logged."""
        caplog.set_level(logging.INFO, logger="curl_logger.main")

        with TestClient(app):
            pass

        messages = [r.getMessage() for r in caplog.records if r.name == "curl_logger.main"]
        assert "Starting curl-logger" in messages
        assert "Shutting down curl-logger" in messages
