"""Tests for application startup, logging setup and error envelopes."""

import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from newscat_gateway.api import envelope
from newscat_gateway.core.exceptions import (
    ConfigurationError,
    CredentialMissingError,
    InvalidFormatError,
    UpstreamGenericError,
)
from newscat_gateway.core.logging import setup_logging
from newscat_gateway.core.static_site import resolve_index_page
from newscat_gateway.main import create_app, verify_startup

from conftest import StubUpstream, make_settings


class TestStartup:
    """Credential checks at startup"""

    def test_strict_startup_without_key_fails(self):
        """Strict startup refuses to run without NEWS_API_KEY"""
        with pytest.raises(ConfigurationError):
            verify_startup(make_settings(NEWS_API_KEY=None, STRICT_STARTUP=True))

    def test_lenient_startup_without_key_warns(self, caplog):
        """Lenient startup only logs a warning"""
        with caplog.at_level(logging.WARNING, logger="newscat_gateway.main"):
            verify_startup(make_settings(NEWS_API_KEY=None))

        assert any("NEWS_API_KEY" in record.getMessage() for record in caplog.records)

    def test_configured_key_is_masked_in_logs(self, caplog):
        """The full key never reaches the logs"""
        with caplog.at_level(logging.INFO, logger="newscat_gateway.main"):
            verify_startup(make_settings(NEWS_API_KEY="supersecretkey123"))

        record = next(r for r in caplog.records if r.getMessage() == "Environment loaded")
        assert record.news_api_key == "supersec..."
        assert "supersecretkey123" not in caplog.text

    def test_lifespan_runs_without_key(self):
        """The app serves requests when the key is missing and startup is lenient"""
        app = create_app(make_settings(NEWS_API_KEY=None))

        with TestClient(app) as client:
            response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["apiKeyConfigurada"] is False


class TestEnvelope:
    """Response composer shapes"""

    def test_error_envelope_omits_unset_hints(self):
        """Only populated hint fields appear"""
        response = envelope.error_response(UpstreamGenericError("fallo", upstream_status=500))

        assert response.status_code == 502
        assert response.body == b'{"error":"fallo","code":"upstream_error"}'

    def test_error_envelope_with_hints(self):
        """Credential errors carry mensaje and hint"""
        response = envelope.error_response(CredentialMissingError())

        assert response.status_code == 500
        assert b'"hint":"Configura la variable de entorno NEWS_API_KEY"' in response.body

    def test_client_error_status(self):
        """Validation errors are 400"""
        assert envelope.error_response(InvalidFormatError()).status_code == 400

    def test_internal_error_envelope(self):
        """The sanitized 500 names the path only"""
        response = envelope.internal_error_response("/news")

        assert response.status_code == 500
        assert b'"path":"/news"' in response.body


class TestIndexResolution:
    """Ordered index page candidates"""

    def test_first_existing_relative_candidate(self, tmp_path):
        """Relative candidates resolve against the base directory, in order"""
        (tmp_path / "public").mkdir()
        (tmp_path / "public" / "index.html").write_text("x", encoding="utf-8")

        result = resolve_index_page(["index.html", "public/index.html"], base_dir=tmp_path)

        assert result == (tmp_path / "public" / "index.html").resolve()

    def test_directories_are_skipped(self, tmp_path):
        """A directory named like the candidate does not count"""
        (tmp_path / "index.html").mkdir()

        assert resolve_index_page(["index.html"], base_dir=tmp_path) is None


@pytest.fixture
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)


@pytest.mark.usefixtures("restore_root_logger")
class TestLogging:
    """Structured logging setup"""

    def test_setup_installs_single_handler(self):
        """The root logger gets one structlog-formatted handler at the configured level"""
        setup_logging(make_settings(LOG_LEVEL="DEBUG", LOG_FORMAT="json"))

        root_logger = logging.getLogger()
        assert len(root_logger.handlers) == 1
        assert root_logger.level == logging.DEBUG

    def test_news_request_does_not_log_api_key(self, capsys):
        """A /news call logged through setup_logging never writes the full key"""
        setup_logging(make_settings(LOG_LEVEL="INFO", LOG_FORMAT="json"))
        stub = StubUpstream(lambda request: httpx.Response(200, json={"totalResults": 0, "articles": []}))
        app = create_app(make_settings(NEWS_API_KEY="supersecretkey123"), transport=stub.transport)

        response = TestClient(app).get("/news", params={"q": "x"})

        output = capsys.readouterr().out
        assert response.status_code == 200
        assert stub.requests[0].url.params["apiKey"] == "supersecretkey123"
        assert "Searching news" in output
        assert "supersecretkey123" not in output

    def test_http_client_loggers_quieted(self):
        """httpx request lines are not emitted at INFO"""
        setup_logging(make_settings(LOG_LEVEL="INFO"))

        assert logging.getLogger("httpx").getEffectiveLevel() == logging.WARNING
        assert logging.getLogger("httpcore").getEffectiveLevel() == logging.WARNING
