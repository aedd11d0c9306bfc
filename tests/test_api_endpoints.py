"""Integration tests for the LexiDaily HTTP endpoints."""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import Mock
import sys
import os

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'backend'))


WORDS = ["ephemeral", "ubiquitous"]


@pytest.fixture
def client():
    """Create a test client with services swapped for test doubles."""
    # Import after path is set
    from main import app
    import main
    from services.daily_words import DailyWordSelector
    from services.document_paginator import DocumentPaginator
    from services.word_detail_generator import WordDetailGenerator

    # Lifespan does not run without a context manager, so set the globals directly
    client = TestClient(app)

    main.word_selector = DailyWordSelector(WORDS, count=2)
    main.generator = WordDetailGenerator(Mock(), language="Hindi")
    main.paginator = DocumentPaginator(meaning_font_path=None, language="Hindi")

    yield client


@pytest.fixture
def mock_generation(client):
    """Make the mocked model return details for the daily words."""
    import main
    from services.llm_client import LLMResponse

    main.generator.llm_client.generate.return_value = LLMResponse(
        text=(
            '{"wordDetails": ['
            '{"word": "ephemeral", "sentence": "Fame is ephemeral.", "meaning": "क्षणिक", "pronunciation": "i-FEM-er-uhl"},'
            '{"word": "ubiquitous", "sentence": "Phones are ubiquitous.", "meaning": "सर्वव्यापी", "pronunciation": "yoo-BIK-wi-tuhs"}'
            ']}'
        ),
        tokens_input=100,
        tokens_output=80,
        latency_ms=300,
        model_used="llama-3.3-70b-versatile"
    )
    return main.generator.llm_client


def _record(word="ephemeral"):
    return {
        "word": word,
        "sentence": f"A sentence using {word}.",
        "meaning": "क्षणिक",
        "pronunciation": "i-FEM-er-uhl",
    }


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["service"] == "lexidaily"
        assert data["generation_available"] is True

    def test_health_without_llm(self, client):
        import main
        main.generator.llm_client = None

        response = client.get("/health")

        assert response.json()["generation_available"] is False


class TestHomePage:
    """Tests for GET /."""

    def test_renders_cards(self, client, mock_generation):
        response = client.get("/", params={"day": "2026-01-01"})

        assert response.status_code == 200
        assert "text/html" in response.headers["content-type"]
        html = response.text
        assert "LexiDaily - Words for January 01, 2026" in html
        assert "Fame is ephemeral." in html
        assert "क्षणिक" in html
        assert "Hindi Meaning:" in html
        assert 'id="export-pdf"' in html

    def test_renders_placeholders_when_model_fails(self, client):
        import main
        from models.word import FailureReason, placeholder_for
        main.generator.llm_client.generate.side_effect = RuntimeError("connection reset")

        response = client.get("/", params={"day": "2026-01-01"})

        assert response.status_code == 200
        assert placeholder_for(FailureReason.ERROR) in response.text

    def test_empty_day_message(self, client):
        import main
        main.word_selector = Mock()
        main.word_selector.select.return_value = []

        response = client.get("/")

        assert "No new words for today" in response.text
        assert 'id="export-pdf"' not in response.text


class TestDailyWords:
    """Tests for GET /api/words/today."""

    def test_daily_words(self, client, mock_generation):
        response = client.get("/api/words/today", params={"day": "2026-01-01"})

        assert response.status_code == 200
        data = response.json()
        assert data["date"] == "2026-01-01"
        assert data["title"] == "LexiDaily - Words for January 01, 2026"
        assert [w["word"] for w in data["words"]] == WORDS
        assert data["words"][1]["pronunciation"] == "yoo-BIK-wi-tuhs"

    def test_invalid_day(self, client):
        response = client.get("/api/words/today", params={"day": "yesterday"})

        assert response.status_code == 400
        assert "ISO date" in response.json()["detail"]


class TestWordDetails:
    """Tests for POST /api/words/details."""

    def test_generates_in_request_order(self, client, mock_generation):
        response = client.post("/api/words/details", json={"words": ["ubiquitous", "ephemeral"]})

        assert response.status_code == 200
        words = response.json()["words"]
        assert [w["word"] for w in words] == ["ubiquitous", "ephemeral"]
        assert words[1]["sentence"] == "Fame is ephemeral."
        assert mock_generation.generate.call_count == 1

    def test_empty_list_rejected(self, client):
        response = client.post("/api/words/details", json={"words": []})

        assert response.status_code == 422

    def test_missing_field_rejected(self, client):
        response = client.post("/api/words/details", json={})

        assert response.status_code == 422


class TestExport:
    """Tests for POST /api/export."""

    def test_export_returns_pdf(self, client):
        response = client.post("/api/export", json={"records": [_record()], "title": "My Words"})

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'attachment; filename="lexidaily_words.pdf"' == response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_export_reports_font_substitution(self, client):
        response = client.post("/api/export", json={"records": [_record()]})

        assert "may not display correctly" in response.headers["x-export-notice"]

    def test_export_empty(self, client):
        response = client.post("/api/export", json={"records": []})

        assert response.status_code == 400
        error = response.json()["detail"]["error"]
        assert error["code"] == "EXPORT_EMPTY"
        assert error["notification"]["title"] == "No words to export"
        assert error["notification"]["variant"] == "destructive"

    def test_export_render_failure(self, client):
        import main
        from services.document_paginator import ExportRenderError
        main.paginator = Mock()
        main.paginator.export.side_effect = ExportRenderError("Failed to render PDF: disk full")

        response = client.post("/api/export", json={"records": [_record()]})

        assert response.status_code == 500
        error = response.json()["detail"]["error"]
        assert error["code"] == "EXPORT_RENDER_FAILED"
        assert error["notification"]["title"] == "PDF Export Failed"

    def test_invalid_record_rejected(self, client):
        response = client.post("/api/export", json={"records": [{"word": "a"}]})

        assert response.status_code == 422
