"""Unit tests for DocumentPaginator."""
import sys
sys.path.insert(0, 'backend')

from pathlib import Path

import fitz  # PyMuPDF
import pytest
from unittest.mock import patch
from reportlab.pdfbase import pdfmetrics

from models.word import WordDetail
from services.document_paginator import (
    DocumentPaginator,
    ExportEmptyError,
    ExportRenderError,
    BOLD_FONT,
    DEFAULT_FONT,
    CONTINUATION_SUFFIX,
)

TITLE = "LexiDaily - Words for October 18, 2026"

FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    "/Library/Fonts/Arial Unicode.ttf",
    "C:/Windows/Fonts/arial.ttf",
]


def _detail(i: int, sentence: str = None) -> WordDetail:
    return WordDetail(
        word=f"word{i}",
        sentence=sentence or f"This is the example sentence for word number {i}.",
        meaning=f"meaning {i}",
        pronunciation=f"WURD-{i}",
    )


def _pdf_pages_text(content: bytes):
    with fitz.open(stream=content, filetype="pdf") as doc:
        return [page.get_text() for page in doc]


@pytest.fixture
def paginator():
    """Paginator without a meaning font, so the default font is used."""
    return DocumentPaginator(meaning_font_path=None, language="Hindi")


@pytest.fixture
def fifty_records():
    return [_detail(i) for i in range(50)]


class TestEmptyExport:
    """Tests for exporting nothing."""

    def test_empty_records_raise(self, paginator):
        with pytest.raises(ExportEmptyError) as exc_info:
            paginator.export([], TITLE)
        assert exc_info.value.code == "EXPORT_EMPTY"
        assert "no words to export" in exc_info.value.message.lower()


class TestSinglePage:
    """Tests for small exports."""

    def test_single_record_produces_pdf(self, paginator):
        result = paginator.export([_detail(1)], TITLE)

        assert result.content.startswith(b"%PDF")
        assert result.filename == "lexidaily_words.pdf"
        assert result.page_count == 1

    def test_pdf_contains_all_fields(self, paginator):
        result = paginator.export([_detail(1)], TITLE)

        text = _pdf_pages_text(result.content)[0]
        assert TITLE in text
        assert "word1" in text
        assert "Sentence: This is the example sentence for word number 1." in text
        assert "Pronunciation: WURD-1" in text
        assert "Hindi Meaning: meaning 1" in text

    def test_field_order_and_styles(self, paginator):
        pages, _ = paginator.layout([_detail(1)], TITLE)

        body = [line for line in pages[0].lines if not line.centered and not line.grey]
        assert [line.text.split(":")[0] for line in body] == ["word1", "Sentence", "Pronunciation", "Hindi Meaning"]
        assert body[0].font_name == BOLD_FONT
        assert all(line.font_name == DEFAULT_FONT for line in body[1:])

    def test_title_is_centered_at_top_margin(self, paginator):
        pages, _ = paginator.layout([_detail(1)], TITLE)

        title = pages[0].lines[0]
        assert title.text == TITLE
        assert title.centered is True
        assert title.y == pytest.approx(paginator.margin)


class TestPagination:
    """Tests for multi-page layout."""

    def test_fifty_records_span_multiple_pages(self, paginator, fifty_records):
        result = paginator.export(fifty_records, TITLE)

        assert result.page_count > 1
        with fitz.open(stream=result.content, filetype="pdf") as doc:
            assert doc.page_count == result.page_count

    def test_every_later_page_starts_with_continuation_title(self, paginator, fifty_records):
        pages, _ = paginator.layout(fifty_records, TITLE)

        assert pages[0].lines[0].text == TITLE
        for page in pages[1:]:
            first = page.lines[0]
            assert first.text == TITLE + CONTINUATION_SUFFIX
            assert first.centered is True
            assert first.y == pytest.approx(paginator.margin)

    def test_continuation_title_in_pdf_text(self, paginator, fifty_records):
        result = paginator.export(fifty_records, TITLE)

        texts = _pdf_pages_text(result.content)
        assert "(cont.)" not in texts[0]
        for text in texts[1:]:
            assert TITLE + CONTINUATION_SUFFIX in text

    def test_no_record_starts_below_bottom_margin(self, paginator, fifty_records):
        pages, _ = paginator.layout(fifty_records, TITLE)
        bottom = paginator.page_height - paginator.margin

        for page in pages:
            for start in page.record_starts:
                assert start <= bottom

    def test_small_records_never_cross_bottom_margin(self, paginator, fifty_records):
        pages, _ = paginator.layout(fifty_records, TITLE)
        bottom = paginator.page_height - paginator.margin

        for page in pages:
            for line in page.lines:
                assert line.y <= bottom

    def test_every_record_is_placed_once_in_order(self, paginator, fifty_records):
        pages, _ = paginator.layout(fifty_records, TITLE)

        words = [line.text for page in pages for line in page.lines if line.font_name == BOLD_FONT]
        assert words == [f"word{i}" for i in range(50)]
        assert sum(len(page.record_starts) for page in pages) == 50

    def test_records_are_not_split_across_pages(self, paginator, fifty_records):
        pages, _ = paginator.layout(fifty_records, TITLE)

        for page in pages:
            bold = [line for line in page.lines if line.font_name == BOLD_FONT]
            meanings = [line for line in page.lines if line.text.startswith("Hindi Meaning:")]
            assert len(bold) == len(meanings) == len(page.record_starts)

    def test_long_text_wraps_to_content_width(self, paginator):
        sentence = " ".join(["extraordinarily"] * 60)
        pages, _ = paginator.layout([_detail(1, sentence=sentence)], TITLE)
        width = paginator.page_width - 2 * paginator.margin

        body = [line for line in pages[0].lines if not line.centered and not line.grey]
        assert len(body) > 4
        for line in body:
            assert pdfmetrics.stringWidth(line.text, line.font_name, line.font_size) <= width + 0.01

    def test_oversized_record_on_fresh_page_is_not_moved(self, paginator):
        huge = _detail(0, sentence=" ".join(["word"] * 2000))
        pages, _ = paginator.layout([huge, _detail(1)], TITLE)

        assert len(pages) == 2
        assert len(pages[0].record_starts) == 1
        assert pages[1].lines[0].text == TITLE + CONTINUATION_SUFFIX
        assert [line.text for line in pages[1].lines if line.font_name == BOLD_FONT] == ["word1"]


class TestFontFallback:
    """Tests for the meaning font substitution policy."""

    def test_missing_font_adds_disclaimer_once(self, fifty_records):
        paginator = DocumentPaginator(meaning_font_path="/nonexistent/NotoSansDevanagari.ttf")
        result = paginator.export(fifty_records, TITLE)

        assert result.font_substituted is True
        assert "may not display correctly" in result.notice

        pages, _ = paginator.layout(fifty_records, TITLE)
        assert len(pages) > 1
        assert any(line.grey for line in pages[0].lines)
        for page in pages[1:]:
            assert not any(line.grey for line in page.lines)

    def test_disclaimer_follows_title(self, paginator):
        pages, _ = paginator.layout([_detail(1)], TITLE)

        assert pages[0].lines[1].grey is True
        assert pages[0].lines[1].text.startswith("Note: Hindi font is not loaded.")

    def test_available_font_is_used_for_meaning(self):
        font_path = next((p for p in FONT_CANDIDATES if Path(p).exists()), None)
        if font_path is None:
            pytest.skip("no TrueType font available on this system")

        paginator = DocumentPaginator(meaning_font_path=font_path)
        result = paginator.export([_detail(1)], TITLE)
        pages, _ = paginator.layout([_detail(1)], TITLE)

        assert result.font_substituted is False
        assert result.notice is None
        assert not any(line.grey for line in pages[0].lines)
        meaning = next(line for line in pages[0].lines if line.text.startswith("Hindi Meaning:"))
        assert meaning.font_name.startswith("LexiMeaning-")


class TestRenderFailure:
    """Tests for drawing and serialization errors."""

    def test_canvas_error_becomes_render_error(self, paginator):
        with patch('services.document_paginator.canvas.Canvas', side_effect=RuntimeError("disk full")):
            with pytest.raises(ExportRenderError) as exc_info:
                paginator.export([_detail(1)], TITLE)

        assert exc_info.value.code == "EXPORT_RENDER_FAILED"
        assert "disk full" in exc_info.value.message
