"""
PDF export of word detail records.

Lays records out top-to-bottom on A4 pages: every field is wrapped to the
content width, a record is moved to a fresh page when it would cross the
bottom margin, and each page after the first repeats the title with a
"(cont.)" suffix. Layout and drawing are separate passes so the computed
positions can be inspected without parsing the PDF.
"""

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from config import (
    EXPORT_FILENAME,
    MEANING_FONT_PATH,
    PDF_BODY_FONT_SIZE,
    PDF_LINE_HEIGHT_MM,
    PDF_MARGIN_MM,
    PDF_NOTE_FONT_SIZE,
    PDF_TITLE_FONT_SIZE,
    TARGET_LANGUAGE,
)
from models.document import DocumentLayoutState, PageLayout, PlacedLine
from models.word import WordDetail

logger = logging.getLogger(__name__)

DEFAULT_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
MEANING_FONT_PREFIX = "LexiMeaning"
CONTINUATION_SUFFIX = " (cont.)"


class ExportError(Exception):
    """Base class for export failures reported to the caller."""
    code = "EXPORT_ERROR"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ExportEmptyError(ExportError):
    """Raised when there are no records to export."""
    code = "EXPORT_EMPTY"


class ExportRenderError(ExportError):
    """Raised when layout or PDF serialization fails."""
    code = "EXPORT_RENDER_FAILED"


@dataclass
class ExportResult:
    """A finished PDF ready for download."""
    content: bytes
    filename: str
    page_count: int
    font_substituted: bool = False
    notice: Optional[str] = None


class DocumentPaginator:
    """Paginates word detail records into a downloadable PDF."""

    def __init__(
        self,
        meaning_font_path: Optional[str] = MEANING_FONT_PATH,
        language: str = TARGET_LANGUAGE,
        filename: str = EXPORT_FILENAME,
        page_size: Tuple[float, float] = A4,
        margin: float = PDF_MARGIN_MM * mm,
        line_height: float = PDF_LINE_HEIGHT_MM * mm
    ):
        """
        Args:
            meaning_font_path: TTF able to render the target script; when it
                cannot be loaded the default font is used with a disclaimer
            language: Target language label for the meaning line
            filename: Download filename
            page_size: (width, height) in points
            margin: Margin on every side, in points
            line_height: Baseline-to-baseline distance, in points
        """
        self.meaning_font_path = meaning_font_path
        self.language = language
        self.filename = filename
        self.page_width, self.page_height = page_size
        self.margin = margin
        self.line_height = line_height
        self._meaning_font: Optional[str] = None
        self._font_resolved = False

    @property
    def font_disclaimer(self) -> str:
        return (
            f"Note: {self.language} font is not loaded. {self.language} characters may not "
            f"display correctly in this PDF. Please ensure a {self.language}-capable font is configured."
        )

    def export(self, records: Sequence[WordDetail], title: str) -> ExportResult:
        """
        Lay out and serialize records.

        Raises:
            ExportEmptyError: no records were given; nothing is produced
            ExportRenderError: layout or serialization failed; nothing is produced
        """
        if not records:
            logger.warning("Export requested with no records")
            raise ExportEmptyError("There are no words to export.")

        try:
            pages, font_substituted = self.layout(records, title)
            content = self.render(pages, title)
        except ExportError:
            raise
        except Exception as e:
            logger.error(f"PDF export failed: {e}", exc_info=True)
            raise ExportRenderError(f"An error occurred while generating the PDF: {e}") from e

        notice = None
        if font_substituted:
            notice = f"{self.language} characters may not display correctly as the font is not loaded."

        logger.info(f"Exported {len(records)} records to {len(pages)} pages ({len(content)} bytes)")
        return ExportResult(
            content=content,
            filename=self.filename,
            page_count=len(pages),
            font_substituted=font_substituted,
            notice=notice
        )

    def layout(self, records: Sequence[WordDetail], title: str) -> Tuple[List[PageLayout], bool]:
        """
        Compute line positions for every page.

        Returns:
            (pages, font_substituted)
        """
        meaning_font = self.resolve_meaning_font()
        font_substituted = meaning_font == DEFAULT_FONT

        state = DocumentLayoutState(
            page_width=self.page_width,
            page_height=self.page_height,
            margin=self.margin,
            line_height=self.line_height,
            y=self.margin
        )
        pages = [PageLayout(page_number=1)]
        self._place_title(pages[-1], state, title)

        if font_substituted:
            for line in self._wrap(self.font_disclaimer, DEFAULT_FONT, PDF_NOTE_FONT_SIZE, state.content_width):
                pages[-1].lines.append(PlacedLine(line, state.y, DEFAULT_FONT, PDF_NOTE_FONT_SIZE, grey=True))
                state.y += state.line_height
            state.y += state.line_height

        for record in records:
            blocks = self._record_lines(record, meaning_font, state.content_width)
            line_count = sum(len(lines) for lines, _ in blocks)
            block_height = (line_count + 1) * state.line_height

            if state.y + block_height > state.bottom_limit and state.records_on_page > 0:
                state.page_number += 1
                state.y = state.margin
                state.records_on_page = 0
                pages.append(PageLayout(page_number=state.page_number))
                self._place_title(pages[-1], state, title + CONTINUATION_SUFFIX)

            page = pages[-1]
            page.record_starts.append(state.y)
            for lines, font_name in blocks:
                for line in lines:
                    page.lines.append(PlacedLine(line, state.y, font_name, PDF_BODY_FONT_SIZE))
                    state.y += state.line_height
            state.y += state.line_height
            state.records_on_page += 1

        return pages, font_substituted

    def render(self, pages: List[PageLayout], title: str) -> bytes:
        """Draw laid-out pages and return the PDF bytes."""
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=(self.page_width, self.page_height))
        pdf.setTitle(title)

        for page in pages:
            for line in page.lines:
                pdf.setFont(line.font_name, line.font_size)
                pdf.setFillGray(0.4 if line.grey else 0)
                baseline = self.page_height - line.y
                if line.centered:
                    pdf.drawCentredString(self.page_width / 2, baseline, line.text)
                else:
                    pdf.drawString(self.margin, baseline, line.text)
            pdf.showPage()

        pdf.save()
        return buffer.getvalue()

    def resolve_meaning_font(self) -> str:
        """Register the meaning font once; fall back to the default font."""
        if not self._font_resolved:
            self._meaning_font = self._try_register(self.meaning_font_path)
            self._font_resolved = True
            if self._meaning_font is None:
                logger.warning(
                    f"{self.language} font not available at {self.meaning_font_path}; "
                    f"{self.language} text may not render correctly"
                )
        return self._meaning_font or DEFAULT_FONT

    def _record_lines(
        self,
        record: WordDetail,
        meaning_font: str,
        width: float
    ) -> List[Tuple[List[str], str]]:
        """Wrapped lines for word, sentence, pronunciation and meaning, with their fonts."""
        fields = [
            (record.word, BOLD_FONT),
            (f"Sentence: {record.sentence}", DEFAULT_FONT),
            (f"Pronunciation: {record.pronunciation}", DEFAULT_FONT),
            (f"{self.language} Meaning: {record.meaning}", meaning_font),
        ]
        return [
            (self._wrap(text, font_name, PDF_BODY_FONT_SIZE, width), font_name)
            for text, font_name in fields
        ]

    def _place_title(self, page: PageLayout, state: DocumentLayoutState, text: str) -> None:
        page.lines.append(PlacedLine(text, state.y, DEFAULT_FONT, PDF_TITLE_FONT_SIZE, centered=True))
        state.y += state.line_height * 2

    @staticmethod
    def _wrap(text: str, font_name: str, font_size: float, width: float) -> List[str]:
        return simpleSplit(text, font_name, font_size, width) or [""]

    @staticmethod
    def _try_register(path: Optional[str]) -> Optional[str]:
        if not path:
            return None
        font_file = Path(path)
        if not font_file.exists():
            return None
        name = f"{MEANING_FONT_PREFIX}-{font_file.stem.replace(' ', '_')}"
        if name in pdfmetrics.getRegisteredFontNames():
            return name
        try:
            pdfmetrics.registerFont(TTFont(name, str(font_file)))
        except Exception as e:
            logger.warning(f"Could not register font {font_file}: {e}")
            return None
        return name
