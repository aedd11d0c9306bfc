"""Main entry point for the LexiDaily web application."""
import logging
from contextlib import asynccontextmanager
from datetime import date
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from config import (
    CORS_ORIGINS,
    DAILY_WORD_COUNT,
    GENERATION_LOG_PATH,
    LOG_FORMAT,
    LOG_LEVEL,
    PAGE_TITLE,
    PORT,
    TARGET_LANGUAGE,
    WORD_BANK_FILE,
)
from logger import setup_logging
from models.api import WordsRequest, WordsResponse, DailyWordsResponse, ExportRequest
from models.notification import Notification
from services.daily_words import DailyWordSelector
from services.document_paginator import DocumentPaginator, ExportError, ExportEmptyError
from services.generation_logger import GenerationLogger
from services.llm_client import LLMClient
from services.word_actions import clipboard_text, share_payload
from services.word_detail_generator import WordDetailGenerator

setup_logging(LOG_LEVEL, LOG_FORMAT)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

# Initialize services (will be done on startup)
word_selector: DailyWordSelector = None
generator: WordDetailGenerator = None
paginator: DocumentPaginator = None
generation_logger: GenerationLogger = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize services on startup and release them on shutdown."""
    global word_selector, generator, paginator, generation_logger

    logger.info("Initializing LexiDaily services...")

    try:
        if WORD_BANK_FILE:
            word_selector = DailyWordSelector.from_file(WORD_BANK_FILE, count=DAILY_WORD_COUNT)
        else:
            word_selector = DailyWordSelector(count=DAILY_WORD_COUNT)
        logger.info(f"Initialized DailyWordSelector ({len(word_selector.word_bank)} words)")

        try:
            llm_client = LLMClient()
            logger.info("Initialized LLMClient")
        except ValueError as e:
            llm_client = None
            logger.warning(f"LLMClient unavailable, word details will use placeholders: {e}")

        generation_logger = GenerationLogger(GENERATION_LOG_PATH)
        generator = WordDetailGenerator(llm_client, generation_logger=generation_logger)
        logger.info("Initialized WordDetailGenerator")

        paginator = DocumentPaginator()
        logger.info("Initialized DocumentPaginator")

        logger.info("All services initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}", exc_info=True)
        raise

    yield

    if generation_logger is not None:
        generation_logger.close()


# Initialize FastAPI app
app = FastAPI(
    title="LexiDaily",
    description="Daily vocabulary cards with AI-generated sentences, meanings and pronunciations",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount("/static", StaticFiles(directory=str(BASE_DIR / "static")), name="static")


def _page_title(day: date) -> str:
    return f"{PAGE_TITLE} - Words for {day.strftime('%B %d, %Y')}"


def _parse_day(day: Optional[str]) -> date:
    if not day:
        return date.today()
    try:
        return date.fromisoformat(day)
    except ValueError:
        raise HTTPException(status_code=400, detail="day must be an ISO date (YYYY-MM-DD)")


@app.get("/", response_class=HTMLResponse)
def home(request: Request, day: Optional[str] = None):
    """Render today's word cards."""
    selected_day = _parse_day(day)
    words = word_selector.select(selected_day)
    details = generator.generate(words) if words else []

    cards = [
        {
            "detail": detail,
            "clipboard_text": clipboard_text(detail),
            "share": share_payload(detail, str(request.url)),
        }
        for detail in details
    ]

    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "app_name": PAGE_TITLE,
            "page_title": _page_title(selected_day),
            "language": TARGET_LANGUAGE,
            "cards": cards,
            "records": [detail.model_dump() for detail in details],
            "year": selected_day.year,
        }
    )


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "service": "lexidaily",
        "version": "1.0.0",
        "generation_available": bool(generator and generator.llm_client is not None)
    }


@app.get("/api/words/today", response_model=DailyWordsResponse)
def daily_words(day: Optional[str] = None) -> DailyWordsResponse:
    """Today's (or the given day's) words with generated details."""
    selected_day = _parse_day(day)
    words = word_selector.select(selected_day)
    logger.info(f"Daily words for {selected_day.isoformat()}: {words}")
    return DailyWordsResponse(
        date=selected_day.isoformat(),
        title=_page_title(selected_day),
        words=generator.generate(words)
    )


@app.post("/api/words/details", response_model=WordsResponse)
def word_details(request: WordsRequest) -> WordsResponse:
    """Generate details for an arbitrary word list."""
    return WordsResponse(words=generator.generate(request.words))


@app.post("/api/export")
def export_pdf(request: ExportRequest) -> Response:
    """
    Export records to a PDF download.

    Raises:
        HTTPException: 400 when there is nothing to export, 500 when the PDF
            could not be produced; both carry a user-facing notification
    """
    title = request.title or _page_title(date.today())

    try:
        result = paginator.export(request.records, title)
    except ExportEmptyError as e:
        raise HTTPException(
            status_code=400,
            detail=_export_error_detail(e, Notification(
                title="No words to export",
                description="There are no words currently displayed to export to PDF.",
                variant="destructive"
            ))
        )
    except ExportError as e:
        logger.error(f"Export failed: {e.message}")
        raise HTTPException(
            status_code=500,
            detail=_export_error_detail(e, Notification(
                title="PDF Export Failed",
                description="An error occurred while generating the PDF. Please try again.",
                variant="destructive"
            ))
        )

    headers = {"Content-Disposition": f'attachment; filename="{result.filename}"'}
    if result.notice:
        headers["X-Export-Notice"] = result.notice

    return Response(content=result.content, media_type="application/pdf", headers=headers)


def _export_error_detail(error: ExportError, notification: Notification) -> dict:
    return {
        "error": {
            "code": error.code,
            "message": error.message,
            "notification": notification.to_dict()
        }
    }


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting LexiDaily on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
