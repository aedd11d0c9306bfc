"""
Daily Words PDF Export Script for LexiDaily.

This script:
1. Selects the words for a given day
2. Generates sentences, meanings and pronunciations with the LLM
3. Lays the records out into a paginated PDF
4. Writes the PDF to disk

Usage:
    python export_daily_words.py
    python export_daily_words.py --date 2026-10-18 --count 7 --output today.pdf
"""
import argparse
import logging
import sys
from datetime import date
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from config import DAILY_WORD_COUNT, EXPORT_FILENAME, LOG_FORMAT, LOG_LEVEL, PAGE_TITLE, WORD_BANK_FILE
from logger import setup_logging
from services.daily_words import DailyWordSelector
from services.document_paginator import DocumentPaginator, ExportError
from services.llm_client import LLMClient
from services.word_detail_generator import WordDetailGenerator

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export a day's LexiDaily words to PDF")
    parser.add_argument("--date", type=date.fromisoformat, default=None,
                        help="Day to export as YYYY-MM-DD (default: today)")
    parser.add_argument("--count", type=int, default=DAILY_WORD_COUNT,
                        help=f"Words per day (default: {DAILY_WORD_COUNT})")
    parser.add_argument("--word-bank", default=WORD_BANK_FILE,
                        help="Newline-delimited word bank file")
    parser.add_argument("--output", default=EXPORT_FILENAME,
                        help=f"Output PDF path (default: {EXPORT_FILENAME})")
    parser.add_argument("--title", default=None, help="Document title")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Run the export; returns a process exit code."""
    args = parse_args(argv)
    day = args.date or date.today()
    title = args.title or f"{PAGE_TITLE} - Words for {day.strftime('%B %d, %Y')}"

    try:
        if args.word_bank:
            selector = DailyWordSelector.from_file(args.word_bank, count=args.count)
        else:
            selector = DailyWordSelector(count=args.count)
        words = selector.select(day)
        logger.info(f"Words for {day.isoformat()}: {', '.join(words)}")

        try:
            llm_client = LLMClient()
        except ValueError as e:
            logger.warning(f"LLM unavailable, exporting placeholder details: {e}")
            llm_client = None

        details = WordDetailGenerator(llm_client).generate(words)

        result = DocumentPaginator().export(details, title)
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(result.content)

        logger.info(f"✓ Wrote {result.page_count} page(s) to {output}")
        if result.notice:
            logger.warning(result.notice)
        return 0

    except ExportError as e:
        logger.error(f"Export failed: {e.message}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Export interrupted by user")
        return 1
    except Exception as e:
        logger.error(f"Export failed: {str(e)}", exc_info=True)
        return 1


if __name__ == "__main__":
    setup_logging(LOG_LEVEL, LOG_FORMAT)
    sys.exit(main())
