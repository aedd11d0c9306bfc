"""Deterministic day-of-year word selection."""
import logging
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_WORD_BANK = [
    "ephemeral", "ubiquitous", "serendipity", "mellifluous", "labyrinthine",
    "eloquent", "pernicious", "ineffable", "quixotic", "sonorous",
    "perfunctory", "ebullient", "laconic", "obfuscate", "resilient",
    "cacophony", "fastidious", "gregarious", "juxtapose", "meticulous",
    "nostalgia", "panacea", "quintessential", "sycophant", "tenacious",
    "vicarious", "wistful", "zealous", "ameliorate", "candor",
    "diligent", "enigma", "facetious", "hapless", "idyllic",
]


class DailyWordSelector:
    """Picks a fixed-size, calendar-based slice of a word bank."""

    def __init__(self, word_bank: Optional[Iterable[str]] = None, count: int = 5):
        """
        Args:
            word_bank: Words to rotate through (defaults to the built-in bank)
            count: Words per day
        """
        if count < 1:
            raise ValueError("count must be at least 1")

        bank: List[str] = []
        seen = set()
        for word in (word_bank if word_bank is not None else DEFAULT_WORD_BANK):
            word = word.strip()
            if word and word.lower() not in seen:
                seen.add(word.lower())
                bank.append(word)

        if not bank:
            raise ValueError("word bank is empty")

        self.word_bank = bank
        self.count = count

    @classmethod
    def from_file(cls, path: str, count: int = 5) -> "DailyWordSelector":
        """Load a newline-delimited bank; blank lines and # comments are skipped."""
        lines = Path(path).read_text(encoding="utf-8").splitlines()
        words = [line for line in lines if line.strip() and not line.lstrip().startswith("#")]
        logger.info(f"Loaded {len(words)} words from {path}")
        return cls(words, count=count)

    def select(self, day: Optional[date] = None) -> List[str]:
        """
        Return the words for a given day.

        The slice starts at (day_of_year - 1) * count and wraps around the
        bank, so consecutive days get consecutive slices.
        """
        day = day or date.today()
        size = len(self.word_bank)
        start = ((day.timetuple().tm_yday - 1) * self.count) % size
        return [self.word_bank[(start + offset) % size] for offset in range(min(self.count, size))]
