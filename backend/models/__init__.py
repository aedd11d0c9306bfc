"""Data models for LexiDaily."""
from .word import WordDetail, FailureReason, RawWordDetail, GenerationPayload, placeholder_for
from .document import DocumentLayoutState, PageLayout, PlacedLine
from .notification import Notification
from .api import WordsRequest, WordsResponse, DailyWordsResponse, ExportRequest

__all__ = [
    "WordDetail",
    "FailureReason",
    "RawWordDetail",
    "GenerationPayload",
    "placeholder_for",
    "DocumentLayoutState",
    "PageLayout",
    "PlacedLine",
    "Notification",
    "WordsRequest",
    "WordsResponse",
    "DailyWordsResponse",
    "ExportRequest",
]
