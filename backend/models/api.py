"""API request and response models."""
from typing import List, Optional

from pydantic import BaseModel, Field

from .word import WordDetail


class WordsRequest(BaseModel):
    """Request body for generating details of arbitrary words."""
    words: List[str] = Field(..., min_length=1)


class WordsResponse(BaseModel):
    """Generated word details."""
    words: List[WordDetail]


class DailyWordsResponse(BaseModel):
    """Today's words with their generated details."""
    date: str
    title: str
    words: List[WordDetail]


class ExportRequest(BaseModel):
    """Records to lay out into a PDF."""
    records: List[WordDetail]
    title: Optional[str] = None
