"""Word detail data models."""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class WordDetail(BaseModel):
    """One generated record for a requested word."""
    word: str
    sentence: str
    meaning: str
    pronunciation: str


class FailureReason(str, Enum):
    """Why a placeholder was substituted for generated text."""
    UNAVAILABLE = "unavailable"  # no usable model output
    ERROR = "error"              # the model call raised
    MISSING = "missing"          # a field or record was absent from valid output


PLACEHOLDER_TEXT = {
    FailureReason.UNAVAILABLE: "Details are currently unavailable for this word.",
    FailureReason.ERROR: "Could not retrieve details at this time.",
    FailureReason.MISSING: "Not provided.",
}


def placeholder_for(reason: FailureReason) -> str:
    """Return the fixed placeholder string for a failure reason."""
    return PLACEHOLDER_TEXT[reason]


class RawWordDetail(BaseModel):
    """A single record as emitted by the model; every field may be absent."""
    word: Optional[str] = None
    sentence: Optional[str] = None
    meaning: Optional[str] = None
    pronunciation: Optional[str] = None


class GenerationPayload(BaseModel):
    """Expected top-level shape of the model's JSON output."""
    word_details: List[RawWordDetail] = Field(alias="wordDetails", min_length=1)
