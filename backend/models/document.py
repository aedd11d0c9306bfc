"""Document layout data models."""
from dataclasses import dataclass, field
from typing import List


@dataclass
class DocumentLayoutState:
    """Vertical cursor used while laying out a single export."""
    page_width: float
    page_height: float
    margin: float
    line_height: float
    y: float = 0.0  # offset from the top edge of the current page
    page_number: int = 1
    records_on_page: int = 0

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        return self.page_height - self.margin


@dataclass
class PlacedLine:
    """A line of text positioned on a page."""
    text: str
    y: float
    font_name: str
    font_size: float
    centered: bool = False
    grey: bool = False


@dataclass
class PageLayout:
    """All lines placed on one page, plus which of them start a record."""
    page_number: int
    lines: List[PlacedLine] = field(default_factory=list)
    record_starts: List[float] = field(default_factory=list)  # y of each record's first line
