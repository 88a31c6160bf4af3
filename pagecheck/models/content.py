from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

ContentTag = Literal["h1", "h2", "h3", "h4", "h5", "h6", "p"]


class ContentElement(BaseModel):
    """One heading or paragraph taken from a page's main content, in document order."""

    model_config = ConfigDict(frozen=True)

    tag: ContentTag
    text: str = Field(min_length=1)


class DuplicateGroup(BaseModel):
    tag: ContentTag
    text: str
    positions: List[int]
    """1-based positions of every element sharing this exact tag and text."""


class TypoMatch(BaseModel):
    word: str
    suggestions: List[str]
    suggestion: str
    """``suggestions`` joined with ``", "``, ready for display."""
    message: str = ""
