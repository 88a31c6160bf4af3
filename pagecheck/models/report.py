from typing import List, Literal

from pydantic import BaseModel

from pagecheck.models.content import DuplicateGroup, TypoMatch


class DuplicateReport(BaseModel):
    url: str
    status: Literal["ok", "no_content"]
    element_count: int
    duplicates: List[DuplicateGroup]


class GrammarReport(BaseModel):
    url: str
    status: Literal["ok", "no_text"]
    language: str
    chunk_count: int
    matches: List[TypoMatch]
