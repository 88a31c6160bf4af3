from typing import List, Optional

from pydantic import BaseModel

from pagecheck.models.report import DuplicateReport, GrammarReport


class DuplicateBatchItem(BaseModel):
    url: str
    ok: bool
    report: Optional[DuplicateReport] = None
    error: Optional[str] = None


class DuplicateBatchResponse(BaseModel):
    items: List[DuplicateBatchItem]


class GrammarBatchItem(BaseModel):
    url: str
    ok: bool
    report: Optional[GrammarReport] = None
    error: Optional[str] = None


class GrammarBatchResponse(BaseModel):
    items: List[GrammarBatchItem]
