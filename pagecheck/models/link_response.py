from typing import List, Literal, Optional

from pydantic import BaseModel

LinkStatus = Literal["reachable", "unreachable", "malformed"]


class LinkResult(BaseModel):
    url: str
    status: LinkStatus
    error: Optional[str] = None


class LinksResponse(BaseModel):
    base_url: str
    pages: List[str]
    """Same-origin pages that answered through the relay, in discovery order."""
    results: List[LinkResult]
