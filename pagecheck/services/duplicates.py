"""Duplicate block detection within a single page.

Headings and paragraphs that repeat verbatim inside a page's main content
(copy-paste leftovers, repeated calls to action, …) are grouped together with
the positions at which they occur.
"""

import logging
from typing import Dict, List, Sequence, Tuple

from pagecheck.models.content import ContentElement, DuplicateGroup
from pagecheck.models.report import DuplicateReport
from pagecheck.services.extractor import extract_elements
from pagecheck.services.relay import FetchRelay

logger = logging.getLogger(__name__)


def detect_duplicates(elements: Sequence[ContentElement]) -> List[DuplicateGroup]:
    """Group *elements* sharing an identical tag and text.

    Matching is exact and case-sensitive.  Positions are 1-based indices into
    *elements*.  Groups are ordered by the first occurrence of their key and
    only keys seen at least twice are reported.
    """
    seen: Dict[Tuple[str, str], List[int]] = {}
    for position, element in enumerate(elements, start=1):
        seen.setdefault((element.tag, element.text), []).append(position)

    return [
        DuplicateGroup(tag=tag, text=text, positions=positions)
        for (tag, text), positions in seen.items()
        if len(positions) > 1
    ]


async def check_page_duplicates(url: str, relay: FetchRelay) -> DuplicateReport:
    """Fetch *url* and report duplicated headings and paragraphs in its main content."""
    html = await relay.fetch(url)
    elements = extract_elements(html)
    if not elements:
        logger.info("Duplicates: no content found on %s", url)
        return DuplicateReport(url=url, status="no_content", element_count=0, duplicates=[])

    duplicates = detect_duplicates(elements)
    logger.debug("Duplicates: %d group(s) among %d elements on %s", len(duplicates), len(elements), url)
    return DuplicateReport(
        url=url, status="ok", element_count=len(elements), duplicates=duplicates
    )
