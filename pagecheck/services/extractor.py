from typing import List

from bs4 import BeautifulSoup, Tag

from pagecheck.models.content import ContentElement
from pagecheck.services.sanitizer import strip_boilerplate

CONTENT_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6", "p")


def _find_main_content(soup: BeautifulSoup) -> BeautifulSoup | Tag:
    """Return the ``<main>`` element, falling back to ``<body>`` or the whole tree."""
    return soup.find("main") or soup.find("body") or soup


def extract_elements(html: str) -> List[ContentElement]:
    """Return the non-empty headings and paragraphs of *html*'s main content.

    Boilerplate subtrees are stripped from the content region before any text
    is collected, so navigation or footer text never shows up.  Elements are
    returned in document order.
    """
    soup = BeautifulSoup(html, "lxml")
    main_node = strip_boilerplate(_find_main_content(soup))

    elements: List[ContentElement] = []
    for node in main_node.find_all(CONTENT_TAGS):
        text = node.get_text().strip()
        if text:
            elements.append(ContentElement(tag=node.name, text=text))
    return elements


def extract_text(html: str) -> str:
    """Return the main-content text of *html*, one element per line."""
    return "\n".join(element.text for element in extract_elements(html))
