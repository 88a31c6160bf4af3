"""Shared fakes for the network collaborators (proxy relay and grammar service)."""

from typing import Dict, List

import pytest

from pagecheck.models.content import TypoMatch
from pagecheck.services.relay import TransportExhausted


class FakeRelay:
    """Serves canned HTML; any URL not in *pages* behaves as if every proxy failed."""

    def __init__(self, pages: Dict[str, str]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url not in self.pages:
            raise TransportExhausted(url, 5)
        return self.pages[url]


class FakeGrammarClient:
    """Flags every chunk containing *word*, remembering the chunks it was sent."""

    def __init__(self, word: str = "teh", suggestions: List[str] | None = None) -> None:
        self.word = word
        self.suggestions = suggestions or ["the"]
        self.calls: List[tuple] = []

    async def check(self, chunks, language="en-US"):
        chunks = list(chunks)
        self.calls.append((chunks, language))
        return [
            TypoMatch(
                word=self.word,
                suggestions=self.suggestions,
                suggestion=", ".join(self.suggestions),
            )
            for chunk in chunks
            if self.word in chunk
        ]


@pytest.fixture
def make_relay():
    return FakeRelay


@pytest.fixture
def grammar_client():
    return FakeGrammarClient()
