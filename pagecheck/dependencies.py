"""FastAPI dependencies that build the network collaborators.

Tests replace these through ``app.dependency_overrides``.
"""

from pagecheck.services.grammar import GrammarClient
from pagecheck.services.relay import DEFAULT_PROXIES, FetchRelay


def get_relay() -> FetchRelay:
    return FetchRelay(DEFAULT_PROXIES)


def get_grammar_client() -> GrammarClient:
    return GrammarClient()
