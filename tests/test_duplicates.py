"""Tests for pagecheck.services.duplicates."""

import asyncio
import itertools

import pytest

from pagecheck.models.content import ContentElement
from pagecheck.services.duplicates import check_page_duplicates, detect_duplicates
from pagecheck.services.relay import TransportExhausted


def _elements(*pairs):
    return [ContentElement(tag=tag, text=text) for tag, text in pairs]


def _groups(elements):
    return [(g.tag, g.text, g.positions) for g in detect_duplicates(elements)]


class TestDetectDuplicates:
    def test_reports_groups_with_positions(self):
        elements = _elements(
            ("h1", "Welcome"), ("p", "Hello"), ("h1", "Welcome"), ("p", "Bye"), ("p", "Hello")
        )
        assert _groups(elements) == [
            ("h1", "Welcome", [1, 3]),
            ("p", "Hello", [2, 5]),
        ]

    def test_distinct_elements_have_no_duplicates(self):
        elements = _elements(("h1", "A"), ("p", "B"), ("h2", "C"))
        assert detect_duplicates(elements) == []

    def test_empty_input(self):
        assert detect_duplicates([]) == []

    def test_same_text_under_different_tags_is_not_a_duplicate(self):
        elements = _elements(("h2", "Pricing"), ("p", "Pricing"))
        assert detect_duplicates(elements) == []

    def test_matching_is_case_sensitive(self):
        elements = _elements(("p", "Contact us"), ("p", "contact us"))
        assert detect_duplicates(elements) == []

    def test_text_containing_separator_like_characters(self):
        elements = _elements(("p", "Note:: read this"), ("p", "Note:: read this"))
        assert _groups(elements) == [("p", "Note:: read this", [1, 2])]

    def test_three_occurrences_share_one_group(self):
        elements = _elements(("p", "Buy now"), ("h3", "Offer"), ("p", "Buy now"), ("p", "Buy now"))
        assert _groups(elements) == [("p", "Buy now", [1, 3, 4])]

    def test_groups_follow_first_occurrence_order(self):
        elements = _elements(("p", "B"), ("p", "A"), ("p", "A"), ("p", "B"))
        assert [g.text for g in detect_duplicates(elements)] == ["B", "A"]

    def test_every_group_has_at_least_two_positions(self):
        elements = _elements(*[("p", str(i % 4)) for i in range(11)] + [("h1", "solo")])
        groups = detect_duplicates(elements)
        assert all(len(g.positions) >= 2 for g in groups)
        assert sum(len(g.positions) for g in groups) <= len(elements)
        for g in groups:
            assert g.positions == sorted(set(g.positions))

    def test_permutation_changes_positions_not_groups(self):
        base = [("h1", "X"), ("p", "Y"), ("h1", "X"), ("p", "Z"), ("p", "Y")]
        expected = {("h1", "X"), ("p", "Y")}
        for order in itertools.permutations(base):
            groups = detect_duplicates(_elements(*order))
            assert {(g.tag, g.text) for g in groups} == expected


class TestCheckPageDuplicates:
    def test_report_for_page_with_repeats(self, make_relay):
        html = """
        <body>
          <header><h1>Brand</h1></header>
          <main>
            <h1>Welcome</h1><p>Hello</p><h1>Welcome</h1><p>Bye</p><p>Hello</p>
          </main>
          <footer><p>Hello</p></footer>
        </body>
        """
        relay = make_relay({"https://ex.com/": html})
        report = asyncio.run(check_page_duplicates("https://ex.com/", relay))

        assert report.status == "ok"
        assert report.element_count == 5
        assert [(g.tag, g.text, g.positions) for g in report.duplicates] == [
            ("h1", "Welcome", [1, 3]),
            ("p", "Hello", [2, 5]),
        ]

    def test_page_without_content(self, make_relay):
        relay = make_relay({"https://ex.com/": "<body><nav><p>Menu</p></nav></body>"})
        report = asyncio.run(check_page_duplicates("https://ex.com/", relay))
        assert report.status == "no_content"
        assert report.element_count == 0
        assert report.duplicates == []

    def test_unique_content(self, make_relay):
        relay = make_relay({"https://ex.com/": "<main><h1>Only</h1><p>Once</p></main>"})
        report = asyncio.run(check_page_duplicates("https://ex.com/", relay))
        assert report.status == "ok"
        assert report.duplicates == []

    def test_fetch_failure_propagates(self, make_relay):
        with pytest.raises(TransportExhausted):
            asyncio.run(check_page_duplicates("https://ex.com/", make_relay({})))
