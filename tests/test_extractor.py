"""Tests for pagecheck.services.extractor and the boilerplate stripping it relies on."""

from bs4 import BeautifulSoup

from pagecheck.services.extractor import extract_elements, extract_text
from pagecheck.services.sanitizer import BOILERPLATE_TAGS, strip_boilerplate


def _pairs(html: str):
    return [(e.tag, e.text) for e in extract_elements(html)]


class TestStripBoilerplate:
    def test_removes_every_boilerplate_tag(self):
        html = "".join(f"<{t}>noise-{t}</{t}>" for t in BOILERPLATE_TAGS) + "<p>Keep</p>"
        soup = strip_boilerplate(BeautifulSoup(html, "lxml"))
        text = soup.get_text()
        assert "noise" not in text
        assert "Keep" in text

    def test_nested_boilerplate_is_removed_once(self):
        html = "<header><nav><p>Menu</p></nav><p>Logo</p></header><p>Body</p>"
        soup = strip_boilerplate(BeautifulSoup(html, "lxml"))
        assert soup.get_text().strip() == "Body"

    def test_returns_the_node_it_was_given(self):
        soup = BeautifulSoup("<div><p>x</p></div>", "lxml")
        div = soup.find("div")
        assert strip_boilerplate(div) is div


class TestMainContentSelection:
    def test_prefers_main_element(self):
        html = """
        <body>
          <p>Outside main</p>
          <main><h1>Inside</h1><p>Main paragraph</p></main>
        </body>
        """
        assert _pairs(html) == [("h1", "Inside"), ("p", "Main paragraph")]

    def test_falls_back_to_body(self):
        html = "<html><body><h2>Title</h2><p>Text</p></body></html>"
        assert _pairs(html) == [("h2", "Title"), ("p", "Text")]

    def test_empty_document(self):
        assert extract_elements("") == []


class TestExtractElements:
    def test_boilerplate_text_never_appears(self):
        html = """
        <body>
          <header><h1>Site name</h1></header>
          <nav><p>Home | About</p></nav>
          <h1>Article</h1>
          <form><p>Subscribe</p></form>
          <p>Story text.</p>
          <footer><p>Copyright</p></footer>
        </body>
        """
        assert _pairs(html) == [("h1", "Article"), ("p", "Story text.")]

    def test_document_order_across_tags(self):
        html = "<main><h2>Second level</h2><p>Para</p><h1>Top level</h1><h6>Tiny</h6></main>"
        assert [e.tag for e in extract_elements(html)] == ["h2", "p", "h1", "h6"]

    def test_text_is_trimmed_and_empty_elements_dropped(self):
        html = "<main><p>   padded   </p><p>   </p><h3></h3><p>\n\tnext\n</p></main>"
        assert _pairs(html) == [("p", "padded"), ("p", "next")]

    def test_inline_markup_is_flattened(self):
        html = "<main><p>Hello <strong>bold</strong> <a href='/x'>world</a></p></main>"
        assert _pairs(html) == [("p", "Hello bold world")]

    def test_script_inside_content_is_removed(self):
        html = "<main><p>Visible<script>var hidden = 1;</script></p><style>p{}</style></main>"
        assert _pairs(html) == [("p", "Visible")]

    def test_other_tags_are_ignored(self):
        html = "<main><div>Div text</div><li>Item</li><span>Span</span><p>Para</p></main>"
        assert _pairs(html) == [("p", "Para")]


class TestExtractText:
    def test_joins_elements_with_newlines(self):
        html = "<main><h1>Title</h1><p>One</p><p>Two</p></main>"
        assert extract_text(html) == "Title\nOne\nTwo"

    def test_no_content_returns_empty_string(self):
        html = "<body><nav><p>Only navigation</p></nav></body>"
        assert extract_text(html) == ""
