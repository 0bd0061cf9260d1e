"""Tests for overseas_reporter/common/dom_utils.py"""

from bs4 import BeautifulSoup

from overseas_reporter.common.dom_utils import (
    document_order,
    is_visible,
    visible_lines,
    visible_text,
)


def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


class TestIsVisible:
    def test_plain_element(self):
        soup = make_soup("<div><p id='p'>text</p></div>")
        assert is_visible(soup.find(id="p"))

    def test_hidden_attribute_on_ancestor(self):
        soup = make_soup("<div hidden><p id='p'>text</p></div>")
        assert not is_visible(soup.find(id="p"))

    def test_display_none_style(self):
        soup = make_soup("<div style='display: none'><p id='p'>text</p></div>")
        assert not is_visible(soup.find(id="p"))

    def test_aria_hidden(self):
        soup = make_soup("<span id='s' aria-hidden='true'>x</span>")
        assert not is_visible(soup.find(id="s"))


class TestVisibleText:
    def test_skips_hidden_and_script(self):
        soup = make_soup(
            "<div id='d'>Xanax <span hidden>secret</span><script>var x=1;</script> $1,000</div>"
        )
        assert visible_text(soup.find(id="d")) == "Xanax $1,000"

    def test_input_value(self):
        soup = make_soup("<div id='d'><input type='submit' value='BUY'></div>")
        assert visible_text(soup.find(id="d")) == "BUY"

    def test_lines(self):
        soup = make_soup("<div id='d'><h3>Sake</h3><p>Price: $8,000</p></div>")
        assert visible_lines(soup.find(id="d")) == ["Sake", "Price: $8,000"]


class TestDocumentOrder:
    def test_depth_first(self):
        soup = make_soup("<div id='a'><p id='b'></p></div><span id='c'></span>")
        order = document_order(soup)
        a, b, c = (soup.find(id=i) for i in "abc")
        assert order[id(a)] < order[id(b)] < order[id(c)]
