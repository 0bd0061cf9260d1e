"""Tests for overseas_reporter/extraction/parsers/strict_walker.py"""

import pytest
from bs4 import BeautifulSoup

from overseas_reporter.extraction.parsers.strict_walker import StrictSectionWalker


def walker_for(body: str) -> StrictSectionWalker:
    soup = BeautifulSoup(f"<html><body>{body}</body></html>", "lxml")
    return StrictSectionWalker(soup)


def row(name, price, stock):
    price_html = f'<span class="displayPrice___p">{price}</span>' if price else ""
    return (
        '<li class="row___r">'
        f'<button class="itemNameButton___n">{name}</button>'
        f'{price_html}'
        f'<span data-tt-content-type="stock">{stock}</span>'
        '</li>'
    )


class TestExtractItems:
    def test_strict_page(self, strict_page):
        items = StrictSectionWalker(strict_page.document).extract_items()
        assert [(i.name, i.unit_cost, i.stock, i.shop) for i in items] == [
            ("Xanax", 1000, 12, "General Store"),
            ("Flowers", 45, 200, "General Store"),
        ]

    def test_multiple_sections(self):
        walker = walker_for(
            '<div class="shopHeader___h">General Store</div>'
            f'<ul>{row("Flowers", "$45", "Stock 10")}</ul>'
            '<div class="shopHeader___h">Arms Dealer</div>'
            f'<ul>{row("Knife", "$1.2k", "Stock: 1,234")}</ul>'
        )
        items = walker.extract_items()
        assert [(i.name, i.shop) for i in items] == [
            ("Flowers", "General Store"),
            ("Knife", "Arms Dealer"),
        ]
        assert items[1].unit_cost == 1200
        assert items[1].stock == 1234

    def test_unrecognized_header_ends_section(self):
        walker = walker_for(
            '<div class="shopHeader___h">General Store</div>'
            f'<ul>{row("Flowers", "$45", "Stock 10")}</ul>'
            '<div class="sectionHeader___h">Featured Deals</div>'
            f'<ul>{row("Teddy Bear", "$500", "Stock 3")}</ul>'
        )
        assert [i.name for i in walker.extract_items()] == ["Flowers"]

    def test_rows_before_first_header_ignored(self):
        walker = walker_for(
            f'<ul>{row("Orphan", "$5", "Stock 1")}</ul>'
            '<div class="shopHeader___h">General Store</div>'
            f'<ul>{row("Flowers", "$45", "Stock 10")}</ul>'
        )
        assert [i.name for i in walker.extract_items()] == ["Flowers"]

    def test_row_missing_price_dropped(self):
        walker = walker_for(
            '<div class="shopHeader___h">General Store</div>'
            f'<ul>{row("Broken", None, "Stock 10")}</ul>'
        )
        assert walker.extract_items() == []

    def test_no_headers_returns_empty(self):
        walker = walker_for(f'<ul>{row("Flowers", "$45", "Stock 10")}</ul>')
        assert walker.extract_items() == []

    def test_table_rows_by_column(self):
        walker = walker_for(
            '<div class="shopHeader___h">Arms Dealer</div>'
            '<table>'
            '<tr><td></td><td>Knife</td><td>Melee</td><td>$500</td>'
            '<td>Stock 20</td><td>1</td><td>Buy</td></tr>'
            '<tr><td></td><td>Short</td><td>$5</td></tr>'
            '</table>'
        )
        items = walker.extract_items()
        assert len(items) == 1
        assert (items[0].name, items[0].unit_cost, items[0].stock) == ("Knife", 500, 20)
        assert items[0].shop == "Arms Dealer"


class TestNormalizeShopName:
    def test_keyword_match(self):
        walker = walker_for("")
        assert walker.normalize_shop_name("Black Market Deals") == "Black Market"
        assert walker.normalize_shop_name("ARMS") == "Arms Dealer"

    def test_unknown(self):
        walker = walker_for("")
        assert walker.normalize_shop_name("Featured") is None
        assert walker.normalize_shop_name("") is None


class TestSelectorValidation:
    def test_missing_roles_raise(self):
        soup = BeautifulSoup("<html></html>", "lxml")
        with pytest.raises(ValueError, match="row"):
            StrictSectionWalker(soup, selectors={"strict": {"header": "h2"}}, header_keywords={})
