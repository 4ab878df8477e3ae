"""
🧪 test_url_canonicalizer.py — канонізація посилань на товар

Перевіряє:
- Відкидання query та fragment
- Ідемпотентність
- Фолбек для неабсолютних рядків
- Перевірку http(s)-префікса
"""

import pytest

from pricewatch.shared.utils.url_canonicalizer import canonicalize, is_http_url


@pytest.mark.parametrize("raw,expected", [
    ("https://shop.example/item/42?ref=abc&utm_source=x", "https://shop.example/item/42"),
    ("https://shop.example/item/42#reviews", "https://shop.example/item/42"),
    ("https://shop.example/item/42?a=1#top", "https://shop.example/item/42"),
    ("  https://shop.example/item/42  ", "https://shop.example/item/42"),
    ("http://shop.example", "http://shop.example"),
])
def test_canonicalize_strips_query_and_fragment(raw, expected):
    assert canonicalize(raw) == expected


def test_canonicalize_is_idempotent():
    once = canonicalize("https://www.amazon.com/dp/B0TEST/ref=sr_1?keywords=x#y")
    assert canonicalize(once) == once
    assert once == "https://www.amazon.com/dp/B0TEST/ref=sr_1"


def test_urls_differing_only_in_query_share_a_key():
    assert canonicalize("https://a.example/p?x=1") == canonicalize("https://a.example/p?x=2")


def test_canonicalize_falls_back_to_truncation_for_relative_text():
    assert canonicalize("shop.example/item?x=1") == "shop.example/item"
    assert canonicalize("not a url#frag") == "not a url"


@pytest.mark.parametrize("raw,expected", [
    ("https://a.example/p", True),
    ("HTTP://A.EXAMPLE/P", True),
    ("ftp://a.example/p", False),
    ("a.example/p", False),
    ("", False),
])
def test_is_http_url(raw, expected):
    assert is_http_url(raw) is expected
