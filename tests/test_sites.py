"""Tests for search URL construction and site profiles."""

from urllib.parse import parse_qs, urlparse

import pytest

from overview_scraper.models import SearchOptions
from overview_scraper.sites import (
    BING,
    GOOGLE,
    build_bing_search_url,
    build_google_search_url,
    get_site,
)


def _params(url):
    return {key: values[0] for key, values in parse_qs(urlparse(url).query).items()}


def test_google_url_uses_documented_defaults():
    url = build_google_search_url("seo agency")
    parsed = urlparse(url)
    assert parsed.scheme == "https"
    assert parsed.netloc == "www.google.com"
    assert parsed.path == "/search"
    assert _params(url) == {
        "q": "seo agency",
        "gl": "US",
        "hl": "en",
        "num": "10",
        "start": "0",
        "pws": "0",
    }


def test_google_url_reflects_overrides():
    options = SearchOptions(geo="DE", language="de", result_count=20, start=10, personalization=True)
    assert _params(build_google_search_url("zahnarzt berlin", options)) == {
        "q": "zahnarzt berlin",
        "gl": "DE",
        "hl": "de",
        "num": "20",
        "start": "10",
        "pws": "1",
    }


def test_google_url_encodes_query():
    url = build_google_search_url("c++ & rust?")
    assert "q=c%2B%2B+%26+rust%3F" in url
    assert _params(url)["q"] == "c++ & rust?"


def test_bing_url_maps_options():
    options = SearchOptions(geo="GB", language="en-GB", result_count=15)
    url = build_bing_search_url("seo agency", options)
    assert urlparse(url).netloc == "www.bing.com"
    assert _params(url) == {"q": "seo agency", "cc": "GB", "setLang": "en-GB", "count": "15"}


def test_bing_offset_becomes_first_result_index():
    assert _params(build_bing_search_url("q", SearchOptions(start=10)))["first"] == "11"


def test_site_profiles():
    assert get_site("google") is GOOGLE
    assert get_site("Bing") is BING
    assert GOOGLE.keywords
    assert BING.keywords == ()
    with pytest.raises(ValueError):
        get_site("altavista")
