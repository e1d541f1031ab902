"""Tests for selector-catalog extraction and the keyword fallback."""

from overview_scraper.extractor import extract
from overview_scraper.selector_catalog import (
    BING_SELECTORS,
    GOOGLE_SELECTORS,
    KEYWORD_SELECTOR,
    OVERVIEW_KEYWORDS,
    SelectorRule,
)

LONG = "Search engine optimisation agencies improve how a site ranks in organic results. " * 2
LONGER = "A much longer block of result text that would win if length decided matches. " * 5


def test_first_catalog_rule_wins_over_longer_later_match():
    html = f"""
    <html><body>
      <div class="VwiC3b">{LONGER}</div>
      <div data-attrid="FeaturedSnippet">{LONG}</div>
    </body></html>
    """
    result = extract(html, GOOGLE_SELECTORS)
    assert result is not None
    assert result.selector == '[data-attrid="FeaturedSnippet"]'
    assert result.text == LONG.strip()
    assert result.keyword is None


def test_rule_below_minimum_length_is_skipped():
    html = f"""
    <html><body>
      <div data-attrid="FeaturedSnippet">Too short</div>
      <div class="hgKElc">{LONG}</div>
    </body></html>
    """
    result = extract(html, GOOGLE_SELECTORS)
    assert result.selector == '.hgKElc'


def test_only_first_element_of_a_selector_is_considered():
    catalog = (SelectorRule('.card', 50), SelectorRule('.other', 50))
    html = f"""
    <html><body>
      <div class="card">short</div>
      <div class="card">{LONG}</div>
      <div class="other">{LONG}</div>
    </body></html>
    """
    result = extract(html, catalog, keywords=())
    assert result.selector == '.other'


def test_inner_markup_is_returned():
    html = f'<html><body><div class="hgKElc"><b>Bold</b> {LONG}</div></body></html>'
    result = extract(html, GOOGLE_SELECTORS)
    assert result.html.startswith("<b>Bold</b>")
    assert result.text.startswith("Bold")


def test_no_match_returns_none():
    html = "<html><body><div class='nothing'>Plain results page</div></body></html>"
    assert extract(html, GOOGLE_SELECTORS, OVERVIEW_KEYWORDS) is None


def test_empty_markup_returns_none():
    assert extract("") is None


def test_keyword_fallback_tags_the_marker_phrase():
    trailing = "Generated summaries explain the topic in a few sentences and cite several sources. " * 2
    html = f"""
    <html><body>
      <section id="panel">
        <h2>Overview</h2>
        <p>{trailing}</p>
      </section>
    </body></html>
    """
    result = extract(html, GOOGLE_SELECTORS, OVERVIEW_KEYWORDS)
    assert result is not None
    assert result.selector == KEYWORD_SELECTOR
    assert result.keyword == "Overview"
    assert result.text.startswith("Overview")
    assert len(result.text) > 100
    assert "<h2>Overview</h2>" in result.html


def test_keyword_fallback_uses_phrase_order():
    filler = "x" * 120
    html = f"""
    <html><body>
      <div><span>Overview</span> {filler}</div>
      <div><span>AI-generated</span> {filler}</div>
    </body></html>
    """
    result = extract(html, (), OVERVIEW_KEYWORDS)
    assert result.keyword == "AI-generated"


def test_keyword_fallback_not_used_when_selector_matches():
    html = f"""
    <html><body>
      <div><span>AI-generated</span> {'y' * 150}</div>
      <div class="hgKElc">{LONG}</div>
    </body></html>
    """
    result = extract(html, GOOGLE_SELECTORS, OVERVIEW_KEYWORDS)
    assert result.selector == '.hgKElc'
    assert result.keyword is None


def test_keyword_inside_script_is_ignored():
    html = f"""
    <html><head><script>var label = "Overview"; {'z' * 200}</script></head>
    <body><p>Ordinary page</p></body></html>
    """
    assert extract(html, (), OVERVIEW_KEYWORDS) is None


def test_keyword_fallback_requires_enough_text():
    html = "<html><body><div>Overview of nothing much</div></body></html>"
    assert extract(html, (), OVERVIEW_KEYWORDS) is None


def test_bing_catalog_uses_lower_threshold():
    text = "Bing answer card with forty characters!!"
    assert 30 < len(text) <= 50
    html = f'<html><body><div class="b_ans">{text}</div></body></html>'
    result = extract(html, BING_SELECTORS, ())
    assert result.selector == '.b_ans'
    assert extract(html.replace("b_ans", "hgKElc"), GOOGLE_SELECTORS, ()) is None


def test_keyword_in_page_title_is_ignored():
    html = """
    <html><head><title>AI Overview - Google Search</title></head>
    <body><div class="g">ordinary blue link result text or a short snippet</div></body></html>
    """
    assert extract(html, GOOGLE_SELECTORS, OVERVIEW_KEYWORDS) is None


def test_keyword_fallback_never_returns_the_whole_body():
    filler = "unrelated result text " * 10
    html = f"<html><body><span>Overview</span> {filler}</body></html>"
    assert extract(html, (), OVERVIEW_KEYWORDS) is None
