"""Tests for hard/soft block classification."""

from overview_scraper.classifier import BlockRules, BlockVerdict, classify
from overview_scraper.sites import build_bing_search_url, build_google_search_url

SEARCH_URL = "https://www.google.com/search?q=seo+agency"


def test_block_url_is_hard_block_regardless_of_text():
    url = "https://www.google.com/sorry/index?continue=https://www.google.com/search"
    assert classify(url, "") is BlockVerdict.HARD_BLOCK
    assert classify(url, "Our systems have detected unusual traffic") is BlockVerdict.HARD_BLOCK
    assert classify(url, "Perfectly normal results") is BlockVerdict.HARD_BLOCK


def test_captcha_and_blocked_paths_are_hard_blocks():
    assert classify("https://example.com/captcha?id=1", "") is BlockVerdict.HARD_BLOCK
    assert classify("https://example.com/blocked", "") is BlockVerdict.HARD_BLOCK


def test_suspicion_text_is_soft_block():
    text = "Our systems have detected unusual traffic from your computer network."
    assert classify(SEARCH_URL, text) is BlockVerdict.SOFT_BLOCK
    assert classify(SEARCH_URL, "This page checks automated queries") is BlockVerdict.SOFT_BLOCK


def test_suspicion_text_beyond_scan_window_is_ignored():
    text = "a" * 600 + " unusual traffic"
    assert classify(SEARCH_URL, text) is BlockVerdict.NONE


def test_clean_page_is_not_blocked():
    assert classify(SEARCH_URL, "About 1,000,000 results") is BlockVerdict.NONE
    assert classify(SEARCH_URL, None) is BlockVerdict.NONE


def test_custom_rules_replace_defaults():
    rules = BlockRules(hard_url_patterns=("/challenge",), soft_text_phrases=("are you a robot",))
    assert classify("https://www.bing.com/challenge", "", rules) is BlockVerdict.HARD_BLOCK
    assert classify("https://www.google.com/sorry/index", "", rules) is BlockVerdict.NONE
    assert classify(SEARCH_URL, "Hmm, are you a robot?", rules) is BlockVerdict.SOFT_BLOCK


def test_block_words_in_search_terms_are_not_hard_blocks():
    assert classify(build_google_search_url("how to solve a captcha"), "About 1,000 results") is BlockVerdict.NONE
    assert classify(build_google_search_url("list of blocked websites"), "") is BlockVerdict.NONE
    assert classify(build_bing_search_url("sorry/index"), "") is BlockVerdict.NONE


def test_sorry_page_with_search_terms_in_query_is_hard_block():
    url = "https://www.google.com/sorry/index?continue=https://www.google.com/search%3Fq%3Dcaptcha&q=EgQ"
    assert classify(url, "") is BlockVerdict.HARD_BLOCK
