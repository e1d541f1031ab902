"""Tests for the command-line entry point and result helpers."""

import json
import logging

import pytest

from overview_scraper import main as cli
from overview_scraper.config import config
from overview_scraper.utils import print_summary, save_results_to_json, summarize

RESULTS = [
    {"success": True, "query": "a", "hasAiOverview": True, "aiOverview": {"text": "Overview text"}},
    {"success": True, "query": "b", "hasAiOverview": False, "aiOverview": None},
    {"success": False, "query": "c", "hasAiOverview": False, "error": "🚫 SOFT BLOCK"},
]


@pytest.fixture(autouse=True)
def isolated_run():
    """main() mutates the global config and installs log handlers; undo both."""
    saved = dict(vars(config))
    yield
    config.__dict__.clear()
    config.__dict__.update(saved)
    package_logger = logging.getLogger("overview_scraper")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()


def test_help_prints_usage(capsys):
    assert cli.main(["--help"]) == 0
    assert "Usage:" in capsys.readouterr().out


def test_sample_config_is_written_to_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert cli.main(["--sample-config"]) == 0
    assert (tmp_path / "config.yaml").exists()


def test_invalid_config_exits_with_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("site: [oops\n", encoding="utf-8")
    assert cli.main(["seo agency"]) == 1
    assert "Invalid YAML" in capsys.readouterr().out


def test_no_queries_exits_with_error(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("logging:\n  level: WARNING\n", encoding="utf-8")
    assert cli.main([]) == 1
    assert "no queries given" in capsys.readouterr().out


def test_queries_run_and_partial_failures_exit_two(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text(
        "queries: [a, b, c]\nsearch:\n  geo: GB\nresults:\n  save_json: out.json\n", encoding="utf-8")
    calls = []

    async def fake_run_queries(queries, options, max_batch_size):
        calls.append((queries, options, max_batch_size))
        return RESULTS

    monkeypatch.setattr(cli, "run_queries", fake_run_queries)

    assert cli.main([]) == 2
    queries, options, _ = calls[0]
    assert queries == ["a", "b", "c"]
    assert options.geo == "GB"
    assert json.loads((tmp_path / "out.json").read_text(encoding="utf-8")) == RESULTS


def test_summarize_counts():
    assert summarize(RESULTS) == {"total": 3, "successful": 2, "failed": 1, "with_overview": 1}


def test_print_summary(capsys):
    print_summary(RESULTS)
    out = capsys.readouterr().out
    assert "Queries processed: 3" in out
    assert "✅ a: Overview text" in out
    assert "❌ c: 🚫 SOFT BLOCK" in out


def test_save_results_to_json(tmp_path):
    path = tmp_path / "results.json"
    save_results_to_json(RESULTS, str(path))
    assert json.loads(path.read_text(encoding="utf-8")) == RESULTS
