"""
Utility functions for the overview scraper.
Includes logging setup, result export and summary printing.
"""

import json
import logging
import sys
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = 'INFO', log_file: Optional[str] = None) -> logging.Logger:
    """
    Set up logging configuration for the scraper.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path

    Returns:
        Configured package logger
    """
    logger = logging.getLogger('overview_scraper')
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not create log file {log_file}: {e}")

    return logger


def save_results_to_json(results: List[Dict[str, Any]], output_file: str) -> None:
    """
    Save serialized outcomes to a JSON file.

    Args:
        results: Outcome dictionaries
        output_file: Output file path
    """
    logger.info(f"Saving {len(results)} results to JSON file: {output_file}")
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(results, f, indent=2, ensure_ascii=False, default=str)
    logger.info(f"Results saved successfully to {output_file}")


def summarize(results: List[Dict[str, Any]]) -> Dict[str, int]:
    summary = {'total': len(results), 'successful': 0, 'failed': 0, 'with_overview': 0}
    for result in results:
        if result.get('success'):
            summary['successful'] += 1
        else:
            summary['failed'] += 1
        if result.get('hasAiOverview'):
            summary['with_overview'] += 1
    return summary


def print_summary(results: List[Dict[str, Any]]) -> None:
    """
    Print a formatted summary of scraping results.

    Args:
        results: Outcome dictionaries
    """
    summary = summarize(results)

    print("\n" + "=" * 60)
    print("AI OVERVIEW SCRAPER SUMMARY")
    print("=" * 60)
    print(f"Queries processed: {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed: {summary['failed']}")
    print(f"With AI overview: {summary['with_overview']}")
    print()

    for result in results:
        if result.get('success') and result.get('hasAiOverview'):
            preview = result['aiOverview']['text'][:200]
            print(f"✅ {result['query']}: {preview}...")
        elif result.get('success'):
            print(f"ℹ️  {result['query']}: no AI overview found")
        else:
            print(f"❌ {result['query']}: {result.get('error')}")

    print("=" * 60)
