#!/usr/bin/env python3
"""
Main entry point for the overview scraper.
Uses YAML configuration for clean, developer-friendly setup.
"""

import asyncio
import logging
import sys
from datetime import datetime
from pathlib import Path

from overview_scraper.config import config
from overview_scraper.config_loader import ConfigLoader
from overview_scraper.models import SearchOptions
from overview_scraper.scraper import OverviewScraper
from overview_scraper.utils import setup_logging, print_summary, save_results_to_json

logger = logging.getLogger(__name__)

USAGE = """
AI Overview Scraper - YAML Configuration Based

Usage:
  python -m overview_scraper.main "query one" "query two"   # Scrape the given queries
  python -m overview_scraper.main                           # Scrape the queries listed in config.yaml
  python -m overview_scraper.main --serve                   # Run the HTTP API
  python -m overview_scraper.main --sample-config           # Create sample config.yaml

Configuration:
  The scraper uses config.yaml in the current directory or project root.
  If no config.yaml exists, sensible defaults are used.
  Environment variables (HEADLESS_MODE, SCRAPER_SITE, PORT, ...) override the file.
"""


async def run_queries(queries, options: SearchOptions, max_batch_size: int):
    """Scrape ``queries`` with one scraper and always release the browser."""
    scraper = OverviewScraper.from_config(config)
    try:
        if len(queries) == 1:
            outcomes = [await scraper.scrape_one(queries[0], options)]
        else:
            outcomes = await scraper.scrape_batch(queries[:max_batch_size], options)
    finally:
        await scraper.close()
    return [outcome.to_dict() for outcome in outcomes]


def serve() -> None:
    import uvicorn
    from overview_scraper.api import create_app

    print(f"🚀 AI Overview API server is running on port {config.api_port}")
    print(f"📡 API Documentation: http://localhost:{config.api_port}/")
    print(f"🏥 Health Check: http://localhost:{config.api_port}/api/health")
    uvicorn.run(create_app(settings=config), host=config.api_host, port=config.api_port)


def _log_file_for_run(base_log_file) -> str:
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    if base_log_file:
        base = Path(base_log_file)
        log_dir = base.parent if base.parent != Path('.') else Path('logs')
        name, ext = base.stem, base.suffix or '.log'
    else:
        log_dir, name, ext = Path('logs'), 'scraper', '.log'
    log_dir.mkdir(parents=True, exist_ok=True)
    return str(log_dir / f"{name}_{timestamp}{ext}")


def main(argv=None):
    """Main entry point for the overview scraper."""
    global logger
    argv = list(sys.argv[1:] if argv is None else argv)

    if '--help' in argv or '-h' in argv:
        print(USAGE)
        return 0

    if '--sample-config' in argv:
        ConfigLoader.create_sample_config()
        print("   Edit config.yaml to customize settings, then run: python -m overview_scraper.main")
        return 0

    try:
        yaml_config = ConfigLoader.load_config()
    except ValueError as e:
        print(f"❌ Error: {e}")
        return 1

    if yaml_config:
        config.update_from_yaml(yaml_config)
    config.update_from_env()

    log_settings = yaml_config.get('logging') or {}
    log_file = _log_file_for_run(log_settings.get('file'))
    logger = setup_logging(log_settings.get('level', 'INFO'), log_file)
    logger.info(f"Logging configured successfully - log file: {log_file}")

    config.validate()

    if '--serve' in argv:
        serve()
        return 0

    queries = [arg for arg in argv if not arg.startswith('--')] or list(yaml_config.get('queries') or [])
    if not queries:
        print("❌ Error: no queries given")
        print("   Pass queries as arguments or list them under 'queries' in config.yaml")
        return 1

    if len(queries) > config.max_batch_size:
        logger.warning(f"Only the first {config.max_batch_size} of {len(queries)} queries will be scraped")

    try:
        options = SearchOptions.from_mapping(yaml_config.get('search'))
    except (TypeError, ValueError) as e:
        print(f"❌ Error: invalid search options: {e}")
        return 1

    print("=" * 60)
    print(config)
    print("=" * 60)

    try:
        results = asyncio.run(run_queries(queries, options, config.max_batch_size))
    except KeyboardInterrupt:
        logger.warning("Scraping interrupted by user")
        print("\n⚠️  Scraping interrupted by user")
        return 1

    print_summary(results)

    save_json = (yaml_config.get('results') or {}).get('save_json')
    if save_json:
        save_results_to_json(results, save_json)
        print(f"\n💾 Detailed results saved to: {save_json}")

    return 0 if all(result['success'] for result in results) else 2


if __name__ == '__main__':
    sys.exit(main())
