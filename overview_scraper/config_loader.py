"""
YAML configuration loader for the overview scraper.
"""

import logging
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


SAMPLE_CONFIG = """# Overview Scraper Configuration
# All settings are optional - defaults will be used if not specified

# Target search engine: google or bing
site: google

# Queries to run when none are given on the command line
queries:
  - seo agency
  - digital marketing

# Browser Settings
browser:
  headless: true
  launch_timeout: 60  # seconds
  enable_stealth: false  # apply playwright-stealth on top of the built-in overrides

# Timeout Settings (seconds)
timeouts:
  page_load: 20

# Pacing Settings (seconds)
pacing:
  min_request_interval: 5
  pre_navigation_delay: [2, 5]
  homepage_delay: [3, 5]
  content_delay: [4, 6]
  inter_query_delay: 3

# Block Detection
detection:
  hard_block_url_patterns:
    - sorry/index
    - captcha
    - blocked
  soft_block_phrases:
    - unusual traffic
    - automated queries

# Diagnostics written when a block page is detected
diagnostics:
  dir: diagnostics
  save_html: true

# Search options applied to every query
search:
  geo: US
  language: en
  result_count: 10
  start: 0
  personalization: false

# HTTP API Settings
api:
  host: 0.0.0.0
  port: 3000
  max_batch_size: 10

# Logging Settings
logging:
  level: INFO  # DEBUG, INFO, WARNING, ERROR
  file: null  # Optional log file path

# Results Settings
results:
  save_json: null  # Optional path to save results JSON
"""


class ConfigLoader:
    """Handles loading of YAML configuration files."""

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Search order:
        1. Explicit config_path if provided
        2. config.yaml in current directory
        3. config.yaml in project root
        4. Returns empty dict (will use defaults)

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Dictionary of configuration values
        """
        if config_path:
            config_file = Path(config_path)
            if not config_file.exists():
                logger.warning(f"Config file not found at explicit path: {config_path}")
                return {}
        else:
            config_file = Path("config.yaml")
            if not config_file.exists():
                config_file = Path(__file__).parent.parent / "config.yaml"
                if not config_file.exists():
                    logger.info("No config.yaml found, using defaults")
                    return {}

        try:
            logger.info(f"Loading configuration from: {config_file}")
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.error(f"Error parsing YAML config file: {e}")
            raise ValueError(f"Invalid YAML in config file: {e}")

        if not isinstance(config_data, dict):
            raise ValueError(f"Config file must contain a mapping, got {type(config_data).__name__}")

        logger.info(f"Successfully loaded configuration from {config_file}")
        return config_data

    @staticmethod
    def create_sample_config(output_path: Path = Path("config.yaml")) -> None:
        """
        Create a sample config.yaml file with all available options.

        Args:
            output_path: Path where to create the sample config file
        """
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(SAMPLE_CONFIG)
        logger.info(f"Sample config file created at: {output_path}")
        print(f"✅ Sample config file created at: {output_path}")
