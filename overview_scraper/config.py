"""
Configuration module for the overview scraper.
Handles browser, timeout, pacing, and block-detection settings.
Supports YAML configuration files and environment variable overrides.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Any, Tuple

from overview_scraper.classifier import BlockRules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PacingPolicy:
    """
    Every timing constant of the pipeline, in seconds.

    Ranges are (min, max) pairs for uniformly jittered waits.
    """

    min_request_interval: float = 5.0
    pre_navigation_delay: Tuple[float, float] = (2.0, 5.0)
    homepage_delay: Tuple[float, float] = (3.0, 5.0)
    content_delay: Tuple[float, float] = (4.0, 6.0)
    inter_query_delay: float = 3.0


DEFAULT_BROWSER_ARGS = [
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-blink-features=AutomationControlled',
    '--disable-features=VizDisplayCompositor',
    '--no-first-run',
    '--disable-gpu',
    '--disable-background-timer-throttling',
    '--disable-backgrounding-occluded-windows',
    '--disable-renderer-backgrounding',
    '--disable-default-apps',
    '--disable-extensions',
    '--disable-sync',
    '--no-default-browser-check',
    '--no-pings',
    '--disable-client-side-phishing-detection',
    '--disable-component-extensions-with-background-pages',
]


def _as_range(value, default: Tuple[float, float]) -> Tuple[float, float]:
    """Accept [min, max] lists or {min, max} mappings from YAML."""
    if isinstance(value, dict):
        return float(value.get('min', default[0])), float(value.get('max', default[1]))
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return float(value[0]), float(value[1])
    raise ValueError(f"Expected a [min, max] pair, got: {value!r}")


class ScraperConfig:
    """Configuration class for the overview scraper with all settings."""

    def __init__(self):
        logger.debug("Initializing ScraperConfig")

        # Target site ("google" or "bing")
        self.site = 'google'

        # Browser settings
        self.browser_headless = True
        self.browser_args = list(DEFAULT_BROWSER_ARGS)
        self.launch_timeout = 60  # seconds
        self.enable_stealth = False  # playwright-stealth on top of the built-in overrides

        # Timeout settings (in seconds)
        self.page_load_timeout = 20

        # Pacing settings (seconds)
        self.min_request_interval = 5.0
        self.pre_navigation_delay = (2.0, 5.0)
        self.homepage_delay = (3.0, 5.0)
        self.content_delay = (4.0, 6.0)
        self.inter_query_delay = 3.0

        # Block detection
        self.hard_block_url_patterns = list(BlockRules().hard_url_patterns)
        self.soft_block_phrases = list(BlockRules().soft_text_phrases)

        # Diagnostics
        self.diagnostics_dir = 'diagnostics'
        self.save_block_html = True

        # API settings
        self.api_host = '0.0.0.0'
        self.api_port = 3000
        self.max_batch_size = 10

    def update_from_yaml(self, yaml_config: Dict[str, Any]) -> None:
        """
        Update configuration from YAML config dictionary.

        Handles nested YAML structure and maps to flat config attributes.

        Args:
            yaml_config: Dictionary loaded from YAML file
        """
        logger.debug(f"Updating configuration from YAML with {len(yaml_config)} top-level keys")

        if 'site' in yaml_config:
            self.site = str(yaml_config['site']).lower()

        # Browser settings
        if 'browser' in yaml_config:
            browser = yaml_config['browser'] or {}
            if 'headless' in browser:
                self.browser_headless = browser['headless']
            if 'args' in browser:
                self.browser_args = list(browser['args'])
            if 'launch_timeout' in browser:
                self.launch_timeout = browser['launch_timeout']
            if 'enable_stealth' in browser:
                self.enable_stealth = browser['enable_stealth']

        # Timeout settings
        if 'timeouts' in yaml_config:
            timeouts = yaml_config['timeouts'] or {}
            if 'page_load' in timeouts:
                self.page_load_timeout = timeouts['page_load']

        # Pacing settings
        if 'pacing' in yaml_config:
            pacing = yaml_config['pacing'] or {}
            if 'min_request_interval' in pacing:
                self.min_request_interval = float(pacing['min_request_interval'])
            if 'pre_navigation_delay' in pacing:
                self.pre_navigation_delay = _as_range(pacing['pre_navigation_delay'], self.pre_navigation_delay)
            if 'homepage_delay' in pacing:
                self.homepage_delay = _as_range(pacing['homepage_delay'], self.homepage_delay)
            if 'content_delay' in pacing:
                self.content_delay = _as_range(pacing['content_delay'], self.content_delay)
            if 'inter_query_delay' in pacing:
                self.inter_query_delay = float(pacing['inter_query_delay'])

        # Block detection settings
        if 'detection' in yaml_config:
            detection = yaml_config['detection'] or {}
            if 'hard_block_url_patterns' in detection:
                self.hard_block_url_patterns = list(detection['hard_block_url_patterns'])
            if 'soft_block_phrases' in detection:
                self.soft_block_phrases = list(detection['soft_block_phrases'])

        # Diagnostics settings
        if 'diagnostics' in yaml_config:
            diagnostics = yaml_config['diagnostics'] or {}
            if 'dir' in diagnostics:
                self.diagnostics_dir = diagnostics['dir']
            if 'save_html' in diagnostics:
                self.save_block_html = diagnostics['save_html']

        # API settings
        if 'api' in yaml_config:
            api = yaml_config['api'] or {}
            if 'host' in api:
                self.api_host = api['host']
            if 'port' in api:
                self.api_port = int(api['port'])
            if 'max_batch_size' in api:
                self.max_batch_size = int(api['max_batch_size'])

        logger.info("Configuration updated from YAML")

    def update_from_env(self) -> None:
        """Update configuration from environment variables."""
        logger.debug("Updating configuration from environment variables")

        env_mappings = {
            'HEADLESS_MODE': ('browser_headless', lambda x: x.lower() == 'true'),
            'SCRAPER_HEADLESS': ('browser_headless', lambda x: x.lower() == 'true'),
            'SCRAPER_SITE': ('site', lambda x: x.lower()),
            'SCRAPER_PAGE_TIMEOUT': ('page_load_timeout', int),
            'SCRAPER_MIN_DELAY': ('min_request_interval', float),
            'SCRAPER_DIAGNOSTICS_DIR': ('diagnostics_dir', str),
            'PORT': ('api_port', int),
        }

        updated_from_env = []
        for env_var, (attr, converter) in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                try:
                    setattr(self, attr, converter(value))
                    updated_from_env.append(env_var)
                    logger.debug(f"Set {attr} from {env_var}: {value}")
                except (ValueError, TypeError) as e:
                    logger.warning(f"Invalid value for {env_var}: {value} - {e}")

        if updated_from_env:
            logger.info(f"Updated configuration from environment variables: {updated_from_env}")
        else:
            logger.debug("No environment variables found for configuration")

    def validate(self) -> bool:
        """Validate configuration values, clamping the ones that are out of range."""
        logger.debug("Validating configuration values")

        validation_warnings = []

        if self.site not in ('google', 'bing'):
            validation_warnings.append(f"unknown site '{self.site}', falling back to google")
            self.site = 'google'

        if self.page_load_timeout < 5:
            validation_warnings.append("page_load_timeout should be at least 5 seconds")
            self.page_load_timeout = 5

        if self.min_request_interval < 0:
            validation_warnings.append("min_request_interval cannot be negative")
            self.min_request_interval = 0.0

        for name in ('pre_navigation_delay', 'homepage_delay', 'content_delay'):
            low, high = getattr(self, name)
            if low < 0 or high < low:
                validation_warnings.append(f"{name} must be a non-negative (min, max) range")
                setattr(self, name, (max(0.0, min(low, high)), max(0.0, low, high)))

        if self.max_batch_size < 1:
            validation_warnings.append("max_batch_size should be at least 1")
            self.max_batch_size = 1

        for warning in validation_warnings:
            logger.warning(f"Configuration validation warning: {warning}")

        if validation_warnings:
            logger.info(f"Configuration validation completed with {len(validation_warnings)} warnings")
        else:
            logger.debug("Configuration validation completed successfully")

        return True

    def pacing_policy(self) -> PacingPolicy:
        return PacingPolicy(
            min_request_interval=self.min_request_interval,
            pre_navigation_delay=tuple(self.pre_navigation_delay),
            homepage_delay=tuple(self.homepage_delay),
            content_delay=tuple(self.content_delay),
            inter_query_delay=self.inter_query_delay,
        )

    def block_rules(self) -> BlockRules:
        return BlockRules(
            hard_url_patterns=tuple(self.hard_block_url_patterns),
            soft_text_phrases=tuple(self.soft_block_phrases),
        )

    def __str__(self) -> str:
        """String representation of configuration."""
        return f"""Scraper Configuration:
- Site: {self.site}
- Headless: {self.browser_headless}
- Page timeout: {self.page_load_timeout}s
- Min request interval: {self.min_request_interval}s
- Inter-query delay: {self.inter_query_delay}s
- Diagnostics directory: {self.diagnostics_dir}
"""


# Global configuration instance
config = ScraperConfig()
