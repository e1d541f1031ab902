"""
Value objects passed through the extraction pipeline.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from overview_scraper.errors import ErrorKind


def utc_timestamp() -> str:
    """ISO-8601 timestamp in UTC, millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass(frozen=True)
class SearchOptions:
    """Per-query search parameters. Every field is optional with a documented default."""

    geo: str = "US"
    language: str = "en"
    result_count: int = 10
    start: int = 0
    personalization: bool = False

    # Query-string names used by the search engines and the HTTP API
    _ALIASES = {
        'gl': 'geo', 'cc': 'geo',
        'hl': 'language', 'setLang': 'language',
        'num': 'result_count', 'count': 'result_count',
        'pws': 'personalization',
    }

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, Any]]) -> "SearchOptions":
        """
        Build options from field names or their query-string aliases.

        Unknown keys are ignored; missing keys keep their defaults.
        """
        values = {}
        for key, value in (data or {}).items():
            if value is None:
                continue
            name = cls._ALIASES.get(key, key)
            if name in ('geo', 'language'):
                values[name] = str(value)
            elif name in ('result_count', 'start'):
                values[name] = int(value)
            elif name == 'personalization':
                if isinstance(value, str):
                    values[name] = value.strip().lower() in ('1', 'true', 'yes', 'on')
                else:
                    values[name] = bool(value)
        return cls(**values)


@dataclass(frozen=True)
class ExtractionResult:
    """The located overview fragment and the rule that found it."""

    text: str
    html: str
    selector: str
    keyword: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'text': self.text, 'html': self.html, 'selector': self.selector}
        if self.keyword is not None:
            data['keyword'] = self.keyword
        return data


@dataclass(frozen=True)
class Success:
    """The query ran to completion. ``extraction`` is None when no overview was present."""

    query: str
    search_url: str
    extraction: Optional[ExtractionResult]
    source: str
    timestamp: str

    success = True

    @property
    def has_overview(self) -> bool:
        return self.extraction is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': True,
            'query': self.query,
            'searchUrl': self.search_url,
            'aiOverview': self.extraction.to_dict() if self.extraction else None,
            'hasAiOverview': self.has_overview,
            'source': self.source,
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class Failure:
    """The query pipeline failed; ``error_kind`` tells callers whether retrying makes sense."""

    query: str
    error_kind: ErrorKind
    message: str
    source: str
    timestamp: str

    success = False
    has_overview = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': False,
            'query': self.query,
            'error': self.message,
            'errorKind': self.error_kind.value,
            'aiOverview': None,
            'hasAiOverview': False,
            'source': self.source,
            'timestamp': self.timestamp,
        }


Outcome = Union[Success, Failure]
