"""HTTP client for Hadoop ``/jmx`` endpoints"""
from typing import Any, List, Optional
import httpx
from metrics.models import BeanRecord
from logging_config import get_logger


logger = get_logger(__name__)


class ExporterError(Exception):
    """Base class for exporter errors"""


class JmxFetchError(ExporterError):
    """Raised when a JMX document cannot be fetched or parsed"""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch JMX from {url}: {reason}")
        self.url = url
        self.reason = reason


def parse_beans(document: Any) -> List[BeanRecord]:
    """Convert a decoded JMX document into bean records"""
    if not isinstance(document, dict) or not isinstance(document.get("beans"), list):
        raise ValueError("JMX document has no 'beans' array")

    beans = []
    for entry in document["beans"]:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            logger.debug("Skipping malformed bean entry", entry_type=type(entry).__name__)
            continue
        beans.append(BeanRecord.from_json(entry))
    return beans


class JmxClient:
    """Fetches and parses JMX documents"""

    def __init__(self, timeout: float = 10.0, transport: Optional[httpx.BaseTransport] = None):
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout, transport=transport, follow_redirects=True)

    def fetch_beans(self, url: str) -> List[BeanRecord]:
        """Fetch ``url`` and return its beans"""
        logger.info("Fetching JMX", url=url, event_type="jmx_fetch")
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise JmxFetchError(url, f"HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise JmxFetchError(url, str(e) or type(e).__name__) from e

        try:
            beans = parse_beans(response.json())
        except ValueError as e:
            raise JmxFetchError(url, str(e)) from e

        logger.debug("Fetched JMX beans", url=url, beans_count=len(beans))
        return beans

    def close(self):
        self._client.close()
