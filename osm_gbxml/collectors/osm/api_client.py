"""
Overpass API client

Fetches building data as OSM XML, including:
- Rate limiting
- Retry logic
- Error handling
"""

import time
import requests
from typing import Optional
from loguru import logger

from ...config import ConversionConfig, get_config
from ...models import BoundingBox


class OverpassAPIError(RuntimeError):
    """Overpass request failed after all retries"""


BUSY_MESSAGE = (
    "The Overpass API server is busy or timed out processing your request. "
    "This usually means the selected area is too large. "
    "Select a smaller area, or wait a few minutes and try again."
)
RATE_LIMIT_MESSAGE = (
    "Too many requests to Overpass API. "
    "Please wait a few minutes before trying again."
)


class OverpassAPIClient:
    """Client for interacting with Overpass API"""

    def __init__(self, config: Optional[ConversionConfig] = None):
        self.config = config or get_config()
        self.overpass_url = self.config.api.overpass_url
        self.timeout = self.config.api.overpass_timeout
        self._last_request_time = 0
        self._min_request_interval = self.config.api.min_request_interval

    def _rate_limit(self):
        """Ensure we don't exceed rate limits"""
        elapsed = time.time() - self._last_request_time
        if elapsed < self._min_request_interval:
            time.sleep(self._min_request_interval - elapsed)
        self._last_request_time = time.time()

    def build_query(self, bbox: BoundingBox) -> str:
        """
        Build an Overpass QL query for all buildings and building parts in a bbox

        Ways are recursed down to their nodes so the XML is self-contained.
        """
        # OSM stores coordinates with 7 decimals
        extent = f"{bbox.south:.7f},{bbox.west:.7f},{bbox.north:.7f},{bbox.east:.7f}"
        return (
            f"[out:xml][timeout:{self.timeout}];\n"
            "(\n"
            f'  way["building"]({extent});\n'
            f'  way["building:part"]({extent});\n'
            ");\n"
            "(._;>;);\n"
            "out meta;"
        )

    def fetch_buildings(self, bbox: BoundingBox) -> str:
        """
        Fetch OSM XML for every building in the bounding box

        Args:
            bbox: Validated bounding box

        Returns:
            OSM XML document text

        Raises:
            OverpassAPIError: If the request fails after all retries
        """
        return self.query(self.build_query(bbox))

    def query(self, query: str) -> str:
        """
        Execute Overpass API query with retry logic

        Args:
            query: Overpass QL query string

        Returns:
            Raw response text

        Raises:
            OverpassAPIError: If query fails after all retries
        """
        self._rate_limit()

        max_retries = self.config.api.max_retries
        retry_delay = self.config.api.retry_delay
        headers = {
            "User-Agent": self.config.api.user_agent,
            "Content-Type": "application/x-www-form-urlencoded"
        }

        for attempt in range(max_retries):
            last_attempt = attempt == max_retries - 1
            try:
                response = requests.post(
                    self.overpass_url,
                    data={"data": query},
                    headers=headers,
                    timeout=self.timeout
                )
                response.raise_for_status()
                return response.text
            except requests.exceptions.Timeout as e:
                wait_time = retry_delay * (attempt + 1)
                if last_attempt:
                    logger.error(f"OSM API failed: Overpass timeout after {max_retries} attempts")
                    raise OverpassAPIError(
                        f"Request timed out after {self.timeout} seconds. "
                        "The selected area is too large or has too many buildings."
                    ) from e
                logger.warning(f"Overpass timeout (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                time.sleep(wait_time)
            except requests.exceptions.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                if status in (429, 503, 504) and not last_attempt:
                    wait_time = retry_delay * (attempt + 1)
                    logger.warning(f"Overpass {status} (attempt {attempt + 1}/{max_retries}). Retrying in {wait_time}s...")
                    time.sleep(wait_time)
                    continue
                logger.error(f"OSM API failed: HTTP {status} after {attempt + 1} attempt(s)")
                if status == 429:
                    raise OverpassAPIError(RATE_LIMIT_MESSAGE) from e
                if status in (503, 504):
                    raise OverpassAPIError(BUSY_MESSAGE) from e
                raise OverpassAPIError(f"Overpass API HTTP error {status}") from e
            except requests.exceptions.RequestException as e:
                if last_attempt:
                    logger.error(f"OSM API failed: Request exception after {max_retries} attempts: {e}")
                    raise OverpassAPIError(
                        f"Network error: {e}. Please check your internet connection and try again."
                    ) from e
                logger.warning(f"Overpass request failed (attempt {attempt + 1}): {e}")
                time.sleep(retry_delay * (attempt + 1))

        raise OverpassAPIError("Overpass API request was not attempted (max_retries < 1)")
