"""
Main OSM Collector

Orchestrates cache and Overpass client for a bounding box
"""

from typing import Optional
from loguru import logger

from .api_client import OverpassAPIClient
from .cache import OSMCache
from ...config import ConversionConfig, get_config
from ...models import BoundingBox


class OSMCollector:
    """
    Collect building data from OpenStreetMap via Overpass API

    Supports caching to disk for debugging and reuse.
    """

    def __init__(self, cache_dir: Optional[str] = None, config: Optional[ConversionConfig] = None):
        self.config = config or get_config()
        self.api_client = OverpassAPIClient(self.config)
        self.cache = OSMCache(cache_dir)

    def fetch_osm(self, bbox: BoundingBox) -> str:
        """
        Fetch OSM XML for all buildings inside the bounding box

        Args:
            bbox: Validated bounding box

        Returns:
            OSM XML document text

        Raises:
            OverpassAPIError: If the Overpass request fails
        """
        cache_path = self.cache.get_cache_path(bbox)
        if cache_path:
            cached_data = self.cache.load(cache_path)
            if cached_data:
                return cached_data

        area = bbox.area_km2
        if area > self.config.large_area_warning_km2:
            logger.warning(f"Selected area is large ({area:.1f} km²); the Overpass request may time out")

        logger.info(f"Fetching OSM buildings in ({bbox.south}, {bbox.west}, {bbox.north}, {bbox.east})")
        data = self.api_client.fetch_buildings(bbox)
        logger.info(f"Received {len(data)} characters of OSM XML")

        if cache_path:
            self.cache.save(cache_path, data)

        return data
