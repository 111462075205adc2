"""
OSM data caching

Handles caching of Overpass XML responses to disk
"""

import os
import hashlib
from typing import Optional
from loguru import logger

from ...models import BoundingBox


class OSMCache:
    """Handles caching of OSM data to disk"""

    def __init__(self, cache_dir: Optional[str] = None):
        self.cache_dir = cache_dir

    def get_cache_path(self, bbox: BoundingBox) -> Optional[str]:
        """Get cache file path for a bounding box query"""
        if not self.cache_dir:
            return None
        cache_key = f"{bbox.south:.6f}_{bbox.west:.6f}_{bbox.north:.6f}_{bbox.east:.6f}"
        cache_hash = hashlib.md5(cache_key.encode()).hexdigest()[:8]
        return os.path.join(self.cache_dir, f"osm_{cache_hash}.osm")

    def load(self, cache_path: str) -> Optional[str]:
        """Load OSM XML from cache if exists"""
        if os.path.exists(cache_path):
            try:
                with open(cache_path, 'r', encoding='utf-8') as f:
                    data = f.read()
                    logger.info(f"Loaded OSM data from cache: {cache_path}")
                    return data
            except OSError as e:
                logger.warning(f"Failed to load cache {cache_path}: {e}")
        return None

    def save(self, cache_path: str, data: str):
        """Save OSM XML to cache"""
        if not self.cache_dir:
            return
        try:
            os.makedirs(os.path.dirname(cache_path), exist_ok=True)
            with open(cache_path, 'w', encoding='utf-8') as f:
                f.write(data)
            logger.info(f"Saved OSM data to cache: {cache_path}")
        except OSError as e:
            logger.warning(f"Failed to save cache {cache_path}: {e}")
