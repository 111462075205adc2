"""
OpenStreetMap data module

Components:
- API client: Overpass API communication
- Models: Data structures (OSMNode, Building)
- Parser: OSM XML parsing and polygon filtering
- Buildings: Height resolution and naming
- Cache: Caching functionality
- Collector: Fetch orchestrator
"""

from .models import OSMNode, Building
from .parser import OSMDocumentParser, OSMDocumentError
from .buildings import resolve_height, display_name
from .api_client import OverpassAPIClient, OverpassAPIError
from .collector import OSMCollector

__all__ = [
    "OSMNode",
    "Building",
    "OSMDocumentParser",
    "OSMDocumentError",
    "resolve_height",
    "display_name",
    "OverpassAPIClient",
    "OverpassAPIError",
    "OSMCollector",
]
