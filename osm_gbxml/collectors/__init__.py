"""
Data collectors for the OSM to gbXML converter

- OSMCollector: Building footprints from OpenStreetMap
"""

from .osm import OSMCollector

__all__ = [
    "OSMCollector",
]
