"""
OSM to gbXML converter

Turns OpenStreetMap building footprints into extruded gbXML spaces for
building energy simulation tools.
"""

from .pipeline import ConversionPipeline
from .models import BoundingBox, ConversionResult, PolygonVertex
from .collectors.osm import OSMDocumentError, OverpassAPIError

__version__ = "1.0.0"

__all__ = [
    "ConversionPipeline",
    "BoundingBox",
    "ConversionResult",
    "PolygonVertex",
    "OSMDocumentError",
    "OverpassAPIError",
]
