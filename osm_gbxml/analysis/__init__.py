"""
Analysis modules for the OSM to gbXML converter
"""

from .geometry_utils import GeometryUtils

__all__ = [
    "GeometryUtils"
]
