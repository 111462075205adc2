"""
gbXML output: footprint extrusion and document serialization
"""

from .extruder import ClosedShell, extrude, normalize_ring
from .builder import GbXMLBuilder

__all__ = [
    "ClosedShell",
    "extrude",
    "normalize_ring",
    "GbXMLBuilder",
]
