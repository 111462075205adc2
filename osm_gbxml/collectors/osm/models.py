"""
OSM data models

Data classes for representing OSM nodes and building footprints
"""

from typing import List, Dict
from dataclasses import dataclass


@dataclass(frozen=True)
class OSMNode:
    """Represents an OSM node (point)"""
    id: str
    lat: float
    lon: float


@dataclass(frozen=True)
class Building:
    """A building or building:part way resolved to its boundary nodes"""
    id: str
    tags: Dict[str, str]
    nodes: List[OSMNode]  # Way order, not explicitly closed
    center_lat: float
    center_lon: float
