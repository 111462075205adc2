"""
Pydantic models for the converter's inputs and results
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from .analysis.geometry_utils import GeometryUtils


# ============================================================
# Selection Models
# ============================================================

class PolygonVertex(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class BoundingBox(BaseModel):
    """Area selected for download, optionally refined by a drawn polygon"""
    south: float
    west: float
    north: float
    east: float
    polygon: Optional[List[PolygonVertex]] = None

    @field_validator("polygon")
    @classmethod
    def _polygon_has_three_vertices(cls, value):
        if value is not None and len(value) < 3:
            raise ValueError(f"Polygon filter needs at least 3 vertices, got {len(value)}")
        return value

    @model_validator(mode="after")
    def _check_extent(self):
        if self.south >= self.north:
            raise ValueError("Southern latitude must be less than northern latitude.")
        if self.west >= self.east:
            raise ValueError("Western longitude must be less than eastern longitude.")
        for lat in (self.south, self.north):
            if lat < -90 or lat > 90:
                raise ValueError("Latitude must be between -90 and 90 degrees.")
        for lon in (self.west, self.east):
            if lon < -180 or lon > 180:
                raise ValueError("Longitude must be between -180 and 180 degrees.")
        return self

    @property
    def area_km2(self) -> float:
        return GeometryUtils.bbox_area_km2(self.south, self.west, self.north, self.east)


# ============================================================
# Result Models
# ============================================================

class ConversionResult(BaseModel):
    xml: Optional[str] = None
    space_count: int = 0
    origin_lat: Optional[float] = None
    origin_lon: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return self.space_count == 0 or self.xml is None


def parse_polygon(text: str) -> List[PolygonVertex]:
    """
    Parse a polygon given as "lat,lon;lat,lon;..."

    Raises:
        ValueError: If a vertex is malformed or fewer than 3 vertices are given
    """
    vertices = []
    for chunk in text.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        parts = chunk.split(",")
        if len(parts) != 2:
            raise ValueError(f"Polygon vertex must be 'lat,lon', got '{chunk}'")
        vertices.append(PolygonVertex(lat=float(parts[0]), lon=float(parts[1])))

    if len(vertices) < 3:
        raise ValueError(f"Polygon filter needs at least 3 vertices, got {len(vertices)}")

    return vertices
