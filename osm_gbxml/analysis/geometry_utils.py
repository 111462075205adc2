"""
Geometry utilities for coordinate transformations and calculations
"""

import math
from typing import Iterable, List, Optional, Sequence, Tuple, Union, Any

from ..config import get_config


# Filter polygons arrive either as (lat, lon) pairs or as objects with
# .lat/.lon attributes (PolygonVertex, OSMNode)
LatLon = Union[Tuple[float, float], Any]


def _lat_lon(vertex: LatLon) -> Tuple[float, float]:
    if hasattr(vertex, "lat") and hasattr(vertex, "lon"):
        return vertex.lat, vertex.lon
    return vertex[0], vertex[1]


class GeometryUtils:
    """Utility functions for geometric operations"""

    @staticmethod
    def point_in_polygon(lat: float, lon: float, polygon: Sequence[LatLon]) -> bool:
        """
        Ray-casting point-in-polygon test

        Vertices are treated as (y=lat, x=lon). A vertex lying exactly on the
        horizontal ray may be counted once or not at all, as with the classic
        algorithm.

        Args:
            lat: Query latitude
            lon: Query longitude
            polygon: Ordered vertices, at least 3

        Returns:
            True if the point lies inside the polygon

        Raises:
            ValueError: If the polygon has fewer than 3 vertices
        """
        vertices = [_lat_lon(v) for v in polygon]
        n = len(vertices)
        if n < 3:
            raise ValueError(f"Polygon needs at least 3 vertices, got {n}")

        inside = False
        j = n - 1
        for i in range(n):
            yi, xi = vertices[i]
            yj, xj = vertices[j]
            if ((yi > lat) != (yj > lat)) and (
                lon < (xj - xi) * (lat - yi) / (yj - yi) + xi
            ):
                inside = not inside
            j = i

        return inside

    @staticmethod
    def latlon_to_local(
        lat: float,
        lon: float,
        origin_lat: float,
        origin_lon: float,
        earth_radius_m: Optional[float] = None
    ) -> Tuple[float, float]:
        """
        Convert a lat/lon point to local (x, y) meters from the origin

        Equirectangular approximation using the origin's latitude for the
        cosine term. Only valid for extents of a few kilometers.
        """
        radius = earth_radius_m
        if radius is None:
            radius = get_config().earth_radius_m
        x = radius * (lon - origin_lon) * math.pi / 180 * math.cos(origin_lat * math.pi / 180)
        y = radius * (lat - origin_lat) * math.pi / 180
        return (x, y)

    @staticmethod
    def mean_center(points: Iterable[LatLon]) -> Tuple[float, float]:
        """Arithmetic mean of (lat, lon) points (not an area centroid)"""
        lat_sum = 0.0
        lon_sum = 0.0
        count = 0
        for point in points:
            lat, lon = _lat_lon(point)
            lat_sum += lat
            lon_sum += lon
            count += 1

        if count == 0:
            raise ValueError("Cannot compute the center of an empty point set")

        return (lat_sum / count, lon_sum / count)

    @staticmethod
    def bbox_area_km2(south: float, west: float, north: float, east: float) -> float:
        """Approximate area of a lat/lon bounding box in square kilometers"""
        radius_km = get_config().earth_radius_m / 1000.0
        mid_lat = (south + north) / 2
        height_km = radius_km * math.radians(north - south)
        width_km = radius_km * math.radians(east - west) * math.cos(math.radians(mid_lat))
        return abs(height_km * width_km)

    @staticmethod
    def project_ring(
        points: Iterable[LatLon],
        origin_lat: float,
        origin_lon: float,
        earth_radius_m: Optional[float] = None
    ) -> List[Tuple[float, float]]:
        """Project an ordered ring of lat/lon points into local meters"""
        local_coords = []
        for point in points:
            lat, lon = _lat_lon(point)
            local_coords.append(
                GeometryUtils.latlon_to_local(lat, lon, origin_lat, origin_lon, earth_radius_m)
            )
        return local_coords
