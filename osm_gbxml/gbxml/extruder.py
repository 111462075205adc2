"""
Footprint extrusion

Turns an ordered planar boundary and a height into a closed shell:
one floor loop, one ceiling loop and one wall quad per edge.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple


Point2 = Tuple[float, float]
Point3 = Tuple[float, float, float]


@dataclass
class ClosedShell:
    """Polygon loops bounding one extruded solid"""
    floor: List[Point3]
    ceiling: List[Point3]
    walls: List[List[Point3]] = field(default_factory=list)

    def loops(self) -> Iterator[List[Point3]]:
        """Floor, ceiling, then walls in edge order"""
        yield self.floor
        yield self.ceiling
        yield from self.walls


def normalize_ring(boundary: Sequence[Point2]) -> List[Point2]:
    """Drop the last point if it repeats the first exactly"""
    coords = [(x, y) for x, y in boundary]
    if len(coords) > 1 and coords[0][0] == coords[-1][0] and coords[0][1] == coords[-1][1]:
        coords = coords[:-1]
    return coords


def extrude(boundary: Sequence[Point2], height: float) -> ClosedShell:
    """
    Extrude a footprint into a closed shell

    The floor keeps the boundary's winding at z=0, the ceiling reverses it at
    z=height, and each edge (p[i], p[i+1]) becomes the quad
    (p[i],0) (p[i+1],0) (p[i+1],h) (p[i],h).

    Raises:
        ValueError: If fewer than 3 points remain after normalization
    """
    ring = normalize_ring(boundary)
    n = len(ring)
    if n < 3:
        raise ValueError(f"Footprint needs at least 3 points, got {n}")

    floor = [(x, y, 0.0) for x, y in ring]
    ceiling = [(x, y, height) for x, y in reversed(ring)]

    walls = []
    for i in range(n):
        x1, y1 = ring[i]
        x2, y2 = ring[(i + 1) % n]
        walls.append([
            (x1, y1, 0.0),
            (x2, y2, 0.0),
            (x2, y2, height),
            (x1, y1, height),
        ])

    return ClosedShell(floor=floor, ceiling=ceiling, walls=walls)
