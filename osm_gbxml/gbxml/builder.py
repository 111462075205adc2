"""
gbXML document builder

Assembles the Campus / Building / BuildingStorey / Space hierarchy for a list
of parsed buildings and serializes it as gbXML text.
"""

import xml.etree.ElementTree as ET
from typing import List, Optional, Sequence, Tuple
from loguru import logger

from ..analysis.geometry_utils import GeometryUtils
from ..collectors.osm.buildings import resolve_height, display_name
from ..collectors.osm.models import Building
from ..config import ConversionConfig, get_config
from .extruder import extrude, Point3


XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


class GbXMLBuilder:
    """
    Build a gbXML document with one Space per building

    Usage:
        builder = GbXMLBuilder()
        xml_text, count = builder.build(buildings)
    """

    def __init__(self, config: Optional[ConversionConfig] = None):
        self.config = config or get_config()
        self.ns = self.config.gbxml_namespace
        self.precision = self.config.coordinate_precision

    def _tag(self, name: str) -> str:
        return f"{{{self.ns}}}{name}"

    def _element(self, parent: Optional[ET.Element], name: str, text: Optional[str] = None, **attrib) -> ET.Element:
        if parent is None:
            element = ET.Element(self._tag(name), attrib)
        else:
            element = ET.SubElement(parent, self._tag(name), attrib)
        if text is not None:
            element.text = text
        return element

    def format_number(self, value: float) -> str:
        """Fixed-point rendering with '.' as the decimal separator"""
        return f"{value:.{self.precision}f}"

    def _cartesian_point(self, parent: ET.Element, point: Point3):
        cp = self._element(parent, "CartesianPoint")
        for value in point:
            self._element(cp, "Coordinate", self.format_number(value))

    def _poly_loop(self, parent: ET.Element, points: List[Point3]):
        loop = self._element(parent, "PolyLoop")
        for point in points:
            self._cartesian_point(loop, point)

    @staticmethod
    def compute_origin(buildings: Sequence[Building]) -> Tuple[float, float]:
        """Mean of all building centers"""
        return GeometryUtils.mean_center((b.center_lat, b.center_lon) for b in buildings)

    def _space(self, parent: ET.Element, building: Building, position: int, origin: Tuple[float, float]):
        origin_lat, origin_lon = origin
        coords = GeometryUtils.project_ring(
            building.nodes, origin_lat, origin_lon, self.config.earth_radius_m
        )
        height = resolve_height(building.tags, self.config.level_height_m, self.config.default_height_m)
        shell = extrude(coords, height)

        space = self._element(
            parent, "Space",
            id=f"space-{building.id}",
            conditionType="HeatedAndCooled",
            buildingStoreyIdRef=self.config.storey_id
        )
        self._element(space, "Name", display_name(building.tags, position))

        shell_geometry = self._element(space, "ShellGeometry", id=f"shell-{building.id}", unit="Meters")
        closed_shell = self._element(shell_geometry, "ClosedShell")
        for loop in shell.loops():
            self._poly_loop(closed_shell, loop)

        logger.debug(f"Space {building.id}: {len(shell.walls)} walls, height {height:.2f}m")

    def build_tree(self, buildings: Sequence[Building], origin: Tuple[float, float]) -> ET.Element:
        """Build the gbXML element tree"""
        origin_lat, origin_lon = origin

        root = self._element(
            None, "gbXML",
            useSIUnitsForResults="true",
            temperatureUnit="C",
            lengthUnit="Meters",
            areaUnit="SquareMeters",
            volumeUnit="CubicMeters",
            version=self.config.gbxml_version
        )

        campus = self._element(root, "Campus", id="campus")
        location = self._element(campus, "Location")
        self._element(location, "Longitude", f"{origin_lon:.6f}")
        self._element(location, "Latitude", f"{origin_lat:.6f}")

        building_el = self._element(campus, "Building", id="building", buildingType="Mixed")
        self._element(building_el, "Name", "Combined Building")

        # BuildingStorey must precede the Spaces that reference it
        storey = self._element(building_el, "BuildingStorey", id=self.config.storey_id)
        self._element(storey, "Name", "Ground Floor")
        self._element(storey, "Level", self.format_number(0.0))

        for position, building in enumerate(buildings, start=1):
            self._space(building_el, building, position, origin)

        return root

    def serialize(self, root: ET.Element) -> str:
        ET.indent(root, space="  ")
        body = ET.tostring(root, encoding="unicode", default_namespace=self.ns)
        return XML_DECLARATION + "\n" + body

    def build(
        self,
        buildings: Sequence[Building],
        origin: Optional[Tuple[float, float]] = None
    ) -> Tuple[Optional[str], int]:
        """
        Serialize buildings into a gbXML document

        Args:
            buildings: Parsed buildings, each with at least 3 boundary nodes
            origin: Optional (lat, lon) override for the local frame origin

        Returns:
            Tuple of (gbXML text, space count), or (None, 0) for no buildings
        """
        if not buildings:
            return None, 0

        if origin is None:
            origin = self.compute_origin(buildings)

        root = self.build_tree(buildings, origin)
        xml_text = self.serialize(root)

        logger.info(f"Built gbXML with {len(buildings)} spaces around origin ({origin[0]:.6f}, {origin[1]:.6f})")
        return xml_text, len(buildings)
