"""
OSM XML document parser

Parses OSM XML into a node index and a list of Building records
"""

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union
from loguru import logger

from ...analysis.geometry_utils import GeometryUtils, LatLon
from .models import OSMNode, Building


OSMDocument = Union[bytes, str, Path]

BUILDING_KEYS = ("building", "building:part")


class OSMDocumentError(ValueError):
    """The OSM input is not well-formed XML"""


def _parse_coordinate(value: Optional[str]) -> float:
    # float() always uses '.' as the decimal separator
    if value is None:
        return 0.0
    try:
        return float(value)
    except ValueError:
        return 0.0


def is_building(tags: Dict[str, str]) -> bool:
    return any(key in tags for key in BUILDING_KEYS)


class OSMDocumentParser:
    """Parses OSM XML documents into buildings"""

    @staticmethod
    def load_root(document: OSMDocument) -> ET.Element:
        """
        Parse the raw document into an element tree

        Raises:
            OSMDocumentError: If the document is not well-formed XML
        """
        try:
            if isinstance(document, Path):
                return ET.parse(document).getroot()
            return ET.fromstring(document)
        except ET.ParseError as e:
            raise OSMDocumentError(f"Malformed OSM document: {e}") from e

    @staticmethod
    def parse_nodes(root: ET.Element) -> Dict[str, OSMNode]:
        """Build the node index: id -> OSMNode"""
        nodes = {}
        for element in root.iter("node"):
            node_id = element.get("id")
            if node_id is None:
                logger.debug("Skipping node without id")
                continue
            lat = _parse_coordinate(element.get("lat"))
            lon = _parse_coordinate(element.get("lon"))
            nodes[node_id] = OSMNode(id=node_id, lat=lat, lon=lon)
        return nodes

    @staticmethod
    def parse_tags(way: ET.Element) -> Dict[str, str]:
        tags = {}
        for tag in way.iter("tag"):
            key = tag.get("k")
            if key is None:
                continue
            tags[key] = tag.get("v", "")
        return tags

    @staticmethod
    def parse(
        document: OSMDocument,
        polygon_filter: Optional[Sequence[LatLon]] = None
    ) -> Tuple[Dict[str, OSMNode], List[Building]]:
        """
        Parse an OSM document into nodes and buildings

        Ways tagged building or building:part are resolved against the node
        index. References to missing nodes are dropped; ways left with fewer
        than 3 nodes are skipped. When a polygon filter is given, only
        buildings whose center lies inside it are kept.

        Args:
            document: OSM XML as bytes, text, or a path to a file
            polygon_filter: Optional ordered (lat, lon) vertices, at least 3

        Returns:
            Tuple of (node index, building list)

        Raises:
            OSMDocumentError: If the document is not well-formed XML
            ValueError: If the polygon filter has fewer than 3 vertices
        """
        if polygon_filter is not None and len(polygon_filter) < 3:
            raise ValueError(f"Polygon filter needs at least 3 vertices, got {len(polygon_filter)}")

        root = OSMDocumentParser.load_root(document)
        nodes = OSMDocumentParser.parse_nodes(root)
        buildings = []
        filtered_out = 0

        for way in root.iter("way"):
            tags = OSMDocumentParser.parse_tags(way)
            if not is_building(tags):
                continue

            way_id = way.get("id") or f"unknown-{len(buildings) + 1}"
            refs = [nd.get("ref") for nd in way.iter("nd")]
            boundary = [nodes[ref] for ref in refs if ref in nodes]

            dangling = len(refs) - len(boundary)
            if dangling:
                logger.debug(f"Way {way_id}: dropped {dangling} dangling node reference(s)")

            # A last node on the first node's position closes the ring and is
            # not a corner, whatever its id
            corners = boundary
            if len(boundary) > 1 and (boundary[0].lat, boundary[0].lon) == (boundary[-1].lat, boundary[-1].lon):
                corners = boundary[:-1]
            if len(boundary) < 3 or len(corners) < 3:
                logger.debug(f"Way {way_id}: skipped, only {len(corners)} resolvable corner(s)")
                continue

            center_lat, center_lon = GeometryUtils.mean_center(boundary)

            if polygon_filter is not None and not GeometryUtils.point_in_polygon(
                center_lat, center_lon, polygon_filter
            ):
                filtered_out += 1
                continue

            buildings.append(Building(
                id=way_id,
                tags=tags,
                nodes=boundary,
                center_lat=center_lat,
                center_lon=center_lon
            ))

        logger.info(f"Parsed {len(nodes)} nodes, {len(buildings)} buildings"
                    + (f" ({filtered_out} outside polygon filter)" if filtered_out else ""))

        return nodes, buildings
