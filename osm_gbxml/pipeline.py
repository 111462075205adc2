"""
Conversion pipeline: OSM XML -> buildings -> gbXML

  1. Input: OSM document (bytes, text or file) or a bounding box to fetch
  2. Parse nodes and building ways, apply the optional polygon filter
  3. Compute the shared origin from building centers
  4. Project, extrude and serialize every building as a gbXML Space

Each call builds its own node index and building list; nothing is shared
between conversions.
"""

import os
from pathlib import Path
from typing import Optional, Sequence
from loguru import logger

from .config import get_config, validate_config, ConversionConfig
from .models import BoundingBox, ConversionResult, PolygonVertex
from .collectors import OSMCollector
from .collectors.osm.parser import OSMDocumentParser, OSMDocument
from .gbxml import GbXMLBuilder


class ConversionPipeline:
    """
    Convert OpenStreetMap buildings to a gbXML model

    Usage:
        pipeline = ConversionPipeline()
        result = pipeline.convert_file("map.osm")
        if not result.is_empty:
            pipeline.save(result, "model.xml")
    """

    def __init__(self, config: Optional[ConversionConfig] = None, cache_dir: Optional[str] = None):
        self.config = config or get_config()
        validate_config(self.config)
        self.cache_dir = cache_dir
        self.osm_collector = OSMCollector(cache_dir=cache_dir, config=self.config)

    def convert_document(
        self,
        document: OSMDocument,
        polygon: Optional[Sequence[PolygonVertex]] = None
    ) -> ConversionResult:
        """
        Convert an in-memory OSM document

        Raises:
            OSMDocumentError: If the document is not well-formed XML
        """
        _, buildings = OSMDocumentParser.parse(document, polygon_filter=polygon)

        if not buildings:
            logger.warning("No buildings found in the OSM data")
            return ConversionResult()

        builder = GbXMLBuilder(self.config)
        origin = builder.compute_origin(buildings)
        xml_text, count = builder.build(buildings, origin=origin)

        return ConversionResult(
            xml=xml_text,
            space_count=count,
            origin_lat=origin[0],
            origin_lon=origin[1]
        )

    def convert_file(
        self,
        path: str,
        polygon: Optional[Sequence[PolygonVertex]] = None
    ) -> ConversionResult:
        """Convert an OSM XML file on disk"""
        logger.info(f"Converting OSM file: {path}")
        return self.convert_document(Path(path), polygon=polygon)

    def convert_bbox(self, bbox: BoundingBox, save_osm: Optional[str] = None) -> ConversionResult:
        """
        Fetch buildings inside a bounding box and convert them

        The drawn polygon on the bounding box, if any, is used as the filter.

        Raises:
            OverpassAPIError: If the download fails
            OSMDocumentError: If the response is not well-formed XML
        """
        osm_xml = self.osm_collector.fetch_osm(bbox)

        if save_osm:
            self._write_text(osm_xml, save_osm)
            logger.info(f"Saved downloaded OSM data: {save_osm}")

        return self.convert_document(osm_xml, polygon=bbox.polygon)

    def save(self, result: ConversionResult, output_path: str):
        """Write the gbXML document to a file"""
        if result.is_empty:
            raise ValueError("Nothing to save: the conversion produced no spaces")

        self._write_text(result.xml, output_path)
        logger.info(f"Saved gbXML with {result.space_count} spaces to {output_path}")

    @staticmethod
    def _write_text(text: str, output_path: str):
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
