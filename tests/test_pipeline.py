"""
End-to-end conversion tests
"""

import xml.etree.ElementTree as ET
from unittest.mock import patch

import pytest

from osm_gbxml import ConversionPipeline, BoundingBox, OSMDocumentError


NS = {"gb": "http://www.gbxml.org/schema"}


@pytest.fixture
def pipeline():
    return ConversionPipeline()


def test_triangle_becomes_one_space(pipeline, triangle_osm):
    result = pipeline.convert_document(triangle_osm)
    assert result.space_count == 1
    assert not result.is_empty

    root = ET.fromstring(result.xml)
    spaces = root.findall(".//gb:Space", NS)
    assert len(spaces) == 1
    loops = spaces[0].findall(".//gb:PolyLoop", NS)
    walls = loops[2:]
    assert len(walls) == 3
    assert all(len(wall.findall("gb:CartesianPoint", NS)) == 4 for wall in walls)


def test_polygon_filter_excluding_center_gives_empty_result(pipeline, triangle_osm, far_away_polygon):
    result = pipeline.convert_document(triangle_osm, polygon=far_away_polygon)
    assert result.space_count == 0
    assert result.xml is None
    assert result.is_empty


def test_building_part_with_dangling_reference(pipeline, building_part_osm):
    result = pipeline.convert_document(building_part_osm)
    assert result.space_count == 1
    root = ET.fromstring(result.xml)
    assert len(root.findall(".//gb:Space", NS)) == 1


def test_origin_reported_on_result(pipeline, triangle_osm):
    result = pipeline.convert_document(triangle_osm)
    assert result.origin_lat == pytest.approx(52.00025)
    assert result.origin_lon == pytest.approx(13.00025)


def test_malformed_document_propagates(pipeline):
    with pytest.raises(OSMDocumentError):
        pipeline.convert_document(b"not xml at all <")


def test_convert_file_and_save(pipeline, tmp_path, two_buildings_osm):
    source = tmp_path / "map.osm"
    source.write_bytes(two_buildings_osm)
    output = tmp_path / "out" / "model.xml"

    result = pipeline.convert_file(str(source))
    pipeline.save(result, str(output))

    assert result.space_count == 2
    assert output.read_text(encoding="utf-8") == result.xml


def test_save_refuses_empty_result(pipeline, tmp_path, triangle_osm, far_away_polygon):
    result = pipeline.convert_document(triangle_osm, polygon=far_away_polygon)
    with pytest.raises(ValueError):
        pipeline.save(result, str(tmp_path / "model.xml"))
    assert not (tmp_path / "model.xml").exists()


def test_repeated_conversions_are_independent(pipeline, triangle_osm, two_buildings_osm):
    first = pipeline.convert_document(two_buildings_osm)
    second = pipeline.convert_document(triangle_osm)
    again = pipeline.convert_document(two_buildings_osm)
    assert (first.space_count, second.space_count) == (2, 1)
    assert again.xml == first.xml


def test_convert_bbox_uses_drawn_polygon(pipeline, tmp_path, triangle_osm):
    bbox = BoundingBox(
        south=51.0, west=12.0, north=53.0, east=14.0,
        polygon=[{"lat": 51.0, "lon": 12.0}, {"lat": 51.0, "lon": 12.5}, {"lat": 51.5, "lon": 12.5}]
    )
    saved_osm = tmp_path / "raw.osm"
    with patch.object(pipeline.osm_collector, "fetch_osm", return_value=triangle_osm.decode("utf-8")) as fetch:
        result = pipeline.convert_bbox(bbox, save_osm=str(saved_osm))

    fetch.assert_called_once_with(bbox)
    assert result.is_empty
    assert saved_osm.read_text(encoding="utf-8") == triangle_osm.decode("utf-8")


def test_convert_bbox_without_polygon(pipeline, triangle_osm):
    bbox = BoundingBox(south=51.0, west=12.0, north=53.0, east=14.0)
    with patch.object(pipeline.osm_collector, "fetch_osm", return_value=triangle_osm.decode("utf-8")):
        result = pipeline.convert_bbox(bbox)
    assert result.space_count == 1


COINCIDENT_ENDS_OSM = b"""<osm>
  <node id="1" lat="52.0" lon="13.0"/>
  <node id="2" lat="52.0" lon="13.001"/>
  <node id="3" lat="52.0" lon="13.0"/>
  <node id="4" lat="52.001" lon="13.0"/>
  <node id="5"/>
  <node id="6"/>
  <way id="10"><nd ref="1"/><nd ref="2"/><nd ref="3"/><tag k="building" v="yes"/></way>
  <way id="11"><nd ref="1"/><nd ref="2"/><nd ref="4"/><tag k="building" v="yes"/></way>
  <way id="12"><nd ref="5"/><nd ref="2"/><nd ref="6"/><tag k="building" v="yes"/></way>
</osm>
"""


def test_degenerate_way_does_not_sink_the_document(pipeline):
    result = pipeline.convert_document(COINCIDENT_ENDS_OSM)
    assert result.space_count == 1
    spaces = ET.fromstring(result.xml).findall(".//gb:Space", NS)
    assert [s.get("id") for s in spaces] == ["space-11"]


def test_custom_config_reaches_fetch_path():
    from osm_gbxml.config import APIConfig, ConversionConfig

    config = ConversionConfig(api=APIConfig(overpass_url="http://custom.example/api", max_retries=5))
    pipeline = ConversionPipeline(config=config)
    assert pipeline.osm_collector.config is config
    assert pipeline.osm_collector.api_client.overpass_url == "http://custom.example/api"
    assert pipeline.osm_collector.api_client.config.api.max_retries == 5
