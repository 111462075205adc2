"""
Shared OSM fixtures
"""

import pytest


TRIANGLE_OSM = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="test">
  <node id="1" lat="52.0" lon="13.0"/>
  <node id="2" lat="52.0" lon="13.001"/>
  <node id="3" lat="52.001" lon="13.0"/>
  <way id="10">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <nd ref="1"/>
    <tag k="building" v="yes"/>
  </way>
</osm>
"""

BUILDING_PART_DANGLING_OSM = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <node id="1" lat="52.0" lon="13.0"/>
  <node id="2" lat="52.0" lon="13.001"/>
  <node id="3" lat="52.001" lon="13.0"/>
  <way id="20">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="99"/>
    <nd ref="3"/>
    <tag k="building:part" v="roof"/>
  </way>
</osm>
"""

TWO_BUILDINGS_OSM = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6">
  <node id="1" lat="52.0" lon="13.0"/>
  <node id="2" lat="52.0" lon="13.001"/>
  <node id="3" lat="52.001" lon="13.001"/>
  <node id="4" lat="52.001" lon="13.0"/>
  <node id="5" lat="52.002" lon="13.002"/>
  <node id="6" lat="52.002" lon="13.003"/>
  <node id="7" lat="52.003" lon="13.003"/>
  <way id="100">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <nd ref="4"/>
    <nd ref="1"/>
    <tag k="building" v="house"/>
    <tag k="name" v="Town Hall"/>
    <tag k="building:levels" v="4"/>
  </way>
  <way id="200">
    <nd ref="5"/>
    <nd ref="6"/>
    <nd ref="7"/>
    <tag k="building" v="yes"/>
    <tag k="height" v="12.5m"/>
  </way>
  <way id="300">
    <nd ref="1"/>
    <nd ref="5"/>
    <tag k="highway" v="residential"/>
  </way>
</osm>
"""


@pytest.fixture
def triangle_osm():
    return TRIANGLE_OSM


@pytest.fixture
def building_part_osm():
    return BUILDING_PART_DANGLING_OSM


@pytest.fixture
def two_buildings_osm():
    return TWO_BUILDINGS_OSM


@pytest.fixture
def far_away_polygon():
    return [(10.0, 10.0), (10.0, 11.0), (11.0, 11.0), (11.0, 10.0)]


@pytest.fixture
def around_triangle_polygon():
    return [(51.99, 12.99), (51.99, 13.01), (52.01, 13.01), (52.01, 12.99)]
