"""
Tests for the command-line interface
"""

from unittest.mock import patch

import cli
from osm_gbxml.collectors.osm import OverpassAPIError


def test_convert_writes_gbxml(tmp_path, triangle_osm):
    source = tmp_path / "map.osm"
    source.write_bytes(triangle_osm)
    output = tmp_path / "model.xml"

    assert cli.main(["convert", "-i", str(source), "-o", str(output)]) == cli.EXIT_OK
    assert output.read_text(encoding="utf-8").startswith("<?xml")


def test_convert_empty_result_writes_nothing(tmp_path, triangle_osm):
    source = tmp_path / "map.osm"
    source.write_bytes(triangle_osm)
    output = tmp_path / "model.xml"

    code = cli.main(["convert", "-i", str(source), "-o", str(output), "--polygon", "10,10;10,11;11,11"])
    assert code == cli.EXIT_EMPTY
    assert not output.exists()


def test_convert_malformed_file_fails(tmp_path):
    source = tmp_path / "broken.osm"
    source.write_text("<osm><way>", encoding="utf-8")
    assert cli.main(["convert", "-i", str(source), "-o", str(tmp_path / "m.xml")]) == cli.EXIT_FAILED


def test_convert_missing_input_fails(tmp_path):
    assert cli.main(["convert", "-i", str(tmp_path / "nope.osm"), "-o", str(tmp_path / "m.xml")]) == cli.EXIT_FAILED


def test_fetch_rejects_invalid_bbox(tmp_path):
    code = cli.main(["fetch", "--south", "53", "--west", "13", "--north", "52", "--east", "14",
                     "-o", str(tmp_path / "m.xml")])
    assert code == cli.EXIT_FAILED


def test_fetch_converts_download(tmp_path, triangle_osm):
    output = tmp_path / "model.xml"
    with patch("osm_gbxml.collectors.osm.collector.OverpassAPIClient.fetch_buildings",
               return_value=triangle_osm.decode("utf-8")):
        code = cli.main(["fetch", "--south", "51.9", "--west", "12.9", "--north", "52.1", "--east", "13.1",
                         "-o", str(output)])
    assert code == cli.EXIT_OK
    assert output.exists()


def test_fetch_network_error_fails(tmp_path):
    with patch("osm_gbxml.collectors.osm.collector.OverpassAPIClient.fetch_buildings",
               side_effect=OverpassAPIError("Too many requests")):
        code = cli.main(["fetch", "--south", "51.9", "--west", "12.9", "--north", "52.1", "--east", "13.1",
                         "-o", str(tmp_path / "m.xml")])
    assert code == cli.EXIT_FAILED


def test_no_command_prints_help():
    assert cli.main([]) == cli.EXIT_FAILED
