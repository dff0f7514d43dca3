import json
import re

import pytest
from pydantic import ValidationError

from campmap.models.camp import CampRecord
from campmap.models.coordinate import Coordinate
from campmap.rendering.html_emitter import (
    CATEGORY_ICONS,
    IconSet,
    PageOptions,
    render_document,
    write_document,
)

ICONS = IconSet(
    tent_data_url="data:image/svg+xml;utf8,%3Csvg%20id%3D'tent'%2F%3E",
    wolf_data_url="data:image/svg+xml;utf8,%3Csvg%20id%3D'wolf'%2F%3E",
)


def _record(name="1 Jan Kowalski", category="obóz stały", **kwargs):
    return CampRecord(
        category=category,
        display_name=name,
        coordinate=Coordinate(latitude=53.5301, longitude=20.7875),
        **kwargs,
    )


def _embedded_camps(document):
    match = re.search(r"const camps = (.*?);\n\n    // Inlined SVG", document, re.S)
    assert match is not None
    return json.loads(match.group(1))


def test_document_structure():
    document = render_document([_record()], ICONS)
    assert document.startswith("<!-- AUTO-GENERATED FILE. DO NOT EDIT DIRECTLY. -->\n<!DOCTYPE html>")
    assert '<html lang="pl">' in document
    assert "<title>Mapa Obozów Harcerskich</title>" in document
    assert "https://unpkg.com/leaflet/dist/leaflet.js" in document
    assert "tile.openstreetmap.org" in document
    assert 'id="filter-from"' in document
    assert 'id="filter-to"' in document


def test_camps_are_embedded_as_json():
    records = [_record(), _record(name="2 Anna Nowak", category="kolonia", team_names=["1 GZ"])]
    camps = _embedded_camps(render_document(records, ICONS))

    assert [camp["displayName"] for camp in camps] == ["1 Jan Kowalski", "2 Anna Nowak"]
    assert camps[0]["coordinate"] == {"latitude": 53.5301, "longitude": 20.7875}
    assert camps[1]["teamNames"] == ["1 GZ"]
    assert camps[1]["detailsHtml"] == records[1].details_html


def test_icons_are_inlined():
    document = render_document([], ICONS)
    assert json.dumps(ICONS.tent_data_url) in document
    assert json.dumps(ICONS.wolf_data_url) in document
    assert json.dumps(CATEGORY_ICONS, ensure_ascii=False) in document
    assert "const camps = [];" in document


# Data cannot close the surrounding script element
def test_script_breakout_is_escaped():
    document = render_document([_record(name="</script><script>alert(1)")], ICONS)
    assert document.count("</script>") == 2


def test_page_options():
    options = PageOptions(title="Obozy <2025>", center_lat=50.0, center_lng=20.0, zoom=8)
    document = render_document([], ICONS, options)
    assert "<title>Obozy &lt;2025&gt;</title>" in document
    assert "const MAP_CENTER = [50.0, 20.0];" in document
    assert "const MAP_ZOOM = 8;" in document


# Without options the default page settings are used, and they cannot be mutated
def test_default_page_options():
    document = render_document([], ICONS)
    assert "<title>Mapa Obozów Harcerskich</title>" in document
    assert "const MAP_CENTER = [52.0, 19.0];" in document
    assert "const MAP_ZOOM = 6;" in document

    options = PageOptions()
    with pytest.raises(ValidationError):
        options.zoom = 10


def test_render_is_deterministic():
    records = [_record(), _record(name="2")]
    assert render_document(records, ICONS) == render_document(records, ICONS)


def test_write_document_creates_parent(tmp_path):
    path = write_document(tmp_path / "public" / "index.html", "<html></html>")
    assert path.read_text(encoding="utf-8") == "<html></html>"
