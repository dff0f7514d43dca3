import json

from campmap.utils.misc_utils import encode_uri_component, script_safe_json, svg_to_data_url


# Same output as JavaScript's encodeURIComponent
def test_encode_uri_component():
    assert encode_uri_component("a b") == "a%20b"
    assert encode_uri_component("<svg fill=\"#fff\"/>") == "%3Csvg%20fill%3D%22%23fff%22%2F%3E"
    assert encode_uri_component("-_.!~*'()") == "-_.!~*'()"
    assert encode_uri_component("ł") == "%C5%82"


def test_svg_to_data_url():
    assert svg_to_data_url("<svg/>") == "data:image/svg+xml;utf8,%3Csvg%2F%3E"


def test_script_safe_json_escapes_closing_tags():
    dumped = script_safe_json([{"html": "</script><b>x</b>"}])
    assert "</" not in dumped
    assert json.loads(dumped) == [{"html": "</script><b>x</b>"}]


def test_script_safe_json_keeps_polish_characters():
    assert "obóz stały" in script_safe_json({"category": "obóz stały"})
