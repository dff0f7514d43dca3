# campmap/utils/misc_utils.py
import json
from typing import Any
from urllib.parse import quote

# Characters JavaScript's encodeURIComponent leaves untouched
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    """Percent-encodes a string the same way as JS encodeURIComponent."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def svg_to_data_url(svg_content: str) -> str:
    return "data:image/svg+xml;utf8," + encode_uri_component(svg_content)


def script_safe_json(data: Any) -> str:
    """Dumps JSON that can be pasted inside a <script> element."""
    dumped = json.dumps(data, indent=2, ensure_ascii=False)
    # "</script>" inside a string literal would otherwise end the element
    return dumped.replace("</", "<\\/")
