"""
Renders the standalone map page.

The page is a single HTML file: camp data and both icons are inlined, only
Leaflet and the OpenStreetMap tiles are loaded by URL. Nothing time-dependent
is written, so the same input always produces the same bytes.
"""

import json
from html import escape
from pathlib import Path
from typing import Dict, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict

from campmap.models.camp import CampRecord
from campmap.models.enums import CampCategory
from campmap.utils.misc_utils import script_safe_json

LEAFLET_CSS_URL = "https://unpkg.com/leaflet/dist/leaflet.css"
LEAFLET_JS_URL = "https://unpkg.com/leaflet/dist/leaflet.js"
TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
TILE_ATTRIBUTION = "&copy; OpenStreetMap contributors"

# Icon key per category; anything else falls back to "default"
CATEGORY_ICONS: Dict[str, str] = {
    CampCategory.STATIONARY_CAMP.value: "tent",
    CampCategory.COLONY.value: "wolf",
}


class IconSet(BaseModel):
    tent_data_url: str
    wolf_data_url: str


class PageOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = "Mapa Obozów Harcerskich"
    center_lat: float = 52.0
    center_lng: float = 19.0
    zoom: int = 6


_STYLE = """
    html, body, #map { height: 100%; margin: 0; padding: 0; }
    #map { width: 100vw; height: 100vh; }
    .camp-label {
      font-weight: bold;
      font-size: 1em;
      color: #333;
      text-align: center;
      margin-bottom: 2px;
      text-shadow: 0 0 2px #fff;
    }
    #date-filter {
      position: fixed; top: 12px; right: 12px; z-index: 1000;
      background: #fff; padding: 10px 12px; border-radius: 8px;
      box-shadow: 0 2px 6px rgba(0,0,0,0.2);
      font-family: system-ui, sans-serif; font-size: 13px;
    }
    #date-filter label { display: block; margin-bottom: 6px; }
    #date-filter .count { margin-top: 6px; color: #555; }
"""

_FILTER_PANEL = """
  <div id="date-filter">
    <div><b>Termin wyjazdu</b></div>
    <label>od <input type="date" id="filter-from"></label>
    <label>do <input type="date" id="filter-to"></label>
    <button type="button" id="filter-reset">Wyczyść</button>
    <div class="count" id="filter-count"></div>
  </div>
"""

# Plain string: uses JS template literals, so it must not go through an f-string
_SCRIPT_BODY = """
    function makeIcon(url) {
      return L.icon({
        iconUrl: url,
        iconSize: [40, 40],
        iconAnchor: [20, 40],
        popupAnchor: [0, -40]
      });
    }

    const icons = {
      tent: makeIcon(tentDataUrl),
      wolf: makeIcon(wolfDataUrl),
      default: makeIcon(tentDataUrl)
    };

    const map = L.map('map').setView(MAP_CENTER, MAP_ZOOM);
    L.tileLayer(TILE_URL, { attribution: TILE_ATTRIBUTION }).addTo(map);

    // Accepts 2025-07-01 and 1.07.2025 (also with / or - between parts)
    function parseDate(value) {
      if (!value) return null;
      const text = String(value).trim();
      let m = text.match(/^(\\d{4})-(\\d{1,2})-(\\d{1,2})/);
      if (m) return new Date(+m[1], +m[2] - 1, +m[3]);
      m = text.match(/^(\\d{1,2})[.\\/-](\\d{1,2})[.\\/-](\\d{4})/);
      if (m) return new Date(+m[3], +m[2] - 1, +m[1]);
      return null;
    }

    const entries = camps.map(camp => {
      const position = [camp.coordinate.latitude, camp.coordinate.longitude];
      const icon = icons[CATEGORY_ICONS[camp.category]] || icons.default;
      const marker = L.marker(position, { icon }).bindPopup(camp.detailsHtml);
      const label = L.marker(position, {
        icon: L.divIcon({
          className: 'camp-label',
          html: escapeHtml(camp.displayName),
          iconAnchor: [16, 0],
          iconSize: [120, 24]
        }),
        interactive: false
      });
      const layer = L.layerGroup([marker, label]).addTo(map);
      const start = parseDate(camp.startDate);
      const end = parseDate(camp.endDate) || start;
      return { layer, start: start || end, end };
    });

    function escapeHtml(text) {
      const div = document.createElement('div');
      div.textContent = text;
      return div.innerHTML;
    }

    function applyFilter() {
      const from = parseDate(document.getElementById('filter-from').value);
      const to = parseDate(document.getElementById('filter-to').value);
      let shown = 0;
      entries.forEach(entry => {
        let visible = true;
        // Camps with unreadable dates are never hidden
        if (entry.start && entry.end) {
          if (from && entry.end < from) visible = false;
          if (to && entry.start > to) visible = false;
        }
        if (visible) {
          shown += 1;
          if (!map.hasLayer(entry.layer)) entry.layer.addTo(map);
        } else if (map.hasLayer(entry.layer)) {
          map.removeLayer(entry.layer);
        }
      });
      document.getElementById('filter-count').textContent =
        `Widoczne: ${shown} / ${entries.length}`;
    }

    document.getElementById('filter-from').addEventListener('change', applyFilter);
    document.getElementById('filter-to').addEventListener('change', applyFilter);
    document.getElementById('filter-reset').addEventListener('click', () => {
      document.getElementById('filter-from').value = '';
      document.getElementById('filter-to').value = '';
      applyFilter();
    });
    applyFilter();
"""


def render_document(
    records: Sequence[CampRecord],
    icons: IconSet,
    options: Optional[PageOptions] = None,
) -> str:
    """Builds the full HTML page for the given camps."""
    options = options or PageOptions()
    camps_json = script_safe_json(
        [record.model_dump(mode="json", by_alias=True) for record in records]
    )

    # JS head as an f-string, everything with ${...} stays in _SCRIPT_BODY
    script_head = f"""
    // Inlined camp data
    const camps = {camps_json};

    // Inlined SVG icons as data URLs
    const tentDataUrl = {json.dumps(icons.tent_data_url)};
    const wolfDataUrl = {json.dumps(icons.wolf_data_url)};

    const CATEGORY_ICONS = {json.dumps(CATEGORY_ICONS, ensure_ascii=False)};
    const MAP_CENTER = [{options.center_lat}, {options.center_lng}];
    const MAP_ZOOM = {options.zoom};
    const TILE_URL = {json.dumps(TILE_URL)};
    const TILE_ATTRIBUTION = {json.dumps(TILE_ATTRIBUTION)};
"""

    document = f"""<!-- AUTO-GENERATED FILE. DO NOT EDIT DIRECTLY. -->
<!DOCTYPE html>
<html lang="pl">
<head>
  <meta charset="UTF-8">
  <title>{escape(options.title)}</title>
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <link rel="stylesheet" href="{LEAFLET_CSS_URL}" />
  <style>{_STYLE}  </style>
</head>
<body>
  <div id="map"></div>{_FILTER_PANEL}
  <script src="{LEAFLET_JS_URL}"></script>
  <script>{script_head}{_SCRIPT_BODY}  </script>
</body>
</html>
"""
    logger.debug(f"Rendered document with {len(records)} camps ({len(document)} chars)")
    return document


def write_document(output_path: Path, document: str) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document, encoding="utf-8")
    logger.info(f"Wrote {output_path}")
    return output_path
