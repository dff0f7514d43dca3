import pytest

from campmap.config.settings import AppSettings
from campmap.models.enums import CampField
from campmap.normalization.header_map import DEFAULT_HEADER_LABELS

TENT_SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"><path d="M0 10 L5 0 L10 10 Z" fill="#2e7d32"/></svg>'
WOLF_SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"><circle cx="5" cy="5" r="4" fill="#555"/></svg>'

# Header as exported from the sheet; a few labels carry stray whitespace
HEADER = [
    label if field not in (CampField.GPS, CampField.CANCELLED) else f" {label} "
    for field, label in DEFAULT_HEADER_LABELS.items()
]


def make_row(**values):
    """Builds a raw row keyed by spreadsheet labels from CampField names."""
    row = {label: "" for label in DEFAULT_HEADER_LABELS.values()}
    for name, value in values.items():
        row[DEFAULT_HEADER_LABELS[CampField[name]]] = value
    return row


@pytest.fixture
def write_tsv(tmp_path):
    """Writes rows (dicts from make_row) to a TSV file using HEADER."""

    def _write(rows, name="camps.tsv"):
        lines = ["\t".join(HEADER)]
        for row in rows:
            lines.append("\t".join(row.get(label.strip(), "") for label in HEADER))
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def icon_paths(tmp_path):
    tent = tmp_path / "tent.svg"
    wolf = tmp_path / "wolf.svg"
    tent.write_text(TENT_SVG, encoding="utf-8")
    wolf.write_text(WOLF_SVG, encoding="utf-8")
    return tent, wolf


@pytest.fixture
def make_settings(tmp_path, icon_paths):
    tent, wolf = icon_paths

    def _make(input_path, output_name="public/index.html"):
        return AppSettings(
            input_path=input_path,
            tent_icon_path=tent,
            wolf_icon_path=wolf,
            output_path=tmp_path / output_name,
        )

    return _make
