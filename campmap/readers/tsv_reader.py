import csv
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from loguru import logger

from campmap.utils.misc_utils import svg_to_data_url


class InputError(Exception):
    """Raised when an input file or asset cannot be read."""

    pass


def _is_blank(row: Dict[Optional[str], object]) -> bool:
    return not any(isinstance(value, str) and value.strip() for value in row.values())


def read_records(tsv_path: Path) -> Tuple[List[str], List[Dict[str, str]]]:
    """Loads a tab-separated export as (header fieldnames, rows as dicts).

    Rows are keyed by the header exactly as written in the file; trimming is
    left to the header map. Lines with no content at all are skipped.
    """
    logger.info(f"Reading records from {tsv_path}")
    try:
        with open(tsv_path, newline="", encoding="utf-8-sig") as tsv_file:
            reader = csv.DictReader(tsv_file, delimiter="\t")
            fieldnames = list(reader.fieldnames or [])
            rows = [row for row in reader if not _is_blank(row)]
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read input file {tsv_path}: {e}") from e

    logger.info(f"Loaded {len(rows)} rows with {len(fieldnames)} columns.")
    return fieldnames, rows


def read_svg_asset(svg_path: Path) -> str:
    """Reads an SVG icon and returns it as an inline data URL."""
    try:
        svg_content = Path(svg_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Cannot read icon {svg_path}: {e}") from e
    logger.debug(f"Embedded icon {svg_path} ({len(svg_content)} chars)")
    return svg_to_data_url(svg_content)
