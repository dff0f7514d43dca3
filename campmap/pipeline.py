from pathlib import Path
from typing import Tuple

from loguru import logger
from pydantic import BaseModel

from campmap.config.settings import AppSettings
from campmap.models.camp import NormalizationResult
from campmap.normalization.header_map import HeaderMap
from campmap.normalization.normalizer import Normalizer
from campmap.readers.tsv_reader import read_records, read_svg_asset
from campmap.rendering.html_emitter import (
    IconSet,
    PageOptions,
    render_document,
    write_document,
)


class PipelineResult(BaseModel):
    output_path: Path
    normalization: NormalizationResult


def build_document(app_settings: AppSettings) -> Tuple[str, NormalizationResult]:
    """Reads every input and renders the page without touching the output file."""
    fieldnames, rows = read_records(app_settings.input_path)
    icons = IconSet(
        tent_data_url=read_svg_asset(app_settings.tent_icon_path),
        wolf_data_url=read_svg_asset(app_settings.wolf_icon_path),
    )

    header_map = HeaderMap.from_fieldnames(fieldnames)
    normalizer = Normalizer(
        cancelled_value=app_settings.cancelled_value,
        rank_placeholder=app_settings.rank_placeholder,
        required_coordinate_categories=app_settings.required_coordinate_categories,
    )
    normalization = normalizer.normalize(rows, header_map)

    options = PageOptions(
        title=app_settings.page_title,
        center_lat=app_settings.map_center_lat,
        center_lng=app_settings.map_center_lng,
        zoom=app_settings.map_zoom,
    )
    return render_document(normalization.records, icons, options), normalization


def run_pipeline(app_settings: AppSettings) -> PipelineResult:
    """Runs read -> normalize -> render -> write.

    The output file is only written once the whole document is rendered, so
    a failing input leaves any previous output untouched.
    """
    logger.info("Starting camp map generation...")
    document, normalization = build_document(app_settings)
    output_path = write_document(app_settings.output_path, document)
    logger.success(
        f"Generated {output_path} with {len(normalization.records)} camps."
    )
    return PipelineResult(output_path=output_path, normalization=normalization)
