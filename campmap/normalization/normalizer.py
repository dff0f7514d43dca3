from typing import Collection, Iterable, List, Mapping, Optional

from loguru import logger

from campmap.models.camp import CampRecord, NormalizationResult, NormalizationWarning
from campmap.models.enums import TEAM_FIELDS, CampCategory, CampField
from campmap.normalization.header_map import HeaderMap
from campmap.parsing.coordinates import CoordinateParser

RawRecord = Mapping[str, Optional[str]]

# Data rows start on spreadsheet row 2, right after the header
FIRST_DATA_ROW = 2


class NormalizationError(Exception):
    """Raised when the normalizer is configured in a way that cannot work."""

    pass


class Normalizer:
    """Turns raw spreadsheet rows into geocoded CampRecords."""

    def __init__(
        self,
        cancelled_value: str = "TRUE",
        rank_placeholder: str = "brak",
        required_coordinate_categories: Optional[Collection[str]] = None,
        parser: Optional[CoordinateParser] = None,
    ):
        if not cancelled_value or not cancelled_value.strip():
            raise NormalizationError("cancelled_value must be a non-empty string")

        self.cancelled_value = cancelled_value.strip()
        self.rank_placeholder = rank_placeholder.strip()
        if required_coordinate_categories is None:
            required_coordinate_categories = [c.value for c in CampCategory]
        self.required_coordinate_categories = {
            category.strip() for category in required_coordinate_categories
        }
        self.parser = parser or CoordinateParser()
        logger.debug(
            f"Normalizer initialized. Warning on missing GPS for: {sorted(self.required_coordinate_categories)}"
        )

    def normalize(
        self, raw_records: Iterable[RawRecord], header_map: HeaderMap
    ) -> NormalizationResult:
        """Normalizes rows in input order.

        Args:
            raw_records: Rows keyed by the original (untrimmed) column names.
            header_map: Resolution of canonical fields to those column names.

        Returns:
            The kept records together with warnings for primary camps that
            had to be dropped for lack of coordinates.
        """
        result = NormalizationResult()
        if not header_map.has(CampField.GPS):
            logger.warning("No GPS column found in input; every row will be skipped.")

        for index, row in enumerate(raw_records):
            row_number = index + FIRST_DATA_ROW

            if self.is_cancelled(row, header_map):
                result.skipped_cancelled += 1
                logger.debug(f"Row {row_number}: cancelled, skipping.")
                continue

            display_name = self.build_display_name(row, header_map)
            category = header_map.get(row, CampField.CATEGORY).strip()
            raw_gps = header_map.get(row, CampField.GPS).strip()
            coordinate = self.parser.parse(raw_gps)

            if coordinate is None:
                result.skipped_unlocated += 1
                if category in self.required_coordinate_categories:
                    warning = NormalizationWarning(
                        row_number=row_number,
                        category=category,
                        display_name=display_name,
                        raw_gps=raw_gps or None,
                        reason="unparseable GPS" if raw_gps else "missing GPS",
                    )
                    logger.warning(str(warning))
                    result.warnings.append(warning)
                else:
                    logger.debug(
                        f"Row {row_number}: no usable GPS for '{category}', skipping."
                    )
                continue

            result.records.append(
                CampRecord(
                    category=category,
                    display_name=display_name,
                    coordinate=coordinate,
                    start_date=header_map.get(row, CampField.START_DATE).strip(),
                    end_date=header_map.get(row, CampField.END_DATE).strip(),
                    address=header_map.get(row, CampField.ADDRESS).strip(),
                    email=header_map.get(row, CampField.EMAIL).strip(),
                    team_names=self.collect_team_names(row, header_map),
                )
            )

        logger.info(
            f"Normalization complete. Kept {len(result.records)} records, "
            f"skipped {result.skipped_cancelled} cancelled and "
            f"{result.skipped_unlocated} without coordinates."
        )
        return result

    def is_cancelled(self, row: RawRecord, header_map: HeaderMap) -> bool:
        return header_map.get(row, CampField.CANCELLED).strip() == self.cancelled_value

    def collect_team_names(self, row: RawRecord, header_map: HeaderMap) -> List[str]:
        teams = []
        for field in TEAM_FIELDS:
            team_name = header_map.get(row, field).strip()
            if team_name:
                teams.append(team_name)
        return teams

    def build_display_name(self, row: RawRecord, header_map: HeaderMap) -> str:
        """`Nr [instructor rank] first last [scout rank]`, empty parts skipped."""
        parts = [
            header_map.get(row, CampField.NUMBER).strip(),
            self._rank(header_map.get(row, CampField.INSTRUCTOR_RANK)),
            header_map.get(row, CampField.FIRST_NAME).strip(),
            header_map.get(row, CampField.LAST_NAME).strip(),
            self._rank(header_map.get(row, CampField.SCOUT_RANK)),
        ]
        return " ".join(part for part in parts if part)

    def _rank(self, value: str) -> str:
        value = value.strip()
        if value == self.rank_placeholder:
            return ""
        return value
