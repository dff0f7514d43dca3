"""
GPS coordinate parsing.

The spreadsheet is filled in by hand, so the GPS column holds whatever the
camp commander pasted from their map application. We recognise three shapes,
tried in order:

    53.53010681604106, 20.78754993842591     (plain decimal pair)
    51.518794 N, 22.896442 E                 (compass-suffixed decimal)
    53°44'07.0"N 21°38'39.3"E                (degrees, minutes, seconds)

Anything else is treated as "no coordinate" and the caller decides whether
that deserves a warning.
"""

import re
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from loguru import logger
from pydantic import ValidationError

from campmap.models.coordinate import Coordinate
from campmap.models.enums import Hemisphere

_NUMBER = r"[+-]?\d+(?:[.,]\d+)?"
_UNSIGNED = r"\d+(?:[.,]\d+)?"


def _to_float(value: str) -> float:
    """Converts a number that may use a decimal comma."""
    return float(value.replace(",", "."))


def dms_to_decimal(
    degrees: float, minutes: float, seconds: float, negative: bool = False
) -> float:
    value = degrees + minutes / 60 + seconds / 3600
    return -value if negative else value


class CoordinateMatcher(ABC):
    """A single recognised coordinate notation."""

    name: str = "unknown"
    pattern: re.Pattern

    def parse(self, raw: str) -> Optional[Coordinate]:
        match = self.pattern.search(raw)
        if not match:
            return None
        try:
            latitude, longitude = self._convert(match)
            return Coordinate(latitude=latitude, longitude=longitude)
        except (ValueError, ValidationError) as e:
            # Out-of-range or otherwise nonsensical values
            logger.debug(f"{self.name} matcher rejected '{raw}': {e}")
            return None

    @abstractmethod
    def _convert(self, match: re.Match) -> tuple[float, float]:
        pass


class DecimalPairMatcher(CoordinateMatcher):
    """`lat, lng` with `.` or `,` as decimal separator.

    The pair is split on the comma that separates the two fields, so
    "53,5301, 20,7875" is read as 53.5301 and 20.7875. Text after the second
    number (a place label, a third value) is ignored, unless it is an uppercase
    hemisphere letter ending the value or followed by a comma or a number,
    as in "51,5 N, 22,8 E", which belongs to the next notation.
    """

    name = "decimal pair"
    pattern = re.compile(
        rf"^\s*({_NUMBER})\s*,\s*({_NUMBER})(?![.,]?\d)(?!\s*°?\s*[NSEW](?:\s*(?:,|$)|\s+\d))"
    )

    def _convert(self, match: re.Match) -> tuple[float, float]:
        return _to_float(match.group(1)), _to_float(match.group(2))


class CompassDecimalMatcher(CoordinateMatcher):
    """`51.518794 N, 22.896442 E`; S and W negate."""

    name = "compass decimal"
    pattern = re.compile(
        rf"^\s*({_UNSIGNED})\s*°?\s*([NS])\s*,?\s*({_UNSIGNED})\s*°?\s*([EW])\b"
    )

    def _convert(self, match: re.Match) -> tuple[float, float]:
        lat_hemisphere = Hemisphere(match.group(2))
        lng_hemisphere = Hemisphere(match.group(4))
        latitude = _to_float(match.group(1))
        longitude = _to_float(match.group(3))
        return (
            -latitude if lat_hemisphere.is_negative else latitude,
            -longitude if lng_hemisphere.is_negative else longitude,
        )


class DmsMatcher(CoordinateMatcher):
    """`53°44'07.0"N 21°38'39.3"E` as copied from Google Maps."""

    name = "degrees-minutes-seconds"
    _axis = r"(\d+)\s*°\s*(\d+)\s*['′]\s*(\d+(?:[.,]\d+)?)\s*(?:\"|″|'')\s*"
    pattern = re.compile(_axis + r"([NS])[\s,]+" + _axis + r"([EW])")

    def _convert(self, match: re.Match) -> tuple[float, float]:
        latitude = dms_to_decimal(
            int(match.group(1)),
            int(match.group(2)),
            _to_float(match.group(3)),
            Hemisphere(match.group(4)).is_negative,
        )
        longitude = dms_to_decimal(
            int(match.group(5)),
            int(match.group(6)),
            _to_float(match.group(7)),
            Hemisphere(match.group(8)).is_negative,
        )
        return latitude, longitude


DEFAULT_MATCHERS: Sequence[CoordinateMatcher] = (
    DecimalPairMatcher(),
    CompassDecimalMatcher(),
    DmsMatcher(),
)


class CoordinateParser:
    """Tries each matcher in priority order; the first one that parses wins."""

    def __init__(self, matchers: Optional[Sequence[CoordinateMatcher]] = None):
        self.matchers: List[CoordinateMatcher] = list(matchers or DEFAULT_MATCHERS)

    def parse(self, raw: Optional[str]) -> Optional[Coordinate]:
        if not raw or not raw.strip():
            return None
        for matcher in self.matchers:
            coordinate = matcher.parse(raw)
            if coordinate is not None:
                logger.trace(f"Parsed '{raw}' as {matcher.name}: {coordinate}")
                return coordinate
        return None


_default_parser = CoordinateParser()


def parse_gps(raw: Optional[str]) -> Optional[Coordinate]:
    """Parses a GPS cell with the default matchers. Never raises."""
    return _default_parser.parse(raw)
