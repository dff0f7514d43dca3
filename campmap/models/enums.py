from enum import Enum


class CampField(str, Enum):
    """Canonical identifiers of the spreadsheet columns we read."""

    NUMBER = "NUMBER"
    CATEGORY = "CATEGORY"
    GPS = "GPS"
    CANCELLED = "CANCELLED"
    FIRST_NAME = "FIRST_NAME"
    LAST_NAME = "LAST_NAME"
    INSTRUCTOR_RANK = "INSTRUCTOR_RANK"
    SCOUT_RANK = "SCOUT_RANK"
    ADDRESS = "ADDRESS"
    EMAIL = "EMAIL"
    START_DATE = "START_DATE"
    END_DATE = "END_DATE"
    TEAM_1 = "TEAM_1"
    TEAM_2 = "TEAM_2"
    TEAM_3 = "TEAM_3"
    TEAM_4 = "TEAM_4"
    TEAM_5 = "TEAM_5"
    TEAM_6 = "TEAM_6"
    TEAM_7 = "TEAM_7"
    TEAM_8 = "TEAM_8"


TEAM_FIELDS = (
    CampField.TEAM_1,
    CampField.TEAM_2,
    CampField.TEAM_3,
    CampField.TEAM_4,
    CampField.TEAM_5,
    CampField.TEAM_6,
    CampField.TEAM_7,
    CampField.TEAM_8,
)


class CampCategory(str, Enum):
    STATIONARY_CAMP = "obóz stały"
    COLONY = "kolonia"
    # Other forms (e.g. wędrówka) pass through as plain strings


class Hemisphere(str, Enum):
    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"

    @property
    def is_negative(self) -> bool:
        return self in (Hemisphere.SOUTH, Hemisphere.WEST)
