from html import escape
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from .coordinate import Coordinate

NO_TEAMS_LABEL = "brak"


class CampRecord(BaseModel):
    """A single geocoded camp or colony, ready to be placed on the map."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    category: str = ""
    display_name: str = ""
    coordinate: Coordinate
    start_date: str = ""
    end_date: str = ""
    address: str = ""
    email: str = ""
    team_names: List[str] = Field(default_factory=list)

    @computed_field(alias="detailsHtml")  # type: ignore[misc]
    @property
    def details_html(self) -> str:
        """Popup markup shown after clicking the marker."""
        if self.team_names:
            teams_html = "".join(f"<div>- {escape(team)}</div>" for team in self.team_names)
        else:
            teams_html = NO_TEAMS_LABEL
        return (
            f"<b>{escape(self.display_name)}</b><br>"
            f"<b>Adres:</b> {escape(self.address)}<br>"
            f"<b>Email:</b> {escape(self.email)}<br>"
            f"<b>Data rozpoczęcia:</b> {escape(self.start_date)}<br>"
            f"<b>Data zakończenia:</b> {escape(self.end_date)}<br>"
            f"<b>Drużyny:</b> {teams_html}"
        )


class NormalizationWarning(BaseModel):
    """A primary-category row that was dropped because it has no usable GPS."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    row_number: int  # Spreadsheet row, header being row 1
    category: str
    display_name: str
    raw_gps: Optional[str] = None
    reason: str

    def __str__(self) -> str:
        gps = f" '{self.raw_gps}'" if self.raw_gps else ""
        return (
            f"Row {self.row_number} ({self.category}) {self.display_name}: "
            f"{self.reason}{gps}"
        )


class NormalizationResult(BaseModel):
    records: List[CampRecord] = Field(default_factory=list)
    warnings: List[NormalizationWarning] = Field(default_factory=list)
    skipped_cancelled: int = 0
    skipped_unlocated: int = 0
