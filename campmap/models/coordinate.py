from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """A point in signed decimal degrees (south and west are negative)."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
