import logging
from pathlib import Path
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from campmap.models.enums import CampCategory


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Input / Output Paths
    input_path: Path = Field(
        Path("data/HAL 2025 - lista wyjazdów - Dane aktualne.tsv"),
        description="Tab-separated spreadsheet export with one camp per row.",
    )
    tent_icon_path: Path = Field(
        Path("data/tent.svg"), description="SVG icon used for stationary camps."
    )
    wolf_icon_path: Path = Field(
        Path("data/wolf.svg"), description="SVG icon used for colonies."
    )
    output_path: Path = Field(
        Path("public/index.html"), description="Where the generated page is written."
    )

    # Normalization Rules
    cancelled_value: str = Field(
        "TRUE", description="Value of the 'Odwołany?' column marking a cancelled camp."
    )
    rank_placeholder: str = Field(
        "brak",
        description="Rank value meaning 'no rank'; omitted from display names.",
    )
    required_coordinate_categories: List[str] = Field(
        default_factory=lambda: [category.value for category in CampCategory],
        description="Categories that produce a warning when GPS cannot be parsed.",
    )

    # Page Settings
    page_title: str = Field("Mapa Obozów Harcerskich")
    map_center_lat: float = Field(52.0, ge=-90, le=90)
    map_center_lng: float = Field(19.0, ge=-180, le=180)
    map_zoom: int = Field(6, ge=0, le=19)

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_prefix="CAMPMAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
