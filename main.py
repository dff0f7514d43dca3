import sys
import argparse
from pathlib import Path
from typing import List, Optional

# --- Settings/Logging ---
from campmap.logging.setup import setup_logging
from campmap.config.settings import settings, AppSettings

setup_logging()

from loguru import logger

# --- End Settings/Logging ---

from campmap.pipeline import PipelineResult, run_pipeline
from campmap.readers.tsv_reader import InputError

from rich import print
from rich.panel import Panel
from rich.markup import escape


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Generate the scouting camp map page from a TSV export."
    )
    ap.add_argument("--input", dest="input_path", type=Path, help="Input TSV path")
    ap.add_argument("--output", dest="output_path", type=Path, help="Output HTML path")
    ap.add_argument("--tent-icon", dest="tent_icon_path", type=Path, help="Tent SVG icon")
    ap.add_argument("--wolf-icon", dest="wolf_icon_path", type=Path, help="Wolf SVG icon")
    return ap.parse_args(argv)


def apply_overrides(base: AppSettings, args: argparse.Namespace) -> AppSettings:
    """Returns settings with every path given on the command line replaced."""
    overrides = {key: value for key, value in vars(args).items() if value is not None}
    if not overrides:
        return base
    logger.debug(f"Command line overrides: {overrides}")
    return base.model_copy(update=overrides)


def print_summary(result: PipelineResult) -> None:
    normalization = result.normalization
    print(
        Panel(
            f"Generated [cyan]{escape(str(result.output_path))}[/cyan] with "
            f"[bold]{len(normalization.records)}[/bold] camps.\n"
            f"Skipped: {normalization.skipped_cancelled} cancelled, "
            f"{normalization.skipped_unlocated} without coordinates.",
            title="Camp map",
            expand=False,
        )
    )
    if normalization.warnings:
        print(f"[yellow]GPS warnings ({len(normalization.warnings)}):[/yellow]")
        for warning in normalization.warnings:
            print(f"  - {escape(str(warning))}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    app_settings = apply_overrides(settings, parse_args(argv))
    try:
        result = run_pipeline(app_settings)
    except InputError as e:
        logger.error(f"Input error, nothing was written: {e}")
        return 1
    except Exception:
        logger.exception("An error occurred during map generation.")
        return 1

    print_summary(result)
    return 0


def cli() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)


if __name__ == "__main__":
    cli()
