"""
Import the library inventory spreadsheet into the games collection.

Usage:
    python -m game_library.data_ingestion.ingest path/to/inventory.csv
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List

import pandas as pd
from pydantic import ValidationError

from ..catalog.admin import generate_search_index
from ..catalog.store import set_game
from ..recommendations.models import Game
from ..recommendations.numeric import parse_float, parse_int
from .config import DEFAULT_IMPORT_CONFIG, ImportConfig

logger = logging.getLogger(__name__)

# Column order of the inventory export; headers in the file are ignored.
CSV_COLUMNS: List[str] = [
    "title",
    "gameId",
    "quantityLibrary",
    "quantityRetail",
    "publisher",
    "upc",
    "purchaseDate",
    "unitCost",
    "vendor",
    "age",
    "playerCountMin",
    "playerCountMax",
    "playTimeMin",
    "playTimeMax",
    "inventoryCategory",
    "gameMode",
    "description",
    "rating",
    "type",
    "complexity",
    "vibe",
    "theme",
    "gameMechanics",
    "tags",
    "notes",
    "imageUrl",
    "rulesUrl",
    "playTested",
]

_INT_COLUMNS = {"quantityLibrary", "quantityRetail", "playerCountMin", "playTimeMin", "playTimeMax"}


@dataclass
class ImportResult:
    imported: int = 0
    errors: int = 0
    skipped: int = 0


def read_inventory(csv_path: Path, config: ImportConfig = DEFAULT_IMPORT_CONFIG) -> pd.DataFrame:
    return pd.read_csv(
        csv_path,
        header=None,
        skiprows=1,
        names=CSV_COLUMNS,
        index_col=False,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
        encoding=config.encoding,
    ).fillna("")


def row_to_document(
    row: pd.Series,
    row_number: int,
    config: ImportConfig = DEFAULT_IMPORT_CONFIG,
) -> dict:
    """Map one inventory row onto a game document."""
    doc: dict = {}
    for column in CSV_COLUMNS:
        value = str(row.get(column, "") or "").strip()
        if column in _INT_COLUMNS:
            doc[column] = parse_int(value)
        elif column == "rating":
            doc[column] = parse_float(value)
        else:
            doc[column] = value

    doc["gameId"] = doc["gameId"] or config.fallback_id(row_number)
    doc["searchIndex"] = generate_search_index(Game.model_validate(doc))
    return doc


def run_import(csv_path: Path, config: ImportConfig = DEFAULT_IMPORT_CONFIG) -> ImportResult:
    """
    Import every row of *csv_path* into the games collection.

    Rows are stored under their inventory id, so re-running the import
    replaces earlier copies instead of duplicating them.
    """
    df = read_inventory(csv_path, config)
    logger.info("Found %d rows in %s", len(df), csv_path)

    result = ImportResult()
    for index, row in df.iterrows():
        # Blank lines are kept as empty rows so fallback ids follow file line numbers.
        line_number = index + 1
        cells = [str(v).strip() for v in row]
        if not any(cells):
            continue
        if not any(cells[1:]):
            result.skipped += 1
            continue

        try:
            doc = row_to_document(row, line_number, config)
            set_game(doc["gameId"], doc)
            result.imported += 1
        except (OSError, ValidationError):
            logger.warning("Failed to import line %d", line_number, exc_info=True)
            result.errors += 1

        if line_number % config.progress_every == 0:
            logger.info("Processed %d of %d rows", line_number, len(df))

    logger.info(
        "Import complete: %d imported, %d errors, %d skipped",
        result.imported,
        result.errors,
        result.skipped,
    )
    return result


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if len(sys.argv) != 2:
        sys.exit("usage: python -m game_library.data_ingestion.ingest <inventory.csv>")
    outcome = run_import(Path(sys.argv[1]))
    print(f"Import complete. {outcome.imported} games imported, {outcome.errors} errors.")
