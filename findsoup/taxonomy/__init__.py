"""Static classification tables for FindSoupNearMe.

The tables ship as JSON files in ``data/`` and are loaded once per process
into an immutable :class:`Taxonomy`. Set ``TAXONOMY_DIR`` to load an
alternative set of tables with the same file names.
"""

import json
import logging
from pathlib import Path

from findsoup.config import get_config
from findsoup.taxonomy.schema import (
    CuisineDefault,
    CuisineDefinition,
    CuisineTable,
    FallbackTable,
    NameRootRule,
    PatternRule,
    QueryHint,
    SoupCatalog,
    SoupTypeDefinition,
    Taxonomy,
)

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"

TABLE_FILES = {
    "cuisines": "cuisines.json",
    "soups": "soup_types.json",
    "fallbacks": "fallbacks.json",
}


def load_taxonomy(data_dir: Path | str | None = None) -> Taxonomy:
    """Load and validate the classification tables.

    Args:
        data_dir: Directory holding the table files (bundled tables if None)

    Returns:
        Validated Taxonomy

    Raises:
        FileNotFoundError: If a table file is missing
        pydantic.ValidationError: If the tables are inconsistent
    """
    data_dir = Path(data_dir) if data_dir else DATA_DIR

    tables = {}
    for key, filename in TABLE_FILES.items():
        table_file = data_dir / filename

        if not table_file.exists():
            raise FileNotFoundError(f"Classification table not found: {table_file}")

        tables[key] = json.loads(table_file.read_text(encoding="utf-8"))

    taxonomy = Taxonomy.model_validate(tables)
    logger.info(
        f"Loaded classification tables {taxonomy.version} from {data_dir} "
        f"({len(taxonomy.cuisines.cuisines)} cuisines, "
        f"{len(taxonomy.soups.soup_types)} soup types)"
    )
    return taxonomy


# Global taxonomy instance
taxonomy: Taxonomy | None = None


def get_taxonomy() -> Taxonomy:
    """Get or load the process-wide taxonomy."""
    global taxonomy
    if taxonomy is None:
        taxonomy = load_taxonomy(get_config().taxonomy_dir)
    return taxonomy


__all__ = [
    "CuisineDefault",
    "CuisineDefinition",
    "CuisineTable",
    "FallbackTable",
    "NameRootRule",
    "PatternRule",
    "QueryHint",
    "SoupCatalog",
    "SoupTypeDefinition",
    "Taxonomy",
    "get_taxonomy",
    "load_taxonomy",
]
