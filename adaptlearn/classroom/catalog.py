"""
LevelCatalog - Load the static lesson catalog from YAML.

The catalog is created once at start-up and never mutated. Level ids must
form the sequence 1..N so that every level n > 1 has a predecessor n-1 to
unlock it.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional

import yaml
from pydantic import ValidationError

from adaptlearn.schemas import Level


logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent.parent / "data" / "levels.yaml"


class CatalogError(ValueError):
    """Raised when a catalog file cannot be turned into valid levels."""


class LevelCatalog:
    """
    Ordered, read-only collection of levels.

    Iterates in id order; lookup by id via get().
    """

    def __init__(self, levels: list[Level]):
        ordered = sorted(levels, key=lambda level: level.id)
        ids = [level.id for level in ordered]
        if len(set(ids)) != len(ids):
            raise CatalogError(f"Duplicate level ids in catalog: {ids}")
        if ids != list(range(1, len(ids) + 1)):
            raise CatalogError(f"Level ids must run 1..N without gaps, got {ids}")

        self._levels = tuple(ordered)
        self._by_id = {level.id: level for level in ordered}

    @property
    def levels(self) -> tuple[Level, ...]:
        return self._levels

    def get(self, level_id: int) -> Optional[Level]:
        """Get a level by id, or None if unknown."""
        return self._by_id.get(level_id)

    def ids(self) -> list[int]:
        return [level.id for level in self._levels]

    def __len__(self) -> int:
        return len(self._levels)

    def __iter__(self) -> Iterator[Level]:
        return iter(self._levels)

    def __contains__(self, level_id: object) -> bool:
        return level_id in self._by_id


def parse_catalog(data: dict) -> LevelCatalog:
    """
    Build a catalog from already-parsed YAML/JSON data.

    Args:
        data: Mapping with a "levels" list

    Raises:
        CatalogError: If the structure or any level is invalid
    """
    if not isinstance(data, dict) or not isinstance(data.get("levels"), list):
        raise CatalogError("Catalog must be a mapping with a 'levels' list")

    levels = []
    for i, raw in enumerate(data["levels"]):
        try:
            levels.append(Level.model_validate(raw))
        except ValidationError as e:
            raise CatalogError(f"Invalid level at position {i}: {e}") from e

    if not levels:
        raise CatalogError("Catalog contains no levels")

    return LevelCatalog(levels)


def load_catalog(path: Path | None = None) -> LevelCatalog:
    """
    Load the level catalog from a YAML file.

    Args:
        path: Optional custom catalog file (default: bundled levels.yaml)

    Returns:
        LevelCatalog with levels in id order

    Raises:
        FileNotFoundError: If the catalog file doesn't exist
        CatalogError: If YAML parsing or validation fails
    """
    file_path = Path(path) if path else DEFAULT_CATALOG_PATH

    if not file_path.exists():
        raise FileNotFoundError(f"Level catalog not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise CatalogError(f"Could not parse {file_path}: {e}") from e

    catalog = parse_catalog(data)
    logger.info(f"Loaded {len(catalog)} levels from {file_path}")
    return catalog
