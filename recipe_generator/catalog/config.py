from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class CatalogConfig:
    """
    Configuration for the static recipe catalog.
    """

    data_path: Path = Path(__file__).resolve().parent.parent / "data" / "recipes.json"
    suggestion_limit: int = 8


DEFAULT_CATALOG_CONFIG = CatalogConfig()
