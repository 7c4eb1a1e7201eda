from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path

from pydantic import TypeAdapter

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"

_catalog_adapter: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])


@lru_cache(maxsize=32)
def load_catalog(culture: str, directory: Path = LOCALES_DIR) -> dict[str, str]:
    """Read ``{directory}/{culture}.json``, falling back to the neutral culture (``fr-CA`` -> ``fr``).

    A culture without a catalog file yields an empty catalog.
    """
    candidates = [culture]
    neutral = culture.split("-", 1)[0]
    if neutral != culture:
        candidates.append(neutral)

    for name in candidates:
        path = directory / f"{name}.json"
        if path.is_file():
            catalog = _catalog_adapter.validate_json(path.read_bytes())
            logger.debug("Loaded %d messages for culture %s from %s", len(catalog), culture, path)
            return catalog

    logger.debug("No message catalog for culture %s in %s", culture, directory)
    return {}


class StringLocalizer:
    """Maps literal message templates to their translation for one culture.

    Templates without a catalog entry are returned verbatim, so an empty
    localizer is the identity.
    """

    def __init__(self, catalog: Mapping[str, str] | None = None, culture: str = "en") -> None:
        self.culture = culture
        self._catalog = dict(catalog or {})

    @classmethod
    def for_culture(cls, culture: str, directory: Path | None = None) -> StringLocalizer:
        catalog = load_catalog(culture, directory or LOCALES_DIR)
        return cls(catalog, culture=culture)

    def __getitem__(self, template: str) -> str:
        return self._catalog.get(template, template)
