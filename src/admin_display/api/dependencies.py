from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator

from admin_display.core.localization import StringLocalizer
from admin_display.core.manager import DisplayManager
from admin_display.core.ports.store import QueryStore
from admin_display.db.memory import InMemoryQueryStore
from admin_display.models import Query
from admin_display.queries.registration import create_query_display_manager

logger = logging.getLogger(__name__)

_store: InMemoryQueryStore | None = None


def _create_store() -> InMemoryQueryStore:
    seed_path = os.getenv("ADMIN_DISPLAY_SEED")
    if seed_path:
        return InMemoryQueryStore.from_seed(seed_path)
    return InMemoryQueryStore()


async def get_store() -> AsyncIterator[QueryStore]:
    """Yield the process-wide ``QueryStore``, creating it lazily on first call."""
    global _store  # noqa: PLW0603
    if _store is None:
        _store = _create_store()
    yield _store


def get_localizer() -> StringLocalizer:
    return StringLocalizer.for_culture(os.getenv("ADMIN_DISPLAY_CULTURE", "en"))


def build_display_manager(store: QueryStore) -> DisplayManager[Query]:
    return create_query_display_manager(store, get_localizer())


async def shutdown_store() -> None:
    global _store  # noqa: PLW0603
    if _store is not None:
        logger.info("Dropping in-memory query store with %d queries", len(_store.queries))
        _store = None
