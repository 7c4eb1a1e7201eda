import logging
from collections.abc import Iterable
from pathlib import Path

from admin_display.db.seed import load_queries
from admin_display.models import Query

logger = logging.getLogger(__name__)


class InMemoryQueryStore:
    """Dict-backed ``QueryStore``; returns the stored instances themselves."""

    def __init__(self, queries: Iterable[Query] = ()) -> None:
        self.queries: dict[str, Query] = {}
        for query in queries:
            if query.name in self.queries:
                logger.warning("Duplicate query name %r; keeping the last definition", query.name)
            self.queries[query.name] = query

    @classmethod
    def from_seed(cls, path: str | Path) -> "InMemoryQueryStore":
        store = cls(load_queries(path))
        logger.info("Loaded %d queries from %s", len(store.queries), path)
        return store

    async def get_query(self, name: str) -> Query | None:
        return self.queries.get(name)

    async def list_queries(self) -> list[Query]:
        return sorted(self.queries.values(), key=lambda q: q.name)

    async def save_query(self, name: str, query: Query) -> None:
        if name and name != query.name:
            self.queries.pop(name, None)
        self.queries[query.name] = query

    async def delete_query(self, name: str) -> bool:
        return self.queries.pop(name, None) is not None
