from admin_display.db.memory import InMemoryQueryStore
from admin_display.db.seed import QueryDocument, load_documents, load_queries

__all__ = [
    "InMemoryQueryStore",
    "QueryDocument",
    "load_documents",
    "load_queries",
]
