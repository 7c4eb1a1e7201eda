"""Domain models edited through the admin display pipeline.

Queries are plain mutable dataclasses. They compare by identity so that the
uniqueness check can tell "the query being edited" apart from "another query
stored under the same name".
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class Query:
    name: str = ""
    source: str = ""
    schema: str | None = None


@dataclass(eq=False)
class SqlQuery(Query):
    source: str = "Sql"
    template: str = ""
    return_documents: bool = False
