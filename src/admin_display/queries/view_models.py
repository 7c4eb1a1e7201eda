from __future__ import annotations

from dataclasses import dataclass

from admin_display.models import Query


@dataclass
class EditQueryViewModel:
    name: str = ""
    source: str = ""
    schema: str | None = None
    query: Query | None = None


@dataclass
class SqlQueryViewModel:
    query: str = ""
    return_documents: bool = False
