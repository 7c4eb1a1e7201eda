from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from admin_display.models import Query, SqlQuery
from admin_display.queries.sources import create_query


class QueryDocument(BaseModel):
    """Serialized form of a query, as found in seed files."""

    model_config = ConfigDict(populate_by_name=True)

    source: str
    name: str = ""
    schema_: str | None = Field(default=None, alias="schema")
    template: str = ""
    return_documents: bool = False

    def to_query(self) -> Query:
        query = create_query(self.source)
        query.name = self.name
        query.schema = self.schema_
        if isinstance(query, SqlQuery):
            query.template = self.template
            query.return_documents = self.return_documents
        return query


_DOCUMENTS = TypeAdapter(list[QueryDocument])


def load_documents(path: str | Path) -> list[QueryDocument]:
    return _DOCUMENTS.validate_json(Path(path).read_bytes())


def load_queries(path: str | Path) -> list[Query]:
    return [doc.to_query() for doc in load_documents(path)]
