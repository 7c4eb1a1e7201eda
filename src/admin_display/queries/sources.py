from admin_display.models import Query, SqlQuery

QUERY_SOURCES: dict[str, type[Query]] = {
    "Sql": SqlQuery,
}


class UnknownQuerySourceError(ValueError):
    """Raised when no query type is registered for a source name."""


def create_query(source: str) -> Query:
    try:
        query_type = QUERY_SOURCES[source]
    except KeyError as exc:
        raise UnknownQuerySourceError(f"Unknown query source: {source!r}") from exc
    return query_type(source=source)
