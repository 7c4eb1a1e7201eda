from typing import Protocol

from admin_display.models import Query


class QueryStore(Protocol):
    async def get_query(self, name: str) -> Query | None: ...

    async def list_queries(self) -> list[Query]: ...

    async def save_query(self, name: str, query: Query) -> None: ...

    async def delete_query(self, name: str) -> bool: ...
