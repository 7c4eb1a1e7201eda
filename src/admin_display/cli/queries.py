import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from admin_display.core.binding import FormModelUpdater
from admin_display.db.memory import InMemoryQueryStore
from admin_display.db.seed import QueryDocument, load_documents
from admin_display.queries.registration import create_query_display_manager
from admin_display.queries.sources import UnknownQuerySourceError

queries_app = typer.Typer(help="Inspect and validate query definitions.")
console = Console()


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def _load_store(seed: Path | None) -> InMemoryQueryStore:
    if seed is None:
        return InMemoryQueryStore()
    return InMemoryQueryStore.from_seed(seed)


def _document_form(doc: QueryDocument) -> dict[str, Any]:
    """Flatten a query document into the form fields the query drivers bind."""
    form: dict[str, Any] = {
        "Query.name": doc.name,
        "Query.source": doc.source,
        "SqlQuery.query": doc.template,
        "SqlQuery.return_documents": doc.return_documents,
    }
    if doc.schema_ is not None:
        form["Query.schema"] = doc.schema_
    return form


async def validate_documents(
    documents: Sequence[QueryDocument], store: InMemoryQueryStore
) -> list[tuple[str, str, str]]:
    """Run each document through the update pipeline; return (query, field, message) rows.

    Valid documents are saved to ``store`` so later duplicates are reported.
    """
    manager = create_query_display_manager(store)
    problems: list[tuple[str, str, str]] = []
    for doc in documents:
        query = doc.to_query()
        updater = FormModelUpdater(_document_form(doc))
        await manager.update_editor(query, updater, is_new=True)
        if updater.model_state.is_valid:
            await store.save_query(query.name, query)
            continue
        for key, messages in updater.model_state.errors.items():
            problems.extend((doc.name, key, message) for message in messages)
    return problems


@queries_app.command("list")
def list_queries(
    seed: Annotated[Path, typer.Option(help="JSON file with query definitions.", exists=True, dir_okay=False)],
) -> None:
    """List the queries defined in a seed file."""
    store = _load_store(seed)

    async def _run() -> list[tuple[str, str, str]]:
        return [(q.name, q.source, q.schema or "") for q in await store.list_queries()]

    _render_table(["name", "source", "schema"], asyncio.run(_run()))


@queries_app.command("validate")
def validate(
    path: Annotated[Path, typer.Argument(help="JSON file with query definitions.", exists=True, dir_okay=False)],
    seed: Annotated[
        Path | None,
        typer.Option(help="Existing queries to check names against.", exists=True, dir_okay=False),
    ] = None,
) -> None:
    """Validate query definitions the same way the admin editor does."""
    try:
        documents = load_documents(path)
        store = _load_store(seed)
        problems = asyncio.run(validate_documents(documents, store))
    except (ValidationError, UnknownQuerySourceError) as exc:
        console.print(f"[red]Cannot read query definitions:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if problems:
        _render_table(["query", "field", "error"], problems)
        raise typer.Exit(code=1)
    console.print(f"[green]{len(documents)} query definition(s) are valid[/green]")
