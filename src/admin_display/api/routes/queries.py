import copy
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from admin_display.api.dependencies import build_display_manager, get_store
from admin_display.api.rendering import render_shape
from admin_display.api.schemas import DisplayListResponse, EditorResponse, UpdateRequest
from admin_display.core.binding import FormModelUpdater
from admin_display.core.ports.store import QueryStore
from admin_display.models import Query as QueryModel
from admin_display.queries.sources import UnknownQuerySourceError, create_query

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/queries", tags=["queries"])


def _new_query(source: str) -> QueryModel:
    try:
        return create_query(source)
    except UnknownQuerySourceError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


async def _existing_query(store: QueryStore, name: str) -> QueryModel:
    query = await store.get_query(name)
    if query is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Query not found: {name}")
    return query


@router.get("", response_model=DisplayListResponse)
async def list_queries(store: QueryStore = Depends(get_store)) -> DisplayListResponse:
    manager = build_display_manager(store)
    items = []
    for query in await store.list_queries():
        shape = await manager.build_display(query, FormModelUpdater(), display_type="SummaryAdmin")
        items.append(render_shape(shape))
    return DisplayListResponse(items=items)


@router.get("/create", response_model=EditorResponse)
async def create_form(
    source: str = Query(...),
    store: QueryStore = Depends(get_store),
) -> EditorResponse:
    query = _new_query(source)
    shape = await build_display_manager(store).build_editor(query, FormModelUpdater(), is_new=True)
    return EditorResponse(shape=render_shape(shape))


@router.post("/create", response_model=EditorResponse, status_code=status.HTTP_201_CREATED)
async def create(
    body: UpdateRequest,
    response: Response,
    source: str = Query(...),
    store: QueryStore = Depends(get_store),
) -> EditorResponse:
    query = _new_query(source)
    manager = build_display_manager(store)
    updater = FormModelUpdater(body.fields)

    shape = await manager.update_editor(query, updater, is_new=True)
    if not updater.model_state.is_valid:
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        return EditorResponse(shape=render_shape(shape), errors=updater.model_state.errors)

    await store.save_query(query.name, query)
    logger.info("Created %s query %r", query.source, query.name)
    display = await manager.build_display(query, updater, display_type="SummaryAdmin")
    return EditorResponse(shape=render_shape(display))


@router.get("/{name}/edit", response_model=EditorResponse)
async def edit_form(name: str, store: QueryStore = Depends(get_store)) -> EditorResponse:
    query = await _existing_query(store, name)
    shape = await build_display_manager(store).build_editor(query, FormModelUpdater())
    return EditorResponse(shape=render_shape(shape))


@router.post("/{name}/edit", response_model=EditorResponse)
async def edit(
    name: str,
    body: UpdateRequest,
    response: Response,
    store: QueryStore = Depends(get_store),
) -> EditorResponse:
    query = await _existing_query(store, name)
    snapshot = copy.copy(query)
    manager = build_display_manager(store)
    updater = FormModelUpdater(body.fields)

    shape = await manager.update_editor(query, updater)
    if not updater.model_state.is_valid:
        rendered = render_shape(shape)
        # Drivers update the stored instance in place.
        vars(query).update(vars(snapshot))
        response.status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
        return EditorResponse(shape=rendered, errors=updater.model_state.errors)

    await store.save_query(name, query)
    logger.info("Updated query %r", query.name)
    display = await manager.build_display(query, updater, display_type="SummaryAdmin")
    return EditorResponse(shape=render_shape(display))


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete(name: str, store: QueryStore = Depends(get_store)) -> Response:
    if not await store.delete_query(name):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Query not found: {name}")
    logger.info("Deleted query %r", name)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
