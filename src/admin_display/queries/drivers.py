from __future__ import annotations

import logging
from types import SimpleNamespace

from admin_display.core.contexts import UpdateEditorContext
from admin_display.core.driver import DisplayDriverBase
from admin_display.core.localization import StringLocalizer
from admin_display.core.ports.store import QueryStore
from admin_display.core.ports.updater import ModelUpdater
from admin_display.core.results import DisplayResult
from admin_display.core.text import is_json, to_safe_name
from admin_display.models import Query, SqlQuery
from admin_display.queries.view_models import EditQueryViewModel, SqlQueryViewModel

logger = logging.getLogger(__name__)


class QueryDisplayDriver(DisplayDriverBase[Query]):
    model_type = Query

    def __init__(self, store: QueryStore, localizer: StringLocalizer | None = None) -> None:
        super().__init__()
        self._store = store
        self._localizer = localizer or StringLocalizer()

    def display(self, model: Query, updater: ModelUpdater) -> DisplayResult | None:
        def _populate(view: SimpleNamespace) -> None:
            view.name = model.name
            view.source = model.source
            view.schema = model.schema
            view.query = model

        return self.combine(
            self.dynamic("Query_Fields_SummaryAdmin", _populate).location("Content:1"),
            self.dynamic("Query_Buttons_SummaryAdmin", _populate).location("Actions:5"),
        )

    def edit(self, model: Query, updater: ModelUpdater) -> DisplayResult | None:
        def _populate(view: EditQueryViewModel) -> None:
            view.name = model.name
            view.source = model.source
            view.schema = model.schema
            view.query = model

        return self.combine(
            self.initialize(EditQueryViewModel, "Query_Fields_Edit", _populate).location("Content:1"),
            self.initialize(EditQueryViewModel, "Query_Fields_Buttons", _populate).location("Actions:5"),
        )

    async def update_async(self, model: Query, context: UpdateEditorContext) -> DisplayResult | None:
        updater = context.updater
        await updater.try_update_model(model, self.prefix, "name", "source", "schema")

        state = updater.model_state
        localize = self._localizer

        if not model.name:
            state.add_model_error(self.prefix, "name", localize["Name is required"])

        if model.schema and not is_json(model.schema):
            state.add_model_error(self.prefix, "schema", localize["Invalid schema JSON supplied."])

        # An empty name is only reported as required.
        if model.name:
            safe_name = to_safe_name(model.name)
            if not safe_name or safe_name != model.name:
                state.add_model_error(self.prefix, "name", localize["Name contains illegal characters"])
            else:
                existing = await self._store.get_query(safe_name)
                if existing is not None and existing is not model:
                    logger.debug("Query name %r is already taken", safe_name)
                    state.add_model_error(self.prefix, "name", localize["A query with the same name already exists"])

        return self.edit(model, updater)


class SqlQueryDisplayDriver(DisplayDriverBase[SqlQuery]):
    """Adds the SQL template editor to queries whose source is SQL."""

    model_type = SqlQuery

    def __init__(self, localizer: StringLocalizer | None = None) -> None:
        super().__init__()
        self._localizer = localizer or StringLocalizer()

    def display_model(self, model: SqlQuery) -> DisplayResult | None:
        def _populate(view: SimpleNamespace) -> None:
            view.query = model

        return self.dynamic("SqlQuery_SummaryAdmin", _populate).location("Content:5")

    def edit_model(self, model: SqlQuery) -> DisplayResult | None:
        def _populate(view: SqlQueryViewModel) -> None:
            view.query = model.template
            view.return_documents = model.return_documents

        return self.initialize(SqlQueryViewModel, "SqlQuery_Edit", _populate).location("Content:5")

    async def update_async(self, model: SqlQuery, context: UpdateEditorContext) -> DisplayResult | None:
        view_model = SqlQueryViewModel(query=model.template, return_documents=model.return_documents)
        await context.updater.try_update_model(view_model, self.prefix, "query", "return_documents")

        model.template = view_model.query
        model.return_documents = view_model.return_documents

        if not model.template:
            context.updater.model_state.add_model_error(
                self.prefix, "query", self._localizer["The query field is required"]
            )

        return self.edit_model(model)
