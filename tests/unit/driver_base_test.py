"""Tests for the participation filter, prefix convention and default chains of DisplayDriverBase."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from admin_display.core.binding import FormModelUpdater
from admin_display.core.contexts import BuildDisplayContext, BuildEditorContext, UpdateEditorContext
from admin_display.core.driver import DisplayDriverBase
from admin_display.core.ports.updater import ModelUpdater
from admin_display.core.results import CombinedResult, DisplayResult, Shape, combine
from admin_display.models import Query, SqlQuery


class RecordingDriver(DisplayDriverBase[Query]):
    """Overrides only the simplest layer of each chain."""

    model_type = Query

    def __init__(self, accept: bool = True) -> None:
        super().__init__()
        self.accept = accept
        self.calls: list[str] = []
        self.prefixes: list[str] = []
        self.display_result = combine()
        self.edit_result = combine()

    def can_handle(self, model: Query) -> bool:
        return self.accept

    def display_model(self, model: Query) -> DisplayResult | None:
        self.calls.append("display")
        self.prefixes.append(self.prefix)
        return self.display_result

    def edit_model(self, model: Query) -> DisplayResult | None:
        self.calls.append("edit")
        self.prefixes.append(self.prefix)
        return self.edit_result


class AsyncGateDriver(RecordingDriver):
    async def can_handle_async(self, model: Query) -> bool:
        await asyncio.sleep(0)
        return model.name.startswith("allowed")


class SqlOnlyDriver(RecordingDriver):
    model_type = SqlQuery


class AsyncUpdaterDriver(DisplayDriverBase[Query]):
    """Awaits in the update link and uses nothing from the context but the updater."""

    model_type = Query

    async def update_async(self, model: Query, context: UpdateEditorContext) -> DisplayResult | None:
        await context.updater.try_update_model(model, self.prefix, "name")
        await asyncio.sleep(0)
        return await self.edit_async(model, context)

    def edit_model(self, model: Query) -> DisplayResult | None:
        return self.dynamic("Query_Name", lambda view: setattr(view, "name", model.name))


class ContextDriver(DisplayDriverBase[Query]):
    model_type = Query

    def __init__(self) -> None:
        super().__init__()
        self.seen: list[Any] = []

    def display(self, model: Query, updater: ModelUpdater) -> DisplayResult | None:
        self.seen.append(updater)
        return combine()

    def edit_in_context(self, model: Query, context: BuildEditorContext) -> DisplayResult | None:
        self.seen.append(context)
        return combine()


def _display_context(model: Any, prefix: str = "") -> BuildDisplayContext:
    return BuildDisplayContext(
        shape=Shape("Query_Detail"), model=model, updater=FormModelUpdater(), html_field_prefix=prefix
    )


def _editor_context(model: Any, prefix: str = "") -> BuildEditorContext:
    return BuildEditorContext(
        shape=Shape("Query_Edit"), model=model, updater=FormModelUpdater(), html_field_prefix=prefix
    )


def _update_context(model: Any, prefix: str = "") -> UpdateEditorContext:
    return UpdateEditorContext(
        shape=Shape("Query_Edit"), model=model, updater=FormModelUpdater(), html_field_prefix=prefix
    )


class TestParticipation:
    @pytest.mark.asyncio
    async def test_declining_driver_returns_none_everywhere(self) -> None:
        driver = RecordingDriver(accept=False)
        query = Query(name="q")

        assert await driver.build_display(query, _display_context(query)) is None
        assert await driver.build_editor(query, _editor_context(query)) is None
        assert await driver.update_editor(query, _update_context(query)) is None
        assert driver.calls == []

    @pytest.mark.asyncio
    async def test_declining_driver_leaves_prefix_unset(self) -> None:
        driver = RecordingDriver(accept=False)
        query = Query(name="q")

        await driver.build_display(query, _display_context(query, prefix="Outer"))

        assert driver.prefix == ""

    @pytest.mark.asyncio
    async def test_async_gate_is_awaited(self) -> None:
        driver = AsyncGateDriver()
        denied = Query(name="denied")
        allowed = Query(name="allowed-one")

        assert await driver.build_display(denied, _display_context(denied)) is None
        assert await driver.build_display(allowed, _display_context(allowed)) is driver.display_result
        assert driver.calls == ["display"]

    @pytest.mark.asyncio
    async def test_concrete_type_driver_declines_other_types(self) -> None:
        driver = SqlOnlyDriver()
        plain = Query(name="plain")

        assert await driver.build_display(plain, _display_context(plain)) is None
        assert await driver.build_editor(plain, _editor_context(plain)) is None
        assert await driver.update_editor(plain, _update_context(plain)) is None
        assert driver.calls == []

    @pytest.mark.asyncio
    async def test_concrete_type_driver_accepts_its_type(self) -> None:
        driver = SqlOnlyDriver()
        sql = SqlQuery(name="sql")

        assert await driver.build_editor(sql, _editor_context(sql)) is driver.edit_result
        assert driver.prefixes == ["SqlQuery"]

    @pytest.mark.asyncio
    async def test_non_model_objects_are_declined(self) -> None:
        driver = RecordingDriver()

        assert await driver.build_display("not a query", _display_context("not a query")) is None


class TestPrefix:
    @pytest.mark.asyncio
    async def test_prefix_is_model_type_name(self) -> None:
        driver = RecordingDriver()
        query = Query(name="q")

        await driver.build_display(query, _display_context(query))

        assert driver.prefixes == ["Query"]

    @pytest.mark.asyncio
    async def test_prefix_is_namespaced_under_ambient_prefix(self) -> None:
        driver = RecordingDriver()
        query = Query(name="q")

        await driver.build_editor(query, _editor_context(query, prefix="Widgets.0"))

        assert driver.prefixes == ["Widgets.0.Query"]

    @pytest.mark.asyncio
    async def test_prefix_uses_declared_type_not_runtime_type(self) -> None:
        driver = RecordingDriver()
        sql = SqlQuery(name="q")

        await driver.build_display(sql, _display_context(sql))

        assert driver.prefixes == ["Query"]

    @pytest.mark.asyncio
    async def test_prefix_is_recomputed_per_call(self) -> None:
        driver = RecordingDriver()
        query = Query(name="q")

        await driver.build_display(query, _display_context(query, prefix="A"))
        await driver.build_display(query, _display_context(query))

        assert driver.prefixes == ["A.Query", "Query"]

    @pytest.mark.asyncio
    async def test_helper_results_carry_prefix(self) -> None:
        driver = RecordingDriver()
        query = Query(name="q")
        await driver.build_display(query, _display_context(query, prefix="Outer"))
        context = _display_context(query)

        await driver.dynamic("Probe", lambda view: None).location("Content:1").apply(context)

        assert context.shape.zone("Content").shapes[0].prefix == "Outer.Query"


class TestDefaultChains:
    @pytest.mark.asyncio
    async def test_simplest_overrides_are_reached_from_every_entry_point(self) -> None:
        driver = RecordingDriver()
        query = Query(name="q")

        assert await driver.build_display(query, _display_context(query)) is driver.display_result
        assert await driver.build_editor(query, _editor_context(query)) is driver.edit_result
        assert await driver.update_editor(query, _update_context(query)) is driver.edit_result
        assert driver.calls == ["display", "edit", "edit"]

    @pytest.mark.asyncio
    async def test_update_without_override_returns_edit_result(self) -> None:
        driver = RecordingDriver()
        query = Query(name="q")

        edited = await driver.build_editor(query, _editor_context(query))
        updated = await driver.update_editor(query, _update_context(query))

        assert updated is edited

    @pytest.mark.asyncio
    async def test_driver_without_overrides_contributes_nothing(self) -> None:
        driver: DisplayDriverBase[Query] = DisplayDriverBase()
        query = Query(name="q")

        assert await driver.build_display(query, _display_context(query)) is None
        assert await driver.build_editor(query, _editor_context(query)) is None
        assert await driver.update_editor(query, _update_context(query)) is None

    @pytest.mark.asyncio
    async def test_updater_and_context_layers_receive_call_arguments(self) -> None:
        driver = ContextDriver()
        query = Query(name="q")
        display_context = _display_context(query)
        editor_context = _editor_context(query)

        await driver.build_display(query, display_context)
        await driver.build_editor(query, editor_context)

        assert driver.seen == [display_context.updater, editor_context]

    @pytest.mark.asyncio
    async def test_async_update_override_binds_through_context_updater(self) -> None:
        driver = AsyncUpdaterDriver()
        query = Query(name="old")
        context = UpdateEditorContext(
            shape=Shape("Query_Edit"),
            model=query,
            updater=FormModelUpdater({"Outer.Query.name": "new"}),
            html_field_prefix="Outer",
        )

        result = await driver.update_editor(query, context)
        assert result is not None
        await result.apply(context)

        assert query.name == "new"
        (shape,) = context.shape.zone("Content").shapes
        assert (shape.model.name, shape.prefix) == ("new", "Outer.Query")

    @pytest.mark.asyncio
    async def test_combine_helper_skips_missing_results(self) -> None:
        driver = RecordingDriver()

        result = driver.combine(None, driver.dynamic("A", lambda view: None), None)

        assert isinstance(result, CombinedResult)
        assert len(result.results) == 1
