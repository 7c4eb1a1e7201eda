"""Host side of the driver pipeline.

The registry keeps driver *factories* rather than instances: a driver stores
the field prefix of the call it is serving, so every manager call resolves
fresh drivers.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from admin_display.core.contexts import (
    BuildDisplayContext,
    BuildEditorContext,
    BuildShapeContext,
    UpdateEditorContext,
)
from admin_display.core.driver import DisplayDriver
from admin_display.core.ports.updater import ModelUpdater
from admin_display.core.results import DisplayResult, Shape

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
DriverFactory = Callable[[], DisplayDriver]


class DriverRegistry:
    def __init__(self) -> None:
        self._factories: dict[type[Any], list[DriverFactory]] = {}

    def register(self, model_type: type[Any], factory: DriverFactory) -> None:
        self._factories.setdefault(model_type, []).append(factory)
        logger.debug("Registered display driver %r for %s", factory, model_type.__name__)

    def resolve(self, model_type: type[Any]) -> list[DisplayDriver]:
        return [factory() for factory in self._factories.get(model_type, [])]

    def __contains__(self, model_type: type[Any]) -> bool:
        return model_type in self._factories


class DisplayManager(Generic[ModelT]):
    """Builds one composite shape for a model from every registered driver."""

    def __init__(self, registry: DriverRegistry, model_type: type[ModelT]) -> None:
        self._registry = registry
        self._model_type = model_type

    @property
    def model_name(self) -> str:
        return self._model_type.__name__

    async def build_display(
        self,
        model: ModelT,
        updater: ModelUpdater,
        display_type: str = "Detail",
        html_field_prefix: str = "",
    ) -> Shape:
        shape = Shape(shape_type=f"{self.model_name}_{display_type}", model=model, prefix=html_field_prefix)
        context = BuildDisplayContext(
            shape=shape,
            model=model,
            updater=updater,
            html_field_prefix=html_field_prefix,
            display_type=display_type,
        )
        for driver in self._registry.resolve(self._model_type):
            await self._apply(driver, await driver.build_display(model, context), context)
        return shape

    async def build_editor(
        self,
        model: ModelT,
        updater: ModelUpdater,
        is_new: bool = False,
        html_field_prefix: str = "",
    ) -> Shape:
        shape = Shape(shape_type=f"{self.model_name}_Edit", model=model, prefix=html_field_prefix)
        context = BuildEditorContext(
            shape=shape,
            model=model,
            updater=updater,
            html_field_prefix=html_field_prefix,
            is_new=is_new,
        )
        for driver in self._registry.resolve(self._model_type):
            await self._apply(driver, await driver.build_editor(model, context), context)
        return shape

    async def update_editor(
        self,
        model: ModelT,
        updater: ModelUpdater,
        is_new: bool = False,
        html_field_prefix: str = "",
    ) -> Shape:
        shape = Shape(shape_type=f"{self.model_name}_Edit", model=model, prefix=html_field_prefix)
        context = UpdateEditorContext(
            shape=shape,
            model=model,
            updater=updater,
            html_field_prefix=html_field_prefix,
            is_new=is_new,
        )
        for driver in self._registry.resolve(self._model_type):
            await self._apply(driver, await driver.update_editor(model, context), context)
        if not updater.model_state.is_valid:
            logger.info(
                "%s update produced %d validation error(s)", self.model_name, updater.model_state.error_count
            )
        return shape

    @staticmethod
    async def _apply(driver: DisplayDriver, result: DisplayResult | None, context: BuildShapeContext) -> None:
        if result is None:
            logger.debug("%s contributed nothing", type(driver).__name__)
            return
        await result.apply(context)
