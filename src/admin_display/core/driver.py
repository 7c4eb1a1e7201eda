"""Display drivers: pluggable contributors to a model's display/edit/update.

The host only knows the three ``build_*``/``update_*`` entry points of the
``DisplayDriver`` protocol. ``DisplayDriverBase`` implements them once:

1. decline (return ``None``) unless the model is an instance of the driver's
   ``model_type`` and ``can_handle_async`` accepts it;
2. compute the field-name prefix for this call;
3. delegate through a chain of overridable defaults.

The default chains are::

    display_async(model, ctx) -> display_in_context(model, ctx)
        -> display(model, updater) -> display_model(model) -> None
    edit_async(model, ctx) -> edit_in_context(model, ctx)
        -> edit(model, updater) -> edit_model(model) -> None
    update_async(model, ctx) -> edit_async(model, ctx)

A concrete driver overrides whichever link matches the complexity of its
logic and inherits the rest.

There is no separate async link taking only the updater: the ``*_async``
links are the awaitable layer, and a driver that awaits but only needs the
updater overrides one of them and reads ``context.updater``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from admin_display.core.contexts import BuildDisplayContext, BuildEditorContext, UpdateEditorContext
from admin_display.core.ports.updater import ModelUpdater
from admin_display.core.results import CombinedResult, DisplayResult, Initializer, ShapeResult, combine

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
ViewModelT = TypeVar("ViewModelT")


class DisplayDriver(Protocol):
    async def build_display(self, model: Any, context: BuildDisplayContext) -> DisplayResult | None: ...

    async def build_editor(self, model: Any, context: BuildEditorContext) -> DisplayResult | None: ...

    async def update_editor(self, model: Any, context: UpdateEditorContext) -> DisplayResult | None: ...


class DisplayDriverBase(Generic[ModelT]):
    model_type: ClassVar[type[Any]] = object

    def __init__(self) -> None:
        self.prefix = ""

    @classmethod
    def model_name(cls) -> str:
        return cls.model_type.__name__

    # -- participation ------------------------------------------------------

    def can_handle(self, model: ModelT) -> bool:
        """Override ``can_handle_async`` instead when the decision needs I/O."""
        return True

    async def can_handle_async(self, model: ModelT) -> bool:
        return self.can_handle(model)

    async def _accepts(self, model: Any) -> bool:
        if not isinstance(model, self.model_type):
            logger.debug("%s declined %s: not a %s", type(self).__name__, type(model).__name__, self.model_name())
            return False
        if not await self.can_handle_async(model):
            logger.debug("%s declined %s", type(self).__name__, type(model).__name__)
            return False
        return True

    def build_prefix(self, model: ModelT, html_field_prefix: str = "") -> None:
        if html_field_prefix:
            self.prefix = f"{html_field_prefix}.{self.model_name()}"
        else:
            self.prefix = self.model_name()

    # -- entry points -------------------------------------------------------

    async def build_display(self, model: Any, context: BuildDisplayContext) -> DisplayResult | None:
        if not await self._accepts(model):
            return None
        self.build_prefix(model, context.html_field_prefix)
        return await self.display_async(model, context)

    async def build_editor(self, model: Any, context: BuildEditorContext) -> DisplayResult | None:
        if not await self._accepts(model):
            return None
        self.build_prefix(model, context.html_field_prefix)
        return await self.edit_async(model, context)

    async def update_editor(self, model: Any, context: UpdateEditorContext) -> DisplayResult | None:
        if not await self._accepts(model):
            return None
        self.build_prefix(model, context.html_field_prefix)
        return await self.update_async(model, context)

    # -- display chain ------------------------------------------------------

    async def display_async(self, model: ModelT, context: BuildDisplayContext) -> DisplayResult | None:
        return self.display_in_context(model, context)

    def display_in_context(self, model: ModelT, context: BuildDisplayContext) -> DisplayResult | None:
        return self.display(model, context.updater)

    def display(self, model: ModelT, updater: ModelUpdater) -> DisplayResult | None:
        return self.display_model(model)

    def display_model(self, model: ModelT) -> DisplayResult | None:
        return None

    # -- edit chain ---------------------------------------------------------

    async def edit_async(self, model: ModelT, context: BuildEditorContext) -> DisplayResult | None:
        return self.edit_in_context(model, context)

    def edit_in_context(self, model: ModelT, context: BuildEditorContext) -> DisplayResult | None:
        return self.edit(model, context.updater)

    def edit(self, model: ModelT, updater: ModelUpdater) -> DisplayResult | None:
        return self.edit_model(model)

    def edit_model(self, model: ModelT) -> DisplayResult | None:
        return None

    # -- update -------------------------------------------------------------

    async def update_async(self, model: ModelT, context: UpdateEditorContext) -> DisplayResult | None:
        return await self.edit_async(model, context)

    # -- result helpers -----------------------------------------------------

    def dynamic(self, shape_type: str, initializer: Initializer) -> ShapeResult:
        return ShapeResult(shape_type, initializer, prefix=self.prefix)

    def initialize(
        self, view_model_type: Callable[[], ViewModelT], shape_type: str, initializer: Initializer
    ) -> ShapeResult:
        return ShapeResult(shape_type, initializer, model_factory=view_model_type, prefix=self.prefix)

    def combine(self, *results: DisplayResult | None) -> CombinedResult:
        return combine(*results)
