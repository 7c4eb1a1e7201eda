"""Display results and the shape tree they are applied to.

A driver never renders anything itself. It returns a display result that
describes which shapes to create, how to populate their view models and where
to place them (``"Zone:position"``); the host applies every result to one
root shape.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from admin_display.core.contexts import BuildShapeContext

HIDDEN_LOCATION = "-"
DEFAULT_ZONE = "Content"

Initializer = Callable[[Any], Awaitable[None] | None]


@dataclass(frozen=True)
class Placement:
    zone: str
    position: str = ""

    @classmethod
    def parse(cls, location: str) -> Placement:
        zone, _, position = location.partition(":")
        return cls(zone=zone.strip() or DEFAULT_ZONE, position=position.strip())


def position_key(position: str) -> tuple[int, tuple[float, ...]]:
    """Sort key for dotted positions: ``"1" < "1.5" < "5" < ""``.

    Positionless entries sort after positioned ones. Non-numeric segments
    sort after numeric ones at the same depth.
    """
    if not position:
        return (1, ())
    parts: list[float] = []
    for part in position.split("."):
        try:
            parts.append(float(part))
        except ValueError:
            parts.append(float("inf"))
    return (0, tuple(parts))


@dataclass
class Zone:
    name: str
    _items: list[tuple[tuple[int, tuple[float, ...]], int, Shape]] = field(default_factory=list, repr=False)

    def add(self, shape: Shape, position: str = "") -> None:
        shape.position = position
        self._items.append((position_key(position), len(self._items), shape))

    @property
    def shapes(self) -> list[Shape]:
        return [item[2] for item in sorted(self._items, key=lambda item: (item[0], item[1]))]


@dataclass
class Shape:
    shape_type: str
    model: Any = None
    prefix: str = ""
    position: str = ""
    zones: dict[str, Zone] = field(default_factory=dict)

    def zone(self, name: str) -> Zone:
        if name not in self.zones:
            self.zones[name] = Zone(name)
        return self.zones[name]

    def find(self, shape_type: str) -> Shape | None:
        """Depth-first lookup of the first descendant with ``shape_type``."""
        for zone in self.zones.values():
            for shape in zone.shapes:
                if shape.shape_type == shape_type:
                    return shape
                found = shape.find(shape_type)
                if found is not None:
                    return found
        return None


class DisplayResult(Protocol):
    async def apply(self, context: BuildShapeContext) -> None: ...


class ShapeResult:
    """Creates one shape, populates its view model and places it in a zone."""

    def __init__(
        self,
        shape_type: str,
        initializer: Initializer,
        model_factory: Callable[[], Any] = SimpleNamespace,
        prefix: str = "",
    ) -> None:
        self.shape_type = shape_type
        self._initializer = initializer
        self._model_factory = model_factory
        self._prefix = prefix
        self._location: str | None = None

    def location(self, location: str) -> ShapeResult:
        self._location = location
        return self

    async def apply(self, context: BuildShapeContext) -> None:
        location = self._location if self._location is not None else DEFAULT_ZONE
        if location == HIDDEN_LOCATION:
            return

        view_model = self._model_factory()
        outcome = self._initializer(view_model)
        if inspect.isawaitable(outcome):
            await outcome

        placement = Placement.parse(location)
        shape = Shape(shape_type=self.shape_type, model=view_model, prefix=self._prefix)
        context.shape.zone(placement.zone).add(shape, placement.position)


class CombinedResult:
    def __init__(self, results: list[DisplayResult]) -> None:
        self.results = results

    async def apply(self, context: BuildShapeContext) -> None:
        for result in self.results:
            await result.apply(context)


def combine(*results: DisplayResult | None) -> CombinedResult:
    return CombinedResult([r for r in results if r is not None])
