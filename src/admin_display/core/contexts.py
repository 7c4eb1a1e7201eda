"""Per-call parameter bundles handed to display drivers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from admin_display.core.ports.updater import ModelUpdater
from admin_display.core.results import Shape


@dataclass
class BuildShapeContext:
    shape: Shape
    model: Any
    updater: ModelUpdater
    html_field_prefix: str = ""


@dataclass
class BuildDisplayContext(BuildShapeContext):
    display_type: str = "Detail"


@dataclass
class BuildEditorContext(BuildShapeContext):
    is_new: bool = False


@dataclass
class UpdateEditorContext(BuildEditorContext):
    pass
