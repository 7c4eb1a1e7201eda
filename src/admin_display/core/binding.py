"""Model binding: copy submitted form values onto models and collect errors.

Form values are addressed by ``"{prefix}.{field}"`` so several drivers (or
several instances of the same model) can share one submitted form without
their fields colliding.
"""

from __future__ import annotations

import logging
import typing
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)


def field_key(prefix: str, field: str) -> str:
    return f"{prefix}.{field}" if prefix else field


class ModelState:
    """Per-request collection of validation errors keyed by field path."""

    def __init__(self) -> None:
        self.errors: dict[str, list[str]] = {}

    def add_model_error(self, prefix: str, key: str, message: str) -> None:
        self.errors.setdefault(field_key(prefix, key), []).append(message)

    def errors_for(self, key: str) -> list[str]:
        return list(self.errors.get(key, []))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return sum(len(messages) for messages in self.errors.values())


@lru_cache(maxsize=64)
def _adapter_for(hint: Any) -> TypeAdapter[Any]:
    return TypeAdapter(hint)


def _field_hints(model: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(type(model))
    except (NameError, TypeError):
        return {}


class FormModelUpdater:
    """``ModelUpdater`` backed by a mapping of submitted form values."""

    def __init__(self, form: Mapping[str, Any] | None = None, model_state: ModelState | None = None) -> None:
        self.form: dict[str, Any] = dict(form or {})
        self.model_state = model_state or ModelState()

    async def try_update_model(self, model: Any, prefix: str, *fields: str) -> bool:
        hints = _field_hints(model)
        for field in fields:
            key = field_key(prefix, field)
            if key not in self.form:
                continue
            raw = self.form[key]
            hint = hints.get(field)
            if hint is None:
                setattr(model, field, raw)
                continue
            try:
                value = _adapter_for(hint).validate_python(raw)
            except ValidationError:
                logger.debug("Rejected value %r for %s", raw, key)
                self.model_state.add_model_error(prefix, field, f"The value '{raw}' is not valid for {field}.")
                continue
            setattr(model, field, value)
        return self.model_state.is_valid
