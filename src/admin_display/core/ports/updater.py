from typing import Any, Protocol

from admin_display.core.binding import ModelState


class ModelUpdater(Protocol):
    model_state: ModelState

    async def try_update_model(self, model: Any, prefix: str, *fields: str) -> bool: ...
