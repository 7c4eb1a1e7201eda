"""Shared fixtures and helpers for tests."""

from collections.abc import AsyncIterator
from pathlib import Path
from typing import cast

import pytest
from fastapi.testclient import TestClient

from admin_display.api.app import create_app
from admin_display.api.dependencies import get_store
from admin_display.core.binding import FormModelUpdater
from admin_display.core.ports.store import QueryStore
from admin_display.db import InMemoryQueryStore

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> InMemoryQueryStore:
    return InMemoryQueryStore()


@pytest.fixture
def updater() -> FormModelUpdater:
    return FormModelUpdater()


@pytest.fixture
def client(store: InMemoryQueryStore) -> TestClient:
    app = create_app()

    async def _override() -> AsyncIterator[QueryStore]:
        yield cast(QueryStore, store)

    app.dependency_overrides[get_store] = _override
    return TestClient(app)
