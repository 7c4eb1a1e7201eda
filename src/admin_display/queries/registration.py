from admin_display.core.localization import StringLocalizer
from admin_display.core.manager import DisplayManager, DriverRegistry
from admin_display.core.ports.store import QueryStore
from admin_display.models import Query
from admin_display.queries.drivers import QueryDisplayDriver, SqlQueryDisplayDriver


def register_query_drivers(
    registry: DriverRegistry, store: QueryStore, localizer: StringLocalizer | None = None
) -> DriverRegistry:
    """Register every display driver that contributes to ``Query`` shapes."""
    registry.register(Query, lambda: QueryDisplayDriver(store, localizer))
    registry.register(Query, lambda: SqlQueryDisplayDriver(localizer))
    return registry


def create_query_display_manager(store: QueryStore, localizer: StringLocalizer | None = None) -> DisplayManager[Query]:
    registry = register_query_drivers(DriverRegistry(), store, localizer)
    return DisplayManager(registry, Query)
