"""Create cache and lock components by kind."""

from collections.abc import Mapping
from typing import Any

from .cache import RedisCache
from .connection import ConnectedComponent
from .lock import RedisLock

COMPONENTS: dict[str, type[ConnectedComponent]] = {
    "cache": RedisCache,
    "lock": RedisLock,
}


def create(kind: str, config: Mapping[str, Any] | None = None, **kwargs: Any) -> ConnectedComponent:
    """Create an unopened component.

    Args:
        kind: "cache" or "lock"
        config: Configuration mapping passed to the component
        **kwargs: Extra constructor arguments (e.g. client_class)

    Returns:
        A configured RedisCache or RedisLock

    Raises:
        ValueError: If kind is not registered

    Example:
        lock = create("lock", {"connection.uri": "redis://localhost:6379/0"})
    """
    try:
        component_class = COMPONENTS[kind]
    except KeyError:
        raise ValueError(
            f"kind must be one of {sorted(COMPONENTS)}, got '{kind}'"
        ) from None
    return component_class(config, **kwargs)
