from collections.abc import Mapping


def ensure_int(value: object, default: int | None = 0) -> int | None:
    """Convert a value to int, with a default fallback."""
    if isinstance(value, bool):
        return default
    try:
        return int(value) if isinstance(value, (int, float, str)) else default
    except (TypeError, ValueError):
        return default


def flatten_config(config: Mapping[str, object], prefix: str = "") -> dict[str, object]:
    """Flatten nested configuration mappings into dotted lower-case keys.

    Example:
        {"connection": {"host": "h"}} -> {"connection.host": "h"}
    """
    flat: dict[str, object] = {}
    for key, value in config.items():
        name = f"{prefix}{str(key).lower()}"
        if isinstance(value, Mapping):
            flat.update(flatten_config(value, prefix=f"{name}."))
        else:
            flat[name] = value
    return flat
