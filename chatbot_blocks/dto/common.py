from typing import Any


def blank_to_none(value: Any) -> Any:
    """Treat empty or whitespace-only optional strings as absent."""
    if isinstance(value, str) and not value.strip():
        return None
    return value
