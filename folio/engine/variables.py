"""User variables for tag substitution."""

from typing import Any


def normalize_key(key: str) -> str:
    """``{total}`` and ``Total`` both address ``TOTAL``."""
    return str(key).strip().strip("{}").strip().upper()


class Variables:
    """Case-insensitive named values; keys are stored uppercase without braces."""

    def __init__(self):
        self._vars: dict[str, Any] = {}

    def set(self, key: str, value: Any, overwrite: bool = True) -> bool:
        """Store *value*; returns False when the key exists and *overwrite* is off."""
        name = normalize_key(key)
        if not name:
            return False
        if not overwrite and name in self._vars:
            return False
        self._vars[name] = value
        return True

    def get(self, key: str, default: Any = None) -> Any:
        return self._vars.get(normalize_key(key), default)

    def __contains__(self, key: str) -> bool:
        return normalize_key(key) in self._vars

    def drop(self, key: str) -> None:
        self._vars.pop(normalize_key(key), None)

    def list(self) -> list[str]:
        return list(self._vars.keys())

    def items(self):
        return self._vars.items()

    def clear(self) -> None:
        self._vars.clear()
