from __future__ import annotations

from typing import Any, Callable, ClassVar, Iterator, Mapping


def _normalize_key(name: str) -> str:
    return name.replace("_", "-")


class Options:
    """
    For storing options to be used by the recorder session and its streams.

    Option names are normalized, so that ``hls_duration`` and ``hls-duration`` refer to the same option.
    Subclasses can map keys to custom getters and setters via :attr:`_MAP_GETTERS` and :attr:`_MAP_SETTERS`.
    """

    _MAP_GETTERS: ClassVar[Mapping[str, Callable[[Any, str], Any]]] = {}
    _MAP_SETTERS: ClassVar[Mapping[str, Callable[[Any, str, Any], None]]] = {}

    def __init__(self, defaults: Mapping[str, Any] | None = None):
        if not defaults:
            defaults = {}

        self.defaults = self._normalize_dict(defaults)
        self.options = self.defaults.copy()

    @staticmethod
    def _normalize_dict(src: Mapping[str, Any]) -> dict[str, Any]:
        return {_normalize_key(key): value for key, value in src.items()}

    def clear(self) -> None:
        """Restore default options"""
        self.options.clear()
        self.options.update(self.defaults.copy())

    def get(self, key: str) -> Any:
        """Get the stored value of a specific key, using a custom getter if one is mapped"""
        normalized = _normalize_key(key)
        method = self._MAP_GETTERS.get(normalized)
        if method is not None:
            return method(self, normalized)
        return self.options.get(normalized)

    def get_explicit(self, key: str) -> Any:
        """Get the stored value of a specific key, ignoring custom getters"""
        return self.options.get(_normalize_key(key))

    def set(self, key: str, value: Any) -> None:
        """Set the value for a specific key, using a custom setter if one is mapped"""
        normalized = _normalize_key(key)
        method = self._MAP_SETTERS.get(normalized)
        if method is not None:
            method(self, normalized, value)
        else:
            self.options[normalized] = value

    def set_explicit(self, key: str, value: Any) -> None:
        """Set the value for a specific key, ignoring custom setters"""
        self.options[_normalize_key(key)] = value

    def update(self, options: Mapping[str, Any] | Options) -> None:
        """Merge options"""
        if isinstance(options, Options):
            options = options.options
        for key, value in options.items():
            self.set(key, value)

    def keys(self) -> Iterator[str]:
        return iter(self.options.keys())

    def __getitem__(self, item: str) -> Any:
        return self.get(item)

    def __setitem__(self, item: str, value: Any) -> None:
        self.set(item, value)

    def __contains__(self, item: str) -> bool:
        return _normalize_key(item) in self.options


__all__ = ["Options"]
