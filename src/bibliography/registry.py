"""Lookup of citation styles by name."""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, List, Mapping

from .reference_styles import HarvardReferenceStyle, ReferenceStyle

DEFAULT_STYLE = "Harvard"


class UnknownStyleError(LookupError):
    """Raised when a style name has no registered implementation."""

    def __init__(self, name: str, available: Iterable[str] = ()):
        self.name = name
        self.available = sorted(available)
        message = f"Unknown reference style: {name!r}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class ReferenceStyleRegistry:
    """Read-only table mapping case-sensitive style names to styles."""

    def __init__(self, styles: Iterable[ReferenceStyle]):
        self._styles: Mapping[str, ReferenceStyle] = MappingProxyType(
            {style.name: style for style in styles}
        )

    def get(self, name: str) -> ReferenceStyle:
        try:
            return self._styles[name]
        except KeyError:
            raise UnknownStyleError(name, self._styles) from None

    def names(self) -> List[str]:
        return list(self._styles)

    def __contains__(self, name: object) -> bool:
        return name in self._styles


DEFAULT_REGISTRY = ReferenceStyleRegistry([HarvardReferenceStyle()])


def get_style(name: str) -> ReferenceStyle:
    return DEFAULT_REGISTRY.get(name)
