"""
Named SQL templates with %(dotted.key) placeholders.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

Lookup = Callable[[str], Optional[str]]


def resolve_path(mapping: Mapping, path: str) -> Optional[str]:
    """Descend a nested mapping one dotted segment at a time.

    A missing segment, a None value or a value that is still a mapping
    resolves to None.
    """
    value: Any = mapping
    for segment in path.split('.'):
        if not isinstance(value, Mapping) or segment not in value:
            return None
        value = value[segment]

    if value is None or isinstance(value, Mapping):
        return None
    return str(value)


def substitute(body: str, lookup: Union[Lookup, Mapping]) -> str:
    """Replace every placeholder in body with the looked-up value.

    Absent values substitute as the empty string. Substituted text is
    inserted verbatim and never rescanned.
    """
    if isinstance(lookup, Mapping):
        mapping = lookup
        lookup = lambda path: resolve_path(mapping, path)

    def replace(match: re.Match) -> str:
        value = lookup(match.group(1))
        if value is None:
            logging.debug(f"Placeholder '{match.group(1)}' resolved to nothing")
            return ''
        return value

    return TemplateRegistry.PLACEHOLDER_PATTERN.sub(replace, body)


class TemplateRegistry:
    """Registry of immutable, named statement templates."""

    PLACEHOLDER_PATTERN = re.compile(r'%\(([^)]+)\)')
    TRAILING_BLANK_PATTERN = re.compile(r'\n\s*\Z')

    def __init__(self, templates: Optional[Mapping[str, str]] = None):
        self._templates: dict[str, str] = {}
        for name, body in (templates or {}).items():
            self.register(name, body)

    def register(self, name: str, body: str) -> None:
        """Register a template, stripping its trailing blank lines."""
        if name in self._templates:
            raise ValueError(f"Template '{name}' is already registered")
        self._templates[name] = self.TRAILING_BLANK_PATTERN.sub('', body)

    def __contains__(self, name: str) -> bool:
        return name in self._templates

    def names(self) -> list[str]:
        return sorted(self._templates)

    def body(self, name: str) -> Optional[str]:
        return self._templates.get(name)

    def resolve(self, name: str, lookup: Union[Lookup, Mapping]) -> Optional[str]:
        """Render a template, or return None when it is not registered."""
        body = self._templates.get(name)
        if body is None:
            logging.warning(f"Template '{name}' is not registered")
            return None
        return substitute(body, lookup)
