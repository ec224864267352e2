"""Property path resolution.

A property path is a dot-delimited chain of names (``"owner.address.city"``).
Each segment is read from the current value: mappings by key, everything
else by attribute. Resolution rules:

1. A ``None`` anywhere along the path short-circuits to ``None``.
2. A segment that does not exist on the current value resolves to ``None``.
3. A segment that exists but cannot be read raises :class:`PropertyAccessError`.
"""

import inspect
import types
from collections.abc import Mapping
from typing import Any, Callable, List, Optional

_MISSING = object()


class PropertyAccessError(ValueError):
    """A property exists on a value but its reader could not be invoked."""

    def __init__(self, property_name: str, owner_type: type, reason: str = ""):
        self.property_name = property_name
        self.owner_type = owner_type
        message = f"Could not get value from specified property: {property_name}"
        if reason:
            message = f"{message} ({owner_type.__name__}: {reason})"
        super().__init__(message)


def parse_property_path(path: Optional[str]) -> List[str]:
    if not path:
        return []
    return [segment for segment in path.split(".") if segment]


def _is_public(name: str) -> bool:
    return not name.startswith("_")


def _declares(value: Any, name: str) -> bool:
    return inspect.getattr_static(value, name, _MISSING) is not _MISSING


def get_value(value: Any, name: str) -> Any:
    """Read one property off ``value``; ``None`` when it does not exist."""
    if isinstance(value, Mapping):
        return value.get(name)

    if not _is_public(name):
        if _declares(value, name):
            raise PropertyAccessError(name, type(value), "non-public attribute")
        return None

    try:
        return getattr(value, name)
    except AttributeError as exc:
        static = inspect.getattr_static(value, name, _MISSING)
        if isinstance(static, types.MemberDescriptorType):
            # unset slot
            return None
        # A declared property whose getter fails is unreadable, not absent.
        if static is not _MISSING:
            raise PropertyAccessError(name, type(value), str(exc)) from exc
        return None
    except Exception as exc:
        raise PropertyAccessError(name, type(value), str(exc)) from exc


def key_extractor(path: Optional[str]) -> Callable[[Any], Any]:
    """Return a function extracting the value at ``path`` from an entity."""
    segments = parse_property_path(path)

    def extract(entity: Any) -> Any:
        current = entity
        for segment in segments:
            if current is None:
                return None
            current = get_value(current, segment)
        return current

    return extract
