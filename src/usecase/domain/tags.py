"""Tag derivation for symbolic failure dispatch.

Resolution order for an object's tag:

1. Instance-level override: a ``tag`` stored on the instance itself,
   or a ``tag`` property / plain method computed per instance.
2. Type-level tag: a ``tag`` class attribute (string) or a
   classmethod/staticmethod ``tag()``.
3. Default: the runtime type name converted from CamelCase to snake_case.
"""

from __future__ import annotations

import inspect
import re
from typing import Any

_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def default_tag(name: str) -> str:
    """Convert a CamelCase type name to a snake_case tag.

    Examples:
        >>> default_tag("UserLoggedIn")
        'user_logged_in'
        >>> default_tag("HTTPServerDown")
        'http_server_down'
        >>> default_tag("list")
        'list'
    """
    return _WORD_BOUNDARY.sub("_", name).lower()


def type_tag(cls: type) -> str:
    """Return the tag declared by *cls*, or its derived default."""
    declared = inspect.getattr_static(cls, "tag", None)
    if isinstance(declared, str):
        return declared
    if isinstance(declared, (classmethod, staticmethod)):
        return str(cls.tag())  # type: ignore[attr-defined]
    return default_tag(cls.__name__)


def _instance_tag(obj: Any) -> str | None:
    try:
        own = vars(obj).get("tag")
    except TypeError:
        # No instance __dict__ (ints, slotted objects).
        own = None
    if own is not None:
        return str(own()) if callable(own) else str(own)

    declared = inspect.getattr_static(type(obj), "tag", None)
    if isinstance(declared, property):
        return str(obj.tag)
    if inspect.isfunction(declared):
        return str(obj.tag())
    if inspect.ismemberdescriptor(declared):
        # A ``tag`` slot; unset slots fall through to the type tag.
        own = getattr(obj, "tag", None)
        if own is not None:
            return str(own()) if callable(own) else str(own)
    return None


def tag_for(obj: Any) -> str:
    """Resolve the dispatch tag of a precondition or caught error."""
    override = _instance_tag(obj)
    if override is not None:
        return override
    return type_tag(type(obj))
