"""
cliflags node helpers.

- mirror("attr"): read-only property over a node's private "_attr" field. The
  children mapping is handed out as a fresh dict, so callers cannot attach or
  detach nodes behind the tree's back; the nodes themselves are not copied.
"""
from collections.abc import Mapping


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")
    field = "_" + name

    def getter(self):
        value = getattr(self, field)
        if isinstance(value, Mapping):
            return dict(value)
        return value

    getter.__name__ = getter.__qualname__ = name
    return property(getter)


__all__ = (
    "mirror",
)
