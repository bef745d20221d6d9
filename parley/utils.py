"""
Parley utilities shared by the field, definition and result layers.

- Unset: sentinel for "not given", distinct from None (None is a valid
  definition payload, for instance).
- coalesce(value, default): Unset → default, everything else untouched.
- rename(callable, name) / @rename(name): give generated helpers a stable
  __name__/__qualname__ so tracebacks stay readable.
- mirror(name): read-only property over "_{name}" that hands out copies of
  containers, so callers never alias internal state.

    >>> coalesce(Unset, "fallback")
    'fallback'
    >>> coalesce(None, "fallback") is None
    True
"""
import builtins
import functools
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel: falsey, prints as "Unset", one instance per
    process, and closed to subclassing.
    """

    def __or__(self, other, /):
        # Lets `str | Unset` be used in isinstance checks.
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return `object`, or `default` when it is Unset.

    Falsey values (None, 0, "", []) are real values and come back as given.
    """
    return default if object is Unset else object


def rename(*parameters):
    """
    rename(callable, name) renames in place and returns the callable;
    rename(name) returns a decorator doing the same.

    TypeError on a wrong arity, a non-callable, a non-string name, or a
    callable whose names are read-only (built-ins).
    """
    match parameters:
        case (target, name):
            if not builtins.callable(target):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                target.__qualname__ = name
                target.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return target
        case (name,):
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def decorator(target):
                if not builtins.callable(target):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(target, name)

            return rename(decorator, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _copy(object):
    # Tuples and strings are immutable and returned as they are.
    if isinstance(object, tuple | str):
        return object
    if isinstance(object, Sequence):
        return [_copy(item) for item in object]
    if isinstance(object, Mapping):
        return {key: _copy(value) for key, value in object.items()}
    if isinstance(object, Set):
        return {_copy(item) for item in object}
    return object


def mirror(name, /):
    """
    Read-only property exposing "_{name}"; lists, mappings and sets come back
    as fresh copies (recursively).

        class Match:
            args = mirror("args")   # reads self._args
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _copy(getattr(self, "_" + name))

    return property(getter)


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",

    # Types
    "UnsetType",

    # Constants
    "Unset",
)
