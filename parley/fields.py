"""
Parley field specifications: what a definition's arguments and flags match.

Overview
- Kind: what a field consumes.
  • POSITIONAL: one token (the default).
  • CONTENT: everything from the field's turn to the end of the input.
  • LIST: one token split on the field's list delimiter (default ",").
  • BOOLEAN: presence only; flags only.

- Specs
  • Argument: positional field of a definition (POSITIONAL | CONTENT | LIST).
  • Flag: named field introduced by the flag prefix (any Kind).

- Shorthand
  • A bare string is sugar for a spec with that name: "member" ≡ Argument("member").
  • A mapping {"name": ..., "kind": ..., "delimiter": ...} is accepted as well.
  • argument(x) / flag(x) normalize any of the three forms into a spec.

Metadata (sanitized on construction)
- name: non-empty string.
- kind: Kind member or its string value; BOOLEAN is refused for arguments.
- delimiter: only for LIST (defaults to ","), non-empty; forbidden otherwise.

Specs are immutable, compare by value, and expose stable __repr__/__rich_repr__
implementations through the SpecType metaclass.

Quick example:
    >>> members = Argument("members", kind="list")
    >>> members.resolve("a,b,c")
    ['a', 'b', 'c']
    >>> flag("delay")
    flag(name='delay', kind=<Kind.POSITIONAL: 'positional'>, delimiter=None)
"""
import enum
import functools
import operator
import re
from collections.abc import Mapping

from .utils import *


class Kind(enum.StrEnum):
    """
    What a field consumes from the input.
    """
    POSITIONAL = "positional"
    CONTENT = "content"
    LIST = "list"
    BOOLEAN = "boolean"


class SpecType(type):
    """
    Metaclass that turns specs into introspectable, read-only value objects.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by the private "_{name}" attribute (see mirror()).
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics and
      rich pretty printing.
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used as the subject of every validation message.

    Conventions
    - __displayable__ (if set) narrows which properties are shown by
      __rich_repr__; otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - argument(name='members', kind=<Kind.LIST: 'list'>, delimiter=',')
            """
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_field(cls, metadata, kinds, /):
    """
    Internal: validate and normalize shared field metadata.

    Responsibilities
    - name: required, non-empty string. Not trimmed: names are matched
      verbatim against the input.
    - kind: Kind member or its string value, restricted to `kinds`.
    - delimiter: LIST only. Defaults to "," when Unset; must be a non-empty
      string. Any other kind refuses an explicit delimiter and stores None.

    Raises
    - TypeError: on wrong types, or a delimiter given for a non-list kind.
    - ValueError: on empty strings or a kind outside `kinds`.

    Side effects
    - Mutates the metadata dict in place.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")

    if not isinstance(kind := metadata["kind"], str):
        raise TypeError(f"{cls.__typename__} {name!r} 'kind' must be a string")
    try:
        kind = Kind(kind)
    except ValueError:
        raise ValueError(f"{cls.__typename__} {name!r} 'kind' must be one of %s" % ", ".join(
            map(repr, map(str, kinds))
        )) from None
    if kind not in kinds:
        raise ValueError(f"{cls.__typename__} {name!r} cannot match {str(kind)!r}")
    metadata["kind"] = kind

    delimiter = metadata["delimiter"]
    if kind is not Kind.LIST:
        if delimiter is not Unset:
            raise TypeError(f"{cls.__typename__} {name!r} 'delimiter' is only allowed for lists")
        metadata["delimiter"] = None
        return

    if not isinstance(delimiter, str | Unset):
        raise TypeError(f"{cls.__typename__} {name!r} 'delimiter' must be a string")
    elif isinstance(delimiter, str) and not delimiter:
        raise ValueError(f"{cls.__typename__} {name!r} 'delimiter' cannot be empty")
    metadata["delimiter"] = coalesce(delimiter, ",")


class Field(metaclass=SpecType):
    """
    Shared behavior for Argument and Flag (not instantiated directly).
    """
    __kinds__ = ()
    __introspectable__ = (
        "name",
        "kind",
        "delimiter",
    )

    def __new__(cls, name, /, kind=Kind.POSITIONAL, delimiter=Unset):
        if cls is Field:
            raise TypeError("type 'Field' cannot be instantiated directly")

        metadata = {
            "name": name,
            "kind": kind,
            "delimiter": delimiter,
        }
        _sanitize_field(cls, metadata, cls.__kinds__)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    def resolve(self, value, /):
        """
        Turn a raw (unquoted) token into this field's value.

        LIST fields split on their delimiter; every other kind returns the
        string unchanged. Quoted literals never go through here.
        """
        if self._kind is Kind.LIST:
            return value.split(self._delimiter)
        return value

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return (self._name, self._kind, self._delimiter) == (other._name, other._kind, other._delimiter)

    def __hash__(self):
        return hash((type(self), self._name, self._kind, self._delimiter))


class Argument(Field):
    """
    Positional field specification.

    Arguments are filled in declaration order. A CONTENT argument swallows the
    rest of the input once its turn comes, so it may only be the last one
    (enforced by Definition).
    """
    __kinds__ = (Kind.POSITIONAL, Kind.CONTENT, Kind.LIST)

    def __argument__(self):
        """
        Introspection hook: identify this spec as an Argument.
        """
        return self


class Flag(Field):
    """
    Named field specification.

    Flags are introduced by the configured flag prefix and take the next token
    (or literal) as their value, unless they are BOOLEAN, in which case their
    presence alone resolves them to True. A flag with nothing to take resolves
    to True as well (implicit boolean).
    """
    __kinds__ = (Kind.POSITIONAL, Kind.CONTENT, Kind.LIST, Kind.BOOLEAN)

    def __flag__(self):
        """
        Introspection hook: identify this spec as a Flag.
        """
        return self


def _normalize(cls, descriptor, /):
    """
    Internal: resolve a field shorthand into a spec of type `cls`.
    """
    if isinstance(descriptor, cls):
        return descriptor
    if isinstance(descriptor, Field):
        raise TypeError(f"{descriptor.__typename__} {descriptor.name!r} cannot be used as {cls.__typename__}")
    if isinstance(descriptor, str):
        return cls(descriptor)
    if isinstance(descriptor, Mapping):
        if unknown := set(descriptor) - {"name", "kind", "delimiter"}:
            raise TypeError(f"{cls.__typename__} descriptor has unknown keys: %s" % ", ".join(map(repr, sorted(unknown))))
        if "name" not in descriptor:
            raise TypeError(f"{cls.__typename__} descriptor requires a 'name'")
        return cls(
            descriptor["name"],
            descriptor.get("kind", Kind.POSITIONAL),
            descriptor.get("delimiter", Unset),
        )
    raise TypeError(f"{cls.__typename__} must be a string, a mapping or an {cls.__typename__}")


def argument(descriptor, /):
    """
    Normalize an argument shorthand ("name", {"name": ...} or Argument) into an Argument.
    """
    return _normalize(Argument, descriptor)


def flag(descriptor, /):
    """
    Normalize a flag shorthand ("name", {"name": ...} or Flag) into a Flag.
    """
    return _normalize(Flag, descriptor)


__all__ = (
    # Enumerations
    "Kind",

    # Classes (specifications)
    "Argument",
    "Flag",

    # Normalizers
    "argument",
    "flag",
)
