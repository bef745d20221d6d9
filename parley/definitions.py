"""
Parley definitions and the definition store.

What this module provides
- Definition: one declared command shape (name, aliases, arguments, flags,
  opaque data). Built once, immutable afterwards.
- Definitions: the store, a multimap from every name and alias to the
  definitions registered under it, in registration order (overloads).

Definition rules (sanitized on construction)
- name: non-empty string.
- alias: a string or an iterable of unique, non-empty strings.
- args: when given, a non-empty sequence of argument shorthands. Names are
  unique. At most one CONTENT argument, and only as the last one: content
  takes the rest of the input, so nothing could ever reach a later argument.
- flags: when given, a non-empty sequence of flag shorthands, turned into a
  name → Flag mapping. A repeated name replaces the earlier flag (last write
  wins) and emits a DuplicatedFlagWarning.
- data: any payload; handed back untouched on every match.

Mapping descriptors
    Definition.from_descriptor({
        "name": "ban",
        "alias": ["b"],
        "args": ["member", {"name": "reason", "kind": "content"}],
        "flags": [{"name": "silent", "kind": "boolean"}],
        "data": handler,
    })
"""
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .faults import DuplicatedFlagWarning, FaultCode, getdoc, trigger
from .fields import Kind, SpecType, argument, flag
from .utils import *


def _process_name(cls, metadata):
    """
    Validate the definition name.
    """
    if not isinstance(name := metadata["name"], str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")


def _process_aliases(cls, metadata):
    """
    Normalize 'alias' into the 'aliases' tuple.

    A bare string stands for a single alias. Items must be non-empty strings
    without duplicates; order is preserved.
    """
    aliases = metadata.pop("alias")
    if isinstance(aliases, str):
        aliases = (aliases,)
    elif not isinstance(aliases, Iterable):
        raise TypeError(f"{cls.__typename__} {metadata['name']!r} 'alias' must be a string or an iterable of strings")

    seen = []
    for alias in aliases:
        if not isinstance(alias, str):
            raise TypeError(f"{cls.__typename__} {metadata['name']!r} aliases must be strings")
        elif not alias:
            raise ValueError(f"{cls.__typename__} {metadata['name']!r} aliases cannot be empty")
        elif alias in seen:
            raise ValueError(f"{cls.__typename__} {metadata['name']!r} aliases cannot contain duplicates")
        seen.append(alias)

    metadata["aliases"] = tuple(seen)


def _sequence(cls, metadata, key):
    """
    Internal: read an optional, non-empty sequence of shorthands.
    """
    object = metadata[key]
    if object is Unset:
        return ()
    if isinstance(object, str | Mapping) or not isinstance(object, Iterable):
        raise TypeError(f"{cls.__typename__} {metadata['name']!r} {key!r} must be a sequence")
    if not (object := list(object)):
        raise ValueError(f"{cls.__typename__} {metadata['name']!r} {key!r} cannot be empty")
    return object


def _process_args(cls, metadata):
    """
    Normalize argument shorthands and enforce their ordering rules.

    - every item goes through fields.argument();
    - names must be unique within the definition;
    - a CONTENT argument must be the last one.
    """
    args = []
    names = set()

    for descriptor in (descriptors := _sequence(cls, metadata, "args")):
        spec = argument(descriptor)
        if spec.kind is Kind.CONTENT and len(args) != len(descriptors) - 1:
            raise TypeError(f"{cls.__typename__} argument {spec.name!r} must be defined last because it matches content")
        if spec.name in names:
            raise ValueError(f"{cls.__typename__} argument name {spec.name!r} is already in use")
        names.add(spec.name)
        args.append(spec)

    metadata["args"] = tuple(args)


def _process_flags(cls, metadata):
    """
    Normalize flag shorthands into a read-only name → Flag mapping.

    Repeated names keep the last declaration and emit a DuplicatedFlagWarning.
    """
    flags = {}

    for descriptor in _sequence(cls, metadata, "flags"):
        spec = flag(descriptor)
        if spec.name in flags:
            trigger(DuplicatedFlagWarning(
                "flag %r is declared more than once on %r" % (spec.name, metadata["name"]),
                title="duplicated flag",
                code=FaultCode.DUPLICATED_FLAG,
                command=metadata["name"],
                input=spec.name,
                hint="keep a single declaration; the last one is used",
                docs=getdoc(FaultCode.DUPLICATED_FLAG),
            ))
        flags[spec.name] = spec

    metadata["flags"] = MappingProxyType(flags)


class Definition(metaclass=SpecType):
    """
    One declared command shape.

    Properties
    - name: str
    - aliases: tuple[str, ...]
    - args: tuple[Argument, ...] (declaration order)
    - flags: mapping[str, Flag]
    - data: the payload given at construction (same object)

    Definitions are immutable. Several definitions may share a name; they are
    overloads and get scanned independently, in registration order.
    """
    __introspectable__ = (
        "name",
        "aliases",
        "args",
        "flags",
    )
    __displayable__ = (
        "name",
        "aliases",
        "args",
        "flags",
        "data",
    )

    def __new__(cls, name, /, *, alias=(), args=Unset, flags=Unset, data=None):
        metadata = {
            "name": name,
            "alias": alias,
            "args": args,
            "flags": flags,
        }
        _process_name(cls, metadata)
        _process_aliases(cls, metadata)
        _process_args(cls, metadata)
        _process_flags(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        self._data = data
        return self

    @property
    def data(self):
        return self._data

    @property
    def keys(self):
        """
        Every key this definition is stored under: its name, then its aliases.
        """
        return (self._name, *self._aliases)

    @classmethod
    def from_descriptor(cls, descriptor, /):
        """
        Build a Definition from a mapping descriptor (or pass a Definition through).

        Recognized keys: name (required), alias, args, flags, data.
        """
        if isinstance(descriptor, Definition):
            return descriptor
        if not isinstance(descriptor, Mapping):
            raise TypeError(f"{cls.__typename__} must be a mapping or a definition")
        if unknown := set(descriptor) - {"name", "alias", "args", "flags", "data"}:
            raise TypeError(f"{cls.__typename__} descriptor has unknown keys: %s" % ", ".join(map(repr, sorted(unknown))))
        if "name" not in descriptor:
            raise TypeError(f"{cls.__typename__} descriptor requires a 'name'")

        options = dict(descriptor)
        return cls(options.pop("name"), **options)


class Definitions(Mapping):
    """
    Multimap from name/alias to the definitions registered under it.

    - add(key, definition) appends; existing entries are never replaced.
    - store[key] returns a tuple of shared Definition objects (KeyError when absent).
    - distinct() yields each registered definition once, in registration order.

    Not synchronized: finish registering before matching from several threads.
    """

    def __init__(self):
        self._entries = {}
        self._ordered = []

    def register(self, definition, /):
        """
        Store a definition under its name and every alias.
        """
        if not isinstance(definition, Definition):
            raise TypeError("register() argument must be a definition")
        for key in definition.keys:
            self.add(key, definition)
        self._ordered.append(definition)

    def add(self, key, definition, /):
        self._entries.setdefault(key, []).append(definition)

    def distinct(self):
        seen = set()
        for definition in self._ordered:
            if id(definition) in seen:
                continue
            seen.add(id(definition))
            yield definition

    def __getitem__(self, key):
        return tuple(self._entries[key])

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return "definitions(%s)" % ", ".join("%r: %d" % (key, len(value)) for key, value in self._entries.items())


__all__ = (
    "Definition",
    "Definitions",
)
