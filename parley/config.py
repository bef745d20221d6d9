"""
Parley configuration: the four markers every registry is compiled from.

Overview
- Config: immutable value object holding
  • prefix: text that must open every command (default "!").
  • delimiter: argument separator; None means “a run of whitespace”.
  • flag_prefix: text that introduces a flag (default "--").
  • quote: a single marker used to open and close literals (default '"'),
    or an explicit (open, close) pair.

Validation (sanitized on construction)
- Every marker must be a non-empty string (TypeError for shapes, ValueError
  for values), quote pairs must have exactly two items.
- Markers must be told apart as literal substrings: flag_prefix cannot equal
  the delimiter, and no quote marker can equal the flag_prefix or the delimiter.

Config values are hashable and compare by value, so compiled patterns can be
memoized per configuration (see parley.patterns.compile).

Quick example:
    >>> config = Config(prefix="?", delimiter=",", quote=("[[", "]]"))
    >>> config.opening, config.closing
    ('[[', ']]')
"""
from collections.abc import Iterable

from .utils import *


def _sanitize_markers(cls, metadata, /):
    """
    Internal: validate the single-string markers (prefix, delimiter, flag_prefix).

    - prefix/flag_prefix: required non-empty strings.
    - delimiter: None (whitespace) or a non-empty string.

    Strings are not trimmed: whitespace inside a marker is significant.
    """
    for name in ("prefix", "delimiter", "flag_prefix"):
        object = metadata[name]
        if name == "delimiter" and object is None:
            continue
        if not isinstance(object, str):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")
        elif not object:
            raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")


def _sanitize_quote(cls, metadata, /):
    """
    Internal: normalize 'quote' into an (opening, closing) pair.

    Accepted forms
    - str: used as both the opening and the closing marker.
    - Iterable[str] with exactly two items: (opening, closing).
    """
    quote = metadata["quote"]
    if isinstance(quote, str):
        quote = (quote, quote)
    elif isinstance(quote, Iterable):
        quote = tuple(quote)
        if len(quote) != 2:
            raise ValueError(f"{cls.__typename__} 'quote' pair must have exactly two markers")
    else:
        raise TypeError(f"{cls.__typename__} 'quote' must be a string or a pair of strings")

    for marker in quote:
        if not isinstance(marker, str):
            raise TypeError(f"{cls.__typename__} 'quote' markers must be strings")
        elif not marker:
            raise ValueError(f"{cls.__typename__} 'quote' markers cannot be empty")

    metadata["quote"] = quote


def _sanitize_collisions(cls, metadata, /):
    """
    Internal: reject markers that cannot be told apart.

    The scanner never disambiguates overlapping markers, so identical ones are
    refused up front.
    """
    delimiter = metadata["delimiter"]
    flag_prefix = metadata["flag_prefix"]

    if flag_prefix == delimiter:
        raise ValueError(f"{cls.__typename__} 'flag_prefix' cannot be the same as 'delimiter'")

    for marker in metadata["quote"]:
        if marker == flag_prefix:
            raise ValueError(f"{cls.__typename__} 'quote' cannot be the same as 'flag_prefix'")
        if marker == delimiter:
            raise ValueError(f"{cls.__typename__} 'quote' cannot be the same as 'delimiter'")


class Config:
    """
    Immutable configuration consumed by the pattern compiler.

    Properties
    - prefix, delimiter, flag_prefix: the sanitized markers.
    - quote: (opening, closing) tuple; opening/closing expose each side.

    Config instances compare and hash by value. Use copy-style overrides via
    __replace__ (or copy.replace on recent interpreters) to derive a variant.
    """
    __typename__ = "config"
    __introspectable__ = (
        "prefix",
        "delimiter",
        "flag_prefix",
        "quote",
    )

    def __new__(cls, prefix="!", delimiter=None, flag_prefix="--", quote='"'):
        metadata = {
            "prefix": prefix,
            "delimiter": delimiter,
            "flag_prefix": flag_prefix,
            "quote": quote,
        }
        _sanitize_markers(cls, metadata)
        _sanitize_quote(cls, metadata)
        _sanitize_collisions(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    prefix = mirror("prefix")
    delimiter = mirror("delimiter")
    flag_prefix = mirror("flag_prefix")
    quote = mirror("quote")

    @property
    def opening(self):
        return self._quote[0]

    @property
    def closing(self):
        return self._quote[1]

    def __key__(self):
        return tuple(getattr(self, name) for name in type(self).__introspectable__)

    def __eq__(self, other):
        if not isinstance(other, Config):
            return NotImplemented
        return self.__key__() == other.__key__()

    def __hash__(self):
        return hash(self.__key__())

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(**dict(zip(type(self).__introspectable__, self.__key__())) | overrides)

    def __repr__(self):
        return "%s(%s)" % (type(self).__typename__, ", ".join("%s=%r" % item for item in self.__rich_repr__()))

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)


__all__ = (
    "Config",
)
