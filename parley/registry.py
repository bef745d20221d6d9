"""
Parley registry: register command definitions, then match chat messages.

What this module provides
- Registry: owns one Config, its compiled Patterns and a Definitions store.
  • add(*definitions): register definitions (chainable).
  • match(message): classify one message against every overload of its command.
  • definitions: every distinct registered definition.
- registry(...): factory returning a Registry.

Matching, step by step
1. The base recognizer splits the message into (name, rest): the prefix must
   open the message, the name runs up to the first delimiter.
2. The name (or alias) is looked up; no definition means no match (None).
3. Every overload is scanned against the same rest with fresh state (see
   parley.scanner); one Match per overload, in registration order.

Quick start
    from parley import registry

    commands = registry(prefix="!")
    commands.add({
        "name": "ban",
        "alias": "b",
        "args": ["member", {"name": "reason", "kind": "content"}],
        "flags": [{"name": "days", "kind": "list"}, {"name": "silent", "kind": "boolean"}],
    })

    for match in commands.match("!ban @spam --silent posting links") or ():
        print(match.args, match.flags, match.unknowns)

Concurrency
- match() only reads shared state; complete every add() before matching from
  several threads.
"""
from collections.abc import Mapping

from .config import Config
from .definitions import Definition, Definitions
from .fields import SpecType
from .patterns import compile
from .scanner import scan
from .utils import *


class Registry(metaclass=SpecType):
    """
    Command registry and matcher.

    Construction
    - Registry() / registry(): default configuration ("!", whitespace, "--", '"').
    - Registry(config): a Config, or a mapping of Config keywords.
    - Registry(**options) / Registry(config, **options): keyword overrides for
      prefix, delimiter, flag_prefix and quote.

    Invalid configurations raise TypeError/ValueError here, before anything
    can be registered.
    """
    __displayable__ = (
        "config",
        "definitions",
    )

    def __new__(cls, config=Unset, /, **options):
        if config is Unset:
            config = Config(**options)
        elif isinstance(config, Config):
            config = config.__replace__(**options) if options else config
        elif isinstance(config, Mapping):
            config = Config(**(dict(config) | options))
        else:
            raise TypeError(f"{cls.__typename__} 'config' must be a config or a mapping")

        self = super().__new__(cls)
        self._config = config
        self._patterns = compile(config)
        self._store = Definitions()
        return self

    @property
    def config(self):
        return self._config

    @property
    def patterns(self):
        return self._patterns

    @property
    def definitions(self):
        """
        Every registered definition once (overloads counted individually,
        aliases not duplicating), in registration order.
        """
        return tuple(self._store.distinct())

    def add(self, *definitions):
        """
        Register one or more definitions.

        Each item is a Definition or a mapping descriptor (see
        Definition.from_descriptor). Items are processed in order; the first
        invalid one raises and stops, the ones before it stay registered.
        A definition is stored under its name and every alias, after any
        definition already stored there.

        Returns
        - self, for chaining.
        """
        if not definitions:
            raise TypeError("add() requires at least one definition")

        for descriptor in definitions:
            self._store.register(Definition.from_descriptor(descriptor))

        return self

    def overloads(self, name, /):
        """
        The definitions registered under a name or alias (empty when none).
        """
        return self._store.get(name, ())

    def match(self, message, /):
        """
        Match one message.

        Returns
        - None when the message does not open with the prefix, or when no
          definition is registered under the command name.
        - otherwise a list with one Match per overload, in registration order.
          Unrecognized tokens are reported in each Match's unknowns, never raised.
        """
        if not isinstance(message, str):
            raise TypeError("match() argument must be a string")

        if (split := self._patterns.split(message)) is None:
            return None

        name, rest = split
        try:
            definitions = self._store[name]
        except KeyError:
            return None

        return [scan(self._patterns, definition, rest) for definition in definitions]

    def __contains__(self, name):
        return name in self._store


def registry(config=Unset, /, **options):
    """
    Create a Registry.

    Parameters
    - config: Unset | Config | Mapping
      Base configuration (defaults when Unset).
    - **options: prefix, delimiter, flag_prefix, quote overrides.

    Returns
    - Registry
    """
    return Registry(config, **options)


__all__ = (
    "Registry",
    "registry",
)
