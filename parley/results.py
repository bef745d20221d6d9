"""
Parley match results.

Overview
- Slot: the kind of slot an unknown token was heading for (ARG or FLAG).
- Unknown(kind, raw): a token that no declared field could take.
- Match: the outcome of scanning one input against one definition.
  • definition: the Definition that was scanned against (same object).
  • name: the definition name.
  • args / flags: resolved values keyed by field name.
      - positional/content → str
      - list → list[str]
      - boolean → True (absence is a missing key, never False)
  • unknowns: Unknown entries in input order.

Matches are produced fresh per call and never reused. Their properties
return copies, so a consumer can freely mutate what it reads.

Unknowns are not errors. Callers that want them surfaced as faults use
Match.enforce(), which raises (or renders, in shell mode) one fault per
unknown token bundled in a MatchExit.
"""
import difflib
import enum
from collections import namedtuple

from .faults import *
from .fields import SpecType


class Slot(enum.StrEnum):
    """
    Where an unknown token was heading.
    """
    ARG = "arg"
    FLAG = "flag"


Unknown = namedtuple("Unknown", ("kind", "raw"))
Unknown.__doc__ = """
A token that could not be attributed to a declared field.

- kind: Slot.ARG for values/literals with no argument left to take them,
  Slot.FLAG for flag names the definition does not declare.
- raw: the token text (a flag's name without its prefix).
"""


class Match(metaclass=SpecType):
    """
    Result of scanning one input against one definition.
    """
    __introspectable__ = (
        "name",
        "args",
        "flags",
        "unknowns",
    )

    def __new__(cls, definition, /, args=(), flags=(), unknowns=()):
        self = super().__new__(cls)
        self._definition = definition
        self._name = definition.name
        self._args = dict(args)
        self._flags = dict(flags)
        self._unknowns = list(unknowns)
        return self

    @property
    def definition(self):
        return self._definition

    def __eq__(self, other):
        if not isinstance(other, Match):
            return NotImplemented
        return (
            self._definition is other._definition and
            self._args == other._args and
            self._flags == other._flags and
            self._unknowns == other._unknowns
        )

    __hash__ = None

    def enforce(self, **options):
        """
        Surface every unknown token as a fault.

        behavior
        - no unknowns → returns self (so calls can be chained).
        - otherwise builds one UnknownArgumentError per unknown argument and one
          UnknownFlagError per unknown flag (with close-match suggestions drawn
          from the declared flag names), then triggers them bundled in a
          MatchExit with the given options.

        options
        - shell, fancy, colorful, deferred: see parley.faults.trigger.
        - command: label used in rendered headers (defaults to the definition name).

        ordinals follow the order of the unknowns, so messages read
        “first unknown …”, “second unknown …”.
        """
        if not self._unknowns:
            return self

        options = {
            "command": self._name,
            "shell": False,
            "fancy": False,
            "colorful": False,
            "deferred": False,
        } | options

        declared = self._definition.flags
        exceptions = []

        for index, unknown in enumerate(self._unknowns, 1):
            if unknown.kind is Slot.FLAG:
                suggestions = difflib.get_close_matches(unknown.raw, declared.keys(), 5)
                try:
                    hint = "did you mean %r?" % suggestions[0]
                except IndexError:
                    hint = "remove it or declare it on %r" % self._name
                exceptions.append(UnknownFlagError(
                    "unknown flag %r (%s unknown)" % (unknown.raw, ordinal(index)),
                    title="unknown flag",
                    code=FaultCode.UNKNOWN_FLAG,
                    input=unknown.raw,
                    index=index,
                    suggestions=suggestions,
                    hint=hint,
                    docs=getdoc(FaultCode.UNKNOWN_FLAG),
                    **options,
                ))
            else:
                exceptions.append(UnknownArgumentError(
                    "unexpected argument %r (%s unknown)" % (unknown.raw, ordinal(index)),
                    title="unexpected argument",
                    code=FaultCode.UNKNOWN_ARGUMENT,
                    input=unknown.raw,
                    index=index,
                    hint="remove the extra value or quote it together with its neighbours",
                    docs=getdoc(FaultCode.UNKNOWN_ARGUMENT),
                    **options,
                ))

        trigger(MatchExit(exceptions), **options)
        return self


__all__ = (
    "Slot",
    "Unknown",
    "Match",
)
