"""
Parley faults: user-facing errors and warnings, and how they are surfaced.

Scope
- FaultCode: stable numeric identifiers, grouped by domain (input errors
  211xx, registration warnings 221xx).
- MatchException / MatchWarning: a message plus read-only options; each knows
  how to render itself (rich) and how to fire (__trigger__).
- MatchExit: exception group bundling every error found in one match.
- trigger(fault, **options): merge runtime options into a fault and fire it.
- getdoc(code) / ordinal(n): documentation lookup and "first", "second" labels.

What is a fault here
- Registration mistakes (bad config, malformed definitions, a content
  argument that is not last) are programming errors. Sanitizers raise
  TypeError/ValueError directly and never come through this module.
- A message that names no registered command is not a fault: match()
  returns None.
- Faults describe what a user typed against a matched command (unknown
  arguments and flags, on demand through Match.enforce) plus soft notices
  raised while registering (a flag declared twice).

Runtime options
- shell: render on stderr instead of raising (errors) or warning (warnings).
- deferred: in shell mode, render errors without exiting.
- fancy: wrap renders in a rich Panel.
- colorful: apply the palette (overridable through __main__.__styles__).
- command: label shown in headers when __main__.__prog__ is not set.
"""
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from functools import cache
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    Stable fault identifiers.

    - 211xx: input a user typed against a matched command.
    - 221xx: registration notices.

    The host may relabel codes through a __codes__ mapping in __main__; the
    numeric values never change.
    """
    # --- input errors ---
    UNKNOWN_ARGUMENT = 21101
    UNKNOWN_FLAG     = 21102

    # --- registration warnings ---
    DUPLICATED_FLAG  = 22101

    def normalize(self):
        """
        The host label for this code, or its number as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderer(options, palette):
    """
    Internal: (styler, text) helpers for one render.

    styler(name) resolves a palette entry (host __styles__ win) or "" when
    colors are off; text(fragment, style) wraps a fragment in a rich Text.
    """
    styles = defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))
    colorful = options.get("colorful", False)

    def styler(name):
        return styles[name] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), style if colorful else "")

    return styler, text


def _header(options, styler, text, *parts):
    """
    Internal: "[ prog — part | part ]" header, prog from __main__.__prog__
    or the command option.
    """
    program = getattr(__import__("__main__"), "__prog__", options.get("command", "parley"))
    fragments = ["[ ", text(program, styler("prog-name")), " — "]
    for index, (fragment, style) in enumerate(parts):
        if index:
            fragments.append(" | ")
        fragments.append(text(fragment, styler(style)))
    fragments.append(" ]")
    return Text.assemble(*fragments)


class _Fault:
    """
    Internal: message + options carrier shared by errors and warnings.

    Subclasses provide __palette__ (style names → rich styles) and __trigger__.
    """
    __palette__ = {}

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        styler, text = _renderer(self.options, type(self).__palette__)

        header = _header(
            self.options,
            styler,
            text,
            (self.options["code"].normalize(), "code"),
            (self.options["title"].title(), "title"),
        )
        body = text(self.message, styler("message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        if not self.options.get("fancy", False):
            return Group(header, body, hint)

        width = None
        if (ratio := self.options.get("ratio")) is not None:
            width = int((console.width - 4) * ratio)
        return Panel(Group(body, hint), title=header, title_align="left", width=width)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MatchException(_Fault, Exception):
    __palette__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #00E5FF",
        "title": "bold #FF4DA6",
        "message": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
    }

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if not self.options.get("deferred", False):
            sys.exit(1)


class UnknownArgumentError(MatchException): ...
class UnknownFlagError(MatchException): ...


class MatchWarning(_Fault, Warning):
    __palette__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",  # amber for warnings
        "title": "bold #FFC2E0",
        "message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
    }

    def __trigger__(self) -> None:
        if self.options.get("shell", False):
            console.print(self)
        else:
            warnings.warn(self, stacklevel=len(inspect.stack()))


class DuplicatedFlagWarning(MatchWarning): ...


class MatchExit(ExceptionGroup):
    """
    Every error found in one match, rendered under a single "bad match" header.
    """
    __palette__ = {
        "prog-name": "bold #E6E6F0",
        "title": "bold #FF4DA6",
    }

    def __new__(cls, exceptions, **options):
        return super().__new__(cls, "bad match", exceptions)

    def __init__(self, exceptions, **options):
        super().__init__("bad match", tuple(exceptions))
        self.options = MappingProxyType(options)

    def __rich__(self):
        styler, text = _renderer(self.options, type(self).__palette__)
        header = _header(self.options, styler, text, (self.message.title(), "title"))

        # Nested panels take two thirds of the console width.
        renders = [exception.__replace__(ratio=2 / 3) for exception in self.exceptions]

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")
        return Group(header, *renders)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        if not self.options.get("deferred", False):
            sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.exceptions, **{**self.options, **overrides})


def trigger(fault, /, **options):
    """
    Fire a fault after merging runtime options into it.

    The fault must implement __trigger__ and __replace__. Outside shell mode
    errors are raised and warnings go through the warnings module; in shell
    mode both are printed on the stderr console.

    Common options: command, shell, fancy, colorful, deferred, title, code,
    hint, docs, plus any context worth showing (input, index, suggestions).
    """
    if not callable(getattr(fault, "__trigger__", None)) or not callable(getattr(fault, "__replace__", None)):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    Documentation for a fault code from __main__.__docs__, or None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


@cache
def ordinal(number, /):
    """
    Ordinal label for a 1-based position: words up to ten, then "11th",
    "21st", "112th" and so on.
    """
    words = ("first", "second", "third", "fourth", "fifth", "sixth", "seventh", "eighth", "ninth", "tenth")
    if 1 <= number <= len(words):
        return words[number - 1]
    if 10 < number % 100 < 20:
        return f"{number}th"
    return f"{number}%s" % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


__all__ = (
    "MatchException",
    "UnknownArgumentError",
    "UnknownFlagError",
    "MatchWarning",
    "DuplicatedFlagWarning",
    "MatchExit",
    "FaultCode",
    "trigger",
    "getdoc",
    "ordinal",
)
