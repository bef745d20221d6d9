"""
Parley scanner: one pass over the argument text of one definition.

State
- position: cursor into the text.
- cursor:   index of the next argument waiting for a value.
- pending:  the flag most recently seen and still waiting for a value, or None.
- anchor:   where the buffered (not yet classified) text starts; the buffer is
            text[anchor:position] and is empty at every token boundary.

Precedence, evaluated afresh at every position (first hit wins)
1. CONTENT   a pending CONTENT flag takes the rest of the text; the pass ends.
2. at a token boundary only:
   FLAG      the flag recognizer matches (and no literal starts here): a flag
             already pending resolves to True, the new flag becomes pending
             (BOOLEAN flags resolve to True at once, unknown names become
             Unknown(FLAG, name)).
   CONTENT   no flag is pending and the argument at the cursor is CONTENT: it
             takes the rest of the text verbatim, flag markers included.
   LITERAL   the literal recognizer matches: its inner text goes, unsplit, to
             the pending flag, else the argument at the cursor, else unknowns.
3. DELIMITER the buffer is flushed (pending flag → argument at cursor →
             Unknown(ARG, text)); list fields split their value.
4. CHARACTER the buffer grows by one character.

At the end of the text the buffer is flushed, and a flag still pending
resolves to True (a pending CONTENT flag takes the empty rest, "").

Quote and flag markers inside a token ('m"ember"', 'a--b') are plain text:
recognizers only run at token boundaries. The scanner never raises on input;
every token ends up in a field or in unknowns.
"""
import enum

from .fields import Kind
from .results import Match, Slot, Unknown


class Token(enum.Enum):
    """
    What the scanner found at the current position.
    """
    CONTENT = enum.auto()
    FLAG = enum.auto()
    LITERAL = enum.auto()
    DELIMITER = enum.auto()
    CHARACTER = enum.auto()


class Scanner:
    """
    Single-use state machine that resolves one text against one definition.

    Usage
        Scanner(patterns, definition, text).scan() -> Match
    """

    def __init__(self, patterns, definition, text, /):
        self._patterns = patterns
        self._definition = definition
        self._text = text

        self._arguments = definition.args
        self._declared = definition.flags

        self._position = 0
        self._anchor = 0
        self._cursor = 0
        self._pending = None

        self._args = {}
        self._flags = {}
        self._unknowns = []

    @property
    def _argument(self):
        """
        The argument waiting for a value, or None once all are filled.
        """
        try:
            return self._arguments[self._cursor]
        except IndexError:
            return None

    def _classify(self):
        """
        Apply the precedence rules at the current position.

        returns
        - (Token, re.Match | None): the token kind and the recognizer match
          that produced it (None for CONTENT and CHARACTER).
        """
        if self._pending is not None and self._pending.kind is Kind.CONTENT:
            return Token.CONTENT, None

        if self._anchor == self._position:
            literal = self._patterns.literal.match(self._text, self._position)
            if literal is None and (found := self._patterns.flag.match(self._text, self._position)):
                return Token.FLAG, found

            argument = self._argument
            if self._pending is None and argument is not None and argument.kind is Kind.CONTENT:
                return Token.CONTENT, None

            if literal is not None:
                return Token.LITERAL, literal

        if found := self._patterns.delimiter.match(self._text, self._position):
            return Token.DELIMITER, found

        return Token.CHARACTER, None

    def _assign(self, value, /, *, literal=False):
        """
        Hand a value to the pending flag, else to the argument at the cursor,
        else record it as an unknown argument.

        literal values are stored verbatim; other values go through the
        field's resolve() (list splitting).
        """
        if (pending := self._pending) is not None:
            self._flags[pending.name] = value if literal else pending.resolve(value)
            self._pending = None
        elif (argument := self._argument) is not None:
            self._args[argument.name] = value if literal else argument.resolve(value)
            self._cursor += 1
        else:
            self._unknowns.append(Unknown(Slot.ARG, value))

    def _flush(self):
        """
        Classify the buffered text, if any. An empty buffer is a no-op, which
        leaves a pending flag waiting for the next value.
        """
        if self._anchor == self._position:
            return
        self._assign(self._text[self._anchor:self._position])

    def _capture(self):
        """
        Give the rest of the text to a CONTENT flag (when pending) or to the
        CONTENT argument at the cursor.
        """
        rest = self._text[self._position:]
        if self._pending is not None:
            self._flags[self._pending.name] = rest
            self._pending = None
        else:
            self._args[self._argument.name] = rest
            self._cursor += 1
        self._position = self._anchor = len(self._text)

    def _settle(self, found):
        """
        Resolve a flag marker whose name was captured by `found`.
        """
        if self._pending is not None:
            self._flags[self._pending.name] = True  # implicit boolean

        name = found["name"]
        spec = self._declared.get(name)
        if spec is None:
            self._unknowns.append(Unknown(Slot.FLAG, name))
            self._pending = None
        elif spec.kind is Kind.BOOLEAN:
            self._flags[spec.name] = True
            self._pending = None
        else:
            self._pending = spec

    def scan(self):
        """
        Walk the text once and assemble the Match.
        """
        length = len(self._text)

        while self._position < length:
            token, found = self._classify()

            match token:
                case Token.CONTENT:
                    self._capture()
                    break
                case Token.FLAG:
                    self._settle(found)
                    self._position = self._anchor = found.end()
                case Token.LITERAL:
                    self._assign(found["value"], literal=True)
                    self._position = self._anchor = found.end()
                case Token.DELIMITER:
                    self._flush()
                    self._position = self._anchor = found.end()
                case Token.CHARACTER:
                    self._position += 1

        self._flush()

        if (pending := self._pending) is not None:
            self._flags[pending.name] = "" if pending.kind is Kind.CONTENT else True
            self._pending = None

        return Match(self._definition, self._args, self._flags, self._unknowns)


def scan(patterns, definition, text, /):
    """
    Resolve `text` (the part of a message after the command name) against one
    definition and return its Match.
    """
    return Scanner(patterns, definition, text).scan()


__all__ = (
    "Token",
    "Scanner",
    "scan",
)
