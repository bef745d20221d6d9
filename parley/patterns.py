r"""
Parley pattern compiler: configuration markers → recognizers.

Recognizers (all compiled once per Config and memoized)
- base:      PREFIX (?P<name>.*?) DELIMITER-OR-END (?P<rest>.*)
- literal:   OPEN (?P<value>.*?) CLOSE DELIMITER-OR-END
- flag:      FLAG-PREFIX (?!DELIMITER) (?P<name>.+?) DELIMITER-OR-END
- delimiter: one delimiter occurrence

Delimiter-or-end
- whitespace default: \s+|\Z
- explicit delimiter D: \s*D\s*|\Z   (surrounding whitespace belongs to the delimiter)

Every marker goes through re.escape, so configuration strings are always
matched as literal text. The delimiter is consumed by the recognizer that
precedes it (no lookahead), which keeps the scanner's cursor arithmetic to a
single match.end(). Patterns are DOTALL: literals and content may span lines.

Examples
    >>> patterns = compile(Config())
    >>> patterns.split("!ban member reason")
    ('ban', 'member reason')
    >>> patterns.split("?ban") is None
    True
"""
import functools
import re

from .config import Config


class Patterns:
    """
    Compiled recognizers for one configuration.

    Attributes
    - config: the source Config.
    - base, literal, flag, delimiter: compiled re.Pattern objects; the scanner
      calls .match(text, position) on them so each is anchored at the cursor.
    """

    def __init__(self, config, /):
        if not isinstance(config, Config):
            raise TypeError("patterns() argument must be a config")
        self.config = config

        prefix = re.escape(config.prefix)
        flag_prefix = re.escape(config.flag_prefix)
        opening = re.escape(config.opening)
        closing = re.escape(config.closing)

        if config.delimiter is None:
            delimiter = r"\s+"
        else:
            delimiter = r"\s*" + re.escape(config.delimiter) + r"\s*"
        boundary = "(?:%s|\\Z)" % delimiter

        self.base = re.compile(prefix + r"(?P<name>.*?)" + boundary + r"(?P<rest>.*)", re.DOTALL)
        self.literal = re.compile(opening + r"(?P<value>.*?)" + closing + boundary, re.DOTALL)
        self.flag = re.compile(flag_prefix + "(?!%s)" % delimiter + r"(?P<name>.+?)" + boundary, re.DOTALL)
        self.delimiter = re.compile(delimiter)

    def split(self, message, /):
        """
        Apply the base recognizer to a whole message.

        Returns
        - (name, rest) when the message opens with the prefix; the name is the
          shortest run up to the first delimiter (or the end), rest may be "".
        - None when the prefix is absent.
        """
        if not (match := self.base.match(message)):
            return None
        return match["name"], match["rest"]

    def __repr__(self):
        return "patterns(config=%r)" % self.config


@functools.cache  # One compilation per distinct configuration.
def compile(config, /):
    """
    Return the (memoized) Patterns for a configuration.
    """
    return Patterns(config)


__all__ = (
    "Patterns",
    "compile",
)
