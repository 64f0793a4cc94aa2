"""Reading and writing SLON, a brace-delimited key/value tree format."""

from .errors import SlonError, SlonIOError, SlonSyntaxError
from .lexer import CharClass, CharReader, classify
from .nodes import SlonNode, SlonScalar
from .parser import ParserConfig, ParserState, SlonParser, load, loads
from .formatter import FormatterOptions, SlonFormatter, dump, dumps
from .document import SlonDocument

__all__ = [
    "SlonError",
    "SlonIOError",
    "SlonSyntaxError",
    "CharClass",
    "CharReader",
    "classify",
    "SlonNode",
    "SlonScalar",
    "ParserConfig",
    "ParserState",
    "SlonParser",
    "load",
    "loads",
    "FormatterOptions",
    "SlonFormatter",
    "dump",
    "dumps",
    "SlonDocument",
]
