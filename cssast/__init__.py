from __future__ import annotations
from cssast.css.parser import (
    Lexer,
    MalformedInputError,
    Node,
    Parse,
    ParseOptions,
    Parser,
    Source,
    Stylesheet,
    TokenCursor,
    parse,
)
from cssast.css.tokens import ParseError, Token, TokenError
from cssast.diagnostics import (
    Diagnostics,
    LoggingDiagnostics,
    NullDiagnostics,
    RecordingDiagnostics,
)

__version__ = "0.1.0"

__all__ = [
    "parse",
    "Parse",
    "Parser",
    "ParseOptions",
    "TokenCursor",
    "Token",
    "Node",
    "Stylesheet",
    "Source",
    "Lexer",
    "ParseError",
    "TokenError",
    "MalformedInputError",
    "Diagnostics",
    "LoggingDiagnostics",
    "NullDiagnostics",
    "RecordingDiagnostics",
]
