"""Stylesheet tokens as produced by a CSS lexer.

A token is one lexical unit of a stylesheet, already grouped by the lexer:

<selector text="a, b"/>
<property name="color" value="red"/>
<media prefix="@media (min-width: 1px)"/>
    ...
<block-end/>

kind   => selector, property, comment, at-rules, block-end, end,
text   => selector text or comment body,
prefix => at-rule prelude, e.g. `@media screen`,
start, end => source positions (opaque, usually {line, column}),
"""
from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any, Literal
from typing_extensions import TypeAliasType

__all__ = [
    "Token",
    "TokenKind",
    "TokenError",
    "ParseError",

    "SELECTOR",
    "PROPERTY",
    "COMMENT",
    "BLOCK_END",
    "END",

    "FLAT_KINDS",
    "GROUP_KINDS",
    "DECLARATION_GROUPS",
    "BLOCK_END_KINDS",
]

TokenKind = TypeAliasType(
    "TokenKind",
    Literal[
        "selector",
        "property",
        "comment",
        "charset",
        "import",
        "namespace",
        "media",
        "keyframes",
        "font-face",
        "supports",
        "viewport",
        "document",
        "page",
        "block-end",
        "end",
    ]
    | str,
)

SELECTOR = "selector"
PROPERTY = "property"
COMMENT = "comment"
BLOCK_END = "block-end"
END = "end"

# Copied through without a body
FLAT_KINDS = frozenset(["property", "charset", "import", "namespace"])
GROUP_KINDS = frozenset(
    ["media", "keyframes", "supports", "document", "font-face", "viewport", "page"]
)
# Groups whose body is declarations instead of rules
DECLARATION_GROUPS = frozenset(["font-face", "viewport", "page"])
# `at-group-end` is what older lexers emit
BLOCK_END_KINDS = frozenset([BLOCK_END, "at-group-end"])


class ParseError(Exception): pass
class TokenError(ParseError): pass


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    name: str | None = None
    text: str | None = None
    prefix: str | None = None
    value: str | None = None
    start: Any = None
    end: Any = None

    @staticmethod
    def from_dict(record: Mapping[str, Any]) -> Token:
        """Build a token from a plain mapping, e.g. one loaded from JSON.

        Keys that are not token fields are ignored.

        Raises:
            TokenError: The mapping has no usable `kind`.
        """
        if not isinstance(record, Mapping):
            raise TokenError(f"Expected a token mapping, got {type(record).__name__}")

        # `type` is the key older lexers use for the kind
        kind = record.get("kind", record.get("type"))
        if not isinstance(kind, str) or kind == "":
            raise TokenError(f"Token is missing a kind: {dict(record)!r}")

        known = {field.name for field in fields(Token)} - {"kind"}
        return Token(kind, **{key: val for key, val in record.items() if key in known})

    def __repr__(self) -> str:
        shown = [
            f"{name}={getattr(self, name)!r}"
            for name in ("name", "text", "prefix", "value")
            if getattr(self, name) is not None
        ]
        return f"Token({', '.join([repr(self.kind), *shown])})"
