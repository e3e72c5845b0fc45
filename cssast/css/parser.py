""" Stylesheet token parser

Builds a `stringify`-able tree out of grouped stylesheet tokens:

{kind: stylesheet, rules: [
    {kind: rule, selectors: [...], declarations: [...]},
    {kind: media, prefix: ..., rules: [...]},
    {kind: font-face, declarations: [...]},
]}

At-rule groups are closed by a `block-end` token. The parser keeps a nesting
depth that is raised when a group is entered and lowered when its
`block-end` token is consumed, which is what ends the nested rule list.
"""

from __future__ import annotations
import copy
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any
from typing_extensions import TypeAliasType

from cssast.css.tokens import *
from cssast.diagnostics import Diagnostics, LoggingDiagnostics

__all__ = [
    "Node",
    "Stylesheet",
    "Source",
    "Lexer",
    "ParseOptions",
    "TokenCursor",
    "Parser",
    "Parse",
    "parse",
    "MalformedInputError",
]

Node = TypeAliasType("Node", dict[str, Any])
Stylesheet = TypeAliasType("Stylesheet", dict[str, Any])
Source = TypeAliasType("Source", Sequence[Token | Mapping[str, Any]] | str)
Lexer = TypeAliasType("Lexer", Callable[[str], Iterable[Token | Mapping[str, Any]]])


@dataclass(frozen=True)
class ParseOptions:
    """Options for a single parse.

    Args
        comments (bool): Keep comment nodes in the tree. Defaults to `False`.
        position (bool): Attach the token's `start`/`end` to every node. Defaults to `False`.
        strict (bool): Raise on unbalanced groups instead of recording them. Defaults to `False`.
    """

    comments: bool = False
    position: bool = False
    strict: bool = False

    @staticmethod
    def coerce(options: ParseOptions | Mapping[str, Any] | None) -> ParseOptions:
        if options is None:
            return ParseOptions()
        elif isinstance(options, ParseOptions):
            return options
        elif isinstance(options, Mapping):
            return ParseOptions(
                comments=bool(options.get("comments")),
                position=bool(options.get("position")),
                strict=bool(options.get("strict")),
            )
        raise TypeError(
            f"Unexpected parse options {type(options).__name__}. Expected ParseOptions or a mapping."
        )


class TokenCursor:
    """Forward-only view over a token sequence that can take back the last token."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self.tokens: tuple[Token, ...] = tuple(tokens)
        self.index = 0
        self.pending: Token | None = None

    def __len__(self) -> int:
        return len(self.tokens) - self.index + (self.pending is not None)

    def take(self) -> Token | None:
        """The next token, or `None` once the sequence is exhausted."""
        if self.pending is not None:
            token, self.pending = self.pending, None
            return token
        if self.index < len(self.tokens):
            token = self.tokens[self.index]
            self.index += 1
            return token
        return None

    def put_back(self, token: Token):
        if self.pending is not None:
            raise RuntimeError(f"Cannot put back {token!r}, {self.pending!r} is still pending")
        self.pending = token


class Parse:
    @staticmethod
    def normalize(source: Source, lexer: Lexer | None = None) -> list[Token]:
        if isinstance(source, str):
            if lexer is None:
                raise TypeError("Parsing CSS text needs a lexer. Pass `lexer` or a list of tokens.")
            source = list(lexer(source))
        elif not isinstance(source, Sequence):
            raise TypeError(
                "Unexpected input to parse. Expected a string or a list of tokens."
            )
        return [token if isinstance(token, Token) else Token.from_dict(token) for token in source]

    @staticmethod
    def stylesheet(
        source: Source,
        options: ParseOptions | Mapping[str, Any] | None = None,
        *,
        diagnostics: Diagnostics | None = None,
        lexer: Lexer | None = None,
    ) -> Stylesheet:
        parser = Parser(source, options, diagnostics=diagnostics, lexer=lexer)
        return parser.consume_stylesheet()


class Parser:
    """State for one parse: the token cursor, group depth, and options.

    A parser is used for a single stylesheet. Create a new one for every
    source so that nothing carries over between parses.
    """

    def __init__(
        self,
        source: Source,
        options: ParseOptions | Mapping[str, Any] | None = None,
        *,
        diagnostics: Diagnostics | None = None,
        lexer: Lexer | None = None,
    ) -> None:
        self.options = ParseOptions.coerce(options)
        self.diagnostics: Diagnostics = diagnostics or LoggingDiagnostics()
        self.cursor = TokenCursor(Parse.normalize(source, lexer))
        self.depth = 0
        self.errors: list[ParseError] = []

    def next(self) -> Token | None:
        token = self.cursor.take()
        self.diagnostics.emit("next", token=token)
        return token

    def reconsume(self, token: Token):
        self.cursor.put_back(token)

    def error(self, error: ParseError, event: str, **fields: Any):
        self.errors.append(error)
        self.diagnostics.emit(event, error=str(error), **fields)

    def enter_group(self):
        self.depth += 1

    def exit_group(self, token: Token):
        if self.depth <= 0:
            self.error(
                MalformedInputError(f"{token.kind!r} token without an open group"),
                "depth-underflow",
                token=token,
                depth=self.depth,
            )
        self.depth -= 1

    def node(self, token: Token, **override: Any) -> Node:
        """Build a tree node from a token.

        Override values win over the token's `kind`, `name` and `value`. Any
        other override is added unless the node already has a value for it.
        `None` overrides are ignored.
        """
        override = {key: val for key, val in override.items() if val is not None}
        node: Node = {}

        if token.kind:
            node["kind"] = override.get("kind", token.kind)
        if token.name:
            node["name"] = override.get("name", token.name)
        if token.value:
            node["value"] = override.get("value", token.value)

        for key, val in override.items():
            if not node.get(key):
                node[key] = val

        if self.options.position:
            # Markers are copied, the tree must not share them with the input
            node["position"] = {
                "start": copy.deepcopy(token.start),
                "end": copy.deepcopy(token.end),
            }

        self.diagnostics.emit("node", node=node)
        return node

    def consume_token(self, token: Token) -> Node | None:
        """Convert a token into a node. Tokens that produce nothing return `None`."""
        # Roughly in order of how often each kind shows up
        if token.kind in FLAT_KINDS:
            return self.node(token)
        elif token.kind == SELECTOR:
            return self.consume_selector(token)
        elif token.kind in BLOCK_END_KINDS:
            self.exit_group(token)
            return None
        elif token.kind in GROUP_KINDS:
            return self.consume_group(token)
        elif token.kind == COMMENT:
            if self.options.comments:
                return self.node(token, text=token.text)
            return None

        self.diagnostics.emit("unexpected-token", token=token)
        return None

    def consume_selector(self, token: Token) -> Node:
        selectors = [part.strip() for part in token.text.split(",")] if token.text else []
        return self.node(
            token,
            kind="rule",
            selectors=selectors,
            declarations=self.consume_declarations(),
        )

    def consume_group(self, token: Token) -> Node:
        self.enter_group()

        if token.kind == "page":
            return self.node(token, prefix=token.prefix, declarations=self.consume_declarations())
        elif token.kind in DECLARATION_GROUPS:
            return self.node(token, declarations=self.consume_declarations())
        return self.node(token, prefix=token.prefix, rules=self.consume_rules())

    def consume_while(self, condition: Callable[[Token], bool]) -> list[Node]:
        """Convert tokens into nodes until `condition` rejects one.

        The rejected token is put back so the enclosing reader sees it next,
        unless it is the `end` marker which only exists to stop the loop.
        """
        nodes = []
        while (token := self.next()) is not None and condition(token):
            if (node := self.consume_token(token)) is not None:
                nodes.append(node)

        if token is not None and token.kind != END:
            self.reconsume(token)
        return nodes

    def consume_declarations(self) -> list[Node]:
        return self.consume_while(lambda token: token.kind in (PROPERTY, COMMENT))

    def consume_rules(self) -> list[Node]:
        """Convert tokens into the rules of the group just entered.

        Works like `consume_while` with a `depth > 0` condition, read on every
        token so block-end tokens inside the loop end it. Rule groups nested
        inside are kept on a stack of open groups instead of recursing, so
        nesting is only bounded by memory.
        """
        open_groups: list[tuple[Token, list[Node]]] = []
        rules: list[Node] = []
        while True:
            token = self.next()
            if token is None or self.depth <= 0:
                if token is not None and token.kind != END:
                    self.reconsume(token)
                if not open_groups:
                    return rules
                # Close the innermost group, its parent sees the same token next
                group, parent = open_groups.pop()
                parent.append(self.node(group, prefix=group.prefix, rules=rules))
                rules = parent
            elif token.kind in GROUP_KINDS and token.kind not in DECLARATION_GROUPS:
                self.enter_group()
                open_groups.append((token, rules))
                rules = []
            elif (node := self.consume_token(token)) is not None:
                rules.append(node)

    def consume_stylesheet(self) -> Stylesheet:
        start = time.perf_counter()

        rules = []
        while (token := self.next()) is not None:
            if (rule := self.consume_token(token)) is not None:
                rules.append(rule)

        if self.depth > 0:
            self.error(
                MalformedInputError(f"{self.depth} group(s) left open at end of input"),
                "unclosed-group",
                depth=self.depth,
            )

        self.diagnostics.emit("ran", ms=round((time.perf_counter() - start) * 1000, 3))

        if self.options.strict:
            for error in self.errors:
                if isinstance(error, MalformedInputError):
                    raise error

        return {"kind": "stylesheet", "rules": rules}


def parse(
    source: Source,
    options: ParseOptions | Mapping[str, Any] | None = None,
    *,
    comments: bool | None = None,
    position: bool | None = None,
    diagnostics: Diagnostics | None = None,
    lexer: Lexer | None = None,
) -> Stylesheet:
    """Convert a list of stylesheet tokens, or CSS text and a lexer, into a tree.

    Args
        source (Source): Tokens, as `Token` objects or mappings, or CSS text.
        options (ParseOptions | Mapping | None): See `ParseOptions`.
        comments (bool | None): Overrides `options.comments` when given.
        position (bool | None): Overrides `options.position` when given.
        diagnostics (Diagnostics | None): Receives debug events. Defaults to logging.
        lexer (Lexer | None): Turns CSS text into tokens. Required for text input.

    Returns:
        Stylesheet: `{"kind": "stylesheet", "rules": [...]}`
    """
    options = ParseOptions.coerce(options)
    overrides = {
        key: val
        for key, val in (("comments", comments), ("position", position))
        if val is not None
    }
    if overrides:
        options = replace(options, **overrides)
    return Parse.stylesheet(source, options, diagnostics=diagnostics, lexer=lexer)


class MalformedInputError(ParseError): pass


if __name__ == "__main__":
    import json

    tokens = [
        {"kind": "charset", "name": '"utf-8"'},
        {"kind": "media", "prefix": "@media (min-width: 1px)"},
        {"kind": "selector", "text": "a, b ,c"},
        {"kind": "property", "name": "color", "value": "red"},
        {"kind": "comment", "text": " links "},
        {"kind": "block-end"},
        {"kind": "font-face"},
        {"kind": "property", "name": "font-family", "value": "Mono"},
        {"kind": "block-end"},
    ]
    print(json.dumps(parse(tokens, comments=True), indent=2))
