"""cssast CLI: parse a JSON token file and print the tree as JSON."""

from __future__ import annotations

import json
import logging
import sys
from typing import IO

import click

from cssast import __version__
from cssast.css.parser import MalformedInputError, ParseOptions, parse
from cssast.css.tokens import TokenError


@click.command()
@click.version_option(version=__version__, prog_name="cssast")
@click.argument("tokens", type=click.File("r", encoding="utf-8"))
@click.option("--comments", is_flag=True, help="Keep comment nodes.")
@click.option("--position", is_flag=True, help="Attach source positions to nodes.")
@click.option("--strict", is_flag=True, help="Fail on unbalanced at-rule groups.")
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indent.")
@click.option("--debug", is_flag=True, help="Log parser events to stderr.")
def cli(
    tokens: IO[str],
    comments: bool,
    position: bool,
    strict: bool,
    indent: int,
    debug: bool,
) -> None:
    """Parse TOKENS (a JSON array of token objects, `-` for stdin) into a tree.

    Prints the stylesheet tree as JSON and exits with code 0, or prints the
    error and exits with code 1.
    """
    if debug:
        logging.basicConfig(format="%(name)s %(message)s")
        logging.getLogger("cssast").setLevel(logging.DEBUG)

    try:
        records = json.load(tokens)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        click.echo(f"Invalid JSON: {exc}", err=True)
        sys.exit(1)

    if not isinstance(records, list):
        click.echo("Invalid token file: expected a JSON array", err=True)
        sys.exit(1)

    options = ParseOptions(comments=comments, position=position, strict=strict)
    try:
        stylesheet = parse(records, options)
    except (TokenError, MalformedInputError) as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    click.echo(json.dumps(stylesheet, indent=indent))
