"""
Shared CLI helpers for the xdiff and xreq commands.
"""

import functools
import sys
from typing import Callable, List, Optional

import click
from rich.console import Console
from rich.syntax import Syntax

from ..core.exceptions import InvalidOverride, ValidationError, XDiffException
from ..core.logging import get_logger, setup_logging
from ..request.encoding import get_content_type
from ..request.overrides import Override, parse_override

logger = get_logger(__name__)

LEXERS = {
    "application/json": "json",
    "text/html": "html",
    "application/xml": "xml",
    "text/xml": "xml",
    "text/css": "css",
    "application/javascript": "javascript",
    "text/javascript": "javascript",
}


class OverrideParamType(click.ParamType):
    """Click parameter type for ``key=value``, ``%key=value`` and ``@key=value``."""

    name = "key=value"

    def convert(self, value, param, ctx) -> Override:
        if isinstance(value, Override):
            return value
        try:
            return parse_override(value)
        except InvalidOverride as e:
            self.fail(e.message, param, ctx)


OVERRIDE = OverrideParamType()

extra_params_option = click.option(
    "--extra-params",
    "-e",
    "extra_params",
    type=OVERRIDE,
    multiple=True,
    help=(
        "Override the request: key=value for query params, "
        "%key=value for headers, @key=value for body fields."
    ),
)


def configure_logging(verbose: bool) -> None:
    setup_logging(log_level="DEBUG" if verbose else None)


def stdout_is_tty() -> bool:
    return sys.stdout.isatty()


def lexer_for(headers) -> str:
    """Pick a highlighting lexer from a response's Content-Type."""
    return LEXERS.get(get_content_type(headers) or "", "text")


def highlight_text(text: str, lexer: str, theme: Optional[str] = None) -> str:
    """Render ``text`` with ANSI syntax highlighting."""
    console = Console(force_terminal=True, color_system="truecolor", soft_wrap=True)
    syntax = Syntax(text, lexer, theme=theme or "monokai", background_color="default")
    with console.capture() as capture:
        console.print(syntax, end="")
    return capture.get()


def parse_selection(raw: str, count: int) -> List[int]:
    """
    Parse comma-separated 1-based indices into 0-based positions.

    Raises:
        ValidationError: If an entry is not a number in range
    """
    selected: List[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        if not part.isdigit() or not (1 <= int(part) <= count):
            raise ValidationError(
                f"Invalid selection {part!r}: expected numbers between 1 and {count}",
                {"selection": raw},
            )
        index = int(part) - 1
        if index not in selected:
            selected.append(index)
    return selected


def handle_errors(func: Callable) -> Callable:
    """Report XDiffException on stderr and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except XDiffException as e:
            logger.debug("Command failed", exc_info=True)
            click.secho(f"Error: {e}", fg="red", err=True)
            sys.exit(1)

    return wrapper
