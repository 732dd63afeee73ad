"""
xreq CLI

Send a single request profile and print the response.

Example:
    xreq run -p todo -e id=2 -e %Authorization=token
"""

import asyncio
from typing import Optional, Tuple

import click

from ..comparison.reducer import get_body_text, get_header_text, get_status_text
from ..core.config import get_settings
from ..request.executor import send
from ..request.overrides import Override, OverrideSet
from ..request.profile import RequestProfile
from ..store.config import RequestConfig
from .common import (
    configure_logging,
    extra_params_option,
    handle_errors,
    highlight_text,
    lexer_for,
    stdout_is_tty,
)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """
    xreq - send HTTP requests described by named profiles.
    """
    configure_logging(verbose)


@cli.command()
@click.option("--profile", "-p", required=True, help="The profile name")
@extra_params_option
@click.option("--config", "-c", type=click.Path(dir_okay=False), help="Configuration to use")
@handle_errors
def run(profile: str, extra_params: Tuple[Override, ...], config: Optional[str]):
    """
    Send the request of a profile and print the response.

    Example:
        xreq run -p todo -e id=2
    """
    settings = get_settings()
    config_file = config or settings.req_config

    document = RequestConfig.load_yaml(config_file)
    request = document.get_profile(profile)
    overrides = OverrideSet.from_overrides(extra_params)

    url = request.get_url(overrides)
    response = asyncio.run(send(request, overrides))

    status = get_status_text(response)
    headers = get_header_text(response)
    body = get_body_text(response)

    if stdout_is_tty():
        click.echo(f"Url: {url}\n")
        click.echo(status, nl=False)
        click.echo(highlight_text(headers, "yaml", settings.theme), nl=False)
        click.echo(highlight_text(body, lexer_for(response.headers), settings.theme))
    else:
        click.echo(status + headers + body)


@cli.command()
@handle_errors
def parse():
    """
    Build a profile from a URL and print it as YAML.
    """
    settings = get_settings()

    url = click.prompt("URL", err=True)
    profile = RequestProfile.from_url(url)
    name = click.prompt("Profile name", err=True)

    result = RequestConfig(profiles={name: profile}).to_yaml()

    if stdout_is_tty():
        click.echo("---\n" + highlight_text(result, "yaml", settings.theme), nl=False)
    else:
        click.echo(result, nl=False)


def main():
    """Main entry point for xreq."""
    cli()


if __name__ == "__main__":
    main()
