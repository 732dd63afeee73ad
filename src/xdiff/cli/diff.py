"""
xdiff CLI

Send the two requests of a diff profile and print the difference between
their responses.

Example:
    xdiff run -p todo -e a=100 -e @name=test
"""

import asyncio
from typing import Optional, Tuple

import click

from ..core.config import get_settings
from ..request.executor import send
from ..request.overrides import Override, OverrideSet
from ..request.profile import RequestProfile
from ..store.config import DiffConfig, DiffProfile, ResponseProfile
from .common import (
    configure_logging,
    extra_params_option,
    handle_errors,
    highlight_text,
    parse_selection,
    stdout_is_tty,
)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """
    xdiff - diff two HTTP requests and compare the responses.
    """
    configure_logging(verbose)


@cli.command()
@click.option("--profile", "-p", required=True, help="The profile name")
@extra_params_option
@click.option("--config", "-c", type=click.Path(dir_okay=False), help="Configuration to use")
@handle_errors
def run(profile: str, extra_params: Tuple[Override, ...], config: Optional[str]):
    """
    Diff two API responses based on the given profile.

    Example:
        xdiff run -p todo -c xdiff.yaml
    """
    settings = get_settings()
    config_file = config or settings.diff_config

    document = DiffConfig.load_yaml(config_file)
    diff_profile = document.get_profile(profile)
    overrides = OverrideSet.from_overrides(extra_params)

    result = asyncio.run(
        diff_profile.diff(overrides, color=stdout_is_tty(), context=settings.context_lines)
    )
    click.echo(result, nl=False)


@cli.command()
@handle_errors
def parse():
    """
    Build a diff profile from two URLs and print it as YAML.
    """
    settings = get_settings()

    url1 = click.prompt("URL 1", err=True)
    url2 = click.prompt("URL 2", err=True)
    name = click.prompt("Profile name", err=True)

    req1 = RequestProfile.from_url(url1)
    req2 = RequestProfile.from_url(url2)

    response = asyncio.run(send(req1))
    headers = response.header_keys()

    skip_headers = []
    if headers:
        click.echo("Response headers:", err=True)
        for index, header in enumerate(headers, start=1):
            click.echo(f"  {index}. {header}", err=True)
        raw = click.prompt(
            "Select headers to skip (comma-separated numbers)",
            default="",
            show_default=False,
            err=True,
        )
        skip_headers = [headers[i] for i in parse_selection(raw, len(headers))]

    diff_profile = DiffProfile(
        req1=req1, req2=req2, res=ResponseProfile(skip_headers=skip_headers)
    )
    result = DiffConfig(profiles={name: diff_profile}).to_yaml()

    if stdout_is_tty():
        click.echo(highlight_text(result, "yaml", settings.theme), nl=False)
    else:
        click.echo(result, nl=False)


def main():
    """Main entry point for xdiff."""
    cli()


if __name__ == "__main__":
    main()
