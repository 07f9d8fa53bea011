"""CLI command implementations"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Annotated, Optional

import anyio
import typer

from hashview.config import Settings, load_config
from hashview.core.classify import classify
from hashview.core.controller import ViewController
from hashview.core.fetch import ContentFetcher
from hashview.core.fragment import parse_fragment, split_view_url
from hashview.core.models import Error, ViewState
from hashview.core.page import build_page


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Stable names for fragment states in JSON output.
FRAGMENT_KINDS = {
    "SeekTime": "seek_time",
    "PageNumber": "page_number",
    "LineRange": "line_range",
    "NoFragment": "none",
}


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail("Invalid configuration", e)


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _make_fetcher(settings: Settings) -> ContentFetcher:
    return ContentFetcher(settings.base_url, settings.content_path, settings.timeout)


async def _open_view(settings: Settings, identifier: Optional[str], fragment: str) -> ViewState:
    """Run one controller lifecycle against a fresh fetcher."""
    async with _make_fetcher(settings) as fetcher:
        controller = ViewController(fetcher, settings.parser_config)
        try:
            return await controller.open(identifier, fragment)
        finally:
            controller.close()


def view_cmd(
    target: Annotated[str, typer.Argument(help="Content identifier or viewer URL (may carry a #fragment)")],
    fragment: Annotated[Optional[str], typer.Option("--fragment", "-f", help="Raw fragment without '#'; overrides the URL's")] = None,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Write the HTML page here instead of stdout")] = None,
    base_url: Annotated[Optional[str], typer.Option("--base-url", help="Content resolution server")] = None,
    theme: Annotated[Optional[str], typer.Option("--theme", help="light or dark")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Fetch an artifact, render it for its media type and emit an HTML page."""
    settings = _settings(overrides={
        "base_url": base_url, "theme": theme,
        "log_level": "DEBUG" if verbose else None,
    })
    _configure_logging(settings.log_level)

    identifier, url_fragment = split_view_url(target)
    raw_fragment = fragment if fragment is not None else url_fragment
    state = anyio.run(_open_view, settings, identifier, raw_fragment)

    if isinstance(state, Error):
        _fail(state.message)

    page = build_page(state, settings.app_name, settings.theme)
    if out:
        Path(out).write_text(page, encoding="utf-8")
        typer.echo(f"  {identifier} -> {out}")
    else:
        typer.echo(page)


def fragment_cmd(
    raw: Annotated[str, typer.Argument(help="Fragment text without the leading '#'")],
    ):
    """Print the view state a fragment resolves to, as JSON."""
    state = parse_fragment(raw)
    payload = {"kind": FRAGMENT_KINDS[type(state).__name__], **asdict(state)}
    typer.echo(json.dumps(payload))


def classify_cmd(
    media_type: Annotated[str, typer.Argument(help="Declared Content-Type")],
    filename: Annotated[Optional[str], typer.Argument(help="Filename used to resolve a code language")] = None,
    ):
    """Print the renderer variant (and code language) for a media type, as JSON."""
    result = classify(media_type, filename)
    typer.echo(json.dumps({"variant": result.variant.value, "language": result.language}))
