"""Main CLI entry point for the browser headers generator."""

import asyncio
import json
import random
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from browser_headers.antibot.headers import HeaderComposer
from browser_headers.core.corpus_source import HttpCorpusSource, JsonFileCorpusSource
from browser_headers.core.retry_handler import RetryHandler
from browser_headers.exceptions import BrowserHeadersError
from config.logging_config import get_logger, setup_logging
from config.settings import settings

# Initialize
app = typer.Typer(
    name="browser-headers",
    help="Generate browser-like request headers with real user agents.",
    add_completion=False,
)
console = Console()
log = get_logger("cli")


@app.callback()
def callback():
    """Browser Headers - realistic headers for automated HTTP clients."""
    pass


def _build_composer(
    operating_systems: Optional[List[str]],
    browsers: Optional[List[str]],
    min_seen: Optional[int],
    corpus_file: Optional[Path],
    url: Optional[str],
    seed: Optional[int],
) -> HeaderComposer:
    if corpus_file:
        source = JsonFileCorpusSource(corpus_file)
    else:
        source = HttpCorpusSource(url or settings.user_agents_url, timeout=settings.fetch_timeout)

    return HeaderComposer(
        operating_systems=operating_systems or None,
        browsers=browsers or None,
        min_times_seen=min_seen,
        source=source,
        rng=random.Random(seed) if seed is not None else None,
    )


async def _initialize(composer: HeaderComposer, retries: int) -> None:
    handler = RetryHandler(max_retries=retries)
    await handler.execute(composer.initialize)


def _load(retries: int, **options) -> HeaderComposer:
    try:
        composer = _build_composer(**options)
        asyncio.run(_initialize(composer, retries))
    except BrowserHeadersError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    return composer


@app.command()
def generate(
    count: int = typer.Option(1, "--count", "-n", min=1, help="Number of header sets to generate"),
    operating_systems: Optional[List[str]] = typer.Option(None, "--os", help="Accepted OS code substring (repeatable)"),
    browsers: Optional[List[str]] = typer.Option(None, "--browser", "-b", help="Accepted browser code substring (repeatable)"),
    min_seen: Optional[int] = typer.Option(None, "--min-seen", help="Minimum times a user agent was seen"),
    corpus_file: Optional[Path] = typer.Option(None, "--corpus-file", "-f", help="Read the corpus from a JSON file"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Corpus URL"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed for reproducible output"),
    retries: int = typer.Option(settings.max_retries, "--retries", help="Retries for the corpus fetch"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON lines instead of tables"),
):
    """
    Generate header sets.

    Examples:
        browser-headers generate --count 3
        browser-headers generate --browser firefox --os linux --json
        browser-headers generate --corpus-file user-agents.json --seed 42
    """
    setup_logging()

    composer = _load(
        retries,
        operating_systems=operating_systems,
        browsers=browsers,
        min_seen=min_seen,
        corpus_file=corpus_file,
        url=url,
        seed=seed,
    )

    for i in range(count):
        headers = composer.generate()

        if as_json:
            typer.echo(json.dumps(headers.to_request_headers()))
            continue

        table = Table(title=f"Headers #{i + 1}")
        table.add_column("Header", style="cyan")
        table.add_column("Value")
        for name, value in headers.items():
            table.add_row(name, "[dim]-[/dim]" if value is None else str(value))
        console.print(table)

    stats = composer.get_stats()
    if stats["duplicates"]:
        log.info(f"{stats['duplicates']} of {stats['samples']} picks repeated a user agent")


@app.command()
def pool(
    operating_systems: Optional[List[str]] = typer.Option(None, "--os", help="Accepted OS code substring (repeatable)"),
    browsers: Optional[List[str]] = typer.Option(None, "--browser", "-b", help="Accepted browser code substring (repeatable)"),
    min_seen: Optional[int] = typer.Option(None, "--min-seen", help="Minimum times a user agent was seen"),
    corpus_file: Optional[Path] = typer.Option(None, "--corpus-file", "-f", help="Read the corpus from a JSON file"),
    url: Optional[str] = typer.Option(None, "--url", "-u", help="Corpus URL"),
    retries: int = typer.Option(settings.max_retries, "--retries", help="Retries for the corpus fetch"),
    limit: int = typer.Option(20, "--limit", "-l", help="Maximum records to list"),
):
    """Show the user agents that pass the filter criteria."""
    setup_logging()

    composer = _load(
        retries,
        operating_systems=operating_systems,
        browsers=browsers,
        min_seen=min_seen,
        corpus_file=corpus_file,
        url=url,
        seed=None,
    )

    records = sorted(composer.pool.records, key=lambda r: r.time_seen, reverse=True)

    table = Table(title=f"User agent pool ({len(records)} records)")
    table.add_column("Browser", style="cyan")
    table.add_column("Version", justify="right")
    table.add_column("OS", style="green")
    table.add_column("Seen", justify="right")
    table.add_column("User-Agent")

    for record in records[:limit]:
        version = "" if record.software_version is None else f"{record.software_version:g}"
        table.add_row(
            record.software_name_code,
            version,
            record.operating_system_code,
            str(record.time_seen),
            record.user_agent,
        )

    console.print(table)
    if len(records) > limit:
        console.print(f"[dim]... {len(records) - limit} more[/dim]")


def main():
    app()


if __name__ == "__main__":
    main()
