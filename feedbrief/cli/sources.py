"""Sources management commands."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config, SourceConfig
from ..exceptions import ConfigError
from ..ingestion import FeedNormalizer

console = Console()
sources_app = typer.Typer(help="Manage feed sources")

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Configuration file")


def _open_config(config_path: Optional[Path]) -> Config:
    config = Config(config_path)
    try:
        config.config
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    return config


@sources_app.command("list")
def sources_list(config_path: Optional[Path] = CONFIG_OPTION) -> None:
    """List all configured sources."""
    config = _open_config(config_path)
    sources = config.config.sources

    if not sources:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("Name", style="cyan")
    table.add_column("Enabled", style="yellow")
    table.add_column("URL", style="blue")

    for source in sources:
        table.add_row(
            source.name or "-",
            "✓" if source.enabled else "✗",
            source.url,
        )

    console.print(table)


@sources_app.command("add")
def sources_add(
    url: str = typer.Argument(..., help="RSS/Atom feed URL"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Display name override"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Add a new feed source."""
    config = _open_config(config_path)
    sources = list(config.config.sources)

    if any(s.url == url.strip() for s in sources):
        console.print(f"[red]Source already exists: {url}[/red]")
        raise typer.Exit(1)

    try:
        new_source = SourceConfig(url=url, name=name)
    except ValueError as e:
        console.print(f"[red]Invalid source: {e}[/red]")
        raise typer.Exit(1)

    sources.append(new_source)
    config.save(config.config.model_copy(update={"sources": sources}))

    console.print(f"[green]✅ Added source: {new_source.url}[/green]")


@sources_app.command("remove")
def sources_remove(
    url: str = typer.Argument(..., help="Feed URL to remove"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Remove a source."""
    config = _open_config(config_path)
    sources = config.config.sources

    remaining = [s for s in sources if s.url != url.strip()]
    if len(remaining) == len(sources):
        console.print(f"[red]Source not found: {url}[/red]")
        raise typer.Exit(1)

    config.save(config.config.model_copy(update={"sources": remaining}))
    console.print(f"[green]✅ Removed source: {url}[/green]")


@sources_app.command("test")
def sources_test(
    url: Optional[str] = typer.Argument(None, help="Feed URL to test (or test all)"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Fetch and parse feeds without summarizing them."""
    config = _open_config(config_path)
    sources = config.config.enabled_sources

    if url:
        sources = [s for s in sources if s.url == url.strip()] or [SourceConfig(url=url)]

    normalizer = FeedNormalizer(
        timeout=config.config.feeds.timeout_ms / 1000,
        user_agent=config.config.extraction.user_agent,
    )
    results = asyncio.run(normalizer.fetch_all_feeds(sources))

    for result in results:
        if result.success:
            console.print(
                f"[green]✅ {result.source_name}: OK "
                f"({result.item_count} items, {result.shape.value})[/green]"
            )
        else:
            console.print(f"[red]❌ {result.source_name}: Failed - {result.error}[/red]")

    if any(not r.success for r in results):
        raise typer.Exit(1)
