"""Run and item command implementations."""

import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import Config, ConfigModel
from ..exceptions import ConfigError, ItemNotFoundError, PipelineError
from ..logging import setup_logging
from ..pipeline import BatchPipeline, ProcessedItem

console = Console()


def load_cli_config(config_path: Optional[Path]) -> ConfigModel:
    """Load configuration for a CLI command, exiting on invalid files."""
    try:
        config = Config(config_path).config
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    setup_logging(config.log_level)
    return config


def print_items_table(items: List[ProcessedItem]) -> None:
    """Print processed items as a table."""
    table = Table(title="Summarized Items")
    table.add_column("Source", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Published", style="yellow")
    table.add_column("Words", style="green", justify="right")

    for item in items:
        table.add_row(
            item.source_name,
            item.title,
            item.pub_date,
            str(len(item.summarized_content.split())),
        )

    console.print(table)


def run_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the digest as JSON to this file",
    ),
) -> None:
    """Fetch every source once and summarize all items."""
    config = load_cli_config(config_path)
    pipeline = BatchPipeline(config)

    try:
        digest = asyncio.run(pipeline.process_all())
    except KeyboardInterrupt:
        console.print("\n[yellow]Pipeline interrupted by user[/yellow]")
        raise typer.Exit(1)
    except PipelineError as e:
        console.print(f"[red]Pipeline failed: {e}[/red]")
        raise typer.Exit(1)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(digest.model_dump(by_alias=True), f, indent=2, ensure_ascii=False)
        console.print(f"[green]✅ Wrote {len(digest.items)} items to {output}[/green]")
        return

    print_items_table(digest.items)
    console.print(f"[dim]Last updated: {digest.last_updated}[/dim]")


def item_command(
    guid: str = typer.Argument(..., help="Identifier of the item to summarize"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the item as JSON"),
) -> None:
    """Summarize the single item carrying GUID."""
    config = load_cli_config(config_path)
    pipeline = BatchPipeline(config)

    try:
        item = asyncio.run(pipeline.process_one(guid))
    except ItemNotFoundError:
        console.print(f"[red]Item not found: {guid}[/red]")
        raise typer.Exit(1)
    except PipelineError as e:
        console.print(f"[red]Failed to fetch item: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(item.model_dump(by_alias=True), ensure_ascii=False))
        return

    console.print(Panel(
        item.summarized_content,
        title=item.title,
        subtitle=f"{item.source_name} • {item.pub_date}",
    ))
