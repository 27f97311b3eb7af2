"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import Config, ConfigModel, default_config_path

console = Console()


def init_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file to create",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing configuration file",
    ),
) -> None:
    """Write a default configuration seeded with the default news sources."""
    config = Config(config_path or default_config_path())

    if config.exists and not force:
        console.print(f"[yellow]Config already exists: {config.config_path}[/yellow]")
        console.print("Use --force to overwrite it.")
        raise typer.Exit(1)

    default = ConfigModel()
    config.save(default)

    console.print(Panel.fit(
        f"[green]✅ Configuration written[/green]\n\n"
        f"File: {config.config_path}\n"
        f"Sources: {len(default.sources)}\n"
        f"Summary bounds: {default.summarizer.min_words}-{default.summarizer.max_words} words",
        style="bold blue",
    ))
    console.print("Next: [bold]feedbrief serve[/bold] or [bold]feedbrief run[/bold]")
