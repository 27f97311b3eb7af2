"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .init import init_command
from .run import item_command, run_command
from .serve import serve_command
from .sources import sources_app

app = typer.Typer(
    name="feedbrief",
    help="feedbrief - News feed fetcher and extractive summarizer",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("serve")(serve_command)
app.command("run")(run_command)
app.command("item")(item_command)
app.add_typer(sources_app, name="sources", help="Manage feed sources")


if __name__ == "__main__":
    app()
