"""Serve command implementation."""

import logging
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from ..api import create_app
from .run import load_cli_config

logger = logging.getLogger(__name__)


def serve_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file",
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default from config)"),
) -> None:
    """Run the HTTP service."""
    config = load_cli_config(config_path)
    host = host or config.server.host
    port = port or config.server.port

    app = create_app(config)

    base_url = f"http://{host}:{port}"
    logger.info("feedbrief server running at %s", base_url)
    logger.info("All processed feeds: %s/feeds/all", base_url)
    logger.info("Single item by guid: %s/feeds/item/{guid}", base_url)

    uvicorn.run(app, host=host, port=port, log_config=None)
