"""Sleng CLI - slang dictionary."""

import json
import logging
import sys

import click

from . import workflows
from .api import create_app, start_server
from .config import load_config
from .session import run_session

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--data-file", type=click.Path(dir_okay=False), default=None,
              help="Dictionary file (overrides DATA_FILE in sleng.conf)")
@click.pass_context
def main(ctx, debug: bool, data_file: str | None):
    """Sleng - slang dictionary with an HTTP API and an interactive menu."""
    config = load_config()
    if data_file:
        config.data_file = data_file

    logging.basicConfig(
        format=LOG_FORMAT,
        level=logging.DEBUG if debug else config.log_level,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["store"] = workflows.get_store(config)


def _address(config, host: str | None, port: int | None) -> tuple[str, int]:
    return host or config.api_host, port or config.api_port


@main.command()
@click.option("--host", default=None, help="API host (default from config)")
@click.option("--port", type=int, default=None, help="API port (default from config)")
@click.pass_context
def run(ctx, host: str | None, port: int | None):
    """Start the API in the background and open the interactive menu."""
    config = ctx.obj["config"]
    store = ctx.obj["store"]
    host, port = _address(config, host, port)

    try:
        server = start_server(create_app(store), host, port, background=True)
    except OSError as e:
        click.echo(f"Error: could not start API on {host}:{port}: {e}", err=True)
        sys.exit(1)

    click.echo(f"API running on http://{host}:{port}")
    try:
        run_session(store)
    finally:
        server.shutdown()


@main.command()
@click.option("--host", default=None, help="API host (default from config)")
@click.option("--port", type=int, default=None, help="API port (default from config)")
@click.pass_context
def serve(ctx, host: str | None, port: int | None):
    """Run the HTTP API only."""
    config = ctx.obj["config"]
    host, port = _address(config, host, port)

    click.echo(f"Serving on http://{host}:{port}")
    click.echo("Press Ctrl+C to stop")
    try:
        start_server(create_app(ctx.obj["store"]), host, port)
    except OSError as e:
        click.echo(f"Error: could not start API on {host}:{port}: {e}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("\nServer stopped.")


@main.command()
@click.pass_context
def menu(ctx):
    """Open the interactive menu without the API."""
    run_session(ctx.obj["store"])


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def entries(ctx, as_json: bool):
    """List dictionary entries."""
    items = workflows.list_entries(ctx.obj["store"])

    if as_json:
        click.echo(json.dumps([e.to_dict() for e in items], indent=2, ensure_ascii=False))
        return

    if not items:
        click.echo("The dictionary is empty.")
        return

    for i, entry in enumerate(items, start=1):
        click.echo(f"{i:3}. {entry.word} - {entry.meaning}")


if __name__ == "__main__":
    main()
