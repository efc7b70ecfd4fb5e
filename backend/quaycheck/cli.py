"""
Command-line interface for quaycheck
"""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click
import uvicorn
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from quaycheck import __version__
from quaycheck.api.services import AppServices, PortQueryService
from quaycheck.core.config import get_settings
from quaycheck.core.exceptions import ConfigurationError, UpstreamError, ValidationError
from quaycheck.docker.models import ContainerState

console = Console()
error_console = Console(stderr=True)

T = TypeVar("T")

EXIT_IN_USE = 1
EXIT_INVALID = 2
EXIT_UPSTREAM = 3

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def run_query(query: Callable[[PortQueryService], Awaitable[T]]) -> T:
    """
    Run one query against a short-lived Docker client

    Exits the process with a distinct code on invalid input, bad configuration
    or upstream failure.
    """

    async def _run() -> T:
        services = AppServices.create(get_settings())
        try:
            return await query(services.query_service)
        finally:
            await services.cleanup()

    try:
        return asyncio.run(_run())
    except (ConfigurationError, ValidationError) as e:
        error_console.print(f"[red]Error:[/red] {e.message}")
        sys.exit(EXIT_INVALID)
    except UpstreamError as e:
        classified = e.classified
        error_console.print(
            f"[red]Error:[/red] {classified.message} [dim]({classified.code})[/dim]"
        )
        if classified.recovery_hint:
            error_console.print(f"[yellow]Hint:[/yellow] {classified.recovery_hint}")
        sys.exit(EXIT_UPSTREAM)


@click.group()
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """quaycheck - which host ports do Docker containers occupy?"""
    level = logging.DEBUG if debug else getattr(logging, get_settings().log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


@main.command()
@click.option("--host", default=None, help="API server host (default: from settings)")
@click.option("--port", default=None, type=int, help="API server port (default: from settings)")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the API server and web UI"""
    settings = get_settings()

    actual_host = host or settings.api_host
    actual_port = port or settings.api_port

    console.print(
        Panel.fit(
            "[bold cyan]quaycheck[/bold cyan]\n"
            f"Server starting on http://{actual_host}:{actual_port}\n"
            f"Docker: {settings.docker_host}",
            border_style="cyan",
        )
    )

    uvicorn.run(
        "quaycheck.api.app:create_app",
        factory=True,
        host=actual_host,
        port=actual_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@main.command()
def containers() -> None:
    """List containers and their port mappings"""
    result = run_query(lambda service: service.list_containers())

    if not result:
        console.print("[yellow]No containers found[/yellow]")
        return

    table = Table(title="Containers")
    table.add_column("Name", style="cyan")
    table.add_column("Image", style="blue")
    table.add_column("State", style="magenta")
    table.add_column("Ports", style="yellow")

    for container in result:
        ports = []
        for mapping in container.ports:
            if mapping.published:
                ports.append(f"{mapping.public_port}:{mapping.private_port}/{mapping.protocol}")
            else:
                ports.append(f"[dim]{mapping.private_port}/{mapping.protocol}[/dim]")

        state = container.state
        state_text = state.value if isinstance(state, ContainerState) else state
        if container.is_running:
            state_text = f"[green]{state_text}[/green]"

        table.add_row(container.display_name, container.image, state_text, " ".join(ports) or "-")

    console.print(table)


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("port")
def check(port: str) -> None:
    """Check whether PORT is free (exit 1 if in use)

    Negative values such as -1 are read as PORT, not as options.
    """

    result = run_query(lambda service: service.check(port))

    if result.available:
        console.print(f"[green]● {result.port}[/green] {result.message}")
    else:
        console.print(f"[red]○ {result.port}[/red] {result.message}")
        sys.exit(EXIT_IN_USE)


@main.command()
@click.option("--start", default=None, help="Lowest port to consider (default 8000, min 1024)")
def suggest(start: str | None) -> None:
    """Suggest the next free port"""
    result = run_query(lambda service: service.suggest(start))

    if result.found:
        console.print(f"[green]{result.port}[/green]")
    else:
        error_console.print(f"[yellow]{result.message}[/yellow]")
        sys.exit(EXIT_IN_USE)


if __name__ == "__main__":
    main()
