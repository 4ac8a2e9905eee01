"""
tempstore CLI - start a disposable store from the shell.

Usage:
  tempstore redis                 # Start Redis, print its URL, wait for Ctrl-C
  tempstore postgres --quiet      # Print only the URL (for scripts)
  tempstore influxdb --log-level DEBUG

The container is removed when the command receives SIGINT or SIGTERM.
"""

import argparse
import asyncio
import signal
import sys
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from .config import Settings, settings
from .config.logging import LoggingConfig
from .models.errors import TempStoreException
from .stores import STORES
from .utils.logging import setup_logging

console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tempstore",
        description="Start a disposable backing service in a Docker container.",
    )
    parser.add_argument("store", choices=sorted(STORES), help="Store to start")
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Print only the store URL on stdout",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    return parser


def _render_store(name: str, store) -> Panel:
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("Store", name)
    table.add_row("URL", store.url())
    table.add_row("Container", store.container_id[:12])
    return Panel(table, title="[bold green]Store ready[/bold green]", expand=False)


def _report_error(error: TempStoreException) -> None:
    console.print(f"[red]Error ({error.error_type.value}):[/red] {error.message}")
    if error.container_id:
        console.print(f"[dim]Container: {error.container_id[:12]}[/dim]")


async def _wait_for_signal() -> None:
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)
    await stop.wait()


async def run(name: str, config: Settings, quiet: bool = False) -> int:
    """Start ``name``, report its URL and keep it alive until signalled."""
    store_cls = STORES[name]
    try:
        if quiet:
            store = await store_cls.start(config)
        else:
            with console.status(f"Starting {name}..."):
                store = await store_cls.start(config)
    except TempStoreException as e:
        _report_error(e)
        return 1

    if quiet:
        print(store.url(), flush=True)
    else:
        console.print(_render_store(name, store))
        console.print("Press Ctrl-C to stop and remove the container.")

    await _wait_for_signal()
    try:
        await store.shutdown()
    except TempStoreException as e:
        _report_error(e)
        return 1

    if not quiet:
        console.print(f"[dim]Removed {name} container[/dim]")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    log_config = settings.logging
    if args.log_level:
        log_config = LoggingConfig(
            log_level=args.log_level, log_format=log_config.log_format
        )
    setup_logging(log_config)

    return asyncio.run(run(args.store, settings, quiet=args.quiet))


if __name__ == "__main__":
    sys.exit(main())
