"""Iconografix CLI.

Usage:
    iconografix providers               # List icon sets and their sizes
    iconografix search QUERY            # Search the active icon set
    iconografix random                  # Random page from the active icon set
    iconografix add NAME [NAME ...]     # Select icons and send the first to the host

Global options:
    --assets PATH|URL   # Root of the icon asset tree
    --provider ID       # Active icon set (default from settings)
    --verbose           # Debug logging
"""

from __future__ import annotations

import argparse
import asyncio
from contextlib import contextmanager
from typing import Iterator, List, Optional

from rich.console import Console
from rich.table import Table

from .catalog import PaginationResult, ProviderRegistry
from .config import Settings
from .errors import IconografixError, NoActiveProviderError, UnknownProviderError
from .host import HostMessagingChannel, StreamTransport, add_selection_to_host
from .logging import configure_logging
from .selection import SelectionMode, SelectionStore

console = Console()
# stdout is reserved for host messages while running `add`
err_console = Console(stderr=True)


@contextmanager
def _open_registry(settings: Settings, provider: Optional[str]) -> Iterator[ProviderRegistry]:
    registry = ProviderRegistry.from_settings(settings)
    try:
        if provider and not registry.set_active(provider.upper()):
            raise UnknownProviderError(provider)
        yield registry
    finally:
        registry.close()


def _print_page(title: str, page: PaginationResult) -> None:
    if not page.items:
        console.print("[yellow]No icons found.[/yellow]")
        return

    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Display Name", style="bold")
    table.add_column("Provider")

    for item in page.items:
        table.add_row(item.name, item.display_name, item.provider_id)

    console.print(table)
    more = " (more available)" if page.has_next else ""
    console.print(f"\nShowing {page.offset + 1}-{page.offset + page.count} of {page.total}{more}")


# --- Commands ---

def cmd_providers(args: argparse.Namespace, settings: Settings) -> int:
    """List icon sets with their catalog sizes."""
    with _open_registry(settings, args.provider) as registry:
        asyncio.run(registry.initialize_all())
        stats = registry.get_stats()
        active_id = registry.active_id

    table = Table(title="Icon Providers")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Icons", justify="right")
    table.add_column("Active", justify="center")

    for entry in stats:
        active = "[green]Yes[/green]" if entry.id == active_id else ""
        count = str(entry.count) if entry.count else "[dim]0[/dim]"
        table.add_row(entry.id, entry.display_name, count, active)

    console.print(table)
    return 0


def cmd_search(args: argparse.Namespace, settings: Settings) -> int:
    """Search the active icon set."""
    limit = settings.clamp_limit(args.limit)
    with _open_registry(settings, args.provider) as registry:
        page = asyncio.run(registry.search(args.query, limit, args.offset))
        _print_page(f"{registry.active.display_name}: '{args.query}'", page)
    return 0


def cmd_random(args: argparse.Namespace, settings: Settings) -> int:
    """Show a random page of the active icon set."""
    limit = settings.clamp_limit(args.limit)
    with _open_registry(settings, args.provider) as registry:
        page = asyncio.run(registry.get_random(limit, args.offset))
        _print_page(f"{registry.active.display_name}: random", page)
    return 0


async def _add(names: List[str], registry: ProviderRegistry, channel: HostMessagingChannel,
               mode: SelectionMode) -> Optional[dict]:
    provider = registry.active
    if provider is None:
        raise NoActiveProviderError()
    await provider.initialize()
    by_name = {item.name: item for item in provider.catalog}

    selection = SelectionStore(mode)
    for name in names:
        match = by_name.get(name)
        if match is None:
            err_console.print(f"[yellow]Icon not found:[/yellow] {name}")
            continue
        selection.add(match)

    if not selection.count():
        return None
    return await add_selection_to_host(selection, registry, channel)


def cmd_add(args: argparse.Namespace, settings: Settings) -> int:
    """Select icons by name and send the first one to the host."""
    channel = HostMessagingChannel(
        StreamTransport(),
        args.origin or settings.host_origin,
        production=settings.production,
    )
    multi = len(args.names) > 1 and settings.enable_multi_select
    mode = SelectionMode.MULTI if multi else SelectionMode.SINGLE

    with _open_registry(settings, args.provider) as registry:
        envelope = asyncio.run(_add(args.names, registry, channel, mode))
    if envelope is None:
        err_console.print("[red]Nothing was sent to the host.[/red]")
        return 1

    meta = envelope["payload"]["metaData"]
    err_console.print(f"[green]Sent:[/green] {meta['name']} ({meta['fileName']})")
    if "batchTotal" in meta:
        err_console.print(f"[yellow]Only the first of {meta['batchTotal']} icons was added.[/yellow]")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iconografix",
        description="Iconografix: browse icon sets and add icons to an embedding host",
    )
    parser.add_argument("--assets", help="Icon asset root (directory or http(s) URL)")
    parser.add_argument("--provider", help="Active icon set id (e.g. FEATHER)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="subcmd")

    p_providers = sub.add_parser("providers", help="List icon sets")
    p_providers.set_defaults(func=cmd_providers)

    p_search = sub.add_parser("search", help="Search the active icon set")
    p_search.add_argument("query", nargs="?", default="", help="Substring to match (empty = all)")
    p_search.add_argument("--limit", type=int, help="Page size")
    p_search.add_argument("--offset", type=int, default=0, help="Page offset")
    p_search.set_defaults(func=cmd_search)

    p_random = sub.add_parser("random", help="Random icons from the active icon set")
    p_random.add_argument("--limit", type=int, help="Page size")
    p_random.add_argument("--offset", type=int, default=0, help="Page offset")
    p_random.set_defaults(func=cmd_random)

    p_add = sub.add_parser("add", help="Send an icon to the embedding host")
    p_add.add_argument("names", nargs="+", help="Icon names (file stems)")
    p_add.add_argument("--origin", help="Exact host origin (e.g. https://host.example)")
    p_add.set_defaults(func=cmd_add)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings.load()
    if args.assets:
        settings.assets_path = args.assets
    configure_logging(verbose=args.verbose or settings.debug_logging, console=err_console)

    if not args.subcmd:
        parser.print_help()
        raise SystemExit(0)

    try:
        raise SystemExit(args.func(args, settings))
    except NoActiveProviderError as e:
        err_console.print(f"[red]Error:[/red] {e}. Use --provider to pick one.")
        raise SystemExit(2)
    except IconografixError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(2)


if __name__ == "__main__":
    main()
