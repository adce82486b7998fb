import argparse
import importlib.metadata
import logging
from contextlib import nullcontext
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import CONFIG_FILE, load_settings, save_settings
from .formatters import format_package_details, format_size
from .graph import EmptyGraphError, PackageGraph, PackageNotFoundError
from .localdb import LocalDBError, load_local_db
from .models import SortMode
from .viewmodel import derive

LOGGER = logging.getLogger(__name__)

PAGER_ENABLE = 40  # how many outputs before using PAGER


def translate_textual_to_rich_markup(markup_string: str) -> str:
    """Translates Textual's style variables to Rich-compatible color names."""
    style_map = {
        "$text-muted": "grey50",
        "$text-subtle": "grey50",
        "$text": "default",
        "$link": "blue",
        "$primary": "cyan",
        "$secondary": "sky_blue1",
        "$accent": "medium_purple",
        "$warning": "yellow",
        "$error": "red",
        "$success": "green",
        "$panel": "grey70",
    }
    for textual_style, rich_style in style_map.items():
        markup_string = markup_string.replace(textual_style, rich_style)
    return markup_string


def build_parser() -> argparse.ArgumentParser:
    appname = "pacdex"
    parser = argparse.ArgumentParser(
        description="pacdex - browse installed packages, their dependants and dependencies."
    )
    parser.add_argument(
        "package_name",
        nargs="?",
        help="Display information for a specific installed package and exit.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"{appname} {_version(appname)}",
    )
    parser.add_argument(
        "--dbpath",
        metavar="PATH",
        help="Directory of the pacman local database (default: /var/lib/pacman/local).",
    )
    parser.add_argument(
        "--sort",
        choices=[mode.value for mode in SortMode],
        help="Initial sort order: by name ascending or installed size descending.",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Start with all packages in the main view instead of explicit ones only.",
    )
    parser.add_argument(
        "--no-optional",
        action="store_true",
        help="Ignore optional dependencies when linking packages.",
    )
    parser.add_argument(
        "--focus", metavar="PACKAGE", help="Start the browser focused on PACKAGE."
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the main package list and exit.",
    )
    parser.add_argument(
        "-l",
        "--limit",
        type=int,
        default=-1,
        help="Limit --list output to integer limit. Defaults to '-1', no limit.",
    )
    parser.add_argument(
        "--write-config",
        action="store_true",
        help=f"Write the effective settings to {CONFIG_FILE} and exit.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log progress to stderr."
    )
    return parser


def _version(appname: str) -> str:
    try:
        return importlib.metadata.version(appname)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def print_package_list(
    console: Console, graph: PackageGraph, sort_mode: SortMode, explicit_only: bool, limit: int
) -> None:
    packages = list(derive(graph, "", sort_mode, explicit_only).main)
    if limit >= 0:
        packages = packages[:limit]

    table = Table(show_header=True, pad_edge=True)
    table.add_column("Name", style="bold")
    table.add_column("Version", style="dim")
    table.add_column("Size", justify="right")
    table.add_column("Reason", style="cyan")
    table.add_column("Required by", justify="right")
    for pkg in packages:
        table.add_row(
            pkg.name,
            pkg.version,
            format_size(pkg.installed_size),
            pkg.reason.value,
            str(len(graph.dependent_names_of(pkg.name))),
        )

    output_func = console.pager if len(packages) > PAGER_ENABLE else nullcontext
    with output_func():
        console.print(
            f"[b]{'Explicitly installed' if explicit_only else 'Installed'}[/b]: {len(packages)} packages"
        )
        console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        format="%(message)s",
    )

    settings = load_settings()
    if args.dbpath:
        settings.local_db_path = args.dbpath
    if args.sort:
        settings.sort_mode = SortMode(args.sort)
    if args.all:
        settings.explicit_only = False
    if args.no_optional:
        settings.include_optional = False

    if args.write_config:
        path = save_settings(settings)
        console.print(f"[bold green]Settings written to {path}[/bold green]")
        return 0

    # --- Package graph ---
    try:
        records = load_local_db(settings.local_db_path)
        graph = PackageGraph.build(records, include_optional=settings.include_optional)
    except LocalDBError as e:
        console.print(f"[bold red]Could not read installed packages: {e}[/bold red]")
        return 1
    except EmptyGraphError:
        console.print(
            f"[bold red]No installed packages found in {settings.local_db_path}[/bold red]"
        )
        return 1

    if args.package_name:
        if args.package_name not in graph:
            console.print(f"Package '{args.package_name}' not found.")
            return 1
        formatted_output = format_package_details(graph.get(args.package_name), graph)
        console.print(translate_textual_to_rich_markup(formatted_output))
        return 0

    if args.list:
        print_package_list(
            console, graph, settings.sort_mode, settings.explicit_only, args.limit
        )
        return 0

    from .main import pacdex
    from .navigation import NavigationState

    state = NavigationState(
        graph,
        sort_mode=settings.sort_mode,
        filter_explicit_only=settings.explicit_only,
        page_size=settings.page_size,
    )
    if args.focus:
        try:
            state.focus_package(args.focus)
        except PackageNotFoundError:
            parser.error(f"Package '{args.focus}' is not installed.")

    app = pacdex(graph=graph, settings=settings, state=state)
    app.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
