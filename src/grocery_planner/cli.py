#!/usr/bin/env python3
"""CLI for grocery-planner: pull ingredient lists from recipe pages.

The CLI is responsible for:
- Argument parsing
- Progress display (Rich UI)
- Error presentation
- Calling the fetcher and extraction pipeline

The extraction logic itself lives in :mod:`grocery_planner.pipeline`.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from contextlib import nullcontext
from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import PlannerConfig
from .exceptions import ConfigurationError, FetchFailedError, GroceryPlannerError
from .grocery import (
    NO_INGREDIENTS_MESSAGE,
    GroceryItem,
    build_grocery_list,
    group_by_category,
    parse_manual_ingredients,
)
from .pipeline import run_pipeline
from .services import ServiceFactory

# Create global Rich console for styled output
console = Console()


def setup_logging(log_file: Path | None = None, debug: bool = False) -> None:
    """Set up logging configuration for the application.

    Logs go to a file only; console output is handled by Rich.

    Args:
        log_file: Path to the log file, or None to disable file logging
        debug: Log at DEBUG instead of INFO
    """
    handlers: list[logging.Handler] = (
        [logging.FileHandler(log_file, mode="w")] if log_file else [logging.NullHandler()]
    )
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )
    # Suppress overly verbose logs from libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Extract ingredient lists from recipe pages and build a grocery list",
        prog="grocery-planner",
    )
    parser.add_argument("urls", nargs="*", metavar="URL", help="Recipe page URL(s)")
    parser.add_argument(
        "--manual",
        type=Path,
        help="File of manually entered ingredients, separated by newlines or commas",
    )
    parser.add_argument(
        "--pantry",
        type=Path,
        help="File of pantry items, one per line (implies --grocery-list)",
    )
    parser.add_argument(
        "--grocery-list",
        action="store_true",
        help="Print a categorized grocery list instead of the raw ingredients",
    )
    parser.add_argument("--json", action="store_true", help="Print JSON instead of tables")
    parser.add_argument("--config", type=Path, help="Path to a TOML config file")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level")
    args = parser.parse_args(argv)
    if not args.urls and not args.manual:
        parser.error("give at least one URL or --manual FILE")
    return args


def read_lines(path: Path) -> list[str]:
    """Read a one-item-per-line text file, skipping blank lines."""
    lines = path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip()]


def display_error(title: str, message: str) -> None:
    """Display an error panel."""
    console.print()
    console.print(
        Panel(
            message,
            title=f"[bold red]{title}[/bold red]",
            border_style="red",
        )
    )
    console.print()


def display_ingredients(title: str, ingredients: list[str], source: str = "manual") -> None:
    """Display one page's (or the manual file's) ingredients."""
    if not ingredients:
        console.print(f"[yellow]![/yellow] {title}: {NO_INGREDIENTS_MESSAGE}")
        return

    table = Table(
        title=f"[bold]{title}[/bold]",
        caption=f"[dim]source: {source}[/dim]",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("#", style="dim", justify="right")
    table.add_column("Ingredient", style="green")
    for i, ingredient in enumerate(ingredients, 1):
        table.add_row(str(i), ingredient)
    console.print(table)


def display_grocery_list(items: list[GroceryItem]) -> None:
    """Display the grocery list grouped by section."""
    if not items:
        console.print("[green]✓[/green] Everything is already in the pantry")
        return

    table = Table(
        title="[bold green]Grocery List[/bold green]",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Section", style="cyan")
    table.add_column("Item", style="green")
    for category, grouped in group_by_category(items).items():
        for i, item in enumerate(grouped):
            table.add_row(category if i == 0 else "", item.name)
    console.print(table)


async def collect_ingredients(urls: list[str], factory: ServiceFactory, quiet: bool) -> list[str]:
    """Fetch each URL and run the pipeline, concatenating results in order.

    Raises:
        GroceryPlannerError: If a page cannot be fetched
    """
    fetcher = factory.create_fetcher()
    normalizer = factory.create_normalizer()
    ingredients: list[str] = []

    for url in urls:
        status = nullcontext() if quiet else console.status(f"Fetching {url}...", spinner="dots")
        with status:
            document = await fetcher.fetch(url)
            ctx = await run_pipeline(document, normalizer)
        logging.info(f"{url}: {len(ctx.ingredients)} ingredients via {ctx.source.value}")
        if not quiet:
            display_ingredients(url, ctx.ingredients, ctx.source.value)
        ingredients.extend(ctx.ingredients)

    return ingredients


async def main_async(argv: list[str] | None = None) -> int:
    """Main async function.

    1. Parse arguments and load configuration
    2. Fetch and extract each URL, then add manual entries
    3. Print ingredients or the grocery list

    Returns:
        Process exit code
    """
    args = parse_args(argv)

    try:
        config = PlannerConfig.load(args.config)
    except ConfigurationError as e:
        display_error("Configuration Error", str(e))
        return 2
    if args.debug:
        config.update(debug_mode=True)

    setup_logging(config.log_file, debug=config.debug_mode)
    logging.info(f"Processing {len(args.urls)} URL(s)")

    async with ServiceFactory(config=config) as factory:
        try:
            ingredients = await collect_ingredients(args.urls, factory, quiet=args.json)
        except FetchFailedError as e:
            display_error(
                "Fetch Failed",
                f"[bold red]{e.context.get('url')}[/bold red] returned {e.status}\n\n"
                f"[dim]{NO_INGREDIENTS_MESSAGE}[/dim]",
            )
            return 1
        except GroceryPlannerError as e:
            display_error("Error", f"{e}\n\n[dim]{NO_INGREDIENTS_MESSAGE}[/dim]")
            return 1

    manual = (
        parse_manual_ingredients(args.manual.read_text(encoding="utf-8")) if args.manual else []
    )
    ingredients.extend(manual)

    if args.pantry or args.grocery_list:
        pantry = read_lines(args.pantry) if args.pantry else []
        items = build_grocery_list(ingredients, pantry)
        if args.json:
            print(json.dumps({"groceryList": [item.model_dump() for item in items]}, indent=2))
        else:
            display_grocery_list(items)
    elif args.json:
        print(json.dumps({"ingredients": ingredients}, indent=2))
    elif args.manual:
        display_ingredients(str(args.manual), manual)

    return 0


def main() -> None:
    """Entry point for the grocery-planner command."""
    try:
        raise SystemExit(asyncio.run(main_async()))
    except KeyboardInterrupt:
        console.print()
        console.print("[yellow]Interrupted[/yellow]")
        raise SystemExit(130) from None
    except (OSError, UnicodeDecodeError) as e:
        display_error("Error", f"{e!s}")
        logging.exception("Unexpected error during processing")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
