"""
Main CLI application using Typer.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.memory_repository import InMemoryAvailabilityRepository
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import BookingSlotsError
from ..domain.models import OwnerAvailability, WeekdayAvailability
from ..services.availability_service import AvailabilityService
from ..services.schemas import AvailabilityUpdate

app = typer.Typer(
    name="bookingslots",
    help="Compute bookable meeting slots from weekly availability templates",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the raw response as JSON.")]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Booking slot engine command line.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load(config_file: Optional[Path]):
    config_path = config_file or get_default_config_path()
    config = AppConfig.load_from_yaml(config_path)
    repository = InMemoryAvailabilityRepository.from_file(
        config.data_file,
        timezone=config.timezone,
        default_time_gap=config.defaults.time_gap_minutes,
    )
    service = AvailabilityService(
        repository=repository,
        timezone=config.timezone,
        lookahead_weeks=config.defaults.lookahead_weeks,
        default_start=config.defaults.get_start_time(),
        default_end=config.defaults.get_end_time(),
    )
    return config, repository, service


def _fail(error: Exception):
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(1)


def _print_public_availability(days: List[WeekdayAvailability]):
    if not days:
        console.print("[yellow]⚠ No availability for this event.[/yellow]")
        return

    table = Table(
        title="Available slots",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Weekday", style="bold yellow")
    table.add_column("Date")
    table.add_column("Slots", style="dim")

    for day in days:
        if not day.is_available:
            table.add_row(day.day.value, "-", "[red]unavailable[/red]")
            continue
        if not day.dates:
            table.add_row(day.day.value, "-", "fully booked")
            continue
        for date_slots in day.dates:
            entry = date_slots.to_dict()
            table.add_row(day.day.value, entry["dateStr"], ", ".join(entry["slots"]))

    console.print()
    console.print(table)
    console.print()


def _print_owner_availability(availability: OwnerAvailability):
    table = Table(
        title=f"Weekly availability (gap {availability.time_gap} min)",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Weekday", style="bold yellow")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Available")

    for row in availability.days:
        entry = row.to_dict()
        table.add_row(
            entry["day"],
            entry["startTime"],
            entry["endTime"],
            "[green]yes[/green]" if row.is_available else "[red]no[/red]",
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def slots(
    event_id: Annotated[str, typer.Argument(help="Id of a public event.")],
    config_file: ConfigOption = None,
    as_json: JsonOption = False,
    now: Annotated[Optional[str], typer.Option("--now", help="Compute as of this ISO-8601 moment instead of the current time.")] = None,
):
    """
    Show the bookable slots of a public event.

    Examples:

        bookingslots slots intro-call
        bookingslots slots intro-call --json --now 2024-11-25T08:00:00
    """
    try:
        config, _, service = _load(config_file)
        moment = pendulum.parse(now, tz=config.timezone) if now else None
        days = asyncio.run(service.get_public_availability(event_id, now=moment))
    except (OSError, ValueError, BookingSlotsError) as e:
        _fail(e)

    if as_json:
        console.print_json(json.dumps([day.to_dict() for day in days]))
    else:
        _print_public_availability(days)


@app.command()
def availability(
    user_id: Annotated[str, typer.Argument(help="Owner of the availability template.")],
    config_file: ConfigOption = None,
    as_json: JsonOption = False,
):
    """
    Show a user's weekly availability template.
    """
    try:
        _, _, service = _load(config_file)
        result = asyncio.run(service.get_user_availability(user_id))
    except (OSError, ValueError, BookingSlotsError) as e:
        _fail(e)

    if as_json:
        console.print_json(json.dumps(result.to_dict()))
    else:
        _print_owner_availability(result)


@app.command()
def update_availability(
    user_id: Annotated[str, typer.Argument(help="Owner of the availability template.")],
    payload_file: Annotated[Path, typer.Argument(help="YAML/JSON file with timeGap and days.")],
    config_file: ConfigOption = None,
):
    """
    Replace a user's weekly availability with the contents of a payload file.
    """
    try:
        config, repository, service = _load(config_file)
        with open(payload_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        payload = AvailabilityUpdate.from_payload(data, config.defaults.time_gap_minutes)
        template = asyncio.run(service.update_availability(user_id, payload))
        repository.save(config.data_file)
    except (OSError, ValueError, yaml.YAMLError, BookingSlotsError) as e:
        _fail(e)

    console.print(
        f"[green]✓ Availability updated:[/green] {len(template.days)} day(s), "
        f"gap {template.time_gap} min"
    )


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]bookingslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
