"""
Main CLI application using Typer.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.http_client import HttpBookingClient
from ..adapters.json_store import JsonBookingStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import SalonSlotsError, ServiceNotFoundError
from ..domain.models import WEEKDAY_NAMES
from ..domain.slot_generator import SlotGenerator
from ..services.availability import AvailabilityService, BookingStoreProtocol

app = typer.Typer(
    name="salonslots",
    help="Show bookable salon appointment slots",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]


def setup_logging(level: str) -> None:
    """Route log records through rich so they match the console output."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration, falling back to defaults when no file exists.

    An explicitly given file must exist.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if config_path.exists():
        return AppConfig.load_from_yaml(config_path)
    return AppConfig()


def _build_store(config: AppConfig) -> BookingStoreProtocol:
    """Pick the booking store configured for this run."""
    store = config.store
    if store.backend == "http":
        return HttpBookingClient(
            base_url=store.base_url,
            timeout=store.timeout_seconds,
            api_token=store.api_token
        )
    return JsonBookingStore(data_file=store.data_file)


def _today():
    return pendulum.today().date()


def _parse_day(date_option: Optional[str]):
    """Parse ``YYYY-MM-DD`` or return today. Past dates are rejected."""
    if not date_option:
        return _today()
    try:
        day = pendulum.from_format(date_option, "YYYY-MM-DD").date()
    except ValueError as e:
        console.print(f"[red]Ошибка разбора даты: {e}[/red]")
        raise typer.Exit(1)

    if day < _today():
        console.print(f"[red]Ошибка: дата {day.isoformat()} уже прошла.[/red]")
        raise typer.Exit(2)
    return day


@app.command()
def slots(
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    service: Annotated[Optional[str], typer.Option("--service", "-s", help="Service id. Defaults to defaults.service_id.")] = None,
    config_file: ConfigOption = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the start times as a JSON array.")] = False,
):
    """
    Show bookable start times for a service on a date.

    Examples:

        salonslots slots --date 2026-10-19 --service peeling

        salonslots slots -s botox --json
    """
    try:
        config = _load_config(config_file)
        setup_logging(config.log_level)

        day = _parse_day(date)
        service_id = service or config.defaults.service_id
        if not service_id:
            console.print("[red]Ошибка: укажите услугу через --service или defaults.service_id.[/red]")
            raise typer.Exit(2)

        availability = AvailabilityService(
            store=_build_store(config),
            slot_generator=SlotGenerator(step_minutes=config.defaults.slot_step_minutes)
        )

        found = asyncio.run(availability.find_slots(day=day, service_id=service_id))

        if as_json:
            typer.echo(json.dumps(found))
            return

        title = day.format("dddd, DD.MM.YYYY", locale=config.locale)

        # a closed day short-circuits before the service lookup
        if not found:
            console.print(f"[yellow]⚠ Нет свободного времени: {title}[/yellow]")
            return

        chosen = asyncio.run(availability.resolve_service(service_id))

        table = Table(
            title=f"{chosen.name} ({chosen.duration} мин) — {title}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Начало", style="bold green")
        table.add_column("Окончание", style="dim")

        for start in found:
            _, end = availability.appointment_window(start, chosen.duration)
            table.add_row(start, end)

        console.print()
        console.print(table)
        console.print()

    except ServiceNotFoundError as e:
        console.print(f"[bold red]Ошибка:[/bold red] {e}")
        raise typer.Exit(2)

    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        console.print(f"[bold red]Ошибка:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def services(config_file: ConfigOption = None):
    """
    List active services.
    """
    try:
        config = _load_config(config_file)
        setup_logging(config.log_level)

        active = asyncio.run(_build_store(config).get_active_services())

        if not active:
            console.print("[yellow]Нет активных услуг.[/yellow]")
            return

        table = Table(title="Услуги", show_header=True, header_style="bold cyan")
        table.add_column("ID", style="dim")
        table.add_column("Название", style="bold yellow")
        table.add_column("Длительность", justify="right")
        table.add_column("Цена, ₽", justify="right")

        for item in active:
            table.add_row(item.id, item.name, f"{item.duration} мин", f"{item.price:,}".replace(",", " "))

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        console.print(f"[bold red]Ошибка:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def schedules(config_file: ConfigOption = None):
    """
    Show the weekly working schedule.
    """
    try:
        config = _load_config(config_file)
        setup_logging(config.log_level)

        week = asyncio.run(_build_store(config).get_schedules())

        if not week:
            console.print("[yellow]Расписание не задано.[/yellow]")
            return

        table = Table(title="Расписание", show_header=True, header_style="bold cyan")
        table.add_column("День", style="bold yellow")
        table.add_column("Часы работы")
        table.add_column("Обед", style="dim")
        table.add_column("Активно", justify="center")

        for schedule in week:
            table.add_row(
                WEEKDAY_NAMES.get(schedule.day_of_week, "?"),
                schedule.format_hours(),
                schedule.format_lunch(),
                "✓" if schedule.is_active else "✗"
            )

        console.print()
        console.print(table)
        console.print()

    except (FileNotFoundError, ValueError, SalonSlotsError) as e:
        console.print(f"[bold red]Ошибка:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]salonslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
