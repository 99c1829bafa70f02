"""
Main CLI application using Typer.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.http_source import HttpHearingSource
from ..adapters.json_source import JsonHearingSource
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import ConfigError, HearingSourceError, InvalidRequestError
from ..domain.models import ConflictQuery, SearchRequest
from ..domain.slot_calculator import SlotCalculator
from ..domain.timefmt import format_date, format_time, parse_date, parse_time
from ..services.scheduling import HearingSchedulerService, HearingSourceProtocol

app = typer.Typer(
    name="hearingslots",
    help="Find free courtroom hearing slots and detect schedule conflicts",
    add_completion=False
)

console = Console()

EXIT_BACKEND_ERROR = 1
EXIT_INVALID_REQUEST = 2
EXIT_CONFLICT = 3
EXIT_CONFIG_ERROR = 4

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
HearingsOption = Annotated[Optional[Path], typer.Option("--hearings", help="JSON file with existing hearings (overrides config source)")]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the result as JSON")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")]


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration, falling back to defaults when no file exists at
    the default location. An explicitly given file must exist.

    Raises:
        ConfigError: If the file is missing, unreadable or fails validation
    """
    path = config_file
    if path is None:
        path = get_default_config_path()
        if not path.exists():
            return AppConfig()

    try:
        return AppConfig.load_from_yaml(path)
    except (FileNotFoundError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _build_source(config: AppConfig, hearings_file: Optional[Path]) -> HearingSourceProtocol:
    if hearings_file is not None:
        return JsonHearingSource(hearings_file)

    source = config.source
    if source.kind == "http":
        return HttpHearingSource(
            base_url=source.base_url,
            timeout_seconds=source.timeout_seconds,
            token=source.token
        )

    if source.path is None:
        raise InvalidRequestError("No hearing source configured. Use --hearings or set source.path.")
    return JsonHearingSource(source.path)


def _build_service(
    config_file: Optional[Path],
    hearings_file: Optional[Path],
    verbose: bool
) -> tuple[AppConfig, HearingSchedulerService]:
    config = _load_config(config_file)
    _setup_logging("DEBUG" if verbose else config.log_level)

    service = HearingSchedulerService(
        hearing_source=_build_source(config, hearings_file),
        slot_calculator=SlotCalculator(calendar=config.calendar.to_calendar()),
        limits=config.search.limits.to_limits()
    )
    return config, service


def _fail(message: str, code: int) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(code)


@app.command()
def slots(
    start: Annotated[Optional[str], typer.Option("--start", "-s", help="First day (DD/MM/YYYY or YYYY-MM-DD)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", "-e", help="Last day, inclusive")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Hearing duration in minutes")] = None,
    court: Annotated[Optional[str], typer.Option("--court", help="Court (vara) id; all courts when omitted")] = None,
    buffer_before: Annotated[Optional[int], typer.Option("--buffer-before", help="Minutes kept free before each hearing")] = None,
    buffer_after: Annotated[Optional[int], typer.Option("--buffer-after", help="Minutes kept free after each hearing")] = None,
    grid: Annotated[Optional[int], typer.Option("--grid", help="Round slot starts up to this many minutes (0 = off)")] = None,
    gap: Annotated[Optional[int], typer.Option("--gap", help="Minimum minutes between consecutive slots")] = None,
    hearings_file: HearingsOption = None,
    config_file: ConfigOption = None,
    as_json: JsonOption = False,
    verbose: VerboseOption = False,
):
    """
    Find free hearing slots.

    Examples:

        hearingslots slots --start 25/11/2024 --end 29/11/2024 --duration 60

        hearingslots slots -s 2024-11-25 -e 2024-11-25 -d 30 --court 2 --grid 0 --json
    """
    try:
        config, service = _build_service(config_file, hearings_file, verbose)
        defaults = config.search

        request = SearchRequest(
            date_start=parse_date(start, field="date_start") if start else None,
            date_end=parse_date(end, field="date_end") if end else None,
            duration_minutes=duration,
            court_id=court,
            buffer_before_minutes=defaults.buffer_before_minutes if buffer_before is None else buffer_before,
            buffer_after_minutes=defaults.buffer_after_minutes if buffer_after is None else buffer_after,
            grid_minutes=defaults.grid_minutes if grid is None else grid,
            min_gap_minutes=defaults.min_gap_minutes if gap is None else gap,
        )

        found = service.find_free_slots(request)

    except ConfigError as e:
        _fail(str(e), EXIT_CONFIG_ERROR)
    except InvalidRequestError as e:
        _fail(str(e), EXIT_INVALID_REQUEST)
    except HearingSourceError as e:
        _fail(str(e), EXIT_BACKEND_ERROR)

    if as_json:
        typer.echo(json.dumps({
            "success": True,
            "total": len(found),
            "data": [slot.to_dict() for slot in found],
        }, ensure_ascii=False, indent=2))
        return

    console.print()
    if not found:
        console.print(
            "[yellow]⚠ No free slots found.[/yellow]\n"
            "Try a longer date range, a shorter duration or smaller buffers."
        )
    else:
        console.print(f"[bold green]✓ {len(found)} free slot(s) found:[/bold green]\n")
        for slot in found:
            console.print(f"  {slot.format_display()}")
    console.print()


@app.command()
def check(
    date: Annotated[str, typer.Option("--date", help="Hearing date (DD/MM/YYYY or YYYY-MM-DD)")],
    time: Annotated[str, typer.Option("--time", help="Start time (HH:MM)")],
    duration: Annotated[int, typer.Option("--duration", "-d", help="Hearing duration in minutes")],
    court: Annotated[str, typer.Option("--court", help="Court (vara) id")],
    exclude: Annotated[Optional[str], typer.Option("--exclude", help="Hearing id to ignore (when re-checking an update)")] = None,
    hearings_file: HearingsOption = None,
    config_file: ConfigOption = None,
    as_json: JsonOption = False,
    verbose: VerboseOption = False,
):
    """
    Check whether a proposed hearing collides with existing ones.

    Exits with code 3 when conflicts exist.
    """
    try:
        _, service = _build_service(config_file, hearings_file, verbose)

        query = ConflictQuery(
            date=parse_date(date, field="date"),
            start=parse_time(time, field="time"),
            duration_minutes=duration,
            court_id=court,
            exclude_hearing_id=exclude,
        )
        conflicts = service.check_conflicts(query)

    except ConfigError as e:
        _fail(str(e), EXIT_CONFIG_ERROR)
    except InvalidRequestError as e:
        _fail(str(e), EXIT_INVALID_REQUEST)
    except HearingSourceError as e:
        _fail(str(e), EXIT_BACKEND_ERROR)

    if as_json:
        typer.echo(json.dumps({
            "has_conflict": bool(conflicts),
            "conflicts": [hearing.to_conflict_dict() for hearing in conflicts],
        }, ensure_ascii=False, indent=2))
    elif not conflicts:
        console.print("[green]✓ No conflicts.[/green]")
    else:
        console.print(f"[bold red]✗ {len(conflicts)} conflicting hearing(s):[/bold red]")
        for hearing in conflicts:
            console.print(f"  {hearing.label()} ({hearing.format_times()})")

    if conflicts:
        raise typer.Exit(EXIT_CONFLICT)


@app.command()
def hearings(
    start: Annotated[str, typer.Option("--start", "-s", help="First day (DD/MM/YYYY or YYYY-MM-DD)")],
    end: Annotated[str, typer.Option("--end", "-e", help="Last day, inclusive")],
    court: Annotated[Optional[str], typer.Option("--court", help="Court (vara) id")] = None,
    hearings_file: HearingsOption = None,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    List existing hearings in a date range.
    """
    try:
        config = _load_config(config_file)
        _setup_logging("DEBUG" if verbose else config.log_level)
        source = _build_source(config, hearings_file)

        date_start = parse_date(start, field="date_start")
        date_end = parse_date(end, field="date_end")
        if date_start > date_end:
            raise InvalidRequestError("date_start must be on or before date_end")

        found = source.list_hearings(date_start, date_end, court or None)

    except ConfigError as e:
        _fail(str(e), EXIT_CONFIG_ERROR)
    except InvalidRequestError as e:
        _fail(str(e), EXIT_INVALID_REQUEST)
    except HearingSourceError as e:
        _fail(str(e), EXIT_BACKEND_ERROR)

    if not found:
        console.print("[yellow]No hearings in this period.[/yellow]")
        return

    table = Table(
        title="Hearings",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("ID", style="bold yellow")
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Court")
    table.add_column("Process", style="dim")

    for hearing in sorted(found, key=lambda h: (h.date, h.start)):
        table.add_row(
            str(hearing.id),
            format_date(hearing.date),
            f"{format_time(hearing.start, with_seconds=False)} - {format_time(hearing.end, with_seconds=False)}",
            hearing.court_name or str(hearing.court_id),
            hearing.process_number
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]hearingslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
