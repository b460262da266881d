from datetime import datetime
from typing import Optional

import typer
from structlog import get_logger

from sprintcal.core.calendar import iso_year, week_number
from sprintcal.core.days import sprint_day_labels, sprint_days
from sprintcal.core.frames import sprints_to_frame
from sprintcal.core.history import sprint_history
from sprintcal.core.mapping import sprint_from_week
from sprintcal.core.resolver import current_sprint, format_range, previous_sprint, sprint_date_range
from sprintcal.exceptions import InvalidSprintException, SettingsException
from sprintcal.logging import initialize_logging
from sprintcal.settings import load_settings, validate_locale
from .common import OutputFormat, get_context, print_results

logger = get_logger(__name__)

app = typer.Typer()

DATE_FORMATS = ["%Y-%m-%d"]


@app.callback()
def main():
    try:
        settings = load_settings()
    except SettingsException as e:
        typer.echo(f"Invalid settings: {e}", err=True)
        raise typer.Exit(3)
    initialize_logging(settings)


def _reference_date(date_: Optional[datetime]):
    return date_.date() if date_ else None


def _locale_option(value: Optional[str]):
    if value is None:
        return value
    try:
        return validate_locale(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _invalid_sprint(sprint: int, e: InvalidSprintException):
    logger.error("invalid sprint number", sprint=sprint)
    typer.echo(str(e), err=True)
    return typer.Exit(2)


@app.command("week")
def week_(
    date_: Optional[datetime] = typer.Option(None, "--date", formats=DATE_FORMATS),
    format_: OutputFormat = typer.Option(OutputFormat.tabulate, "--format"),
):
    g = get_context()
    reference_date = g.resolve_date(_reference_date(date_))
    week = week_number(reference_date)
    result = {
        "date": reference_date.isoformat(),
        "iso_year": iso_year(reference_date),
        "week": week,
        "sprint": sprint_from_week(week),
    }
    print_results([result], format_=format_)


@app.command("current")
def current_(
    date_: Optional[datetime] = typer.Option(None, "--date", formats=DATE_FORMATS),
    format_: OutputFormat = typer.Option(OutputFormat.tabulate, "--format"),
    fields: Optional[str] = None,
):
    g = get_context()
    print_results(current_sprint(g, _reference_date(date_)), format_=format_, fields=fields)


@app.command("previous")
def previous_(
    date_: Optional[datetime] = typer.Option(None, "--date", formats=DATE_FORMATS),
    format_: OutputFormat = typer.Option(OutputFormat.tabulate, "--format"),
    fields: Optional[str] = None,
):
    g = get_context()
    print_results(previous_sprint(g, _reference_date(date_)), format_=format_, fields=fields)


@app.command("history")
def history_(
    count: Optional[int] = typer.Option(None, "--count", "-n"),
    date_: Optional[datetime] = typer.Option(None, "--date", formats=DATE_FORMATS),
    format_: OutputFormat = typer.Option(OutputFormat.tabulate, "--format"),
):
    g = get_context()
    sprints = sprint_history(g, count, _reference_date(date_))
    print_results(sprints_to_frame(sprints), format_=format_)


@app.command("dates")
def dates_(
    sprint: int,
    format_: OutputFormat = typer.Option(OutputFormat.tabulate, "--format"),
):
    g = get_context()
    try:
        date_range = sprint_date_range(g, sprint)
    except InvalidSprintException as e:
        raise _invalid_sprint(sprint, e) from e
    print_results(date_range, format_=format_)


@app.command("days")
def days_(
    sprint: int,
    year: Optional[int] = typer.Option(None, "--year"),
    format_: OutputFormat = typer.Option(OutputFormat.tabulate, "--format"),
):
    g = get_context()
    year = year or iso_year(g.today())
    try:
        days = sprint_days(sprint, year)
    except InvalidSprintException as e:
        raise _invalid_sprint(sprint, e) from e
    labels = sprint_day_labels(g, sprint, year)
    print_results([{"date": d.isoformat(), "label": label} for d, label in zip(days, labels)], format_=format_)


@app.command("format-range")
def format_range_(
    start: datetime = typer.Argument(..., formats=DATE_FORMATS),
    end: datetime = typer.Argument(..., formats=DATE_FORMATS),
    locale: Optional[str] = typer.Option(None, "--locale", callback=_locale_option),
):
    g = get_context()
    typer.echo(format_range(start.date(), end.date(), locale or g.locale))
