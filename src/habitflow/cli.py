"""Command line interface for HabitFlow."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Optional

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .logging_config import setup_logging
from .models.calendar_day import CalendarDay
from .models.grid import month_grid
from .models.habit import Habit
from .services import presentation
from .services.demo import seed_demo_data
from .services.export_csv import export_completions_csv, export_habits_csv

HISTORY_WINDOW_DAYS = 30


def _parse_day(value: Optional[str]) -> Optional[CalendarDay]:
    if value is None:
        return None
    try:
        return CalendarDay.parse(value)
    except ValueError as exc:
        raise click.BadParameter(f"{value!r} is not a YYYY-MM-DD date") from exc


def _find_habit(app: AppContext, ref: str) -> Habit:
    habits = app.habit_repo.list_all(include_archived=True)
    try:
        wanted = uuid.UUID(ref)
    except ValueError:
        wanted = None
    for habit in habits:
        if habit.id == wanted or habit.title.casefold() == ref.strip().casefold():
            return habit
    raise click.ClickException(f"No habit named {ref!r}")


@click.group()
@click.option("--today", "today_text", default=None, help="Reference day as YYYY-MM-DD.")
@click.option("--seed", type=int, default=None, help="Demo data seed (defaults to HABITFLOW_DEMO_SEED).")
@click.option(
    "--demo/--no-demo",
    default=True,
    show_default=True,
    help="Seed demo habits when the store is empty.",
)
@click.pass_context
def cli(ctx: click.Context, today_text: Optional[str], seed: Optional[int], demo: bool) -> None:
    """Track habits and inspect completion statistics."""

    config = BaseConfig()
    setup_logging(config)
    fixed_today = _parse_day(today_text)
    app = create_app_context(config, today=(lambda: fixed_today) if fixed_today else None)
    if demo and not app.habit_repo.list_all(include_archived=True):
        seed_demo_data(
            app.habit_service,
            today=app.today(),
            days=config.DEMO_HISTORY_DAYS,
            seed=config.DEMO_SEED if seed is None else seed,
            tz=config.TIMEZONE,
        )
    ctx.obj = app


@cli.command("today")
@click.pass_obj
def today_cmd(app: AppContext) -> None:
    """Show today's habits and overall progress."""

    today = app.today()
    click.echo(presentation.format_day(today, "full"))
    for habit in app.habit_repo.list_active():
        mark = "x" if app.completion_store.is_completed(habit.id, today) else " "
        reminder = presentation.format_reminder(habit.reminder_hour, habit.reminder_minute)
        suffix = f"  (reminder {reminder})" if reminder else ""
        click.echo(f"  [{mark}] {habit.title}{suffix}")
    progress = app.aggregator.daily_progress(today)
    click.echo(
        f"Done {progress.completed}/{progress.total} ({presentation.format_percent(progress.ratio)})"
    )


@cli.command("toggle")
@click.argument("habit_ref")
@click.option("--day", "day_text", default=None, help="Day to toggle (defaults to today).")
@click.pass_obj
def toggle_cmd(app: AppContext, habit_ref: str, day_text: Optional[str]) -> None:
    """Mark a habit done, or undo it, for a day."""

    habit = _find_habit(app, habit_ref)
    day = _parse_day(day_text) or app.today()
    record = app.habit_service.toggle(habit.id, day)
    state = "completed" if record.is_completed else "not completed"
    click.echo(f"{habit.title}: {state} on {presentation.format_day(day)}")


@cli.command("week")
@click.option("--ending", "ending_text", default=None, help="Last day of the week window.")
@click.pass_obj
def week_cmd(app: AppContext, ending_text: Optional[str]) -> None:
    """Show the seven-day completion series."""

    ending = _parse_day(ending_text) or app.today()
    series = app.aggregator.weekly_series(ending)
    for offset, ratio in enumerate(series):
        day = ending.add_days(offset - len(series) + 1)
        label = presentation.format_day(day, "short")
        click.echo(f"  {label:<12} {presentation.format_percent(ratio):>4}")
    click.echo(f"Average: {presentation.format_percent(app.aggregator.weekly_average(ending))}")


@cli.command("month")
@click.option("--year", type=int, default=None)
@click.option("--month", type=click.IntRange(1, 12), default=None)
@click.pass_obj
def month_cmd(app: AppContext, year: Optional[int], month: Optional[int]) -> None:
    """Show the month grid with per-day percentages."""

    today = app.today()
    year = year or today.year
    month = month or today.month
    first_weekday = app.config.FIRST_WEEKDAY
    cells = month_grid(year, month, first_weekday)
    ratios = app.aggregator.completion_by_day(c.day for c in cells if c.in_month)

    click.echo(presentation.month_title(year, month))
    click.echo(" ".join(f"{s:>4}" for s in presentation.weekday_symbols(first_weekday)))
    for week_start in range(0, len(cells), 7):
        row = []
        for cell in cells[week_start:week_start + 7]:
            if not cell.in_month:
                row.append(f"{'.':>4}")
            else:
                row.append(f"{presentation.percent(ratios[cell.day]):>4}")
        click.echo(" ".join(row))
    average = app.aggregator.monthly_average(year, month)
    click.echo(f"Month: {presentation.format_percent(average)}")


@cli.command("history")
@click.argument("habit_ref")
@click.option("--limit", type=click.IntRange(min=1), default=10, show_default=True)
@click.pass_obj
def history_cmd(app: AppContext, habit_ref: str, limit: int) -> None:
    """Show a habit's recent completions, success rate and streaks."""

    habit = _find_habit(app, habit_ref)
    today = app.today()
    aggregator = app.aggregator
    created = habit.created_day(aggregator.tz)

    click.echo(f"{habit.title} (goal {habit.goal_times_per_week}x/week)")
    click.echo(f"Tracking for: {presentation.habit_age_label(created, today)}")
    rate = aggregator.success_rate(habit, HISTORY_WINDOW_DAYS, today=today)
    click.echo(f"Success rate: {presentation.format_percent(rate)}")
    current, longest = aggregator.streaks(habit.id, today)
    click.echo(f"Streak: {current} current, {longest} longest")
    days = aggregator.completed_days(habit.id, since_days=HISTORY_WINDOW_DAYS, today=today)
    for day in days[:limit]:
        click.echo(f"  {presentation.format_day(day):<20} {presentation.relative_day_label(day, today)}")


@cli.command("export")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the CSV files (defaults to <data dir>/exports).",
)
@click.pass_obj
def export_cmd(app: AppContext, output_dir: Optional[Path]) -> None:
    """Export habits and completion records as CSV."""

    target = output_dir or Path(app.config.DATA_DIR) / "exports"
    habits = app.habit_repo.list_all(include_archived=True)
    records = []
    for habit in habits:
        records.extend(reversed(list(app.completion_store.records_for(habit.id))))
    habits_path = export_habits_csv(habits=habits, output_path=target / "habits.csv")
    records_path = export_completions_csv(records=records, output_path=target / "completions.csv")
    click.echo(f"Export written: {habits_path}")
    click.echo(f"Export written: {records_path}")


def main() -> None:
    cli(prog_name="habitflow")


if __name__ == "__main__":
    main()
