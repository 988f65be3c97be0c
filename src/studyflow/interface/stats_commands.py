"""`studyflow stats` subgroup: analytics over a study data file."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Annotated

import typer

from studyflow.interface._common import _fmt_day, _run_service_call

stats_app = typer.Typer(help="Study progress analytics.", no_args_is_help=True)

DataOption = Annotated[
    Path | None,
    typer.Option("--data", help="YAML/JSON study data file. Defaults to config."),
]
TzOption = Annotated[
    int | None,
    typer.Option("--tz", help="Offset from UTC in minutes (east positive). Defaults to config."),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON.")]


@stats_app.command("activity")
def activity(
    user: Annotated[str, typer.Option(help="User ID.")],
    start: Annotated[int, typer.Option(help="Range start, epoch ms.")],
    end: Annotated[int, typer.Option(help="Range end, epoch ms.")],
    tz: TzOption = None,
    data: DataOption = None,
    json_output: JsonOption = False,
):
    """Study events per local day."""

    async def call(service, config):
        offset = config.tz_offset_minutes if tz is None else tz
        return await service.get_daily_activity(user, start, end, offset)

    rows = _run_service_call(data, call)
    if json_output:
        typer.echo(json.dumps([asdict(r) for r in rows], indent=2))
        return
    if not rows:
        typer.secho("No study activity in range.", fg="yellow")
        return
    for row in rows:
        typer.echo(f"{_fmt_day(row.date)}  {row.count}")


@stats_app.command("streak")
def streak(
    user: Annotated[str, typer.Option(help="User ID.")],
    tz: TzOption = None,
    data: DataOption = None,
    json_output: JsonOption = False,
):
    """Current study streak and burnout level."""

    async def call(service, config):
        offset = config.tz_offset_minutes if tz is None else tz
        return await service.get_burnout_stats(user, offset)

    result = _run_service_call(data, call)
    if json_output:
        typer.echo(json.dumps(asdict(result), indent=2))
        return
    color = {"high": "red", "medium": "yellow", "low": "green"}[result.level]
    typer.echo(f"Streak: {result.streak_days} day(s)")
    typer.secho(f"Burnout risk: {result.level}", fg=color)


@stats_app.command("forecast")
def forecast(
    deck: Annotated[str, typer.Option(help="Deck ID.")],
    exam_date: Annotated[int | None, typer.Option(help="Exam date, epoch ms.")] = None,
    data: DataOption = None,
    json_output: JsonOption = False,
):
    """Predict when a deck will be ready."""

    async def call(service, config):
        return await service.get_readiness_forecast(deck, exam_date)

    result = _run_service_call(data, call)
    if json_output:
        typer.echo(json.dumps(asdict(result), indent=2))
        return
    typer.echo(f"Cards remaining: {result.cards_remaining}")
    if result.predicted_ready_date is None:
        typer.secho("No reviews in the last week; cannot forecast.", fg="yellow")
        return
    typer.echo(f"Predicted ready: {_fmt_day(result.predicted_ready_date)}")
    if result.exam_date is not None and result.predicted_ready_date > result.exam_date:
        typer.secho("Warning: forecast is after the exam date.", fg="red")


@stats_app.command("weak")
def weak(
    deck: Annotated[str, typer.Option(help="Deck ID.")],
    data: DataOption = None,
    json_output: JsonOption = False,
):
    """Cards you struggle with most."""

    async def call(service, config):
        return await service.get_weak_topics(deck)

    topics = _run_service_call(data, call)
    if json_output:
        typer.echo(json.dumps([asdict(t) for t in topics], indent=2))
        return
    if not topics:
        typer.secho("No cards in deck.", fg="yellow")
        return
    for t in topics:
        typer.echo(f"{t.ease_factor:.2f}  {t.topic}")


@stats_app.command("deck")
def deck_stats(
    deck: Annotated[str, typer.Option(help="Deck ID.")],
    tz: TzOption = None,
    data: DataOption = None,
    json_output: JsonOption = False,
):
    """Scheduling overview of a deck."""

    async def call(service, config):
        offset = config.tz_offset_minutes if tz is None else tz
        return await service.get_deck_stats(deck, offset)

    result = _run_service_call(data, call)
    if json_output:
        typer.echo(json.dumps(asdict(result), indent=2))
        return
    typer.echo(
        f"Total: {result.total_cards}  New: {result.new_cards}"
        f"  Learning: {result.learning_cards}  Review: {result.review_cards}"
    )
    typer.echo(f"Due now: {result.due_now}  Due later today: {result.due_today}")
    typer.echo(
        f"Mastered: {result.mastered_cards}  Avg ease: {result.average_ease_factor:.2f}"
    )


@stats_app.command("performance")
def performance(
    deck: Annotated[str, typer.Option(help="Deck ID.")],
    data: DataOption = None,
    json_output: JsonOption = False,
):
    """Quiz scores on a deck over time."""

    async def call(service, config):
        return await service.get_deck_performance(deck)

    points = _run_service_call(data, call)
    if json_output:
        typer.echo(json.dumps([asdict(p) for p in points], indent=2))
        return
    if not points:
        typer.secho("No quizzes taken on this deck.", fg="yellow")
        return
    for p in points:
        typer.echo(f"{_fmt_day(p.date)}  {p.score_percent}%")
