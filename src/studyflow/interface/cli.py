"""studyflow CLI: root commands and subgroup registration."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from studyflow.application.config import resolve_config
from studyflow.domain.constants import DEFAULT_EASE_FACTOR
from studyflow.interface._common import _fmt_day, _fmt_time, _resolve_with_overrides

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="studyflow: spaced-repetition scheduling and study analytics.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# Verbosity -> level of the "studyflow" logger
_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO, 2: logging.DEBUG}

# ---------------------------------------------------------------------------
# Register subgroups
# ---------------------------------------------------------------------------

from studyflow.interface.stats_commands import stats_app  # noqa: E402

app.add_typer(stats_app, name="stats")

config_app = typer.Typer(help="Manage studyflow configuration.")
app.add_typer(config_app, name="config")


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for studyflow."""
    level = _resolve_with_overrides().verbose + verbose
    logging.getLogger("studyflow").setLevel(_LOG_LEVELS[min(level, 2)])


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def review(
    rating: Annotated[str, typer.Argument(help="Recall rating: easy, medium or hard.")],
    ease_factor: Annotated[
        float, typer.Option(help="Current ease factor of the card.")
    ] = DEFAULT_EASE_FACTOR,
    interval: Annotated[int, typer.Option(help="Current interval in days.")] = 0,
    repetitions: Annotated[int, typer.Option(help="Reviews received so far.")] = 0,
    now: Annotated[
        int | None, typer.Option(help="Review time, epoch ms. Defaults to now.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """[bold green]Schedule[/bold green] a card's next review from a rating."""
    from studyflow.application.review.deck import describe_next_review
    from studyflow.application.review.scheduler import schedule_next_review_from_rating
    from studyflow.domain.review.models import CardScheduleState

    try:
        state = CardScheduleState(
            ease_factor=ease_factor, interval=interval, repetitions=repetitions
        )
        result = schedule_next_review_from_rating(rating, state, now=now)
    except ValueError as e:
        typer.secho(f"Invalid review: {e}", fg="red", err=True)
        raise typer.Exit(2) from e

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "quality": result.quality,
                    "ease_factor": result.ease_factor,
                    "interval": result.interval,
                    "repetitions": result.repetitions,
                    "next_review_at": result.next_review_at,
                },
                indent=2,
            )
        )
        return

    typer.echo(f"Quality: {result.quality}")
    typer.echo(f"Ease factor: {result.ease_factor:.2f}")
    typer.echo(f"Interval: {result.interval} day(s)  Repetitions: {result.repetitions}")
    typer.secho(
        f"Next review: {_fmt_time(result.next_review_at)} "
        f"({describe_next_review(result.next_review_at, now=result.reviewed_at)})",
        fg="green",
    )


@app.command()
def forecast(
    cards_remaining: Annotated[int, typer.Argument(help="Cards left to learn.", min=0)],
    pace: Annotated[float, typer.Argument(help="Cards cleared per day.")],
    now: Annotated[
        int | None, typer.Option(help="Reference time, epoch ms. Defaults to now.")
    ] = None,
):
    """Forecast when a backlog is cleared at a steady pace."""
    from studyflow.application.stats.analytics import compute_predicted_ready_date

    ready = compute_predicted_ready_date(cards_remaining, pace, now)
    if ready is None:
        typer.secho("No pace yet; cannot forecast.", fg="yellow")
        return
    typer.echo(f"Ready by {_fmt_day(ready)} ({ready})")


@app.command()
def serve(
    port: Annotated[int, typer.Option(help="Port to bind the server to.")] = 8787,
    host: Annotated[str, typer.Option(help="Host to bind the server to.")] = "127.0.0.1",
    reload: Annotated[bool, typer.Option(help="Enable auto-reload.")] = False,
):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("studyflow.server:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
