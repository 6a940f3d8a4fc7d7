"""kioku CLI: record reviews, inspect schedules and build the daily queue."""

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from kioku.application.config import AppConfig, resolve_config
from kioku.application.factory import get_review_service, get_schedule_repository
from kioku.application.scheduler.insights import ScheduleInsights
from kioku.application.scheduler.review_scheduler import interval_label
from kioku.application.scheduler.service import ReviewService
from kioku.consts import VERSION
from kioku.domain.exceptions import KiokuError
from kioku.domain.schedule.models import CardId, CardScheduleState
from kioku.infrastructure.adapters.schedule.serialization import state_to_record

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="kioku: spaced-repetition scheduling for vocabulary flashcards.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

config_app = typer.Typer(help="Manage kioku configuration.")
app.add_typer(config_app, name="config")

insights = ScheduleInsights()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_card_id(raw: str) -> CardId:
    """Numeric ids are stored as integers, anything else as text."""
    return int(raw) if raw.isdigit() else raw


def _config(ctx: typer.Context) -> AppConfig:
    obj = ctx.ensure_object(dict)
    try:
        return resolve_config({"db_path": obj.get("db_path"), "verbose": obj.get("verbose")})
    except ValidationError as e:
        typer.secho(f"Error: invalid configuration\n{e}", fg="red", err=True)
        raise typer.Exit(1) from e


@contextmanager
def _service(ctx: typer.Context) -> Iterator[ReviewService]:
    config = _config(ctx)
    logger.debug(f"Using schedule database {config.db_path} (preset {config.preset})")

    try:
        repo = get_schedule_repository(config)
    except KiokuError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e

    try:
        yield get_review_service(config, repo)
    except KiokuError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e
    finally:
        close = getattr(repo, "close", None)
        if close is not None:
            close()


def _describe(state: CardScheduleState, now: datetime) -> dict:
    record = state_to_record(state)
    record.update(
        interval=interval_label(state.interval_days),
        stage=insights.learning_stage(state),
        difficulty=insights.difficulty_level(state),
        due=insights.due_description(state, now),
    )
    return record


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
    db: Annotated[
        Path | None, typer.Option("--db", help="Schedule database path override.")
    ] = None,
):
    """Global settings for kioku."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["db_path"] = db

    if verbose >= 3:
        logging.getLogger("kioku").setLevel(logging.DEBUG)
    elif verbose == 2:
        logging.getLogger("kioku").setLevel(logging.INFO)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def review(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Card to record a review for.")],
    correct: Annotated[
        bool | None,
        typer.Option("--correct/--incorrect", help="Whether the card was remembered."),
    ] = None,
    quality: Annotated[
        int | None, typer.Option("--quality", "-q", help="SM-2 quality grade, 0-5.")
    ] = None,
    swipe: Annotated[
        str | None, typer.Option("--swipe", help="Swipe direction: left, right, up, down.")
    ] = None,
):
    """[bold green]Record[/bold green] one review and show when the card is due next."""
    given = [opt for opt in (correct, quality, swipe) if opt is not None]
    if len(given) != 1:
        typer.secho(
            "Give exactly one of --correct/--incorrect, --quality or --swipe.", fg="red", err=True
        )
        raise typer.Exit(2)

    cid = _parse_card_id(card_id)
    now = _now()
    with _service(ctx) as service:
        if correct is not None:
            state = service.record(cid, correct, now)
        elif quality is not None:
            state = service.record_quality(cid, quality, now)
        else:
            state = service.record_swipe(cid, swipe, now)

    if state is None:
        typer.echo(f"Card {cid}: skipped.")
        return

    # Repetitions only survive a correct answer.
    outcome = "correct" if state.repetitions > 0 else "incorrect"
    typer.echo(
        f"Card {cid}: {outcome}. Next review in {interval_label(state.interval_days)} "
        f"({state.next_review_at:%Y-%m-%d}), streak {state.streak}."
    )


@app.command()
def show(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Card to inspect.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show a card's schedule."""
    cid = _parse_card_id(card_id)
    now = _now()
    with _service(ctx) as service:
        state = service.get_state(cid)

    info = _describe(state, now)
    if json_output:
        typer.echo(json.dumps(info, indent=2))
        return

    typer.echo(f"Card {cid}  [{info['stage']}, {info['difficulty']}]")
    typer.echo(f"  Interval: {info['interval']}  Ease: {state.ease_factor:.2f}")
    typer.echo(
        f"  Repetitions: {state.repetitions}  Streak: {state.streak}"
        f"  Reviews: {state.total_reviews}"
    )
    typer.echo(f"  Due: {info['due']}")


@app.command()
def due(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
    limit: Annotated[
        int | None, typer.Option(help="Daily review limit override (0 = unlimited).")
    ] = None,
):
    """List today's review queue."""
    config = _config(ctx)
    now = _now()
    with _service(ctx) as service:
        queue = service.build_queue(
            now,
            daily_new_cards_limit=config.new_cards_limit(),
            daily_review_limit=config.daily_review_limit if limit is None else limit,
            review_order=config.queue_order(),
        )

    if json_output:
        typer.echo(
            json.dumps(
                {
                    "new": len(queue.new_cards),
                    "due": len(queue.due_cards),
                    "queue": [_describe(s, now) for s in queue.ordered],
                },
                indent=2,
            )
        )
        return

    if not queue.ordered:
        typer.secho("Nothing due.", fg="green")
        return

    typer.echo(f"New: {len(queue.new_cards)}  Due: {len(queue.due_cards)}")
    for state in queue.ordered:
        typer.echo(f"  {state.card_id}  {insights.due_description(state, now)}")


@app.command()
def stats(
    ctx: typer.Context,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Show review and progress statistics."""
    now = _now()
    with _service(ctx) as service:
        review_stats, progress = service.stats(now)

    if json_output:
        payload = {"review": asdict(review_stats), "progress": asdict(progress)}
        typer.echo(json.dumps(payload, indent=2))
        return

    typer.echo(
        f"Cards: {review_stats.total}  New: {review_stats.new}"
        f"  Due: {review_stats.review}  Overdue: {review_stats.overdue}"
    )
    typer.echo(
        f"Mastered: {progress.mastered_cards} ({progress.mastery_percentage:.1f}%)"
        f"  Average ease: {progress.average_ease_factor:.2f}"
    )


@app.command()
def forget(
    ctx: typer.Context,
    card_id: Annotated[str, typer.Argument(help="Card whose schedule should be removed.")],
):
    """Remove a card's schedule."""
    cid = _parse_card_id(card_id)
    with _service(ctx) as service:
        removed = service.forget(cid)

    if removed:
        typer.secho(f"Removed schedule for card {cid}.", fg="green")
    else:
        typer.secho(f"No schedule stored for card {cid}.", fg="yellow")


@app.command()
def label(days: Annotated[int, typer.Argument(min=0, help="Interval in days.")]):
    """Print a human-readable interval."""
    typer.echo(interval_label(days))


@app.command()
def version():
    """Print the kioku version."""
    typer.echo(f"kioku {VERSION}")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _config(ctx)
    d = config.model_dump(mode="json")
    try:
        d["scheduler"] = asdict(config.scheduler_config())
    except KiokuError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e
    typer.echo(json.dumps(d, indent=2))
