"""flashy CLI: review scheduling, study sessions and config commands."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from flashy.application.config import resolve_config
from flashy.domain.errors import FlashyError
from flashy.domain.scheduling.models import CONFIDENCE_PROFILES
from flashy.infrastructure.adapters.card_file import CardFileRepository
from flashy.interface._common import (
    _resolve_with_overrides,
    fail,
    make_scheduler,
    parse_at,
    require_card_file,
)

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="flashy: spaced-repetition scheduling for flashcard decks.",
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

config_app = typer.Typer(help="Manage flashy configuration.")
app.add_typer(config_app, name="config")

AtOption = Annotated[
    str | None,
    typer.Option("--at", help="Evaluate as of this ISO 8601 time instead of now."),
]
JsonOption = Annotated[bool, typer.Option("--json", help="Print machine-readable JSON.")]
RatingOption = Annotated[
    int,
    typer.Option(
        "--rating",
        "-r",
        help="Confidence rating: 1 (Less Confident), 2 (Medium), 3 (More Confident).",
    ),
]


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Increase verbosity."),
    ] = 0,
):
    """Global settings for flashy."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        logging.getLogger("flashy").setLevel(logging.DEBUG)


# ---------------------------------------------------------------------------
# Scheduling commands
# ---------------------------------------------------------------------------


@app.command("next-review")
def next_review(
    interval_days: Annotated[
        int, typer.Argument(help="Current interval in days (0 for a new card).")
    ],
    rating: RatingOption = 2,
    at: AtOption = None,
    as_json: JsonOption = False,
):
    """Compute the [bold]next interval[/bold] and due date for one review."""
    scheduler = make_scheduler(resolve_config(), at=parse_at(at))
    try:
        outcome = scheduler.next_review(interval_days, rating)
    except FlashyError as e:
        raise fail(e) from e

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "interval_days": outcome.interval_days,
                    "next_due_at": outcome.next_due_at.isoformat(),
                }
            )
        )
        return

    typer.echo(f"Interval: {outcome.interval_days} days")
    typer.echo(f"Next due: {outcome.next_due_at.isoformat()}")


@app.command("interval")
def interval(
    last_reviewed_at: Annotated[
        str | None,
        typer.Argument(help="Last review time (ISO 8601). Omit for a new card."),
    ] = None,
    at: AtOption = None,
):
    """Print whole days elapsed since the last review."""
    reviewed = parse_at(last_reviewed_at)
    scheduler = make_scheduler(resolve_config(), at=parse_at(at))
    typer.echo(str(scheduler.current_interval(reviewed)))


@app.command("review")
def review(
    card_id: Annotated[int, typer.Argument(help="ID of the card being reviewed.")],
    path: Annotated[
        Path | None,
        typer.Argument(help="Card snapshot file (YAML or JSON). Defaults to config."),
    ] = None,
    rating: RatingOption = 2,
    at: AtOption = None,
    as_json: JsonOption = False,
):
    """Review one card from a snapshot file and show the state to persist.

    The file is not modified.
    """
    config = _resolve_with_overrides(card_file=path)
    card_file = require_card_file(config)
    scheduler = make_scheduler(config, at=parse_at(at))

    try:
        card = CardFileRepository(card_file).get_card(card_id)
        if card is None:
            typer.secho(f"Card {card_id} not found in {card_file}", fg="red", err=True)
            raise typer.Exit(1)
        result = scheduler.review(card, rating)
    except FlashyError as e:
        raise fail(e) from e

    updated = result.card
    if as_json:
        typer.echo(
            json.dumps(
                {
                    "id": updated.id,
                    "interval_days": result.outcome.interval_days,
                    "previous_interval_days": result.previous_interval_days,
                    "last_reviewed_at": updated.last_reviewed_at.isoformat(),
                    "next_due_at": updated.next_due_at.isoformat(),
                    "review_count": updated.review_count,
                }
            )
        )
        return

    typer.echo(f"Card {updated.id}: {updated.question}")
    typer.echo(
        f"Interval: {result.previous_interval_days} -> {result.outcome.interval_days} days"
    )
    typer.echo(f"Next due: {updated.next_due_at.isoformat()}")
    typer.echo(f"Reviews: {updated.review_count}")


@app.command("session")
def session(
    path: Annotated[
        Path | None,
        typer.Argument(help="Card snapshot file (YAML or JSON). Defaults to config."),
    ] = None,
    limit: Annotated[
        int | None, typer.Option(help="Show at most this many cards.", min=0)
    ] = None,
    seed: Annotated[int | None, typer.Option(help="Seed for a reproducible order.")] = None,
    at: AtOption = None,
    as_json: JsonOption = False,
):
    """Build a [bold green]study session[/bold green]: due cards, weakest first (weighted)."""
    config = _resolve_with_overrides(card_file=path, seed=seed, session_limit=limit)
    card_file = require_card_file(config)
    scheduler = make_scheduler(config, at=parse_at(at))

    try:
        cards = CardFileRepository(card_file).load_cards()
        plan = scheduler.build_session(cards, limit=config.session_limit)
    except FlashyError as e:
        raise fail(e) from e

    if as_json:
        typer.echo(
            json.dumps(
                {
                    "session_id": plan.session_id,
                    "generated_at": plan.generated_at.isoformat(),
                    "total_count": plan.total_count,
                    "due_count": plan.due_count,
                    "card_ids": [card.id for card in plan.cards],
                },
                indent=2,
            )
        )
        return

    typer.echo(f"Due cards: {plan.due_count} of {plan.total_count}")
    if not plan.cards:
        typer.secho("Nothing to review right now.", fg="yellow")
        return

    for position, card in enumerate(plan.cards, start=1):
        level = card.confidence_level or 2
        label = CONFIDENCE_PROFILES[level].label
        typer.echo(f"{position:>3}. [{label}] #{card.id} {card.question}")


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@app.command("server")
def server(
    host: Annotated[str | None, typer.Option(help="Interface to bind.")] = None,
    port: Annotated[int | None, typer.Option(help="Port to listen on.")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Auto-reload on changes.")] = False,
):
    """Run the scheduling HTTP API."""
    import uvicorn

    config = _resolve_with_overrides(host=host, port=port)
    uvicorn.run("flashy.server:app", host=config.host, port=config.port, reload=reload)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


def main():
    app()


if __name__ == "__main__":
    main()
