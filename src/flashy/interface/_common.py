"""Shared helpers for CLI command modules."""

import random
from datetime import datetime
from pathlib import Path
from typing import Any

import typer

from flashy.application.config import AppConfig, resolve_config
from flashy.application.scheduling.service import ReviewScheduler
from flashy.application.utils.time import parse_timestamp
from flashy.domain.errors import CardFileError, FlashyError, InvalidArgumentError
from flashy.infrastructure.adapters.system_clock import FixedClock


def _resolve_with_overrides(**kwargs: Any) -> AppConfig:
    """Resolve config, passing only the CLI options that were actually set."""
    return resolve_config({k: v for k, v in kwargs.items() if v is not None})


def humanize_error(e: Exception) -> str:
    """Turn a flashy error into a one-line message for the terminal."""
    if isinstance(e, InvalidArgumentError):
        return f"Invalid input: {e}"
    if isinstance(e, CardFileError):
        return f"Could not read cards from {e}"
    if isinstance(e, FlashyError):
        return str(e)
    return f"Unexpected error: {e}"


def fail(e: Exception) -> typer.Exit:
    typer.secho(humanize_error(e), fg="red", err=True)
    return typer.Exit(1)


def parse_at(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return parse_timestamp(value)
    except ValueError:
        raise typer.BadParameter(f"not an ISO 8601 timestamp: {value!r}") from None


def make_scheduler(config: AppConfig, at: datetime | None = None) -> ReviewScheduler:
    """Build a scheduler from config, pinning the clock when --at is given."""
    clock = FixedClock(at) if at is not None else None
    rng = random.Random(config.seed) if config.seed is not None else None
    return ReviewScheduler(clock=clock, rng=rng)


def require_card_file(config: AppConfig) -> Path:
    if config.card_file is None:
        typer.secho(
            "No card file given. Pass FILE or set FLASHY_CARD_FILE.", fg="red", err=True
        )
        raise typer.Exit(2)
    return config.card_file
