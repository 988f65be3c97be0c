"""Helpers shared by CLI command groups."""

import asyncio
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import typer

from studyflow.application.config import AppConfig, resolve_config


def _fmt_day(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d")


def _fmt_time(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _resolve_with_overrides(**overrides: Any) -> AppConfig:
    """Resolve config, letting non-None CLI values win."""
    return resolve_config(overrides)


def _run_service_call(data: Path | None, call):
    """
    Build the analytics service for the configured data file and run call(service, config).

    Exits with code 1 when the data file is missing and 2 on bad input.
    """
    from studyflow.application.factory import get_study_repository
    from studyflow.application.stats.service import AnalyticsService

    config = _resolve_with_overrides(data_file=data)
    try:
        service = AnalyticsService(get_study_repository(config), config)
        return asyncio.run(call(service, config))
    except FileNotFoundError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(1) from e
    except ValueError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(2) from e
