"""CLI interface using Typer."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from fitmetrics.config import get_settings
from fitmetrics.config.settings import Settings, default_config_path

app = typer.Typer(
    help="Fitness metrics: energy targets and progress analytics",
    no_args_is_help=True,
)
console = Console()

config_app = typer.Typer(help="Manage configuration")
app.add_typer(config_app, name="config")


def _emit(text: Optional[str]) -> None:
    """Print formatter output for json/markdown (table output prints itself).

    Printed verbatim: no markup, highlighting or wrapping, so piped JSON
    stays parseable.
    """
    if text is not None:
        console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Fitness metrics: energy targets and progress analytics."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@app.command()
def targets(
    sex: str = typer.Option(..., "--sex", help="Sex (male/female)"),
    weight: float = typer.Option(..., "--weight", help="Current weight (kg, or lbs with --units imperial)"),
    height: float = typer.Option(..., "--height", help="Height (cm, or inches with --units imperial)"),
    activity: str = typer.Option(
        "moderately_active",
        "--activity",
        help="Activity level (sedentary/lightly_active/moderately_active/very_active/extremely_active)",
    ),
    goal: str = typer.Option(
        "maintenance", "--goal", help="Fitness goal (fat_loss/muscle_gain/maintenance)"
    ),
    age: Optional[int] = typer.Option(None, "--age", help="Age in years (default from config)"),
    units: str = typer.Option("metric", "--units", help="Input units (metric/imperial)"),
    actual_weight: Optional[bool] = typer.Option(
        None,
        "--actual-weight/--reference-weight",
        help="Base protein on your weight instead of the 70 kg reference",
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format (table/json/markdown)"
    ),
) -> None:
    """Calculate TDEE and daily macro targets for a profile."""
    from fitmetrics.export.formatters import format_targets
    from fitmetrics.profiles.body_calc import (
        compute_energy_targets,
        height_to_cm,
        weight_to_kg,
    )

    settings = get_settings()
    if age is None:
        age = settings.energy.default_age
    if actual_weight is None:
        actual_weight = settings.energy.use_actual_weight
    output_format = output_format or settings.defaults.output_format

    try:
        if units == "imperial":
            weight_kg = weight_to_kg(weight, "lbs")
            height_cm = height_to_cm(height, "in")
        elif units == "metric":
            weight_kg, height_cm = weight, height
        else:
            raise ValueError(f"units must be 'metric' or 'imperial', got '{units}'")

        result = compute_energy_targets(
            sex,
            weight_kg,
            height_cm,
            activity,
            goal,
            age=age,
            use_actual_weight=actual_weight,
        )
        _emit(format_targets(result, output_format, console))
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def analytics(
    log_dir: Path = typer.Argument(..., help="Directory with profile.yaml and CSV logs"),
    time_range: Optional[str] = typer.Option(
        None, "--range", "-r", help="Time range (7days/30days/90days)"
    ),
    today: Optional[str] = typer.Option(
        None, "--today", help="Reference date YYYY-MM-DD (default: today)"
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format (table/json/markdown)"
    ),
) -> None:
    """Show progress analytics computed from exported logs."""
    from fitmetrics.analytics.composer import compute_analytics
    from fitmetrics.data.log_loader import load_logs
    from fitmetrics.export.formatters import format_analytics

    settings = get_settings()
    time_range = time_range or settings.analytics.default_time_range
    output_format = output_format or settings.defaults.output_format

    try:
        reference_day = date.fromisoformat(today) if today else None
        logs = load_logs(log_dir, settings.energy.use_actual_weight)
        view = compute_analytics(
            logs.weights,
            logs.workouts,
            logs.nutrition,
            time_range,
            logs.profile,
            today=reference_day,
        )
        _emit(format_analytics(view, output_format, console))
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@config_app.command("show")
def config_show(
    config_path: Optional[Path] = typer.Option(None, "--path", help="Config file path"),
) -> None:
    """Show the effective configuration."""
    import yaml

    try:
        settings = Settings.load(config_path) if config_path else get_settings()
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False))


@config_app.command("init")
def config_init(
    config_path: Optional[Path] = typer.Option(None, "--path", help="Config file path"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Write a config file with default settings."""
    target = config_path or default_config_path()
    if target.exists() and not force:
        console.print(f"[yellow]Config already exists at {target}[/yellow] (use --force)")
        raise typer.Exit(1)

    Settings().save(target)
    console.print(f"[green]Wrote default config to {target}[/green]")


if __name__ == "__main__":
    app()
