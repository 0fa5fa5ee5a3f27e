"""Output formatters for energy targets and analytics."""

from __future__ import annotations

import json
from datetime import date
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fitmetrics.analytics.composer import AnalyticsViewModel
from fitmetrics.profiles.body_calc import EnergyTargets

TIME_RANGE_TITLES = {
    "7days": "Last 7 Days",
    "30days": "Last 30 Days",
    "90days": "Last 90 Days",
}


def _short_date(day: date) -> str:
    """Chart-style date label, e.g. "Mar 5"."""
    return f"{day:%b} {day.day}"


def _bar(percent: float, width: int = 20) -> str:
    """Text progress bar for a 0-100 percentage."""
    filled = int(round(max(0.0, min(100.0, percent)) / 100 * width))
    return "#" * filled + "-" * (width - filled)


class TableFormatter:
    """Format results as Rich tables for terminal display."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
        """
        self.console = console or Console()

    def format_targets(self, targets: EnergyTargets) -> None:
        """Print energy targets as a panel and macro table."""
        header_lines = [
            f"[bold]Goal:[/bold] {targets.goal.replace('_', ' ')}",
            f"[bold]BMR:[/bold] {targets.bmr:.0f} kcal/day",
            f"[bold]TDEE:[/bold] {targets.tdee} kcal/day",
            f"[bold]Target:[/bold] {targets.calories} kcal/day "
            f"({targets.calories - targets.tdee:+d} from TDEE)",
        ]
        self.console.print(Panel("\n".join(header_lines), title="Energy Targets"))

        table = Table(title="Daily Macro Targets")
        table.add_column("Macro", style="cyan")
        table.add_column("Grams", justify="right")
        table.add_column("kcal", justify="right")

        table.add_row("Protein", str(targets.protein), str(targets.protein * 4))
        carbs = f"[red]{targets.carbs}[/red]" if targets.carbs < 0 else str(targets.carbs)
        table.add_row("Carbs", carbs, str(targets.carbs * 4))
        table.add_row("Fat", str(targets.fat), str(targets.fat * 9))
        self.console.print(table)

        self.console.print(
            f"[dim]Protein based on {targets.protein_reference_kg:.1f} kg body weight[/dim]"
        )

    def format_analytics(self, view: AnalyticsViewModel) -> None:
        """Print the analytics overview and per-view tables."""
        overview = view.overview
        title = TIME_RANGE_TITLES.get(view.time_range.value, view.time_range.value)

        header_lines = [
            f"[bold]Weekly Consistency:[/bold] {overview.weekly_consistency}%",
            f"[bold]Avg. Workout Duration:[/bold] {overview.avg_workout_duration} min",
            f"[bold]Avg. Daily Calories:[/bold] {overview.avg_daily_calories} kcal",
            f"[bold]Total Workouts:[/bold] {overview.total_workouts} "
            f"(last {overview.window_days} days)",
            f"[bold]Current Streak:[/bold] {view.streak} days",
            f"[bold]{view.goal_progress.label}:[/bold] "
            f"{view.goal_progress.percent:.0f}% {_bar(view.goal_progress.percent)}",
        ]
        self.console.print(
            Panel("\n".join(header_lines), title=f"Analytics - {title} (as of {view.today})")
        )

        # Weight trend
        if view.weight_trend.has_chart:
            weight_table = Table(title="Weight Trend")
            weight_table.add_column("Date")
            weight_table.add_column("Weight", justify="right")
            for point in view.weight_trend.points:
                weight_table.add_row(_short_date(point.date), f"{point.weight:.1f}")
            self.console.print(weight_table)
            if view.weight_change is not None:
                change = view.weight_change
                pct = (
                    f" ({change.percent_change:+.1f}%)"
                    if change.percent_change is not None
                    else ""
                )
                self.console.print(f"Change: {change.change:+.1f}{pct}")
        else:
            self.console.print("[dim]Not enough weight data to display trend[/dim]")

        # Workout frequency
        freq_table = Table(title="Workout Frequency")
        freq_table.add_column("Day", style="cyan")
        freq_table.add_column("Workouts", justify="right")
        for bucket in view.workout_frequency:
            freq_table.add_row(bucket.label, str(bucket.count))
        self.console.print(freq_table)

        if view.workout_types:
            type_table = Table(title="Workout Types")
            type_table.add_column("Type", style="cyan")
            type_table.add_column("Count", justify="right")
            for category in view.workout_types:
                type_table.add_row(category.label, str(category.count))
            self.console.print(type_table)

        # Nutrition
        if view.nutrition_series:
            nutrition_table = Table(title="Daily Nutrition")
            nutrition_table.add_column("Date")
            nutrition_table.add_column("Calories", justify="right")
            nutrition_table.add_column("Protein", justify="right")
            nutrition_table.add_column("Carbs", justify="right")
            nutrition_table.add_column("Fat", justify="right")
            for point in view.nutrition_series:
                nutrition_table.add_row(
                    _short_date(point.date),
                    f"{point.totals.calories:.0f}",
                    f"{point.totals.protein:.0f}g",
                    f"{point.totals.carbs:.0f}g",
                    f"{point.totals.fat:.0f}g",
                )
            self.console.print(nutrition_table)
        else:
            self.console.print("[dim]No nutrition data to display[/dim]")

        macros = view.macro_distribution
        self.console.print(
            f"Macro Distribution: Protein {macros.protein}% | "
            f"Carbs {macros.carbs}% | Fat {macros.fat}%"
        )

        # Today's progress
        progress = view.today_progress
        today_table = Table(title="Today's Progress")
        today_table.add_column("Goal", style="cyan")
        today_table.add_column("Intake", justify="right")
        today_table.add_column("Progress")
        today_table.add_row("Calories", f"{view.today_totals.calories:.0f}", _bar(progress.calories))
        today_table.add_row("Protein", f"{view.today_totals.protein:.0f}g", _bar(progress.protein))
        today_table.add_row("Carbs", f"{view.today_totals.carbs:.0f}g", _bar(progress.carbs))
        today_table.add_row("Fat", f"{view.today_totals.fat:.0f}g", _bar(progress.fat))
        self.console.print(today_table)


class JSONFormatter:
    """Format results as JSON for programmatic use."""

    def format_targets(self, targets: EnergyTargets) -> str:
        return json.dumps(targets.to_dict(), indent=2)

    def format_analytics(self, view: AnalyticsViewModel) -> str:
        return json.dumps(view.to_dict(), indent=2)


class MarkdownFormatter:
    """Format results as Markdown for sharing or documentation."""

    def format_targets(self, targets: EnergyTargets) -> str:
        lines = [
            "# Daily Energy Targets",
            "",
            f"**Goal:** {targets.goal.replace('_', ' ')}",
            f"**TDEE:** {targets.tdee} kcal",
            f"**Calories:** {targets.calories} kcal",
            "",
            "| Macro | Grams |",
            "|-------|-------|",
            f"| Protein | {targets.protein} |",
            f"| Carbs | {targets.carbs} |",
            f"| Fat | {targets.fat} |",
        ]
        return "\n".join(lines)

    def format_analytics(self, view: AnalyticsViewModel) -> str:
        overview = view.overview
        title = TIME_RANGE_TITLES.get(view.time_range.value, view.time_range.value)
        lines = [
            f"# Analytics: {title}",
            "",
            f"**Weekly Consistency:** {overview.weekly_consistency}%",
            f"**Avg. Workout Duration:** {overview.avg_workout_duration} min",
            f"**Avg. Daily Calories:** {overview.avg_daily_calories} kcal",
            f"**Total Workouts:** {overview.total_workouts}",
            f"**Current Streak:** {view.streak} days",
            f"**{view.goal_progress.label}:** {view.goal_progress.percent:.0f}%",
            "",
            "## Workout Frequency",
            "",
            "| Day | Workouts |",
            "|-----|----------|",
        ]
        for bucket in view.workout_frequency:
            lines.append(f"| {bucket.label} | {bucket.count} |")

        macros = view.macro_distribution
        lines.extend(
            [
                "",
                "## Macro Distribution",
                "",
                "| Protein | Carbs | Fat |",
                "|---------|-------|-----|",
                f"| {macros.protein}% | {macros.carbs}% | {macros.fat}% |",
            ]
        )

        if view.nutrition_series:
            lines.extend(
                [
                    "",
                    "## Daily Nutrition",
                    "",
                    "| Date | Calories | Protein | Carbs | Fat |",
                    "|------|----------|---------|-------|-----|",
                ]
            )
            for point in view.nutrition_series:
                t = point.totals
                lines.append(
                    f"| {point.date.isoformat()} | {t.calories:.0f} | {t.protein:.0f}g "
                    f"| {t.carbs:.0f}g | {t.fat:.0f}g |"
                )

        return "\n".join(lines)


def format_targets(
    targets: EnergyTargets,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format energy targets in the specified format.

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    if output_format == "table":
        TableFormatter(console).format_targets(targets)
        return None
    elif output_format == "json":
        return JSONFormatter().format_targets(targets)
    elif output_format == "markdown":
        return MarkdownFormatter().format_targets(targets)
    else:
        raise ValueError(f"Unknown output format: {output_format}")


def format_analytics(
    view: AnalyticsViewModel,
    output_format: str = "table",
    console: Optional[Console] = None,
) -> Optional[str]:
    """Format an analytics view model in the specified format.

    Args:
        view: Analytics view model
        output_format: One of 'table', 'json', 'markdown'
        console: Rich console (for table format)

    Returns:
        Formatted string for json/markdown, None for table (prints directly)
    """
    if output_format == "table":
        TableFormatter(console).format_analytics(view)
        return None
    elif output_format == "json":
        return JSONFormatter().format_analytics(view)
    elif output_format == "markdown":
        return MarkdownFormatter().format_analytics(view)
    else:
        raise ValueError(f"Unknown output format: {output_format}")
