#!/usr/bin/env python3
"""
running-coach CLI.

Training load (CTL, ATL, TSB) and coaching insights from the run log.

Usage:
    running-coach status --user USER_ID             # Current fitness and form
    running-coach insights --user USER_ID           # Prioritized coaching insights
    running-coach history --user USER_ID --days 14  # Daily CTL/ATL/TSB table
    running-coach context --user USER_ID            # Training context for the coach prompt
"""

import argparse
import asyncio
import json
import logging
import sys
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import Settings, get_settings
from .db import create_data_source
from .exceptions import RunningCoachError
from .llm.context_builder import build_training_context
from .models.insights import InsightPriority, InsightType
from .services.training_load import TrainingLoadService
from .utils.log_sanitizer import configure_logging

logger = logging.getLogger(__name__)

console = Console()


FORM_COLORS = {
    "green": "green",
    "lightgreen": "bright_green",
    "yellow": "yellow",
    "orange": "dark_orange",
    "red": "red",
}

INSIGHT_COLORS = {
    InsightType.DANGER: "red",
    InsightType.WARNING: "yellow",
    InsightType.SUCCESS: "green",
    InsightType.INFO: "cyan",
}


def parse_date(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def format_tsb_rich(tsb: float, color: str) -> Text:
    """Format TSB with the form color."""
    return Text(f"{tsb:+.1f}", style=FORM_COLORS.get(color, "white"))


async def cmd_status(args, service: TrainingLoadService) -> int:
    """Show current fitness, fatigue and form."""
    report = await service.build_report(args.user, args.date)
    if report is None:
        console.print("[red]Training data unavailable.[/red]")
        return 1

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
        return 0

    state = report.fitness
    color = FORM_COLORS.get(state.form.color, "white")

    table = Table(box=box.ROUNDED, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("CTL (fitness)", f"{state.ctl:.1f}")
    table.add_row("ATL (fatigue)", f"{state.atl:.1f}")
    table.add_row("TSB (form)", format_tsb_rich(state.tsb, state.form.color))
    table.add_row("Runs analyzed", str(report.workout_count))

    console.print()
    console.print(Panel(f"[bold]Training Status - {state.date.isoformat()}[/bold]"))
    console.print(table)
    console.print(Text(f"{state.form.status}: {state.form.description}", style=color))
    console.print()
    return 0


async def cmd_insights(args, service: TrainingLoadService) -> int:
    """Show prioritized coaching insights."""
    report = await service.build_report(args.user, args.date)
    if report is None:
        console.print("[red]Training data unavailable.[/red]")
        return 1

    if args.json:
        print(json.dumps([i.model_dump(mode="json") for i in report.insights], indent=2))
        return 0

    console.print()
    if not report.insights:
        console.print("No insights for the last two weeks.")
        console.print()
        return 0

    for insight in report.insights:
        style = INSIGHT_COLORS.get(insight.type, "white")
        marker = "!" if insight.priority == InsightPriority.HIGH else "-"
        body = f"{insight.description}\n\n[bold]Recommendation:[/bold] {insight.recommendation}"
        console.print(
            Panel(
                body,
                title=f"{marker} {insight.title}",
                subtitle=f"{insight.category.value} / {insight.priority.value}",
                border_style=style,
            )
        )
    console.print()
    return 0


async def cmd_history(args, service: TrainingLoadService) -> int:
    """Show daily CTL, ATL and TSB."""
    start_date = args.date - timedelta(days=args.days - 1)
    history = await service.get_fitness_history(args.user, start_date, args.date)

    if args.json:
        print(json.dumps([state.to_dict() for state in history], indent=2))
        return 0

    table = Table(title=f"Fitness (Last {args.days} Days)", box=box.ROUNDED)
    table.add_column("Date", style="cyan")
    table.add_column("CTL", justify="right")
    table.add_column("ATL", justify="right")
    table.add_column("TSB", justify="right")
    table.add_column("Form", style="bold")

    for state in history:
        table.add_row(
            state.date.isoformat(),
            f"{state.ctl:.1f}",
            f"{state.atl:.1f}",
            format_tsb_rich(state.tsb, state.form.color),
            Text(state.form.status, style=FORM_COLORS.get(state.form.color, "white")),
        )

    console.print()
    console.print(table)
    console.print()
    return 0


async def cmd_context(args, service: TrainingLoadService) -> int:
    """Print the training context block for the coach prompt."""
    report = await service.build_report(args.user, args.date)
    # An unavailable store yields an empty context, not an error
    print(build_training_context(report))
    return 0


COMMANDS = {
    "status": cmd_status,
    "insights": cmd_insights,
    "history": cmd_history,
    "context": cmd_context,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="running-coach",
        description="running-coach - training load and coaching insights",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  running-coach status --user athlete-1
  running-coach insights --user athlete-1 --date 2026-03-01
  running-coach history --user athlete-1 --days 28 --json
  running-coach context --user athlete-1 --db training.db
        """,
    )
    parser.add_argument("--db", type=Path, help="SQLite database path (overrides settings)")
    parser.add_argument("--log-level", help="Logging level (overrides settings)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--user", "-u", required=True, help="Athlete user ID")
    common.add_argument(
        "--date",
        type=parse_date,
        default=None,
        help="Reference date YYYY-MM-DD (default: today)",
    )
    common.add_argument("--json", action="store_true", help="Output JSON")

    subparsers.add_parser("status", parents=[common], help="Show current fitness and form")
    subparsers.add_parser("insights", parents=[common], help="Show coaching insights")
    history_p = subparsers.add_parser("history", parents=[common], help="Show daily CTL/ATL/TSB")
    history_p.add_argument(
        "--days", "-d", type=int, default=14, help="Number of days to show"
    )
    subparsers.add_parser("context", parents=[common], help="Print the coach prompt context")

    return parser


def main(argv: Optional[list] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings: Settings = get_settings()
    if args.db is not None:
        settings = settings.model_copy(update={"data_source": "sqlite", "training_db_path": args.db})

    configure_logging(args.log_level or settings.log_level)

    if args.date is None:
        args.date = date.today()
    if getattr(args, "days", 1) < 1:
        parser.error("--days must be at least 1")

    try:
        service = TrainingLoadService(create_data_source(settings), settings=settings)
        return asyncio.run(COMMANDS[args.command](args, service))
    except RunningCoachError as e:
        logger.error(f"{args.command} failed: {e.message}")
        console.print(f"[red]{e.message}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
