"""Command-line interface for the content classification engine using Typer and Rich."""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from content_sentinel.config.logging import configure_logging, get_logger
from content_sentinel.config.settings import settings
from content_sentinel.exceptions import SentinelError
from content_sentinel.pipeline import ModerationPipeline
from content_sentinel.schemas import (
    Author,
    ConsensusResult,
    Engagement,
    Platform,
    Submission,
    VerificationRecord,
)

__version__ = "0.1.0"

# Initialize CLI app
app = typer.Typer(
    help="Content Sentinel - hybrid harm classification and submission verification",
    add_completion=False,
)

# Initialize Rich console for output
console = Console()

logger = get_logger("cli")

RISK_STYLES = {
    "critical": "bold red",
    "high": "red",
    "medium": "yellow",
    "low": "green",
    "very_low": "bold green",
}


def _print_consensus(result: ConsensusResult) -> None:
    table = Table(title="Classification", show_header=True, header_style="bold magenta")
    table.add_column("Field", style="cyan", width=20)
    table.add_column("Value", style="yellow")

    table.add_row("Category", result.category.value)
    table.add_row("Confidence", f"{result.confidence * 100:.1f}%")
    score = result.sentiment.score
    table.add_row(
        "Sentiment",
        f"{result.sentiment.label.value} ({score:+.2f})" if score is not None else result.sentiment.label.value,
    )
    table.add_row("Toxicity", f"{result.toxicity.score * 100:.1f}%")
    table.add_row("Source", result.source)
    table.add_row("Sources", ", ".join(sorted(result.contributing_sources)))
    table.add_row("Keywords", ", ".join(result.keywords) or "-")
    if not result.agreement:
        table.add_row("Needs review", f"[red]yes[/red] - {result.disagreement_reason}")
    for error in result.provider_errors:
        table.add_row(f"Error: {error.provider}", f"[red]{error.reason}[/red]")
    if result.cancelled:
        table.add_row("Cancelled", "yes")

    console.print(table)


def _print_record(record: VerificationRecord) -> None:
    table = Table(title="Verification", show_header=True, header_style="bold magenta")
    table.add_column("Factor", style="cyan", width=22)
    table.add_column("Points", justify="right")
    table.add_column("Status", width=9)
    table.add_column("Reason", style="dim")

    for factor in record.score.factors:
        table.add_row(
            factor.name,
            f"{factor.points_awarded}/{factor.max_points}",
            factor.status.value,
            factor.reason or "",
        )
    console.print(table)

    risk = record.risk.risk_level.value
    console.print(Panel(
        f"Score: [bold]{record.score.total}[/bold]/100 ({record.score.level.value})\n"
        f"Risk: [{RISK_STYLES[risk]}]{risk}[/{RISK_STYLES[risk]}] (rule {record.risk.rule})",
        title="Result",
        border_style="green",
    ))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging before any command runs."""
    if verbose:
        configure_logging(level="DEBUG")


@app.command()
def classify(
    text: str = typer.Argument(..., help="Text to classify"),
    mode: Optional[str] = typer.Option(None, help="local_only, single_provider or combined"),
    provider: Optional[str] = typer.Option(None, help="Provider for single_provider mode"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
) -> None:
    """
    Classify a piece of text.

    Args:
        text: Text to classify
        mode: Consensus mode override
        provider: Provider override for single_provider mode
        as_json: Print JSON instead of a table
    """
    logger.info("Classify command invoked")

    async def _run() -> ConsensusResult:
        async with ModerationPipeline() as pipeline:
            return await pipeline.classify(text, mode=mode, provider=provider)

    try:
        result = asyncio.run(_run())
    except SentinelError as e:
        console.print(f"[red]✗[/red] Error: {e}")
        raise typer.Exit(1)

    if as_json:
        console.print_json(result.model_dump_json())
    else:
        _print_consensus(result)


@app.command()
def verify(
    content: str = typer.Argument(..., help="Post content"),
    platform: Platform = typer.Option(Platform.OTHER, help="Platform the post comes from"),
    url: Optional[str] = typer.Option(None, help="Original post URL"),
    username: str = typer.Option("", help="Author username"),
    profile_url: Optional[str] = typer.Option(None, help="Author profile URL"),
    verified: bool = typer.Option(False, "--verified", help="Author is verified"),
    likes: int = typer.Option(0, min=0),
    shares: int = typer.Option(0, min=0),
    comments: int = typer.Option(0, min=0),
    mode: Optional[str] = typer.Option(None, help="local_only, single_provider or combined"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
) -> None:
    """
    Classify a post and score its credibility.

    Fetches the original URL's page metadata when a URL is given.
    """
    logger.info("Verify command invoked")

    submission = Submission(
        content=content,
        platform=platform,
        original_url=url,
        author=Author(username=username, profile_url=profile_url, verified=verified),
        engagement=Engagement(likes=likes, shares=shares, comments=comments),
    )

    async def _run() -> tuple[ConsensusResult, VerificationRecord]:
        async with ModerationPipeline() as pipeline:
            return await pipeline.verify_submission(submission, mode=mode)

    try:
        consensus, record = asyncio.run(_run())
    except SentinelError as e:
        console.print(f"[red]✗[/red] Error: {e}")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps({
            "classification": consensus.model_dump(mode="json"),
            "verification": record.model_dump(mode="json"),
        }))
    else:
        _print_consensus(consensus)
        _print_record(record)


@app.command()
def status() -> None:
    """
    Display engine status and configuration.

    Shows the analysis mode, provider availability and logging settings.
    """
    logger.info("Displaying engine status")

    try:
        engine = ModerationPipeline().status()
    except SentinelError as e:
        console.print(f"[red]✗[/red] Configuration error: {e}")
        raise typer.Exit(1)

    table = Table(title="Content Sentinel Status", show_header=True, header_style="bold magenta")
    table.add_column("Component", style="cyan", width=20)
    table.add_column("Status", style="green", width=15)
    table.add_column("Details", style="yellow")

    table.add_row("Analysis mode", engine["mode"], f"priority: {', '.join(engine['priority'])}")
    for name, configured in engine["available_providers"].items():
        table.add_row(
            f"Provider: {name}",
            "✓ Configured" if configured else "⚠ Not Configured",
            "in combined set" if name in engine["providers"] else "",
        )
    table.add_row(
        "Timeouts",
        "✓ Active",
        f"provider {engine['provider_timeout']}s, deadline {engine['analysis_deadline']}s, "
        f"metadata {engine['metadata_timeout']}s",
    )
    table.add_row(
        "Selective external",
        "✓ Enabled" if engine["selective_external"] else "✗ Disabled",
        "short, unambiguous texts stay local",
    )
    table.add_row("Logging", "✓ Active", f"Level: {settings.log_level}, Format: {settings.log_format}")

    console.print(table)


@app.command()
def version() -> None:
    """Display version information."""
    console.print("[bold]Content Sentinel[/bold]")
    console.print(f"Version: {__version__}")


if __name__ == "__main__":
    app()
