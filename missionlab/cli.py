"""Command-line interface for MissionLab."""

import random
import sys
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import StudioConfig, config
from .rendering import PdfTrajectoryRenderer
from .studio import MissionBriefing, MissionStudio, UploadResult

LOG_FORMAT = "<green>{time:HH:mm:ss}</green> | {level} | {message}"

# Configure logger
logger.remove()  # Remove default handler
logger.add(sys.stderr, format=LOG_FORMAT, level="INFO")

app = typer.Typer(
    help="MissionLab: physics learning missions and projectile simulation",
    rich_markup_mode="rich",
)
console = Console()


def _set_verbose(verbose: bool) -> None:
    if verbose:
        logger.remove()
        logger.add(sys.stderr, format=LOG_FORMAT, level="DEBUG")


def _print_upload(result: UploadResult) -> None:
    color = "green" if result.ok else "red"
    console.print(f"[{color}]{result.title}:[/] {escape(result.message)}")
    for issue in result.issues:
        console.print(f"  [yellow]•[/] {escape(str(issue))}")


def _load_packs(
    studio: MissionStudio, packs: Optional[List[Path]], key: Optional[str]
) -> None:
    """Upload each ``--pack`` file before the command runs; exit on failure."""
    for pack in packs or []:
        result = studio.upload_content_pack_file(key, pack)
        if not result.ok:
            _print_upload(result)
            raise typer.Exit(1)
        names = ", ".join(result.merged) or "no topics"
        console.print(f"✓ Loaded [cyan]{escape(names)}[/]")


def _settings_with_samples(samples: Optional[int]) -> StudioConfig:
    """Global settings, or a copy with ``SAMPLE_COUNT`` replaced."""
    if samples is None:
        return config

    overrides = config.to_dict()
    overrides["simulation"] = {**overrides["simulation"], "SAMPLE_COUNT": samples}
    settings = StudioConfig.from_dict(overrides)
    settings.admin = config.admin
    return settings


def _print_briefing(briefing: MissionBriefing) -> None:
    console.print(f"\n[bold]{escape(briefing.title)}[/]")
    console.print(f"[bold]AI Plan:[/] {escape(briefing.mission)}")
    console.print(f"[bold]Your Prompt:[/] {escape(briefing.prompt)}")
    console.print(f"[bold]Flow:[/] {briefing.flow}\n")
    for line in briefing.quiz_lines:
        console.print(escape(line))


PACK_OPTION = typer.Option(
    None, "--pack", "-p", help="Content pack JSON to load first (repeatable)"
)
KEY_OPTION = typer.Option(None, "--key", "-k", help="Admin key for --pack uploads")
VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable verbose output")


@app.command(name="mission")
def generate_mission(
    prompt: str = typer.Argument("", help="Free-text request, e.g. 'heat engines'"),
    pack: Optional[List[Path]] = PACK_OPTION,
    key: Optional[str] = KEY_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Resolve a prompt to a topic and show its mission."""
    _set_verbose(verbose)
    studio = MissionStudio()
    _load_packs(studio, pack, key)
    _print_briefing(studio.generate_mission(prompt))


@app.command()
def surprise(
    seed: Optional[int] = typer.Option(
        None, "--seed", help="Random seed for a reproducible pick"
    ),
    pack: Optional[List[Path]] = PACK_OPTION,
    key: Optional[str] = KEY_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """Show the mission for a randomly chosen topic."""
    _set_verbose(verbose)
    studio = MissionStudio(rng=random.Random(seed))
    _load_packs(studio, pack, key)
    _print_briefing(studio.surprise_mission())


@app.command()
def topics(
    pack: Optional[List[Path]] = PACK_OPTION,
    key: Optional[str] = KEY_OPTION,
    verbose: bool = VERBOSE_OPTION,
):
    """List catalog topics."""
    _set_verbose(verbose)
    studio = MissionStudio()
    _load_packs(studio, pack, key)

    table = Table(title="Available Topics")
    table.add_column("Topic", style="cyan")
    table.add_column("Questions", justify="right")
    table.add_column("Mission")

    for topic in studio.catalog.keys():
        spec = studio.catalog[topic]
        default = " [dim](default)[/]" if topic == studio.catalog.default_topic else ""
        table.add_row(
            escape(topic) + default, str(len(spec.challenge)), escape(spec.mission)
        )

    console.print(table)


@app.command()
def upload(
    pack_file: Path = typer.Argument(..., help="Content pack JSON file"),
    key: str = typer.Option(..., "--key", "-k", help="Admin key"),
    verbose: bool = VERBOSE_OPTION,
):
    """Validate and merge a content pack, then report the merged topics."""
    _set_verbose(verbose)
    studio = MissionStudio()
    result = studio.upload_content_pack_file(key, pack_file)
    _print_upload(result)
    if not result.ok:
        raise typer.Exit(1)


@app.command()
def simulate(
    angle: Optional[float] = typer.Option(
        None, "--angle", "-a", help="Launch angle (°)"
    ),
    speed: Optional[float] = typer.Option(None, "--speed", "-s", help="Speed (m/s)"),
    gravity: Optional[float] = typer.Option(
        None, "--gravity", "-g", help="Gravity (m/s²)"
    ),
    pdf: Optional[Path] = typer.Option(
        None, "--pdf", help="Draw the trajectory to this PDF file"
    ),
    samples: Optional[int] = typer.Option(
        None, "--samples", "-n", help="Number of time steps in the sampled path"
    ),
    points: int = typer.Option(
        0, "--points", help="Print this many evenly spaced pixel points"
    ),
    verbose: bool = VERBOSE_OPTION,
):
    """Run the projectile simulation for one set of launch parameters."""
    _set_verbose(verbose)
    try:
        settings = _settings_with_samples(samples)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    renderer = PdfTrajectoryRenderer(pdf) if pdf is not None else None
    studio = MissionStudio(renderer=renderer, settings=settings)

    defaults = studio.settings.simulation
    frame = studio.update_simulation(
        defaults.DEFAULT_ANGLE_DEG if angle is None else angle,
        defaults.DEFAULT_SPEED_M_S if speed is None else speed,
        defaults.DEFAULT_GRAVITY_M_S2 if gravity is None else gravity,
    )

    console.print(" | ".join(frame.labels))
    if not frame.ok:
        console.print(f"[red]Error:[/] {frame.error}")
        raise typer.Exit(1)

    for line in frame.readout:
        console.print(line)

    if points > 0:
        path_points = frame.path.points
        step = max(1, (len(path_points) - 1) // max(points - 1, 1))
        table = Table(title="Pixel Path")
        table.add_column("#", justify="right")
        table.add_column("px", justify="right", style="green")
        table.add_column("py", justify="right", style="yellow")
        for index in range(0, len(path_points), step):
            px, py = path_points[index]
            table.add_row(str(index), f"{px:.1f}", f"{py:.1f}")
        console.print(table)

    if pdf is not None:
        console.print(f"\nTrajectory drawn to [blue]{pdf}[/]")
