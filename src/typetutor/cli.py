"""CLI entry point for TypeTutor."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from typetutor.config.settings import Settings


def _load_engine(settings, store):
    """Rebuild the engine from the persisted level and recent history."""
    from typetutor.engine.adaptive import AdaptiveDifficultyEngine

    engine = AdaptiveDifficultyEngine(store.get_level() or settings.starting_level)
    for session in store.recent_sessions(AdaptiveDifficultyEngine.HISTORY_LIMIT):
        engine.add_session(session)
    return engine


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding config.yaml and the session history.",
)
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None) -> None:
    """TypeTutor: adaptive typing practice for programmers."""
    from typetutor.state.history import SessionStore

    settings = Settings.load(data_dir)
    logging.basicConfig(
        level=settings.get_log_level(),
        format="%(levelname)-5s [%(name)s] %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["store"] = SessionStore(db_path=settings.history_path)


@main.command()
@click.pass_context
def levels(ctx: click.Context) -> None:
    """List the difficulty levels."""
    from typetutor.engine.levels import DIFFICULTY_LEVELS

    current = ctx.obj["store"].get_level() or ctx.obj["settings"].starting_level
    for level in DIFFICULTY_LEVELS:
        marker = "*" if level.id == current else " "
        click.echo(
            f"{marker} {level.id}: {level.name} "
            f"({level.target_wpm} WPM, {level.target_accuracy}% accuracy, "
            f"{level.session_duration} min)"
        )


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show the current level, phase and coaching tips."""
    store = ctx.obj["store"]
    engine = _load_engine(ctx.obj["settings"], store)
    level = engine.get_current_level()
    phase = engine.get_progression_phase()

    click.echo(f"Level: {level.id} ({level.name})")
    if phase is not None:
        click.echo(f"Phase {phase.phase}: {phase.name}, goal {phase.goals.wpm} WPM at {phase.goals.accuracy}%")
    click.echo(f"Sessions recorded: {store.count()}")
    for tip in engine.get_recommendations():
        click.echo(f"  - {tip}")


@main.command()
@click.option("--level", "level_id", default=None, help="Level id to practice (defaults to the current level).")
@click.pass_context
def practice(ctx: click.Context, level_id: str | None) -> None:
    """Print practice text aimed at recent mistakes."""
    from typetutor.engine.levels import get_level
    from typetutor.engine.stats import error_patterns

    engine = _load_engine(ctx.obj["settings"], ctx.obj["store"])
    if level_id is None:
        level = engine.get_current_level()
    else:
        level = get_level(level_id)
        if level is None:
            raise click.BadParameter(f"Unknown level: {level_id}", param_hint="--level")

    click.echo(engine.generate_adaptive_text(level, error_patterns(engine.history)))


@main.command()
@click.argument("session_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def record(ctx: click.Context, session_file: Path) -> None:
    """Record a completed session from a JSON or YAML file.

    Documents without a ``target_wpm`` get the configured practice target.
    """
    import yaml

    from typetutor.engine.session import PerformanceSession

    settings: Settings = ctx.obj["settings"]
    store = ctx.obj["store"]
    try:
        with open(session_file) as f:
            document = yaml.safe_load(f) or {}
        if isinstance(document, dict):
            document.setdefault("target_wpm", settings.practice.target_wpm)
        session = PerformanceSession.from_dict(document)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Could not parse {session_file}: {e}")
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise click.ClickException(f"Invalid session document {session_file}: {e}")

    engine = _load_engine(settings, store)
    previous = engine.get_current_level()
    engine.add_session(session)
    store.save_session(session)

    level = engine.update_current_level()
    store.set_level(level.id)
    if level.id != previous.id:
        click.echo(f"Level changed: {previous.id} -> {level.id}")
    else:
        click.echo(f"Level unchanged: {level.id}")


@main.command()
@click.confirmation_option(prompt="Delete all recorded sessions?")
@click.pass_context
def reset(ctx: click.Context) -> None:
    """Clear recorded history and the stored level."""
    ctx.obj["store"].clear()
    click.echo("History cleared.")
