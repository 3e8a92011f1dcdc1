"""Main CLI entry point for gitgym."""

import click
from pathlib import Path

from gitgym.adaptive import ProgressionEngine
from gitgym.config import (
    DEFAULT_CURRICULUM,
    HINT_AFTER_ATTEMPTS,
    WORKDIR_NAME,
    ConfigurationError,
    validate_config,
)
from gitgym.content import CurriculumSource, LevelLoader, LevelRunner
from gitgym.errors import GitGymError
from gitgym.profile import ProfileStore


class GitGymGroup(click.Group):
    """Click group that reports gitgym errors as plain CLI errors."""

    def invoke(self, ctx):
        try:
            return super().invoke(ctx)
        except GitGymError as e:
            raise click.ClickException(str(e)) from e


def in_game_dir() -> bool:
    return Path.cwd().name == WORKDIR_NAME


def ensure_game_dir():
    """Refuse to touch the working directory unless it is the game directory."""
    if not in_game_dir():
        raise click.ClickException(
            f"gitgym only runs inside a directory called {WORKDIR_NAME}. "
            f"Run 'gitgym play' to create it, then 'cd {WORKDIR_NAME}'."
        )


def load_engine(store: ProfileStore = None) -> tuple[ProgressionEngine, LevelLoader]:
    """Load the profile and wire up the progression engine."""
    store = store or ProfileStore()
    curriculum = CurriculumSource()
    engine = ProgressionEngine(store.load(), store, curriculum)
    return engine, LevelLoader(curriculum)


def show_level(engine: ProgressionEngine, level):
    """Print the level header and description."""
    levels = engine.profile.current_levels
    number = levels.index(level.name) if level.name in levels else "?"
    click.echo("*" * 60)
    click.echo(f"Name: {level.name}")
    click.echo(f"Level: {number}")
    click.echo(f"Difficulty: {'*' * level.difficulty}")
    click.echo()
    click.echo(level.description)
    click.echo("*" * 60)


def start_level(engine: ProgressionEngine, loader: LevelLoader, name: str):
    """Set up the working directory for a level and show it."""
    level = loader.load(engine.profile, name)
    if level is None:
        click.echo(f"Level does not exist: {name}", err=True)
        return None
    LevelRunner().setup(level)
    show_level(engine, level)
    return level


@click.group(cls=GitGymGroup)
def cli():
    """gitgym: learn git one level at a time."""
    pass


@cli.command()
def play():
    """Check your solution for the current level, or start the game."""
    if not in_game_dir():
        click.echo(f"gitgym plays inside a directory called {WORKDIR_NAME}.")
        if not click.confirm(f"Create ./{WORKDIR_NAME}?"):
            click.echo("Exiting.")
            return
        Path(WORKDIR_NAME).mkdir(exist_ok=True)
        click.echo(f"Created {WORKDIR_NAME}. Run 'cd {WORKDIR_NAME}' then 'gitgym play' to begin.")
        return

    for issue in validate_config():
        click.echo(f"  Warning: {issue}", err=True)

    engine, loader = load_engine()
    profile = engine.profile

    if profile.level is None:
        click.echo("Welcome to gitgym!")
        name = engine.advance()
        start_level(engine, loader, name)
        return

    level = loader.require(profile, profile.level)
    attempts = engine.record_attempt()

    if LevelRunner().solve(level):
        click.echo(click.style("Congratulations, you have solved the level!", fg="green", bold=True))
        name = engine.advance()
        if engine.is_finished():
            click.echo(click.style("You have completed every level. Well done!", fg="green"))
            return
        click.echo()
        start_level(engine, loader, name)
    else:
        click.echo(click.style("Sorry, this solution is not quite right!", fg="red"))
        if attempts >= HINT_AFTER_ATTEMPTS:
            click.echo(
                "Don't forget you can use 'gitgym hint' for a hint "
                "and 'gitgym reset' to start the level over."
            )


@cli.command()
def hint():
    """Show the next hint for the current level."""
    engine, loader = load_engine()
    profile = engine.profile

    if profile.level is None:
        click.echo("No level selected. Run 'gitgym play' to start.")
        return

    level = loader.require(profile, profile.level)
    text =engine.next_hint(level)
    if text:
        click.echo(text)


@cli.command()
@click.argument("level_name", required=False)
def reset(level_name):
    """Start the current level over, or jump to LEVEL_NAME.

    Example: gitgym reset add
    """
    ensure_game_dir()
    engine, loader = load_engine()
    profile = engine.profile

    if level_name:
        if not loader.exists(profile, level_name):
            click.echo(f"Level does not exist: {level_name}", err=True)
            return
        engine.set_level(level_name)

    if profile.level is None:
        click.echo("No level selected. Run 'gitgym play' to start.")
        return

    click.echo(f"Resetting level {profile.level}")
    start_level(engine, loader, profile.level)


@cli.command()
def levels():
    """List the levels of the current curriculum."""
    engine, _ = load_engine()
    profile = engine.profile

    if profile.current_levels:
        names = [name for name in profile.current_levels if name is not None]
    elif profile.folder:
        names = engine.curriculum.read_config(profile.folder)
    else:
        names = engine.curriculum.list()
    completed = set(profile.completed_levels)

    title = profile.folder or "built-in levels"
    click.echo(f"\n=== {title} ===\n")

    for number, name in enumerate(names, start=1):
        if name == profile.level:
            marker = click.style("->", fg="yellow", bold=True)
        elif name in completed:
            marker = click.style("ok", fg="green")
        else:
            marker = "  "
        click.echo(f"  {marker} {number:>2}. {name}")


@cli.command()
def status():
    """Show the current level and overall progress."""
    engine, loader = load_engine()
    info = engine.status()

    click.echo("\n=== gitgym Status ===\n")
    click.echo(f"Curriculum: {info['folder'] or 'built-in levels'}")

    if info["level"] is None:
        click.echo("No level selected. Run 'gitgym play' to start.")
        return

    click.echo(f"Current level: {info['level']}")
    click.echo(f"Attempts on this level: {info['attempts']}")
    if info["total"]:
        click.echo(f"Completed: {info['completed']} / {info['total']}")

    if info["finished"]:
        click.echo("\nAll levels completed!")
        return

    level = loader.require(engine.profile, info["level"])
    click.echo()
    show_level(engine, level)


@cli.command()
@click.argument("folder")
def curriculum(folder):
    """Play the levels in FOLDER, or 'default' for the built-in levels.

    FOLDER must contain a 'config' file listing one level name per line.
    """
    ensure_game_dir()
    engine, loader = load_engine()
    engine.set_curriculum(folder)

    if folder == DEFAULT_CURRICULUM:
        click.echo("Switched to the built-in levels.")
        start_level(engine, loader, engine.profile.level)
    else:
        count = len(engine.profile.current_levels) - 1
        click.echo(f"Switched to {folder} ({count} levels). Run 'gitgym play' to start.")


@cli.command()
@click.option("--strict", is_flag=True, help="Fail if git is not installed")
def doctor(strict):
    """Check that gitgym is set up correctly."""
    try:
        issues = validate_config(require_git=strict)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    if not issues:
        click.echo("All checks passed.")
        return
    for issue in issues:
        click.echo(f"  Warning: {issue}", err=True)


if __name__ == "__main__":
    cli()
