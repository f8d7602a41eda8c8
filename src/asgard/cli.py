"""CLI interface for Asgard."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from asgard.core.launcher import Launcher
from asgard.errors import AsgardError, CorruptDataError, LaunchError, NotFoundError
from asgard.host import PromptDirectoryChooser, SubprocessRunner, parse_command
from asgard.models.registry_view import RegistryView
from asgard.models.script_file import ScriptFile
from asgard.settings import RUNNER_KEY, Settings
from asgard.storage import ClickStore
from asgard.utils import pluralize


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _report_error(exc: AsgardError) -> None:
    message = str(exc)
    if isinstance(exc, CorruptDataError):
        message += " (run 'asgard reset' to start over)"
    click.echo(f"  {click.style('✗', fg='red')} {message}", err=True)


def _build_launcher() -> Launcher:
    settings = Settings()
    return Launcher(
        preferences=settings,
        chooser=PromptDirectoryChooser(),
        runner=SubprocessRunner(parse_command(settings.get(RUNNER_KEY))),
        store=ClickStore(),
        on_error=_report_error,
    )


def _require_folder(launcher: Launcher) -> None:
    if launcher.folder is None:
        click.echo("No script folder set. Use 'asgard folder PATH' or 'asgard folder --choose'.", err=True)
        sys.exit(1)


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
def main(verbose: int) -> None:
    """Asgard: launch your scripts, most used first."""
    _setup_logging(verbose)


# ── list ─────────────────────────────────────────────────────────────────

@main.command("list")
@click.argument("query", required=False)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(query: str | None, as_json: bool) -> None:
    """List scripts, favorites first. QUERY filters by name."""
    launcher = _build_launcher()
    _require_folder(launcher)
    view = launcher.refresh(query)
    if launcher.last_error is not None and not len(launcher.registry.view):
        sys.exit(1)
    clicks = launcher.registry.clicks

    if as_json:
        def _entries(scripts: tuple[ScriptFile, ...]) -> list[dict]:
            return [
                {"name": s.name, "path": str(s.path), "clicks": clicks.get(s.name, 0)}
                for s in scripts
            ]

        click.echo(json.dumps({
            "favorites": _entries(view.favorites),
            "standard": _entries(view.standard),
        }, indent=2))
        return

    if not len(view):
        click.echo("No scripts found." if not query else f"No scripts match '{query}'.")
        return

    if view.favorites:
        click.echo(f"\n  {click.style('Favorites', fg='blue', bold=True)}")
        for script in view.favorites:
            _format_script(launcher, script, view, clicks.get(script.name, 0))
    if view.standard:
        click.echo(f"\n  {click.style('Scripts', fg='blue', bold=True)}")
        for script in view.standard:
            _format_script(launcher, script, view, clicks.get(script.name, 0))
    click.echo()


def _format_script(launcher: Launcher, script: ScriptFile, view: RegistryView, count: int) -> None:
    label = launcher.format_entry(script, view)
    tag = click.style(f" ({pluralize(count, 'run')})", fg="bright_black") if count else ""
    click.echo(f"    {click.style(label, fg='cyan', bold=view.is_favorite(script))}{tag}")
    click.echo(f"      {click.style(str(script.path), fg='bright_black')}")


# ── run ──────────────────────────────────────────────────────────────────

@main.command()
@click.argument("target")
def run(target: str) -> None:
    """Run a script by name or path and count the launch."""
    launcher = _build_launcher()
    script = _resolve_script(launcher, target)
    try:
        launcher.launch(script)
    except (NotFoundError, LaunchError) as exc:
        _report_error(exc)
        sys.exit(1)


def _resolve_script(launcher: Launcher, target: str) -> ScriptFile:
    """Find the script a user meant, by display name first, then by path."""
    view = launcher.refresh()
    matches = view.find(target)
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        click.echo(f"'{target}' is ambiguous, it matches {pluralize(len(matches), 'script')}:", err=True)
        for script in matches:
            click.echo(f"  {script.path}", err=True)
        click.echo("Run it by path instead.", err=True)
        sys.exit(1)

    path = Path(target).expanduser()
    if path.is_file():
        path = path.resolve()
        for script in view.scripts:
            if script.path.resolve() == path:
                return script
        extension = launcher.extension
        name = path.name[: -len(extension)] if path.name.endswith(extension) else path.stem
        return ScriptFile(name=name, path=path)

    click.echo(f"No script named '{target}'.", err=True)
    sys.exit(1)


# ── folder ───────────────────────────────────────────────────────────────

@main.command()
@click.argument("path", required=False)
@click.option("--choose", is_flag=True, help="Pick the folder interactively")
def folder(path: str | None, choose: bool) -> None:
    """Show or set the script folder."""
    launcher = _build_launcher()

    if choose:
        selected = launcher.choose_folder()
        if selected is None:
            click.echo("No folder selected.")
        else:
            click.echo(f"Script folder set to {selected}")
        return

    if path is None:
        current = launcher.folder
        click.echo(str(current) if current else "No script folder set.")
        return

    try:
        selected = launcher.set_folder(path)
    except NotFoundError as exc:
        _report_error(exc)
        sys.exit(1)
    click.echo(f"Script folder set to {selected}")


# ── marker ───────────────────────────────────────────────────────────────

@main.command()
@click.argument("value", required=False)
def marker(value: str | None) -> None:
    """Show or set the marker shown before favorites."""
    launcher = _build_launcher()
    if value is None:
        click.echo(launcher.marker)
        return
    launcher.set_marker(value)
    click.echo(f"Favorites marker set to '{value}'")


# ── stats ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(as_json: bool) -> None:
    """Show recorded launches and the current favorite threshold."""
    launcher = _build_launcher()
    try:
        data = launcher.stats()
    except CorruptDataError as exc:
        _report_error(exc)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    threshold = data["threshold"]
    click.echo(f"\n  Percentile:  {data['percentile']:.2f}")
    click.echo(f"  Threshold:   {threshold if threshold is not None else 'n/a (no launches yet)'}")
    if data["clicks"]:
        click.echo("\n  Launches:")
        for name, count in data["clicks"].items():
            star = click.style(f"{launcher.marker} ", fg="yellow") if threshold is not None and count >= threshold else "  "
            click.echo(f"    {star}{name:30s} {count:>6,}")
    click.echo()


# ── reset ────────────────────────────────────────────────────────────────

@main.command()
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def reset(yes: bool) -> None:
    """Forget all recorded launches."""
    if not yes and not click.confirm("Clear all recorded launches?", default=False):
        click.echo("Aborted.")
        return
    launcher = _build_launcher()
    try:
        launcher.reset_clicks()
    except AsgardError as exc:
        _report_error(exc)
        sys.exit(1)
    click.echo("Launch counts cleared.")
