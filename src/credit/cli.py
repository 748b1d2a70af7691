"""CLI entry point using Click."""

from __future__ import annotations

import logging
import os
import re
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import NoReturn

import click

from credit.config import LOG_FILE, get_config_dir, load_config
from credit.logs import setup_logging

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class _DefaultGroup(click.Group):
    """Insert 'run' when the first arg is not a registered subcommand."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.no_args_is_help = False  # bare `credit` also routes to run

    def invoke(self, ctx):
        # nothing left after group options: run with defaults
        if not ctx._protected_args and not ctx.args:
            ctx._protected_args = ["run"]
        return super().invoke(ctx)

    def resolve_command(self, ctx, args):
        cmd_name = args[0] if args else None
        if cmd_name and cmd_name in self.commands:
            return super().resolve_command(ctx, args)
        return super().resolve_command(ctx, ["run"] + list(args))


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


def _valid_date(value: str) -> bool:
    """True if *value* is a zero-padded YYYY-MM-DD calendar date."""
    if not DATE_PATTERN.fullmatch(value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def _resolve_token(token_env: str) -> str:
    token = os.environ.get(token_env) or os.environ.get("GITHUB_TOKEN")
    if token:
        return token
    return click.prompt(
        "Please enter your github token",
        hide_input=True,
        default="",
        show_default=False,
    ).strip()


@click.group(cls=_DefaultGroup, context_settings={"ignore_unknown_options": True})
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Level written to the log file in the config directory",
)
@click.version_option(package_name="credit")
@click.pass_context
def main(ctx, log_level: str) -> None:
    """credit - export merged PRs and closed issues to a Jira-importable CSV."""
    ctx.ensure_object(dict)
    config_dir = get_config_dir()
    ctx.obj["config_dir"] = config_dir
    setup_logging(config_dir / LOG_FILE, log_level)


@main.command()
@click.argument("user", required=False)
@click.option(
    "--from",
    "-f",
    "from_date",
    default=None,
    metavar="YYYY-MM-DD",
    help="Start date for items to export (default: 90 days ago)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="CSV file to write (default: issues.csv)",
)
@click.option("--no-color", is_flag=True, help="Disable color output")
@click.pass_context
def run(ctx, user: str | None, from_date: str | None, output: str | None, no_color: bool) -> None:
    """Fetch USER's merged PRs and closed issues, edit them, write a CSV."""
    from credit.app import CreditApp
    from credit.editor import build_editor
    from credit.export import export_csv
    from credit.github import GitHubClient, GitHubError
    from credit.models import items_from_records
    from credit.store import ConstructionError
    from credit.theme import load_theme

    config_dir: Path = ctx.obj["config_dir"]
    config = load_config(config_dir)

    if from_date is not None:
        if not _valid_date(from_date):
            _fail("invalid date format for --from, please use YYYY-MM-DD")
    else:
        from_date = (date.today() - timedelta(days=config.days)).strftime(DATE_FORMAT)

    if not user:
        user = click.prompt("Please enter a user to export issues for").strip()
    if not user:
        _fail("a user is required")

    token = _resolve_token(config.token_env)
    if not token:
        _fail(f"no GitHub token; set {config.token_env}")

    theme = load_theme(config_dir)
    client = GitHubClient(token, api_url=config.api_url)
    try:
        prs, issues = client.fetch_work(user, from_date)
    except GitHubError as e:
        logger.error("Fetch failed: %s", e)
        _fail(str(e))

    try:
        state = build_editor(
            items_from_records(prs, issues),
            theme=theme,
            list_weight=config.list_weight,
            editor_weight=config.editor_weight,
        )
    except ConstructionError as e:
        logger.error("Editor construction failed: %s", e)
        _fail(f"{e} for {user} since {from_date}")

    app = CreditApp(state, user=user, no_color=no_color)
    items = app.run()
    if app.return_code:
        raise SystemExit(1)
    if items is None:
        items = state.store.items()

    output_path = Path(output or config.output)
    count = export_csv(items, user, output_path)
    click.echo(f"Wrote {count} items to {output_path}")


@main.command("init")
@click.pass_context
def init_cmd(ctx) -> None:
    """Write a default config.toml to the config directory."""
    from credit.config import CONFIG_FILE, save_config
    from credit.models import ProjectConfig

    config_dir: Path = ctx.obj["config_dir"]
    if (config_dir / CONFIG_FILE).exists():
        click.echo(f"Already exists: {config_dir / CONFIG_FILE}", err=True)
        raise SystemExit(1)
    dest = save_config(config_dir, ProjectConfig())
    click.echo(f"Created {dest}")


@main.command("init-theme")
@click.pass_context
def init_theme_cmd(ctx) -> None:
    """Copy the default theme to theme.yaml in the config directory for customization."""
    from credit.theme import init_theme

    config_dir: Path = ctx.obj["config_dir"]
    try:
        dest = init_theme(config_dir)
    except FileExistsError as e:
        click.echo(f"Already exists: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"Created {dest}")
