"""
CLI for hookchain.

Commands:
    hookchain pre-commit     Run the configured pre-commit hooks
    hookchain pre-push       Run the configured pre-push hooks
    hookchain clang-format   Check staged files against clang-format
    hookchain install        Install git hook shims
    hookchain init           Initialize configuration
    hookchain status         Show configured hooks and tools
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from hookchain import __version__
from hookchain.config import CONFIG_FILE_NAME, HookchainConfig
from hookchain.dispatcher import Dispatcher, is_runnable
from hookchain.errors import HookchainError
from hookchain.formatting.check import FormatCheck
from hookchain.formatting.clang_format import find_executable
from hookchain.hooks.git import GitRepo
from hookchain.hooks.install import HOOK_COMMANDS, install_hook, uninstall_hook
from hookchain.models import HookEvent

console = Console(highlight=False)


def _load_config(ctx: click.Context) -> HookchainConfig:
    config_path = ctx.obj.get("config_path") if ctx.obj else None
    cfg = HookchainConfig.load(Path(config_path) if config_path else None)
    cfg.validate()
    return cfg


def _fail(error: Exception) -> None:
    console.print(f"[red]Error:[/red] {error}", soft_wrap=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="hookchain")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to config file",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: Optional[str]) -> None:
    """hookchain - Run chains of git hooks and check formatting."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def _dispatch(ctx: click.Context, event: HookEvent) -> None:
    try:
        cfg = _load_config(ctx)
        hooks_dir = Path(cfg.hooks_dir) if cfg.hooks_dir else GitRepo().hooks_dir()
    except HookchainError as e:
        _fail(e)
        return

    dispatcher = Dispatcher(
        event,
        cfg.hooks_for(event),
        hooks_dir,
        console=console,
        config_source=cfg.describe_source(),
    )
    result = dispatcher.run()
    sys.exit(result.exit_code)


@main.command("pre-commit")
@click.pass_context
def pre_commit(ctx: click.Context) -> None:
    """Run the configured pre-commit hooks in order."""
    _dispatch(ctx, HookEvent.PRE_COMMIT)


@main.command("pre-push")
@click.argument("git_args", nargs=-1)
@click.pass_context
def pre_push(ctx: click.Context, git_args: tuple[str, ...]) -> None:
    """Run the configured pre-push hooks in order.

    Git passes the remote name and URL; sub-hooks are run without them.
    """
    if git_args:
        logging.getLogger(__name__).debug(f"Ignoring pre-push arguments: {git_args}")
    _dispatch(ctx, HookEvent.PRE_PUSH)


@main.command("clang-format")
@click.pass_context
def clang_format(ctx: click.Context) -> None:
    """Check staged files against clang-format and offer to fix them."""
    try:
        cfg = _load_config(ctx)
        check = FormatCheck(cfg, GitRepo(), console=console)
        exit_code = check.run()
    except HookchainError as e:
        _fail(e)
        return
    sys.exit(exit_code)


@main.command()
@click.option(
    "--type",
    "-t",
    "hook_type",
    type=click.Choice(list(HOOK_COMMANDS)),
    default="pre-commit",
    help="Git hook type",
)
@click.option(
    "--uninstall",
    is_flag=True,
    help="Remove the git hook",
)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite an existing hook not installed by hookchain",
)
def install(hook_type: str, uninstall: bool, force: bool) -> None:
    """Install or remove git hook shims that run hookchain."""
    if uninstall:
        if uninstall_hook(hook_type):
            console.print(f"[green]✓[/green] Removed {hook_type} hook")
        else:
            console.print(f"[yellow]Hook not found:[/yellow] {hook_type}")
        return

    if install_hook(hook_type, force=force):
        console.print(f"[green]✓[/green] Installed {hook_type} hook")
        console.print(
            f"\nThe hook runs [bold]hookchain {HOOK_COMMANDS[hook_type]}[/bold].\n"
            f"List sub-hooks in [dim]{CONFIG_FILE_NAME}[/dim]."
        )
    else:
        console.print(
            "[red]Failed to install hook[/red] "
            "(not a git repository, or an existing hook would be overwritten; use --force)"
        )
        sys.exit(1)


@main.command()
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite existing configuration",
)
def init(force: bool) -> None:
    """Initialize hookchain configuration."""
    config_path = Path(CONFIG_FILE_NAME)

    if config_path.exists() and not force:
        console.print(
            f"[yellow]Configuration file already exists:[/yellow] {config_path}\n"
            "Use --force to overwrite."
        )
        sys.exit(1)

    # Create default config
    config = HookchainConfig(pre_commit_hooks=["pre-commit-clang-format"])
    config_path.write_text(config.to_toml())

    console.print(
        Panel(
            f"[green]✓[/green] Created configuration file: [bold]{config_path}[/bold]\n\n"
            "Next steps:\n"
            "1. Install the dispatcher: [dim]hookchain install --type pre-commit[/dim]\n"
            "2. Install sub-hooks: [dim]hookchain install --type pre-commit-clang-format[/dim]\n"
            "3. Add or reorder hooks in the config file",
            title="hookchain Initialized",
            border_style="green",
        )
    )


@main.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configured hooks and tool availability."""
    try:
        config = _load_config(ctx)
    except HookchainError as e:
        _fail(e)
        return

    hooks_dir: Optional[Path] = Path(config.hooks_dir) if config.hooks_dir else None
    if hooks_dir is None:
        try:
            hooks_dir = GitRepo().hooks_dir()
        except (HookchainError, FileNotFoundError):
            hooks_dir = None

    table = Table(title="hookchain Status")
    table.add_column("Event", style="cyan")
    table.add_column("Hook", style="white")
    table.add_column("Status", style="green")

    for event in HookEvent:
        hooks = config.hooks_for(event)
        if not hooks:
            table.add_row(event.value, "[dim]none configured[/dim]", "[yellow]○[/yellow]")
        for name in hooks:
            ok = hooks_dir is not None and is_runnable(hooks_dir / name)
            table.add_row(event.value, name, "✓" if ok else "[red]✗ missing[/red]")

    console.print(table)

    tools = Table(title="Tools")
    tools.add_column("Setting", style="cyan")
    tools.add_column("Value", style="white")
    tools.add_column("Status", style="green")

    tools.add_row("Config File", str(config.source) if config.source else "None (using defaults)",
                  "✓" if config.source else "[yellow]○[/yellow]")
    tools.add_row("Hooks Dir", str(hooks_dir) if hooks_dir else "Not in a git repository",
                  "✓" if hooks_dir else "[red]✗[/red]")

    clang = find_executable(config.clang_format, "clang-format")
    tools.add_row("clang-format", clang or "Not found", "✓" if clang else "[red]✗[/red]")

    color_diff = find_executable(config.color_diff, "colordiff")
    tools.add_row("colordiff", color_diff or "Not found (plain diff output)",
                  "✓" if color_diff else "[yellow]○[/yellow]")

    extensions = " ".join(config.file_extensions) if config.parse_extensions else "all files"
    tools.add_row("Checked Extensions", extensions, "✓")

    console.print()
    console.print(tools)


if __name__ == "__main__":
    main()
