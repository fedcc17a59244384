import asyncio
import sys
from pathlib import Path
from typing import NoReturn, get_args

import click
from rich.console import Console
from rich.markup import escape

from skill_creator.config import ArchiverKind, Config, load_config
from skill_creator.constant import VERSION
from skill_creator.exception import ConfigError, PackageError, ScaffoldError

console = Console(soft_wrap=True, highlight=False, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)


def _collect_log_levels(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> dict[str, str]:
    """Turn repeated `-L [MODULE=]LEVEL` values into `{logger name: level}`."""
    from skill_creator.utils.logging import level_no, qualify_module

    levels: dict[str, str] = {}
    for value in values:
        module, sep, level = value.rpartition("=")
        if sep and not module.strip():
            raise click.BadParameter(f"missing module before '=' in {value!r}", ctx, param)
        try:
            level_no(level)
        except ValueError as e:
            raise click.BadParameter(str(e), ctx, param) from e
        levels[qualify_module(module)] = level.strip()
    return levels


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
@click.version_option(VERSION)
@click.option(
    "--verbose",
    is_flag=True,
    default=False,
    help="Echo log records to stderr. Default: no.",
)
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Log debug information. Default: no.",
)
@click.option(
    "--log-level",
    "-L",
    "log_levels",
    multiple=True,
    callback=_collect_log_levels,
    help=(
        "Set a log level, repeatable. `packager=DEBUG` targets one module "
        "(`skill_creator.` may be omitted); a bare `LEVEL` sets the default."
    ),
)
@click.option(
    "--config-file",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, path_type=Path),
    default=None,
    help="Configuration file to load. Default: config.toml in the share directory.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    debug: bool,
    log_levels: dict[str, str],
    config_file: Path | None,
):
    """Scaffold, validate and package agent skills."""
    from skill_creator.share import get_share_dir
    from skill_creator.utils.logging import configure_file_logging, qualify_module

    try:
        config = load_config(config_file)
    except ConfigError as e:
        raise click.BadParameter(e.message, param_hint="--config-file") from e

    merged_levels = {qualify_module(k): v for k, v in config.logging.levels.items()}
    merged_levels.update(log_levels)
    base_level = "TRACE" if debug else "INFO"
    console_level = None
    if verbose:
        console_level = "DEBUG" if debug else "INFO"
    try:
        configure_file_logging(
            get_share_dir() / "logs" / "skill-creator.log",
            base_level=base_level,
            module_levels=merged_levels,
            console_level=console_level,
        )
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--config-file") from exc

    ctx.obj = config


def _get_config(ctx: click.Context) -> Config:
    # Standalone entry points run without the group, so no config was loaded yet
    if isinstance(ctx.obj, Config):
        return ctx.obj
    try:
        return load_config()
    except ConfigError as e:
        raise click.ClickException(e.message) from e


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]❌ {escape(message)}[/red]")
    sys.exit(1)


@cli.command("init")
@click.argument("skill_name")
@click.option(
    "--path",
    "-p",
    "path",
    required=True,
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    help="Directory in which the skill directory is created.",
)
def init_command(skill_name: str, path: Path):
    """Create a new skill named SKILL_NAME from the template."""
    from skill_creator.scaffold import init_skill

    console.print(f"🚀 Initializing skill: {escape(skill_name)}")
    console.print(f"   Location: {escape(str(path))}\n")
    try:
        skill_dir = asyncio.run(init_skill(skill_name, path))
    except ScaffoldError as e:
        _fail(f"Error: {e.message}")

    console.print(
        f"✅ Skill '{escape(skill_name)}' initialized successfully at {escape(str(skill_dir))}"
    )
    console.print("\nNext steps:")
    console.print("1. Edit SKILL.md to complete the TODO items and update the description")
    console.print("2. Customize or delete the example files in scripts/, references/, and assets/")
    console.print("3. Run the validator when ready to check the skill structure")


@cli.command("validate")
@click.argument(
    "skill_dir",
    type=click.Path(path_type=Path),
)
def validate_command(skill_dir: Path):
    """Validate the SKILL.md of the skill in SKILL_DIR."""
    from skill_creator.validator import validate_skill

    result = asyncio.run(validate_skill(skill_dir))
    if not result.valid:
        _fail(result.message)
    console.print(f"✅ {escape(result.message)}")


@cli.command("package")
@click.argument(
    "skill_dir",
    type=click.Path(path_type=Path),
)
@click.argument(
    "output_dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    required=False,
)
@click.option(
    "--archiver",
    "archiver_kind",
    type=click.Choice(get_args(ArchiverKind)),
    default=None,
    help="Archiver to use. Default: `archiver` from the config file (builtin).",
)
@click.pass_context
def package_command(
    ctx: click.Context,
    skill_dir: Path,
    output_dir: Path | None,
    archiver_kind: ArchiverKind | None,
):
    """Validate SKILL_DIR and package it into OUTPUT_DIR/<name>.skill."""
    from skill_creator.archiver import get_archiver
    from skill_creator.packager import package_skill

    archiver = get_archiver(archiver_kind or _get_config(ctx).archiver)

    console.print(f"📦 Packaging skill: {escape(str(skill_dir))}")
    if output_dir is not None:
        console.print(f"   Output directory: {escape(str(output_dir))}")
    try:
        artifact = asyncio.run(package_skill(skill_dir, output_dir, archiver=archiver))
    except PackageError as e:
        _fail(e.message)

    console.print(f"✅ Successfully packaged skill to: {escape(str(artifact))}")


def main():
    cli()


def init_skill_main():
    init_command(prog_name="init-skill")


def quick_validate_main():
    validate_command(prog_name="quick-validate")


def package_skill_main():
    package_command(prog_name="package-skill")


if __name__ == "__main__":
    main()
