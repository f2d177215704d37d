"""CLI interface for siteredirect.

Command-line tool for generating a redirect site from an existing
documentation project.
"""

import asyncio
import logging
import sys
from pathlib import Path

import click

from siteredirect.config import (
    DEFAULT_HOSTNAME,
    SITE_DIRNAME,
    AppConfig,
    RunConfig,
    load_user_config,
    resolve_app_config,
    resolve_cli_app_config,
    resolve_mode,
    resolve_user_config_conventional_path,
)
from siteredirect.core import lifecycle
from siteredirect.core.generator import generate_redirects
from siteredirect.core.site import SiteApp

REDIRECT_DIRNAME = "redirect"


class _EchoHandler(logging.Handler):
    """Log handler writing through click so output follows the current stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


class _RedirectGroup(click.Group):
    """Command group that treats an empty command name as a help request."""

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        if not cmd_name:
            return _empty_command
        return super().get_command(ctx, cmd_name)


def _print_root_help() -> None:
    click.echo(click.get_current_context().find_root().get_help())


_empty_command = click.Command("", callback=_print_root_help, hidden=True)


@click.group(cls=_RedirectGroup, invoke_without_command=True)
@click.version_option(package_name="siteredirect")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """siteredirect - Redirect every page of a site to a new host."""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("source_dir", required=False)
@click.option(
    "--hostname",
    default=DEFAULT_HOSTNAME,
    show_default=True,
    help="Hostname to redirect to (e.g., https://new.example.com/)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to config file (default: <source>/.vuepress/config.toml)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory (default: <source>/.vuepress/redirect)",
)
@click.option(
    "--cache",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory of the cache files (overrides config)",
)
@click.option(
    "--temp",
    "-t",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory of the temporary files (overrides config)",
)
@click.option(
    "--clean-cache",
    is_flag=True,
    help="Clean the cache files before generation",
)
@click.option(
    "--clean-temp",
    is_flag=True,
    help="Clean the temporary files before generation",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output (debug logging)",
)
@click.pass_context
def generate(
    ctx: click.Context,
    source_dir: str | None,
    hostname: str,
    config_path: Path | None,
    output: Path | None,
    cache: Path | None,
    temp: Path | None,
    clean_cache: bool,
    clean_temp: bool,
    verbose: bool,
) -> None:
    """Generate redirect site using the project under SOURCE_DIR."""
    if not source_dir:
        click.echo(ctx.get_help())
        return

    _configure_logging(verbose=verbose)

    try:
        asyncio.run(
            _generate(
                source_dir,
                hostname=hostname,
                config_path=config_path,
                output=output,
                cache=cache,
                temp=temp,
                clean_cache=clean_cache,
                clean_temp=clean_temp,
            ),
        )
    except Exception as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        if verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


async def _generate(
    source_dir: str,
    *,
    hostname: str,
    config_path: Path | None,
    output: Path | None,
    cache: Path | None,
    temp: Path | None,
    clean_cache: bool,
    clean_temp: bool,
) -> None:
    """Resolve configuration, prepare directories and write redirect pages."""
    cli_config = resolve_cli_app_config(source_dir, cache=cache, temp=temp)

    user_config_path = (
        config_path.resolve()
        if config_path is not None
        else resolve_user_config_conventional_path(cli_config.source)
    )
    user_config = load_user_config(user_config_path)

    app_config = resolve_app_config(cli=cli_config, user=user_config)
    if app_config is None:
        return

    run_config = RunConfig(
        hostname=hostname,
        output_folder=_resolve_output_folder(app_config, output),
        base=app_config.base,
        clean_cache=clean_cache,
        clean_temp=clean_temp,
        mode=resolve_mode(),
    )

    app = SiteApp(app_config, mode=run_config.mode)

    if run_config.clean_temp:
        click.echo("Cleaning temp...")
        await lifecycle.clean_temp(app)
    if run_config.clean_cache:
        click.echo("Cleaning cache...")
        await lifecycle.clean_cache(app)

    await lifecycle.empty_dir(run_config.output_folder, protected=[app.dir.source()])

    click.echo("Initializing site and preparing data...")
    await app.init()

    click.echo("Generating redirect pages...")
    tasks = await generate_redirects(app.pages, run_config)

    click.echo(
        click.style(
            f"Generated {len(tasks)} redirect pages in {run_config.output_folder}",
            fg="green",
        ),
    )


def _resolve_output_folder(app_config: AppConfig, output: Path | None) -> Path:
    """Resolve output folder against the working directory.

    Args:
        app_config: Resolved site configuration
        output: Explicit --output value, if any

    Returns:
        Absolute output folder
    """
    if output is not None:
        return Path.cwd() / output
    return app_config.source / SITE_DIRNAME / REDIRECT_DIRNAME


def _configure_logging(*, verbose: bool) -> None:
    package_logger = logging.getLogger("siteredirect")
    if not any(isinstance(h, _EchoHandler) for h in package_logger.handlers):
        handler = _EchoHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


if __name__ == "__main__":
    cli()
