import tomllib
from pathlib import Path

import click
import pydantic

from singleton_deployer.config import Settings, load_config_from_file
from singleton_deployer.logging import set_verbose


@click.group()
@click.version_option(package_name="singleton-deployer")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read settings from a TOML file instead of the environment",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, *, verbose: bool) -> None:
    set_verbose(verbose=verbose)
    try:
        ctx.obj = Settings() if config_path is None else load_config_from_file(config_path)
    except (pydantic.ValidationError, tomllib.TOMLDecodeError) as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc


from . import allowlist, config, deploy  # noqa: F401, E402
