"""CLI module for vidprobe."""

import logging
import sys
from pathlib import Path

import click

from vidprobe.cli.exit_codes import ExitCode
from vidprobe.config import ConfigError, build_logging_config, get_config
from vidprobe.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="vidprobe")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to config file (default: ~/.vidprobe/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """vidprobe - Extract media metadata from ffmpeg banner output."""
    ctx.ensure_object(dict)

    try:
        config = get_config(config_path=config_path)
        logging_config = build_logging_config(
            config.logging,
            level=log_level.lower() if log_level else None,
            file=log_file,
            format="json" if log_json else None,
        )
    except ConfigError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    configure_logging(logging_config)
    logger.debug(
        "Settings: log_level=%s, log_format=%s, acceptance=%s",
        logging_config.level,
        logging_config.format,
        config.playback.acceptance,
    )
    ctx.obj["config"] = config


def _register_commands() -> None:
    from vidprobe.cli.parse import parse_command

    main.add_command(parse_command)


_register_commands()
