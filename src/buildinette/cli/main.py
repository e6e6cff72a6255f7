from __future__ import annotations

import click
import typer
from typer.core import TyperCommand

from buildinette.common import LoggingConfig, create_logger, setup_cli_logging
from buildinette.config import FileConfigStore
from buildinette.settings import settings

from .commands import create as create_command

logger = create_logger("cli")


class CreateCommand(TyperCommand):
    """Reports argument errors (unknown flag, bad choice) with exit code 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.show()
            ctx.exit(1)


app = typer.Typer(
    help="Generate C/C++ project skeletons with an optional libft, MinilibX and git remote.",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)
app.command("create", cls=CreateCommand)(create_command.create)


def _setup_logging() -> None:
    # A broken config file is reported by the command itself
    config = FileConfigStore(settings.paths).load().unwrap_or(None)
    logging_config = config.logging if config else LoggingConfig()

    if logging_config.enabled:
        setup_cli_logging(app_info=settings.app, config=logging_config, paths=settings.paths)
        logger.debug("CLI logging initialized", config=logging_config.model_dump())


def main() -> None:
    """Entrypoint for the buildinette CLI."""
    _setup_logging()
    app()
