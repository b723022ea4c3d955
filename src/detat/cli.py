import logging
import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from detat.config import CONFIG_ENV_VAR, DetatConfig, load_config_file
from detat.detection import DetectorName
from detat.errors import ConfigError
from detat.runner import Detat
from detat.transcode import Trap

LOG_LEVEL_ENV_VAR = "DETAT_LOG_LEVEL"

app = typer.Typer(help="cat with charset detection: print inputs of unknown encoding as UTF-8.")
console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if not value:
        return
    try:
        current = version("detat")
    except PackageNotFoundError:
        current = "unknown"
    typer.echo(f"detat {current}")
    raise typer.Exit()


def setup_logging(verbose: int) -> None:
    """Route log records to stderr through rich; -v is INFO, -vv is DEBUG."""
    if verbose >= 2:
        level: int | str = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
        if not isinstance(logging.getLevelName(level), int):
            raise typer.BadParameter(f"Unknown log level '{level}' in {LOG_LEVEL_ENV_VAR}.")
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@app.command()
def main(
    paths: list[str] | None = typer.Argument(
        None, metavar="[PATH]...", help="Input files. None, '-' or '' reads stdin."
    ),
    confidence_min: float | None = typer.Option(
        None,
        "--confidence-min",
        "-c",
        help="Fail if detected confidence is less than this (chardet detector only).",
    ),
    fallback: str | None = typer.Option(
        None,
        "--fallback",
        "-f",
        metavar="ENCODING",
        help="Use this encoding if detected confidence is too low.",
    ),
    json_lines: bool = typer.Option(False, "--json", "-j", help="Show results in a JSON Lines format."),
    stat: bool = typer.Option(False, "--stat", "-s", help="Show statistics instead of content."),
    allow_binary: bool = typer.Option(
        False, "--allow-binary", "-b", help="Print a binary input as it is."
    ),
    trap: Trap | None = typer.Option(
        None,
        "--trap",
        "-t",
        case_sensitive=False,
        help="Decode error handler: strict | replace | ignore (chardet detector only).",
    ),
    detector: DetectorName | None = typer.Option(
        None, "--detector", "-d", case_sensitive=False, help="Charset detection backend."
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config",
        envvar=CONFIG_ENV_VAR,
        help="YAML or JSON file with default options; flags override it.",
    ),
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="Log more (repeatable)."),
    show_version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Detect the charset of each input and write it out as UTF-8."""
    setup_logging(verbose)
    try:
        base = load_config_file(config_file) if config_file else DetatConfig()
        config = base.merged(
            confidence_min=confidence_min,
            fallback=fallback,
            json=json_lines,
            stat=stat,
            allow_binary=allow_binary,
            trap=trap,
            detector=detector,
        ).validate()
    except ConfigError as exc:
        raise typer.BadParameter(str(exc)) from exc

    status = Detat(config).run_all(paths or [])
    raise typer.Exit(code=status)


if __name__ == "__main__":
    app()
