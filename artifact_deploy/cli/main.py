# artifact_deploy/cli/main.py
"""Main CLI entry point for artifact-deploy"""

import os
import sys
import logging
from pathlib import Path
from typing import Dict, Optional, Any

import click
from rich.logging import RichHandler

from ..__version__ import __version__
from ..api.deployer import Deployer
from ..constants import APP_NAME, ENV_LOG_LEVEL, LOG_FORMAT
from .utils.output import console

# Import all commands
from .commands import (
    deploy,
    status,
    prune,
    verify,
)


def setup_logging(verbose: bool = False, debug: bool = False, quiet: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
        quiet: Only show errors
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.getLevelName(os.environ.get(ENV_LOG_LEVEL, "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ]
    )
    logging.getLogger().setLevel(level)

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


class Context:
    """CLI context object

    Holds the global options; the configuration is only read when a
    command asks for a deployer.
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path
        self.verbose: bool = False
        self.debug: bool = False

    def create_deployer(self, overrides: Optional[Dict[str, Any]] = None) -> Deployer:
        """Load the configuration and build a deployer

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        return Deployer.from_config_file(self.config_path, overrides)


@click.group(name=APP_NAME)
@click.version_option(__version__, prog_name=APP_NAME)
@click.option('-c', '--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Configuration file (default: ./artifact-deploy.yaml)')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, config_path, verbose, debug, quiet):
    """Artifact Deploy - Versioned artifact releases

    Retrieves an artifact (http(s) URL, group:artifact:version[:ext]
    repository coordinate, or local file), installs it into
    releases/<version>, and points the current link at it. Content
    manifests detect drift; old releases are pruned.
    """
    setup_logging(verbose=verbose, debug=debug, quiet=quiet)

    ctx.obj = Context(config_path)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(deploy.deploy)
cli.add_command(status.status)
cli.add_command(prune.prune)
cli.add_command(verify.verify)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
