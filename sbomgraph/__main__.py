# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
import importlib.metadata
import sys

import click
from loguru import logger

from sbomgraph.cmd.duplicates import duplicates
from sbomgraph.cmd.ingest import ingest


@click.group()
@click.version_option(
    importlib.metadata.version("sbomgraph"),
    "--version",
    "-v",
    message="%(version)s",
)
@click.option(
    "--log-level",
    type=click.Choice(
        ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
        case_sensitive=False,
    ),
    default="INFO",
)
def main(log_level="INFO"):
    # loguru has no way to change a sink's level; replace the sink instead
    logger.remove()
    logger.add(sys.stderr, level=log_level.upper())


@click.command("version")
def version():
    """Print version information."""
    click.echo(importlib.metadata.version("sbomgraph"))
    sys.exit(0)


main.add_command(ingest)
main.add_command(duplicates)
main.add_command(version)


if __name__ == "__main__":
    main()
