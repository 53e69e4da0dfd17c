# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
import asyncio
import sys

import click
from loguru import logger

from sbomgraph.cmd.options import input_options, resolve_inputs
from sbomgraph.configmanager import ConfigManager
from sbomgraph.database import Database
from sbomgraph.errors import SbomGraphError
from sbomgraph.pipeline import run


@click.command("ingest")
@input_options
@click.option(
    "--database",
    envvar="DATABASE_URL",
    default=None,
    help="SQLAlchemy URL of the graph store. [default: [database] url from the config file, or a local PostgreSQL]",
)
@click.option(
    "--reset",
    is_flag=True,
    default=False,
    help="Drop and recreate the graph tables before ingesting, discarding their contents.",
)
def ingest(root, prefixes, suffix, database, reset):
    """Ingest the SPDX SBOMs found below ROOT into the graph store."""
    root, suffix = resolve_inputs(root, suffix)
    config = ConfigManager()
    if database is None:
        database = config.database_url()
    reset = reset or config.reset_on_start()

    try:
        with Database.connect(database, reset=reset) as db:
            count = asyncio.run(run(root, db, prefixes, suffix))
            counts = db.counts()
    except SbomGraphError as err:
        logger.error(f"Ingestion failed: {err}")
        sys.exit(1)

    logger.info(
        "Ingested {} files - sboms: {}, packages: {}, edges: {}",
        count,
        counts["sboms"],
        counts["packages"],
        counts["edges"],
    )
