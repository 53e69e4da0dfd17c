# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
import asyncio
import sys

import click
from loguru import logger

from sbomgraph.cmd.options import input_options, resolve_inputs
from sbomgraph.errors import SbomGraphError
from sbomgraph.pipeline import run
from sbomgraph.processors import DetectDuplicates


@click.command("duplicates")
@input_options
@click.option(
    "--output",
    type=click.File("w"),
    default=None,
    help="Also write the duplicate namespaces as JSON to this file.",
)
def duplicates(root, prefixes, suffix, output):
    """Report document namespaces declared by more than one file below ROOT."""
    root, suffix = resolve_inputs(root, suffix)
    detector = DetectDuplicates()

    try:
        asyncio.run(run(root, detector, prefixes, suffix))
    except SbomGraphError as err:
        logger.error(f"Reading SBOMs failed: {err}")
        sys.exit(1)

    detector.dump()
    if output:
        output.write(detector.report().to_json(indent=2))
