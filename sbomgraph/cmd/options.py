# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
import pathlib
from typing import Optional, Tuple

import click

from sbomgraph.configmanager import ConfigManager


def split_prefixes(ctx, param, values) -> Tuple[str, ...]:
    """Accept both repeated ``--prefix`` options and comma separated lists (as in PREFIXES)."""
    if not values:
        return ()
    return tuple(prefix for value in values for prefix in value.split(",") if prefix)


def input_options(func):
    """Options shared by every command that walks a directory of SBOMs."""
    func = click.option(
        "--suffix",
        default=None,
        help="Extension of the files to read. [default: .bz2, or [ingest] suffix from the config file]",
    )(func)
    func = click.option(
        "--prefix",
        "-p",
        "prefixes",
        multiple=True,
        envvar="PREFIXES",
        callback=split_prefixes,
        help="Only read files whose name starts with PREFIX; repeatable or comma separated. Reads all files when not given.",
    )(func)
    func = click.argument(
        "root",
        envvar="ROOT_DIR",
        required=False,
        type=click.Path(exists=True, file_okay=False, path_type=pathlib.Path),
    )(func)
    return func


def resolve_inputs(
    root: Optional[pathlib.Path], suffix: Optional[str]
) -> Tuple[pathlib.Path, str]:
    config = ConfigManager()
    if root is None:
        root = pathlib.Path(config.input_root())
    if suffix is None:
        suffix = config.input_suffix()
    return root, suffix
