# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from .ingest import Database, IngestResult
from .schema import create_schema, edges, metadata, packages, reset_schema, sboms

__all__ = [
    "Database",
    "IngestResult",
    "create_schema",
    "reset_schema",
    "metadata",
    "sboms",
    "packages",
    "edges",
]
