# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from loguru import logger
from sqlalchemy import JSON, Column, MetaData, String, Table, UniqueConstraint, Uuid
from sqlalchemy.engine import Connection
from sqlalchemy.sql.dml import Insert

from sbomgraph.errors import IngestError

metadata = MetaData()

sboms = Table(
    "sboms",
    metadata,
    Column("uid", Uuid, primary_key=True),
    Column("id", String, nullable=False),
    Column("namespace", String, nullable=False),
    Column("properties", JSON, nullable=False),
)

packages = Table(
    "packages",
    metadata,
    Column("uid", Uuid, primary_key=True),
    Column("id", String, nullable=False),
    Column("namespace", String, nullable=False),
    Column("properties", JSON, nullable=False),
)

# Endpoints are derived identifiers and may name nodes that never get a row,
# so there are no foreign keys here.
edges = Table(
    "edges",
    metadata,
    Column("start_id", Uuid, nullable=False),
    Column("end_id", Uuid, nullable=False),
    Column("type", String, nullable=False),
    Column("properties", JSON, nullable=False),
    UniqueConstraint("start_id", "end_id", "type", name="edges_unique"),
)


def create_schema(connection: Connection) -> None:
    """Create any missing graph tables, leaving existing data alone."""
    with connection.begin():
        metadata.create_all(connection)


def reset_schema(connection: Connection) -> None:
    """Drop and recreate the graph tables, discarding everything ingested so far."""
    logger.warning("Resetting graph store schema")
    with connection.begin():
        metadata.drop_all(connection)
        metadata.create_all(connection)


def conflict_free_insert(connection: Connection, table: Table) -> Insert:
    """Build an INSERT for ``table`` that does nothing when a unique key already exists."""
    dialect = connection.dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise IngestError(f"Unsupported database dialect: {dialect}")
    return insert(table).on_conflict_do_nothing()
