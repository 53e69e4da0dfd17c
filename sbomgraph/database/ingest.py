# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import Any, Dict, List, Optional, Type

from loguru import logger
from spdx_tools.spdx.model.document import Document
from spdx_tools.spdx.model.package import Package
from sqlalchemy import create_engine, func, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool
from sqlalchemy.sql.dml import Insert

from sbomgraph.errors import IngestError
from sbomgraph.identity import Key
from sbomgraph.processors import Processor
from sbomgraph.relationships import canonicalize

from .schema import conflict_free_insert, create_schema, edges, packages, reset_schema, sboms


@dataclass
class IngestResult:
    key: Key
    inserted: bool = False
    packages: int = 0
    relationships: int = 0
    duplicate_relationships: int = 0


def external_refs(package: Package, reference_type: str) -> List[str]:
    return [
        ref.locator for ref in package.external_references if ref.reference_type == reference_type
    ]


def package_properties(package: Package) -> Dict[str, Any]:
    return {
        "name": package.name,
        "purls": external_refs(package, "purl"),
        "cpes": external_refs(package, "cpe22Type"),
    }


class Database(Processor):
    """Graph store for ingested SBOMs.

    Holds a single connection for its whole lifetime; every document is written
    in its own transaction, one after the other.

    Attributes:
        engine (Engine): The SQLAlchemy engine the connection was taken from.
        connection (Connection): The connection all transactions run on.
    """

    def __init__(self, engine: Engine, reset: bool = False) -> None:
        self.engine = engine
        try:
            self.connection: Connection = engine.connect()
            if reset:
                reset_schema(self.connection)
            else:
                create_schema(self.connection)
        except SQLAlchemyError as err:
            raise IngestError(f"initializing graph store {engine.url!r}") from err

    @classmethod
    def connect(cls, url: str, reset: bool = False) -> "Database":
        """Open the graph store at ``url``.

        Args:
            url (str): SQLAlchemy database URL (PostgreSQL or SQLite).
            reset (bool): Drop and recreate the tables first, discarding their contents.
        """
        if url.startswith("sqlite"):
            engine = create_engine(url)
        else:
            engine = create_engine(url, poolclass=NullPool)
        return cls(engine, reset=reset)

    def close(self) -> None:
        self.connection.close()
        self.engine.dispose()

    def __enter__(self) -> "Database":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> bool:
        self.close()
        return False

    async def process(self, path: Path, sbom: Document) -> None:
        self.ingest(sbom)

    def counts(self) -> Dict[str, int]:
        """Return the number of rows in each graph table."""
        result = {}
        for table in (sboms, packages, edges):
            query = select(func.count()).select_from(table)
            result[table.name] = self.connection.execute(query).scalar_one()
        # leave no transaction open between ingests
        self.connection.rollback()
        return result

    def _execute(self, statement: Insert, params: Dict[str, Any], what: str) -> int:
        try:
            return self.connection.execute(statement, params).rowcount
        except SQLAlchemyError as err:
            raise IngestError(what) from err

    def ingest(self, sbom: Document) -> IngestResult:
        """Write one SBOM with its packages and relationships in a single transaction.

        If the SBOM itself is already present, nothing is written: a document is
        only ever committed as a whole, so it is assumed to be complete. Packages
        and relationships that already exist are skipped.

        Args:
            sbom (Document): The parsed SPDX document.

        Returns:
            IngestResult: What was written.
        """
        logger.info(
            "Ingest - packages: {}, relationships: {}", len(sbom.packages), len(sbom.relationships)
        )

        namespace = sbom.creation_info.document_namespace
        key = Key(sbom.creation_info.spdx_id, namespace)
        result = IngestResult(key)

        try:
            tx = self.connection.begin()
        except SQLAlchemyError as err:
            raise IngestError(f"starting transaction for SBOM: {key}") from err

        with tx:
            # SBOM

            num = self._execute(
                conflict_free_insert(self.connection, sboms),
                {
                    "uid": key.to_uuid(),
                    "id": key.id,
                    "namespace": key.namespace,
                    "properties": {"name": sbom.creation_info.name},
                },
                f"inserting SBOM: {key}",
            )
            if num == 0:
                logger.warning(f"Duplicate SBOM: {key}")
                tx.rollback()
                return result
            result.inserted = True

            # packages

            stmt = conflict_free_insert(self.connection, packages)
            for package in sbom.packages:
                pkg_key = Key(package.spdx_id, namespace)
                result.packages += self._execute(
                    stmt,
                    {
                        "uid": pkg_key.to_uuid(),
                        "id": pkg_key.id,
                        "namespace": pkg_key.namespace,
                        "properties": package_properties(package),
                    },
                    f"inserting package: {pkg_key}",
                )

            # relationships

            stmt = conflict_free_insert(self.connection, edges)
            for rel in sbom.relationships:
                a, rel_type, b = canonicalize(
                    rel.spdx_element_id,
                    rel.relationship_type,
                    str(rel.related_spdx_element_id),
                )
                a = Key(a, namespace)
                b = Key(b, namespace)
                num = self._execute(
                    stmt,
                    {
                        "start_id": a.to_uuid(),
                        "end_id": b.to_uuid(),
                        "type": rel_type,
                        "properties": {},
                    },
                    f"inserting relationship: {a} -[{rel_type}]-> {b}",
                )
                if num == 0:
                    logger.warning(f"Duplicate package relation: {a} -[{rel_type}]-> {b}")
                    result.duplicate_relationships += 1
                else:
                    result.relationships += 1

            try:
                tx.commit()
            except SQLAlchemyError as err:
                raise IngestError(f"committing SBOM: {key}") from err

        return result
