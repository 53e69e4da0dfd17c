# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT

import bz2
import json
import sys

import pytest
from loguru import logger
from sqlalchemy import create_engine

from sbomgraph.configmanager import ConfigManager
from sbomgraph.database import Database
from sbomgraph.pipeline import parse_document

NAMESPACE = "https://example.com/spdx/helics-3.4.0"


def spdx_package(spdx_id, name, purls=(), cpes=(), license_declared="NOASSERTION"):
    refs = [
        {
            "referenceCategory": "PACKAGE-MANAGER",
            "referenceType": "purl",
            "referenceLocator": purl,
        }
        for purl in purls
    ]
    refs += [
        {
            "referenceCategory": "SECURITY",
            "referenceType": "cpe22Type",
            "referenceLocator": cpe,
        }
        for cpe in cpes
    ]
    package = {
        "SPDXID": spdx_id,
        "name": name,
        "downloadLocation": "NOASSERTION",
        "licenseDeclared": license_declared,
    }
    if refs:
        package["externalRefs"] = refs
    return package


def spdx_relationship(element, relationship_type, related):
    return {
        "spdxElementId": element,
        "relationshipType": relationship_type,
        "relatedSpdxElement": related,
    }


def spdx_document(namespace=NAMESPACE, name="helics", packages=(), relationships=()):
    return {
        "spdxVersion": "SPDX-2.3",
        "dataLicense": "CC0-1.0",
        "SPDXID": "SPDXRef-DOCUMENT",
        "name": name,
        "documentNamespace": namespace,
        "creationInfo": {
            "created": "2024-01-01T00:00:00Z",
            "creators": ["Tool: sbomgraph-tests"],
        },
        "packages": list(packages),
        "relationships": list(relationships),
    }


@pytest.fixture(name="helics_json")
def fixture_helics_json():
    """A small document: two packages, one of them with a purl and a cpe, and three relationships."""
    return spdx_document(
        packages=[
            spdx_package(
                "SPDXRef-helics",
                "helics",
                purls=["pkg:github/GMLC-TDC/HELICS@3.4.0"],
                cpes=["cpe:/a:gmlc:helics:3.4.0"],
                license_declared="BSD-3-Clause",
            ),
            spdx_package("SPDXRef-zeromq", "zeromq", license_declared="MPL-2.0"),
        ],
        relationships=[
            spdx_relationship("SPDXRef-DOCUMENT", "DESCRIBES", "SPDXRef-helics"),
            spdx_relationship("SPDXRef-helics", "DEPENDS_ON", "SPDXRef-zeromq"),
            spdx_relationship("SPDXRef-zeromq", "CONTAINED_BY", "SPDXRef-helics"),
        ],
    )


@pytest.fixture(name="helics_sbom")
def fixture_helics_sbom(helics_json):
    return parse_document(helics_json)


@pytest.fixture(name="write_sbom")
def fixture_write_sbom():
    """Write a JSON document as a bzip2 compressed file."""

    def write(path, document):
        path.parent.mkdir(parents=True, exist_ok=True)
        with bz2.open(path, "wt", encoding="utf-8") as f:
            json.dump(document, f)
        return path

    return write


@pytest.fixture(name="db")
def fixture_db():
    database = Database(create_engine("sqlite://"))
    yield database
    database.close()


@pytest.fixture(name="log_messages")
def fixture_log_messages():
    messages = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(name="isolated_config", autouse=True)
def fixture_isolated_config(tmp_path, monkeypatch):
    # keep a developer's own config file out of the tests
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    ConfigManager.delete_instance("sbomgraph")
    yield
    ConfigManager.delete_instance("sbomgraph")


@pytest.fixture(autouse=True)
def fixture_restore_logger():
    yield
    # CLI tests replace the stderr sink with one bound to a captured stream
    logger.remove()
    logger.add(sys.stderr)
