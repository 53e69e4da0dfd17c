# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT

from setuptools import find_packages, setup

setup(
    name="sbomgraph",
    version="0.1.0",
    description="Ingest SPDX SBOMs into a deterministic property graph stored in a relational database",
    python_requires=">=3.9",
    packages=find_packages(include=["sbomgraph", "sbomgraph.*"]),
    install_requires=[
        "click>=8.0",  # Command line interface
        "loguru",  # Logging
        "spdx-tools>=0.8",  # SPDX model, JSON parser and writer
        "SQLAlchemy>=2.0",  # Graph store schema and transactions
        "dataclasses-json",  # Duplicate report serialization
        "tomlkit",  # Configuration file
    ],
    extras_require={
        "postgres": [
            "psycopg[binary]>=3.1",  # Driver for the default PostgreSQL store
        ],
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "sbomgraph=sbomgraph.__main__:main",
        ],
    },
)
