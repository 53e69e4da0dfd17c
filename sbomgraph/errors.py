# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT


class SbomGraphError(Exception):
    """Base class for errors that abort an sbomgraph run.

    The message names what was being processed (a file path or a Key); the
    underlying exception is kept as ``__cause__`` and appended when printed.
    """

    def __str__(self) -> str:
        message = super().__str__()
        if self.__cause__ is not None:
            return f"{message}: {self.__cause__}"
        return message


class ParseError(SbomGraphError):
    """Decompressing, parsing or caching an input document failed."""


class IngestError(SbomGraphError):
    """Writing a document into the graph store failed."""
