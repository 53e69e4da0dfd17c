# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
import asyncio
import bz2
import json
import os
import pathlib
from typing import Any, Dict, Iterator, Sequence

from loguru import logger
from spdx_tools.spdx.model.document import Document
from spdx_tools.spdx.parser.error import SPDXParsingError
from spdx_tools.spdx.parser.jsonlikedict.json_like_dict_parser import JsonLikeDictParser
from spdx_tools.spdx.writer.json.json_writer import write_document_to_stream

from sbomgraph.errors import ParseError
from sbomgraph.license import fix_license
from sbomgraph.processors import Processor

DEFAULT_SUFFIX = ".bz2"
PROCESSED_SUFFIX = ".processed"
TMP_SUFFIX = ".tmp"


def accepted(path: pathlib.Path, prefixes: Sequence[str]) -> bool:
    """Check a file name against the prefix filter; an empty filter accepts everything."""
    if not prefixes:
        return True
    return any(path.name.startswith(prefix) for prefix in prefixes)


def _walk_error(err: OSError) -> None:
    raise ParseError(f"reading input directory {err.filename}") from err


def find_inputs(
    root: pathlib.Path, prefixes: Sequence[str] = (), suffix: str = DEFAULT_SUFFIX
) -> Iterator[pathlib.Path]:
    """Yield the compressed SBOMs below ``root``, in a stable order.

    Args:
        root (pathlib.Path): Directory to search recursively.
        prefixes (Sequence[str]): Only accept file names starting with one of these.
        suffix (str): Extension a file must have to be considered.

    Raises:
        ParseError: If ``root`` or a directory below it cannot be listed.
    """
    for cdir, dirs, files in os.walk(root, onerror=_walk_error):
        dirs.sort()
        for name in sorted(files):
            if not name.endswith(suffix):
                continue
            path = pathlib.Path(cdir) / name
            if accepted(path, prefixes):
                yield path


def cache_path(path: pathlib.Path) -> pathlib.Path:
    return path.with_name(path.name + PROCESSED_SUFFIX)


def decompress(path: pathlib.Path) -> Dict[str, Any]:
    """Read a bzip2 compressed JSON document."""
    try:
        with bz2.open(path, "rt", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, EOFError, ValueError) as err:
        raise ParseError(f"decompressing {path}") from err
    if not isinstance(data, dict):
        raise ParseError(f"decompressing {path}: not a JSON object")
    return data


def parse_document(data: Dict[str, Any], source: Any = "<memory>") -> Document:
    """Parse a decoded SPDX JSON document into the SPDX model."""
    try:
        return JsonLikeDictParser().parse(data)
    except SPDXParsingError as err:
        raise ParseError(f"parsing {source}: {'; '.join(err.get_messages())}") from err


def read_cache(processed: pathlib.Path) -> Document:
    try:
        with open(processed, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as err:
        raise ParseError(f"reading cache file {processed}") from err
    if not isinstance(data, dict):
        raise ParseError(f"reading cache file {processed}: not a JSON object")
    return parse_document(data, processed)


def write_cache(sbom: Document, processed: pathlib.Path) -> None:
    """Store the parsed SBOM as ``processed``, never leaving a partial file under that name."""
    tmp = processed.with_name(processed.name[: -len(PROCESSED_SUFFIX)] + TMP_SUFFIX)
    try:
        with open(tmp, "w", encoding="utf-8") as f:
            write_document_to_stream(sbom, f, validate=False)
        os.replace(tmp, processed)
    except (OSError, ValueError, TypeError) as err:
        raise ParseError(f"writing cache file {processed}") from err


def load_sbom(path: pathlib.Path) -> Document:
    """Load an SBOM, using the sibling ``.processed`` cache when there is one.

    On a cache miss the file is decompressed, invalid license expressions are
    replaced and the parsed result is written to the cache.

    Args:
        path (pathlib.Path): The compressed SPDX JSON file.

    Returns:
        Document: The parsed SBOM.
    """
    processed = cache_path(path)
    if processed.exists():
        return read_cache(processed)

    logger.info(f"Processing: {path}")

    data = decompress(path)
    fix_license(data)
    sbom = parse_document(data, path)
    write_cache(sbom, processed)
    return sbom


async def process(path: pathlib.Path, processor: Processor) -> None:
    logger.info(f"Parsing: {path}")

    sbom = await asyncio.to_thread(load_sbom, path)

    logger.info(
        f"Processing SBOM: {sbom.creation_info.name} / {sbom.creation_info.document_namespace}"
    )

    await processor.process(path, sbom)


async def run(
    root: pathlib.Path,
    processor: Processor,
    prefixes: Sequence[str] = (),
    suffix: str = DEFAULT_SUFFIX,
) -> int:
    """Feed every input SBOM below ``root`` to ``processor``, one after the other.

    Returns:
        int: The number of files processed.
    """
    count = 0
    for path in find_inputs(root, prefixes, suffix):
        await process(path, processor)
        count += 1
    return count
