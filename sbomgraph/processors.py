# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
import inspect
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Union

from dataclasses_json import dataclass_json
from loguru import logger
from spdx_tools.spdx.model.document import Document


class Processor(ABC):
    """Something that consumes parsed SBOMs, one at a time, in input order."""

    @abstractmethod
    async def process(self, path: Path, sbom: Document) -> None:
        """Handle one parsed SBOM read from ``path``.

        Raising aborts the whole run.
        """


@dataclass_json
@dataclass
class DuplicateReport:
    """Document namespaces declared by more than one input file."""

    duplicates: Dict[str, List[str]] = field(default_factory=dict)


class DetectDuplicates(Processor):
    """Records which input files declare each document namespace.

    The same logical document showing up under several file names is reported
    at the end of a run by :meth:`dump`.
    """

    def __init__(self) -> None:
        self.namespaces: Dict[str, List[Path]] = defaultdict(list)

    async def process(self, path: Path, sbom: Document) -> None:
        self.namespaces[sbom.creation_info.document_namespace].append(path)

    def duplicates(self) -> Dict[str, List[Path]]:
        return {ns: paths for ns, paths in self.namespaces.items() if len(paths) > 1}

    def report(self) -> DuplicateReport:
        return DuplicateReport(
            duplicates={
                ns: [path.as_posix() for path in paths] for ns, paths in self.duplicates().items()
            }
        )

    def dump(self) -> None:
        for namespace, paths in self.duplicates().items():
            logger.warning(f"Duplicates: {namespace}")
            for path in paths:
                logger.warning(f"    {path}")


class FunctionProcessor(Processor):
    """Adapts a plain function (or coroutine function) taking an SBOM into a Processor."""

    def __init__(self, func: Callable[[Document], Union[Any, Awaitable[Any]]]) -> None:
        self.func = func

    async def process(self, path: Path, sbom: Document) -> None:
        result = self.func(sbom)
        if inspect.isawaitable(result):
            await result
