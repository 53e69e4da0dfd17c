# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
"""Canonical edge types for SPDX relationships.

SPDX lets a document state the same fact from either end ("A CONTAINS B" or
"B CONTAINED_BY A"). Every relationship label is mapped to one canonical label and
endpoint order here, so the graph holds a single edge per fact no matter which
direction the document used.
"""
from typing import Dict, FrozenSet, NamedTuple, Tuple, Union

from loguru import logger
from spdx_tools.spdx.model.relationship import RelationshipType


class Canonical(NamedTuple):
    label: str
    swap: bool


def _same(label: str) -> Tuple[str, Canonical]:
    return label, Canonical(label, False)


def _inverse(label: str, canonical: str) -> Tuple[str, Canonical]:
    return label, Canonical(canonical, True)


# Covers the full SPDX 2.3 vocabulary. Labels without an inverse keep their own
# name and direction.
RELATIONSHIP_TABLE: Dict[str, Canonical] = dict(
    [
        # inverse pairs
        _same("DESCRIBES"),
        _inverse("DESCRIBED_BY", "DESCRIBES"),
        _same("CONTAINS"),
        _inverse("CONTAINED_BY", "CONTAINS"),
        _same("DEPENDS_ON"),
        _inverse("DEPENDENCY_OF", "DEPENDS_ON"),
        _same("GENERATES"),
        _inverse("GENERATED_FROM", "GENERATES"),
        _same("ANCESTOR_OF"),
        _inverse("DESCENDANT_OF", "ANCESTOR_OF"),
        _same("PREREQUISITE_FOR"),
        _inverse("HAS_PREREQUISITE", "PREREQUISITE_FOR"),
        # dependency flavours
        _same("DEPENDENCY_MANIFEST_OF"),
        _same("BUILD_DEPENDENCY_OF"),
        _same("DEV_DEPENDENCY_OF"),
        _same("OPTIONAL_DEPENDENCY_OF"),
        _same("PROVIDED_DEPENDENCY_OF"),
        _same("TEST_DEPENDENCY_OF"),
        _same("RUNTIME_DEPENDENCY_OF"),
        # linking
        _same("DYNAMIC_LINK"),
        _same("STATIC_LINK"),
        # provenance and versioning
        _same("VARIANT_OF"),
        _same("COPY_OF"),
        _same("EXPANDED_FROM_ARCHIVE"),
        _same("DISTRIBUTION_ARTIFACT"),
        _same("PATCH_FOR"),
        _same("PATCH_APPLIED"),
        _same("AMENDS"),
        _same("FILE_ADDED"),
        _same("FILE_DELETED"),
        _same("FILE_MODIFIED"),
        # roles
        _same("EXAMPLE_OF"),
        _same("DATA_FILE_OF"),
        _same("TEST_CASE_OF"),
        _same("TEST_OF"),
        _same("TEST_TOOL_OF"),
        _same("BUILD_TOOL_OF"),
        _same("DEV_TOOL_OF"),
        _same("DOCUMENTATION_OF"),
        _same("OPTIONAL_COMPONENT_OF"),
        _same("METAFILE_OF"),
        _same("PACKAGE_OF"),
        _same("REQUIREMENT_DESCRIPTION_FOR"),
        _same("SPECIFICATION_FOR"),
        _same("OTHER"),
    ]
)

CANONICAL_LABELS: FrozenSet[str] = frozenset(c.label for c in RELATIONSHIP_TABLE.values())


def canonicalize(
    source_id: str, label: Union[str, RelationshipType], target_id: str
) -> Tuple[str, str, str]:
    """Map a raw relationship triple onto its canonical label and direction.

    Args:
        source_id (str): SPDX identifier of the element the relationship is declared on.
        label (Union[str, RelationshipType]): The relationship type as found in the document.
        target_id (str): SPDX identifier of the related element.

    Returns:
        Tuple[str, str, str]: ``(source, label, target)`` in canonical form. Unknown
        labels are returned unchanged.
    """
    if isinstance(label, RelationshipType):
        label = label.name

    canonical = RELATIONSHIP_TABLE.get(label)
    if canonical is None:
        logger.debug(f"Unknown relationship type, keeping as is: {label}")
        return source_id, label, target_id

    if canonical.swap:
        return target_id, canonical.label, source_id
    return source_id, canonical.label, target_id
