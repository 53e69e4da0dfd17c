# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT

import pytest
from spdx_tools.spdx.model.relationship import RelationshipType

from sbomgraph.relationships import CANONICAL_LABELS, RELATIONSHIP_TABLE, canonicalize

SYNONYM_PAIRS = [
    ("DESCRIBES", "DESCRIBED_BY"),
    ("CONTAINS", "CONTAINED_BY"),
    ("DEPENDS_ON", "DEPENDENCY_OF"),
    ("GENERATES", "GENERATED_FROM"),
    ("ANCESTOR_OF", "DESCENDANT_OF"),
    ("PREREQUISITE_FOR", "HAS_PREREQUISITE"),
]


@pytest.mark.parametrize("forward, inverse", SYNONYM_PAIRS)
def test_inverse_labels_collapse_to_one_edge(forward, inverse):
    expected = ("SPDXRef-a", forward, "SPDXRef-b")
    assert canonicalize("SPDXRef-a", forward, "SPDXRef-b") == expected
    assert canonicalize("SPDXRef-b", inverse, "SPDXRef-a") == expected


@pytest.mark.parametrize("label", sorted(RELATIONSHIP_TABLE))
def test_canonicalize_is_idempotent(label):
    once = canonicalize("SPDXRef-a", label, "SPDXRef-b")
    assert canonicalize(*once) == once


@pytest.mark.parametrize("rel_type", list(RelationshipType), ids=lambda t: t.name)
def test_every_spdx_relationship_type_is_known(rel_type):
    assert rel_type.name in RELATIONSHIP_TABLE
    _, label, _ = canonicalize("SPDXRef-a", rel_type, "SPDXRef-b")
    assert label in CANONICAL_LABELS


def test_relationship_type_and_name_agree():
    assert canonicalize("a", RelationshipType.CONTAINED_BY, "b") == canonicalize(
        "a", "CONTAINED_BY", "b"
    )


@pytest.mark.parametrize(
    "label", ["DYNAMIC_LINK", "BUILD_DEPENDENCY_OF", "PATCH_FOR", "VARIANT_OF", "OTHER"]
)
def test_labels_without_inverse_keep_direction(label):
    assert canonicalize("SPDXRef-a", label, "SPDXRef-b") == ("SPDXRef-a", label, "SPDXRef-b")


def test_inverse_labels_are_never_emitted():
    inverses = {inverse for _, inverse in SYNONYM_PAIRS}
    assert not inverses & CANONICAL_LABELS


def test_unknown_label_passes_through(log_messages):
    assert canonicalize("SPDXRef-a", "USES", "SPDXRef-b") == ("SPDXRef-a", "USES", "SPDXRef-b")
    assert any("Unknown relationship type" in m for m in log_messages)
