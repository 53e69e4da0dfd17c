# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
import uuid
from dataclasses import dataclass

# Root of the two-stage derivation; changing it changes every identifier in the store.
ROOT_NAMESPACE = uuid.UUID("c7091b73-48ed-46cc-b05d-088a23c79913")


def namespace_uuid(namespace: str) -> uuid.UUID:
    """Return the intermediate UUID shared by every entity of a document namespace."""
    return uuid.uuid5(ROOT_NAMESPACE, namespace)


def derive(namespace: str, local_id: str) -> uuid.UUID:
    """Derive the store identifier of ``local_id`` declared under ``namespace``.

    The identifier is a name-based (version 5) UUID of ``local_id`` inside the
    per-namespace UUID from :func:`namespace_uuid`, so the same pair always maps
    to the same value without any shared registry.

    Args:
        namespace (str): The SPDX document namespace.
        local_id (str): The SPDX identifier within that document.

    Returns:
        uuid.UUID: The derived identifier.
    """
    return uuid.uuid5(namespace_uuid(namespace), local_id)


@dataclass(frozen=True)
class Key:
    id: str
    namespace: str

    def __str__(self) -> str:
        return f"{self.namespace} / {self.id}"

    def to_uuid(self) -> uuid.UUID:
        return derive(self.namespace, self.id)
