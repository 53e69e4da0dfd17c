# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from .identity import Key, derive
from .relationships import canonicalize

__all__ = ["Key", "derive", "canonicalize"]
