# Copyright 2023 Lawrence Livermore National Security, LLC
# See the top-level LICENSE file for details.
#
# SPDX-License-Identifier: MIT
from typing import Any, Dict

from loguru import logger
from spdx_tools.common.spdx_licensing import spdx_licensing

NOASSERTION = "NOASSERTION"

# Package fields holding a license expression that the SPDX model parser validates
LICENSE_FIELDS = ("licenseDeclared", "licenseConcluded")


def is_valid_expression(expression: str) -> bool:
    """Check a license expression against the grammar the SPDX parser enforces."""
    if expression.upper() in ("NOASSERTION", "NONE"):
        return True
    # besides ExpressionError, empty groups such as "()" fail with a bare IndexError
    try:
        return spdx_licensing.parse(expression) is not None
    except Exception as err:  # pylint: disable=broad-except
        logger.debug(f"Invalid SPDX license expression {expression!r}: {err}")
        return False


def fix_license(document: Dict[str, Any]) -> bool:
    """Replace invalid SPDX license expressions in a raw JSON document with NOASSERTION.

    This has to run on the JSON form, before it is parsed into the SPDX model,
    since the model parser rejects the whole document on a malformed expression.

    Args:
        document (Dict[str, Any]): The decoded SPDX JSON document; modified in place.

    Returns:
        bool: True if at least one expression was replaced.
    """
    changed = False
    packages = document.get("packages")
    if not isinstance(packages, list):
        return changed

    for package in packages:
        if not isinstance(package, dict):
            continue
        for field in LICENSE_FIELDS:
            expression = package.get(field)
            if isinstance(expression, str) and not is_valid_expression(expression):
                logger.debug(
                    "Replacing faulty SPDX license expression with NOASSERTION: {} in {}",
                    expression,
                    package.get("SPDXID"),
                )
                package[field] = NOASSERTION
                changed = True

    return changed
