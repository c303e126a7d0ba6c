"""
Up-front validation of schema documents.

Malformed documents are rejected before any inference happens, using the
meta-schema of the draft the document declares.
"""

from __future__ import annotations

import logging
from typing import Any

from jsonschema import Draft201909Validator, Draft202012Validator
from jsonschema.validators import validator_for

logger = logging.getLogger(__name__)

DRAFT_2020_12_PREFIX = "https://json-schema.org/draft/2020-12/schema"


def select_validator(schema: Any) -> type:
    """
    Pick the validator class matching the declared `$schema`.

    Args:
        schema: The schema document

    Returns:
        A jsonschema validator class (draft 2019-09 when undeclared)
    """
    schema_version = schema.get("$schema") if isinstance(schema, dict) else None
    if isinstance(schema_version, str) and schema_version.startswith(DRAFT_2020_12_PREFIX):
        return Draft202012Validator
    return validator_for(schema, default=Draft201909Validator)


def check_schema(schema: Any) -> None:
    """
    Check a document against its meta-schema.

    Raises:
        jsonschema.exceptions.SchemaError: If the document is not a valid schema
    """
    validator_class = select_validator(schema)
    logger.debug("Checking schema with %s", validator_class.__name__)
    validator_class.check_schema(schema)
