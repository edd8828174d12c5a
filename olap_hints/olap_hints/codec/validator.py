"""Caller-contract checks for metadata maps.

:func:`wrap_sql` inserts keys and values verbatim.  Content containing the
grammar's delimiters yields a comment that :func:`parse_metadata` reads back
differently, or not at all.  These helpers let callers detect that before the
statement leaves the process.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping

from pydantic import BaseModel, Field

from olap_hints.codec.grammar import (
    COMMENT_TERMINATOR,
    KEY_VALUE_SEPARATOR,
    PAIR_SEPARATOR,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ViolationKind(str, enum.Enum):
    """Ways a metadata entry can break the comment grammar."""

    EMPTY_KEY = "EMPTY_KEY"
    PAIR_SEPARATOR = "PAIR_SEPARATOR"
    KEY_VALUE_SEPARATOR = "KEY_VALUE_SEPARATOR"
    COMMENT_TERMINATOR = "COMMENT_TERMINATOR"
    SURROUNDING_WHITESPACE = "SURROUNDING_WHITESPACE"


class EntryField(str, enum.Enum):
    KEY = "key"
    VALUE = "value"


_FORBIDDEN: tuple[tuple[str, ViolationKind], ...] = (
    (PAIR_SEPARATOR, ViolationKind.PAIR_SEPARATOR),
    (KEY_VALUE_SEPARATOR, ViolationKind.KEY_VALUE_SEPARATOR),
    (COMMENT_TERMINATOR, ViolationKind.COMMENT_TERMINATOR),
)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class MetadataViolation(BaseModel):
    """A single metadata entry that would not survive a wrap/parse round-trip."""

    key: str = Field(description="The offending entry's key, as given.")
    field: EntryField = Field(description="Whether the key or the value is at fault.")
    kind: ViolationKind = Field(description="Which grammar rule is broken.")
    description: str = Field(description="Human-readable explanation.")


# ---------------------------------------------------------------------------
# Exception
# ---------------------------------------------------------------------------


class MetadataValidationError(ValueError):
    """Raised when metadata cannot be embedded without corrupting the comment."""

    def __init__(self, violations: list[MetadataViolation]) -> None:
        self.violations = violations
        summary = "; ".join(v.description for v in violations)
        super().__init__(f"Metadata violates comment grammar: {summary}")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def check_metadata(metadata: Mapping[str, str]) -> list[MetadataViolation]:
    """Return every grammar violation in *metadata*.

    An empty list means :func:`parse_metadata` will recover the mapping
    exactly from the output of :func:`wrap_sql`.
    """
    violations: list[MetadataViolation] = []

    for key, value in metadata.items():
        if not key.strip():
            violations.append(
                MetadataViolation(
                    key=key,
                    field=EntryField.KEY,
                    kind=ViolationKind.EMPTY_KEY,
                    description=f"Key {key!r} is empty after trimming",
                )
            )

        for entry_field, text in ((EntryField.KEY, key), (EntryField.VALUE, value)):
            # A blank key is already reported as EMPTY_KEY.
            blank_key = entry_field is EntryField.KEY and not key.strip()
            if text != text.strip() and not blank_key:
                violations.append(
                    MetadataViolation(
                        key=key,
                        field=entry_field,
                        kind=ViolationKind.SURROUNDING_WHITESPACE,
                        description=f"{entry_field.value.capitalize()} of {key!r} has leading or trailing whitespace",
                    )
                )
            for token, kind in _FORBIDDEN:
                if token in text:
                    violations.append(
                        MetadataViolation(
                            key=key,
                            field=entry_field,
                            kind=kind,
                            description=f"{entry_field.value.capitalize()} of {key!r} contains {token!r}",
                        )
                    )

    return violations


def assert_metadata_safe(metadata: Mapping[str, str]) -> None:
    """Raise :class:`MetadataValidationError` if *metadata* has any violation."""
    violations = check_metadata(metadata)
    if not violations:
        return

    for violation in violations:
        logger.warning(
            "Metadata violation [%s] on %s of %r: %s",
            violation.kind.value,
            violation.field.value,
            violation.key,
            violation.description,
        )
    raise MetadataValidationError(violations)
