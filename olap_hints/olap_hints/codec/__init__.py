"""OLAP metadata comment codec."""

from olap_hints.codec.grammar import (
    COMMENT_PREFIX,
    COMMENT_SUFFIX,
    METADATA_PATTERN,
)
from olap_hints.codec.metadata_codec import (
    WrappedSQL,
    parse_metadata,
    split_metadata,
    strip_metadata,
    wrap_sql,
)
from olap_hints.codec.validator import (
    MetadataValidationError,
    MetadataViolation,
    ViolationKind,
    assert_metadata_safe,
    check_metadata,
)

__all__ = [
    "COMMENT_PREFIX",
    "COMMENT_SUFFIX",
    "METADATA_PATTERN",
    "MetadataValidationError",
    "MetadataViolation",
    "ViolationKind",
    "WrappedSQL",
    "assert_metadata_safe",
    "check_metadata",
    "parse_metadata",
    "split_metadata",
    "strip_metadata",
    "wrap_sql",
]
