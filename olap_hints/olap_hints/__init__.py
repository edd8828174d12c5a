"""Carry key/value hints through SQL text in an ``/*OLAP:...*/`` comment."""

from olap_hints.codec import (
    MetadataValidationError,
    MetadataViolation,
    WrappedSQL,
    assert_metadata_safe,
    check_metadata,
    parse_metadata,
    split_metadata,
    strip_metadata,
    wrap_sql,
)

__version__ = "0.1.0"

wrap = wrap_sql
parse = parse_metadata
strip = strip_metadata

__all__ = [
    "MetadataValidationError",
    "MetadataViolation",
    "WrappedSQL",
    "assert_metadata_safe",
    "check_metadata",
    "parse",
    "parse_metadata",
    "split_metadata",
    "strip",
    "strip_metadata",
    "wrap",
    "wrap_sql",
]
