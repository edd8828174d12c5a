"""Embed and recover key/value metadata in a SQL comment prefix.

Three pure string transformations share the grammar in
:mod:`olap_hints.codec.grammar`:

* :func:`wrap_sql` prepends ``/*OLAP:k=v;...*/ `` to a statement.
* :func:`parse_metadata` reads the map back from the *first* comment.
* :func:`strip_metadata` removes *every* comment and trims the ends.

``parse_metadata`` and ``strip_metadata`` never raise.  ``wrap_sql`` is
total unless strict mode asks it to check the caller contract first.

The codec does not parse the SQL itself; the statement is treated as
opaque text.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from olap_hints.codec.grammar import (
    COMMENT_PREFIX,
    COMMENT_SUFFIX,
    COMMENT_TERMINATOR,
    KEY_VALUE_SEPARATOR,
    METADATA_PATTERN,
    PAIR_SEPARATOR,
    SQL_SEPARATOR,
    STRIP_TOKEN_PATTERN,
)
from olap_hints.codec.validator import assert_metadata_safe
from olap_hints.telemetry.profiling import profile_operation

logger = logging.getLogger(__name__)


class WrappedSQL(BaseModel):
    """A statement split into its clean SQL and the metadata it carried."""

    model_config = ConfigDict(frozen=True)

    sql: str = Field(description="The statement with every metadata comment removed.")
    metadata: dict[str, str] = Field(
        default_factory=dict,
        description="Metadata parsed from the first comment, empty if none.",
    )


@profile_operation("olap.wrap")
def wrap_sql(sql: str, metadata: Mapping[str, str], *, strict: bool = False) -> str:
    """Prepend a metadata comment to *sql*.

    Entries are emitted in the iteration order of *metadata*, each as
    ``key=value;``.  Keys and values are inserted verbatim; callers must keep
    them free of ``;``, ``=`` and ``*/``.

    Parameters
    ----------
    sql:
        The statement to wrap.  Treated as opaque text.
    metadata:
        Key/value hints to embed.  An empty mapping still produces a
        recognisable ``/*OLAP:*/`` prefix.
    strict:
        Check *metadata* with :func:`assert_metadata_safe` before wrapping.

    Returns
    -------
    str
        ``"/*OLAP:" + body + "*/ " + sql``.

    Raises
    ------
    MetadataValidationError
        Only in strict mode, when an entry would corrupt the comment.
    """
    if strict:
        assert_metadata_safe(metadata)

    body = "".join(f"{key}{KEY_VALUE_SEPARATOR}{value}{PAIR_SEPARATOR}" for key, value in metadata.items())
    return f"{COMMENT_PREFIX}{body}{COMMENT_SUFFIX}{SQL_SEPARATOR}{sql}"


@profile_operation("olap.parse")
def parse_metadata(sql: str) -> dict[str, str]:
    """Extract the metadata map from the first comment in *sql*.

    Segments that are blank, or that do not split on ``=`` into exactly two
    parts, are skipped.  Keys and values are whitespace-trimmed and later
    duplicates overwrite earlier ones.  Returns an empty dict when *sql*
    carries no comment.
    """
    match = METADATA_PATTERN.search(sql)
    if match is None:
        return {}

    metadata: dict[str, str] = {}
    for segment in match.group(1).split(PAIR_SEPARATOR):
        if not segment.strip():
            continue
        parts = segment.split(KEY_VALUE_SEPARATOR)
        if len(parts) != 2:
            logger.debug("Ignoring malformed metadata segment %r", segment)
            continue
        metadata[parts[0].strip()] = parts[1].strip()

    return metadata


@profile_operation("olap.strip")
def strip_metadata(sql: str) -> str:
    """Return *sql* with every metadata comment removed and its ends trimmed.

    Interior whitespace, including the separator that followed a removed
    comment in the middle of the text, is left as-is.  Deleting a comment can
    join its neighbours into a new one (``/*OLAP:/*OLAP:k=v*/*/``), so the
    result contains no comment at all, as if removal were repeated until
    nothing matched.

    A single left-to-right scan keeps the output offsets of the prefixes
    still open.  A ``*/`` closes the innermost one by truncating the output
    back to it; any other ``*`` ends every open body, which cannot hold one.
    """
    out: list[str] = []
    open_offsets: list[int] = []
    pos = 0
    while True:
        match = STRIP_TOKEN_PATTERN.search(sql, pos)
        if match is None:
            break
        out.append(sql[pos : match.start()])
        token = match.group()
        if token == COMMENT_PREFIX:
            open_offsets.append(len(out))
            out.append(token)
            pos = match.end()
        elif token == COMMENT_SUFFIX and open_offsets:
            del out[open_offsets.pop() :]
            pos = match.end()
        else:
            # A bare '*', or a '*/' with nothing open whose '/' may start a prefix.
            open_offsets.clear()
            out.append(COMMENT_TERMINATOR)
            pos = match.start() + 1
    out.append(sql[pos:])
    return "".join(out).strip()


def split_metadata(sql: str) -> WrappedSQL:
    """Parse and strip *sql* in one step."""
    return WrappedSQL(sql=strip_metadata(sql), metadata=parse_metadata(sql))
