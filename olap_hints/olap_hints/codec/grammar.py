"""Grammar of the OLAP metadata comment.

The carrier is a single block comment placed in front of a SQL statement::

    /*OLAP:user=admin;transaction=12345;*/ SELECT * FROM users

The body may contain any character except ``*``, so the comment can never
nest and always terminates at the first ``*/`` after the ``OLAP:`` marker.
The grammar is deliberately permissive: it does not validate the body's
``key=value`` structure, which is left to :func:`parse_metadata`.
"""

from __future__ import annotations

import re

COMMENT_PREFIX = "/*OLAP:"
COMMENT_SUFFIX = "*/"

# Separator between the closing ``*/`` and the wrapped statement.
SQL_SEPARATOR = " "

PAIR_SEPARATOR = ";"
KEY_VALUE_SEPARATOR = "="

# Any ``*`` inside the body ends it early for the parser.
COMMENT_TERMINATOR = "*"

METADATA_PATTERN: re.Pattern[str] = re.compile(r"/\*OLAP:([^*]*)\*/")

# Tokens that open, close or break a comment, for strip's linear scan.
STRIP_TOKEN_PATTERN: re.Pattern[str] = re.compile(r"/\*OLAP:|\*/?")
