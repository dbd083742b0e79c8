"""
Script splitting helpers: `GO` batches, single statements, identifiers.
"""
from __future__ import annotations
import re

import sqlparse

BATCH_SEPARATOR = re.compile(r"^\s*GO\s*$", re.MULTILINE | re.IGNORECASE)


def split_batches(sql: str) -> list[str]:
    """
    Split *sql* on lines consisting solely of ``GO`` and return the
    non‑blank batches in order.  Batches are returned as written.
    """
    return [b for b in BATCH_SEPARATOR.split(sql) if b.strip()]


def split_statements(batch: str) -> list[str]:
    """
    Split one batch into individual statements **safely** (aware of
    literals, comments, etc.).
    """
    return [s.strip() for s in sqlparse.split(batch) if s.strip()]


def quote_name(name: str) -> str:
    """Backtick‑quote an identifier for interpolation into DDL."""
    if not name or not name.strip():
        raise ValueError("Identifier must not be empty")
    return "`" + name.replace("`", "``") + "`"
