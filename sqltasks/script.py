from __future__ import annotations
import logging
import pathlib

from sqltasks.batches import split_batches, split_statements
from sqltasks.driver import Target, open_connection

log = logging.getLogger(__name__)


def execute_sql_command(target: Target, sql: str) -> int:
    """
    Run *sql* batch by batch (``GO`` lines separate batches) over a single
    connection.  Stops at the first failing batch and re‑raises.

    Returns the number of batches executed.
    """
    batches = split_batches(sql)
    executed = 0
    with open_connection(target) as conn, conn.cursor(buffered=True) as cur:
        for batch in batches:
            log.debug("Executing SQL : %s", batch)
            try:
                for stmt in split_statements(batch):
                    cur.execute(stmt)
            except Exception:
                log.warning("Exception happened while executing this command: %s", batch)
                raise
            executed += 1
    return executed


def execute_sql_file(target: Target, sql_file: pathlib.Path | str) -> int:
    path = pathlib.Path(sql_file).expanduser().resolve()
    log.info("Executing sql file %s", path)

    # utf-8-sig: scripts saved by SSMS & co. start with a BOM
    sql = path.read_text(encoding="utf-8-sig")
    executed = execute_sql_command(target, sql)

    log.info("Finished executing SQL from %s", path)
    return executed
