"""
CREATE / DROP DATABASE helpers.

Each call opens its own connection, runs its statements and closes it
again.  Database names are interpolated as quoted identifiers; values are
always passed as parameters.
"""
from __future__ import annotations
import logging

import mysql.connector

from sqltasks.batches import quote_name
from sqltasks.constants import ER_BAD_DB_ERROR, ER_NO_SUCH_THREAD
from sqltasks.driver import Target, open_connection

log = logging.getLogger(__name__)


def db_exists(cur, name: str) -> bool:
    cur.execute(
        "SELECT COUNT(*) FROM information_schema.schemata WHERE schema_name=%s",
        (name,),
    )
    (cnt,) = cur.fetchone()
    return cnt > 0


def _kill_sessions(cur, name: str) -> None:
    """Disconnect every other session that has *name* selected."""
    cur.execute(
        "SELECT id FROM information_schema.processlist "
        "WHERE db=%s AND id <> CONNECTION_ID()",
        (name,),
    )
    for (pid,) in cur.fetchall():
        log.debug("Killing session %s using %s", pid, name)
        try:
            cur.execute(f"KILL {int(pid)}")
        except mysql.connector.Error as err:
            # session ended on its own in the meantime
            if err.errno != ER_NO_SUCH_THREAD:
                raise


def create_database(target: Target, name: str) -> None:
    sql = f"CREATE DATABASE {quote_name(name)}"
    with open_connection(target, server_only=True) as conn, conn.cursor(buffered=True) as cur:
        log.debug("Executing SQL : %s", sql)
        cur.execute(sql)
    log.info("Database %s is created", name)


def create_database_if_not_exists(target: Target, name: str) -> bool:
    """Create *name* unless it is already there.  Returns True if created."""
    sql = f"CREATE DATABASE {quote_name(name)}"
    with open_connection(target, server_only=True) as conn, conn.cursor(buffered=True) as cur:
        created = not db_exists(cur, name)
        if created:
            log.debug("Executing SQL : %s", sql)
            cur.execute(sql)
    log.info("Database %s is created if it was not there", name)
    return created


def drop_database(target: Target, name: str) -> bool:
    """
    Drop *name*, kicking out other sessions first.

    Returns True if a database was dropped.  A connection string that
    points at the (missing) database itself is reported, not raised.
    """
    quoted = quote_name(name)
    try:
        with open_connection(target) as conn, conn.cursor(buffered=True) as cur:
            log.info("About to drop database %s", name)
            if not db_exists(cur, name):
                log.info("Database %s is not there, nothing to drop", name)
                return False
            _kill_sessions(cur, name)
            cur.execute(f"DROP DATABASE {quoted}")
            log.info("Database %s is dropped", name)
            return True
    except mysql.connector.Error as err:
        if err.errno == ER_BAD_DB_ERROR:
            log.error("Database %s does not exist", name)
            return False
        raise


def drop_and_create_database(target: Target, name: str) -> None:
    drop_database(target, name)
    create_database(target, name)
