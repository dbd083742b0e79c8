from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Iterator, Union

import mysql.connector

from sqltasks.config import ConfigError, Environment
from sqltasks.constants import (
    CR_NETWORK_ERRORS,
    ESCAPE_CONTROL_CHARS,
    LOCAL_INSTANCE_HINT,
)

log = logging.getLogger(__name__)

Target = Union[str, Environment]


class LocalInstanceError(ConfigError):
    """Connecting failed and the connection string looks wrongly escaped."""


def as_environment(target: Target) -> Environment:
    if isinstance(target, Environment):
        return target
    return Environment.from_connection_string(target)


def _is_network_error(err: mysql.connector.Error) -> bool:
    if err.errno in CR_NETWORK_ERRORS:
        return True
    msg = (getattr(err, "msg", None) or str(err)).lower()
    return msg.startswith("can't connect to")


def looks_like_local_instance(source: str) -> bool:
    """True when *source* names localdb or carries escape‑mangled characters."""
    return "localdb" in source.lower() or any(c in source for c in ESCAPE_CONTROL_CHARS)


def _connect(env: Environment, server_only: bool):
    dsn = env.server_dsn() if server_only else env.dsn()
    log.debug("About to open connection with this connection string: %s", env.describe())
    try:
        return mysql.connector.connect(**dsn, autocommit=True)
    except (AttributeError, TypeError) as exc:
        # driver rejects keyword arguments it does not know
        raise ConfigError(f"Unsupported connection option: {exc}") from exc
    except mysql.connector.Error as err:
        if _is_network_error(err) and looks_like_local_instance(env.source):
            log.error(LOCAL_INSTANCE_HINT)
            raise LocalInstanceError(LOCAL_INSTANCE_HINT) from err
        # Bubble up anything else (bad credentials, unknown database, etc.)
        raise


@contextmanager
def open_connection(target: Target, *, server_only: bool = False) -> Iterator:
    """
    Context‑manager that yields an **autocommit** connection for *target*
    (a connection string or an :class:`Environment`) and closes it on exit.

    With ``server_only`` the default schema of the target is not selected,
    which is what CREATE / DROP DATABASE need.
    """
    conn = _connect(as_environment(target), server_only)
    try:
        yield conn
    finally:
        conn.close()
