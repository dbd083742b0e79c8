import re

import mysql.connector
import pytest

_CREATE_RE = re.compile(r"^CREATE DATABASE `((?:[^`]|``)+)`$")
_DROP_RE = re.compile(r"^DROP DATABASE `((?:[^`]|``)+)`$")

CONNECT_ARGS = {
    "host", "port", "user", "password", "database", "unix_socket",
    "connection_timeout", "charset", "autocommit",
}


class FakeCursor:
    def __init__(self, server, kwargs):
        self.server = server
        self.kwargs = kwargs
        self._rows = []

    def execute(self, sql, params=None):
        self.server.executed.append((sql, params))
        for needle, exc in self.server.fail_on.items():
            if needle in sql:
                raise exc
        self._rows = self.server.respond(sql, params)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False


class FakeConnection:
    def __init__(self, server, kwargs):
        self.server = server
        self.kwargs = kwargs
        self.closed = False

    def cursor(self, **kwargs):
        return FakeCursor(self.server, kwargs)

    def close(self):
        self.closed = True


class FakeServer:
    """Just enough of a MariaDB server to record what sqltasks sends."""

    def __init__(self):
        self.databases = {"mysql", "information_schema"}
        self.sessions = {}
        self.fail_on = {}
        self.connect_error = None
        self.connects = []
        self.connections = []
        self.executed = []

    def connect(self, **kwargs):
        self.connects.append(kwargs)
        for key in kwargs:
            if key not in CONNECT_ARGS:
                raise AttributeError(f"Unsupported argument '{key}'")
        if self.connect_error is not None:
            raise self.connect_error
        db = kwargs.get("database")
        if db and db not in self.databases:
            raise mysql.connector.errors.ProgrammingError(
                msg=f"Unknown database '{db}'", errno=1049
            )
        conn = FakeConnection(self, kwargs)
        self.connections.append(conn)
        return conn

    def respond(self, sql, params):
        if "information_schema.schemata" in sql:
            return [(1 if params[0] in self.databases else 0,)]
        if "information_schema.processlist" in sql:
            return [(pid,) for pid in self.sessions.get(params[0], [])]
        m = _CREATE_RE.match(sql)
        if m:
            name = m.group(1).replace("``", "`")
            if name in self.databases:
                raise mysql.connector.errors.DatabaseError(
                    msg=f"Can't create database '{name}'; database exists", errno=1007
                )
            self.databases.add(name)
            return []
        m = _DROP_RE.match(sql)
        if m:
            self.databases.discard(m.group(1).replace("``", "`"))
            return []
        return []

    @property
    def statements(self):
        return [sql for sql, _ in self.executed]


@pytest.fixture
def server(monkeypatch):
    srv = FakeServer()
    monkeypatch.setattr(mysql.connector, "connect", srv.connect)
    return srv


@pytest.fixture
def conn_str():
    return "Server=127.0.0.1;Port=3307;User Id=root;Password=s3cret"
