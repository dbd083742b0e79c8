"""
sqltasks – database provisioning helpers for build scripts.

    import sqltasks

    conn = "Server=127.0.0.1;Port=3306;User Id=root;Password=${DB_ROOT_PASSWORD}"
    sqltasks.drop_and_create_database(conn, "shop_test")
    sqltasks.execute_sql_file(conn, "db/schema.sql")
"""
from sqltasks.config import ConfigError, Environment, parse_connection_string
from sqltasks.database import (
    create_database,
    create_database_if_not_exists,
    drop_and_create_database,
    drop_database,
)
from sqltasks.driver import LocalInstanceError, open_connection
from sqltasks.manifest import run_manifest
from sqltasks.script import execute_sql_command, execute_sql_file

__version__ = "0.3.0"

__all__ = [
    "ConfigError",
    "Environment",
    "LocalInstanceError",
    "create_database",
    "create_database_if_not_exists",
    "drop_and_create_database",
    "drop_database",
    "execute_sql_command",
    "execute_sql_file",
    "open_connection",
    "parse_connection_string",
    "run_manifest",
]
