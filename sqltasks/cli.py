#!/usr/bin/env python3
"""
sqltasks – provisioning CLI.

    sqltasks -e dev recreate shop_test
    sqltasks --connection "mysql://root:pw@127.0.0.1/shop_test" exec-file db/seed.sql
    sqltasks run sqltasks.yml --dry-run

The target comes from ``--connection``, else the ``-e`` environment of
``sqltasks.config.yml`` (``-c`` for another file), else
``$SQLTASKS_CONNECTION``.
"""
from __future__ import annotations

import functools
import logging
import pathlib
import sys

import click
import mysql.connector

from sqltasks import __version__
from sqltasks.config import ConfigError, Environment, resolve
from sqltasks.database import (
    create_database,
    create_database_if_not_exists,
    drop_and_create_database,
    drop_database,
)
from sqltasks.log import configure_logging
from sqltasks.manifest import run_manifest
from sqltasks.script import execute_sql_command, execute_sql_file


def _fail(msg: str) -> None:
    click.echo(msg, err=True)
    sys.exit(1)


def _reporting_errors(fn):
    """Turn config / driver errors into a one‑line message and exit 1."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except ConfigError as exc:
            _fail(f"Config error: {exc}")
        except mysql.connector.Error as exc:
            _fail(f"Database error: {exc}")
        except FileNotFoundError as exc:
            _fail(f"File not found: {exc.filename}")
        except ValueError as exc:
            _fail(f"Invalid value: {exc}")

    return wrapper


def _target(ctx: click.Context) -> Environment:
    obj = ctx.obj
    return resolve(obj["connection"], obj["config_path"], obj["env"])


@click.group()
@click.option("-c", "--config", "config_path", type=click.Path(), help="env config YAML")
@click.option("-e", "--env", help="environment name from the config file")
@click.option("--connection", help="connection string")
@click.option("-v", "--verbose", is_flag=True, help="log executed SQL")
@click.pass_context
def main(ctx, config_path, env, connection, verbose):
    configure_logging(logging.DEBUG if verbose else logging.INFO)
    ctx.obj = {
        "config_path": pathlib.Path(config_path) if config_path else None,
        "env": env,
        "connection": connection,
    }


@main.command()
def version():
    click.echo(__version__)


@main.command()
@click.argument("name")
@click.option("--if-not-exists", is_flag=True, help="skip when the database exists")
@click.pass_context
@_reporting_errors
def create(ctx, name, if_not_exists):
    if if_not_exists:
        create_database_if_not_exists(_target(ctx), name)
    else:
        create_database(_target(ctx), name)


@main.command()
@click.argument("name")
@click.pass_context
@_reporting_errors
def drop(ctx, name):
    drop_database(_target(ctx), name)


@main.command()
@click.argument("name")
@click.pass_context
@_reporting_errors
def recreate(ctx, name):
    drop_and_create_database(_target(ctx), name)


@main.command("exec")
@click.argument("sql")
@click.pass_context
@_reporting_errors
def exec_cmd(ctx, sql):
    """Execute SQL text ("-" reads it from stdin)."""
    if sql == "-":
        sql = click.get_text_stream("stdin").read()
    n = execute_sql_command(_target(ctx), sql)
    click.echo(f"Executed {n} batch(es).")


@main.command("exec-file")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_context
@_reporting_errors
def exec_file_cmd(ctx, path):
    n = execute_sql_file(_target(ctx), path)
    click.echo(f"Executed {n} batch(es).")


@main.command("run")
@click.argument("manifest", type=click.Path(dir_okay=False), default="sqltasks.yml")
@click.option("--dry-run", is_flag=True)
@click.pass_context
@_reporting_errors
def run_cmd(ctx, manifest, dry_run):
    obj = ctx.obj
    # the manifest's own connection_string wins unless told otherwise
    target = None
    if obj["connection"] or obj["env"] or obj["config_path"]:
        target = _target(ctx)
    n = run_manifest(pathlib.Path(manifest), target, dry_run=dry_run)
    click.echo(f"{'Checked' if dry_run else 'Ran'} {n} task(s).")


if __name__ == "__main__":
    main()
