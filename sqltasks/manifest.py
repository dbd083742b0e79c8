"""
Task manifests – the build‑script surface.

    # sqltasks.yml
    connection_string: "Server=127.0.0.1;Port=3307;User Id=root;Password=${DB_ROOT_PASSWORD}"
    tasks:
      - recreate: shop_test
      - execute_file: db/schema.sql
      - execute: |
          INSERT INTO shop_test.settings (k, v) VALUES ('seeded', '1');

TOML works the same (``[[tasks]]`` tables).
"""
from __future__ import annotations
import logging
import os
import pathlib
import typing as t

import yaml

from sqltasks.config import ConfigError, Environment
from sqltasks.constants import CONNECTION_ENV_VAR
from sqltasks.database import (
    create_database,
    create_database_if_not_exists,
    drop_and_create_database,
    drop_database,
)
from sqltasks.script import execute_sql_command, execute_sql_file

try:
    import tomllib as _toml
except ModuleNotFoundError:
    import tomli as _toml

log = logging.getLogger(__name__)

TASKS: dict[str, t.Callable[..., t.Any]] = {
    "create": create_database,
    "create_if_not_exists": create_database_if_not_exists,
    "drop": drop_database,
    "recreate": drop_and_create_database,
    "execute": execute_sql_command,
    "execute_file": execute_sql_file,
}


def load_manifest(p: pathlib.Path) -> dict:
    if not p.exists():
        raise ConfigError(f"Manifest {p} does not exist")
    if p.suffix.lower() == ".toml":
        with p.open("rb") as f:
            return _toml.load(f)
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _parse_tasks(data: dict, base_dir: pathlib.Path) -> list[tuple[str, str]]:
    raw = data.get("tasks")
    if not raw:
        raise ConfigError("No `tasks` defined in manifest")
    if not isinstance(raw, list):
        raise ConfigError("`tasks` must be a list")

    tasks: list[tuple[str, str]] = []
    for i, item in enumerate(raw, start=1):
        if not isinstance(item, dict) or len(item) != 1:
            raise ConfigError(f"Task #{i} must be a mapping with exactly one key")
        ((kind, arg),) = item.items()
        if kind not in TASKS:
            raise ConfigError(
                f"Task #{i}: unknown task {kind!r} (expected one of {', '.join(TASKS)})"
            )
        if not isinstance(arg, str) or not arg.strip():
            raise ConfigError(f"Task #{i} ({kind}) needs a non-empty string argument")
        if kind == "execute_file":
            path = pathlib.Path(arg).expanduser()
            arg = str(path if path.is_absolute() else base_dir / path)
        tasks.append((kind, arg))
    return tasks


def run_manifest(
    manifest_file: pathlib.Path | str,
    connection: str | Environment | None = None,
    *,
    dry_run: bool = False,
) -> int:
    """
    Validate every task in *manifest_file*, then run them in order.
    *connection* overrides the manifest's own ``connection_string``;
    ``$SQLTASKS_CONNECTION`` is used only when neither is given.
    Returns the number of tasks.
    """
    path = pathlib.Path(manifest_file)
    data = load_manifest(path)
    tasks = _parse_tasks(data, path.parent)

    target = connection or data.get("connection_string") or os.getenv(CONNECTION_ENV_VAR)
    if not target:
        raise ConfigError(
            f"No connection given, no `connection_string` in {path} and no ${CONNECTION_ENV_VAR}"
        )
    if isinstance(target, str):
        target = Environment.from_connection_string(target, path.stem)

    for i, (kind, arg) in enumerate(tasks, start=1):
        shown = arg if kind != "execute" else arg.strip().splitlines()[0] + " ..."
        log.info("%s[%d/%d] %s %s", "(DRY) " if dry_run else "", i, len(tasks), kind, shown)
        if dry_run:
            continue
        TASKS[kind](target, arg)

    if dry_run:
        log.info("DRY-RUN complete (no changes executed)")
    return len(tasks)
