# Licensed to the Apache Software Foundation (ASF) under one
# or more contributor license agreements.  See the NOTICE file
# distributed with this work for additional information
# regarding copyright ownership.  The ASF licenses this file
# to you under the Apache License, Version 2.0 (the
# "License"); you may not use this file except in compliance
# with the License.  You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an
# "AS IS" BASIS, WITHOUT WARRANTIES OR CONDITIONS OF ANY
# KIND, either express or implied.  See the License for the
# specific language governing permissions and limitations
# under the License.

from pathlib import Path
from urllib.parse import urlparse

import click

from fleetbase_cli.constants import DEFAULT_FLEETBASE_PATH
from fleetbase_cli.exceptions import InvalidInputError
from fleetbase_cli.manifest import read_manifest, update_json_file
from fleetbase_cli.utils import expand_path, write_json


def registry_host(registry: str) -> str:
    """Return the host (and port) of a registry URL."""
    if not (host := urlparse(registry).netloc):
        raise InvalidInputError(f"Invalid registry URL: {registry}")
    return host


def append_npmrc_lines(npmrc_path: Path, lines: list[str]) -> None:
    """Append lines to an .npmrc, creating it if needed."""
    npmrc_path.parent.mkdir(parents=True, exist_ok=True)
    with npmrc_path.open("a", encoding="utf-8") as f:
        f.writelines(f"{line}\n" for line in lines)


def resolve_auth_instance(fleetbase_path: str | Path) -> Path:
    """Use `fleetbase_path` if it holds console/ and api/, else /fleetbase."""
    instance = expand_path(fleetbase_path or ".")
    if (instance / "console").is_dir() and (instance / "api").is_dir():
        return instance
    return Path(DEFAULT_FLEETBASE_PATH)


def set_auth(
    token: str, fleetbase_path: str | Path, registry: str
) -> tuple[Path, Path]:
    """
    Store a registry auth token for both the console and the api.

    The token is appended to console/.npmrc and merged into the `bearer`
    section of api/auth.json, keeping tokens for other hosts.

    Returns:
        The .npmrc and auth.json paths that were written
    """
    if not token:
        raise InvalidInputError("Auth token is required.")

    host = registry_host(registry)
    instance = resolve_auth_instance(fleetbase_path)
    npmrc_path = instance / "console" / ".npmrc"
    composer_auth_path = instance / "api" / "auth.json"

    append_npmrc_lines(npmrc_path, [f'//{host}/:_authToken="{token}"'])
    click.secho(f"✅ NPM auth token set in {npmrc_path}", fg="green")

    current = read_manifest(composer_auth_path) or {}
    bearer = {**current.get("bearer", {}), host: token}
    if not update_json_file(composer_auth_path, {"bearer": bearer}):
        composer_auth_path.parent.mkdir(parents=True, exist_ok=True)
        write_json(composer_auth_path, {"bearer": bearer})
    click.secho(f"✅ Composer auth token set in {composer_auth_path}", fg="green")

    return npmrc_path, composer_auth_path


def save_login_token(
    npmrc_path: Path, registry: str, token: str, scope: str | None = None
) -> None:
    lines = [f"//{registry_host(registry)}/:_authToken={token}"]
    if scope:
        scope = scope if scope.startswith("@") else f"@{scope}"
        lines.append(f"{scope}:registry={registry}")
    append_npmrc_lines(npmrc_path, lines)
