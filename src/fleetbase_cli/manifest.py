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

import json
from pathlib import Path
from typing import Any

from fleetbase_cli.exceptions import (
    InvalidInputError,
    NotFoundError,
    WriteFailedError,
)
from fleetbase_cli.utils import read_json, write_json

APPEND_KEYS = ("keywords",)


def read_manifest(path: Path) -> dict[str, Any] | None:
    """Read a JSON manifest, or None if it does not exist."""
    try:
        manifest = read_json(path)
    except json.JSONDecodeError as ex:
        raise InvalidInputError(f"{path} is not valid JSON: {ex}") from ex
    if manifest is not None and not isinstance(manifest, dict):
        raise InvalidInputError(f"{path} must contain a JSON object")
    return manifest


def merge_manifest(
    existing: dict[str, Any], updates: dict[str, Any]
) -> dict[str, Any]:
    """
    Merge `updates` into a manifest without mutating either argument.

    Every key in `updates` replaces the existing value, except `keywords`,
    which is appended to the existing list (existing entries first).
    """
    merged = {**existing, **updates}
    for key in APPEND_KEYS:
        if key not in updates:
            continue
        if isinstance(existing.get(key), list):
            merged[key] = [*existing[key], *(updates[key] or [])]
        else:
            merged[key] = updates[key]
    return merged


def update_json_file(path: Path, updates: dict[str, Any]) -> bool:
    """
    Apply `updates` to the JSON manifest at `path`.

    Returns:
        False if the manifest does not exist (nothing is written), else True

    Raises:
        InvalidInputError: If the manifest is not a JSON object
        WriteFailedError: If the merged manifest cannot be written
    """
    existing = read_manifest(path)
    if existing is None:
        return False

    try:
        write_json(path, merge_manifest(existing, updates))
    except OSError as ex:
        raise WriteFailedError(f"Failed to write {path}: {ex}") from ex
    return True


def load_manifest(path: Path) -> dict[str, Any]:
    """Read a JSON manifest, raising NotFoundError when it is absent."""
    if (manifest := read_manifest(path)) is None:
        raise NotFoundError(f"{path.name} not found in {path.parent}")
    return manifest
