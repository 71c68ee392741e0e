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

import shutil
from pathlib import Path
from typing import Callable

import click

from fleetbase_cli.constants import MAX_UNIQUE_PATH_ATTEMPTS
from fleetbase_cli.exceptions import (
    CommandError,
    FetchFailedError,
    ResourceExhaustedError,
)
from fleetbase_cli.process import run_command

CloneTransport = Callable[[str, Path], None]


def resolve_unique_path(
    parent_dir: Path, slug: str, max_attempts: int = MAX_UNIQUE_PATH_ATTEMPTS
) -> Path:
    """
    Find a free directory for `slug` under `parent_dir`.

    Tries `slug`, then `slug-1`, `slug-2`, ... up to `max_attempts` suffixes.

    Raises:
        ResourceExhaustedError: If every candidate already exists
    """
    target = parent_dir / slug
    if not target.exists():
        return target

    for counter in range(1, max_attempts + 1):
        target = parent_dir / f"{slug}-{counter}"
        if not target.exists():
            return target

    raise ResourceExhaustedError(
        f"Could not find a free directory for '{slug}' in {parent_dir} "
        f"after {max_attempts} attempts"
    )


def clone_template(source: str, dest: Path) -> None:
    """Copy a local template directory, or `git clone` a remote one."""
    if Path(source).is_dir():
        shutil.copytree(source, dest, ignore=shutil.ignore_patterns(".git"))
        return

    run_command(["git", "clone", "--depth", "1", source, str(dest)], capture=True)


def fetch_template(
    template_source: str,
    parent_dir: Path,
    slug: str,
    clone: CloneTransport = clone_template,
) -> Path:
    """
    Materialize the starter template in a uniquely-named directory.

    Args:
        template_source: Git URL or local directory of the starter template
        parent_dir: Directory the extension is created in
        slug: Desired directory name
        clone: Transport that populates the target directory

    Returns:
        Path of the populated extension directory

    Raises:
        FetchFailedError: If the transport fails; the target is removed
        ResourceExhaustedError: If no free directory name is found
    """
    parent_dir.mkdir(parents=True, exist_ok=True)
    target = resolve_unique_path(parent_dir, slug)

    click.secho(f"⚙️  Creating new extension in {target}…", fg="cyan")
    try:
        clone(template_source, target)
    except (CommandError, OSError) as ex:
        if target.exists():
            shutil.rmtree(target, ignore_errors=True)
        raise FetchFailedError(
            f"Failed to fetch template from {template_source}: {ex}"
        ) from ex

    if not target.is_dir():
        raise FetchFailedError(f"Template transport did not create {target}")
    return target
