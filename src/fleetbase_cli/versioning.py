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

import click
import semver

from fleetbase_cli.constants import MANIFEST_FILES
from fleetbase_cli.exceptions import InvalidInputError, NotFoundError
from fleetbase_cli.manifest import read_manifest, update_json_file

# Read order when looking for the current version
VERSION_SOURCES = ("package.json", "composer.json", "extension.json")
RELEASE_TYPES = ("major", "minor", "patch", "pre-release")


def current_version(directory: Path) -> str:
    for filename in VERSION_SOURCES:
        manifest = read_manifest(directory / filename)
        if manifest and manifest.get("version"):
            return manifest["version"]
    raise NotFoundError(f"No manifest with a version found in {directory}")


def bump_version(version: str, release: str, pre_release_id: str = "beta") -> str:
    """
    Bump a semantic version.

    Args:
        version: Current version (e.g., "1.2.3")
        release: One of "major", "minor", "patch" or "pre-release"
        pre_release_id: Identifier used for pre-releases (e.g., "beta")

    Returns:
        Bumped version (e.g., "1.2.4" or "1.2.3-beta.1")
    """
    try:
        parsed = semver.Version.parse(version)
    except ValueError as ex:
        raise InvalidInputError(f"'{version}' is not a semantic version") from ex

    if release == "major":
        bumped = parsed.bump_major()
    elif release == "minor":
        bumped = parsed.bump_minor()
    elif release == "patch":
        bumped = parsed.bump_patch()
    elif release == "pre-release":
        bumped = parsed.bump_prerelease(pre_release_id)
    else:
        raise InvalidInputError(f"Unknown release type '{release}'")
    return str(bumped)


def bump_manifests(
    directory: Path, release: str = "patch", pre_release_id: str = "beta"
) -> str:
    """Write the bumped version to every manifest present in `directory`."""
    old_version = current_version(directory)
    new_version = bump_version(old_version, release, pre_release_id)

    for filename in MANIFEST_FILES:
        if update_json_file(directory / filename, {"version": new_version}):
            click.secho(f"✅ {filename}: {old_version} → {new_version}", fg="green")
    return new_version
