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

import tarfile
from pathlib import Path

import click
from pydantic import ValidationError

from fleetbase_cli.constants import BUNDLE_EXCLUDES, BUNDLE_SUFFIX
from fleetbase_cli.exceptions import (
    InvalidInputError,
    NotFoundError,
    WriteFailedError,
)
from fleetbase_cli.manifest import load_manifest
from fleetbase_cli.types import ExtensionManifest
from fleetbase_cli.utils import kebab_case


def read_extension_manifest(extension_dir: Path) -> ExtensionManifest:
    data = load_manifest(extension_dir / "extension.json")
    try:
        return ExtensionManifest.model_validate(data)
    except ValidationError as ex:
        raise InvalidInputError(f"Invalid extension.json: {ex}") from ex


def bundle_filename(manifest: ExtensionManifest) -> str:
    """Build the bundle name (e.g., 'order-tracker-v1.0.0-bundle.tar.gz')."""
    return f"{kebab_case(manifest.name)}-v{manifest.version}{BUNDLE_SUFFIX}"


def is_bundle(path: Path) -> bool:
    return path.name.endswith(BUNDLE_SUFFIX)


def create_bundle(extension_dir: Path) -> Path:
    """
    Archive an extension directory as a gzipped tarball inside it.

    Dependency directories, VCS metadata and earlier bundles are left out.
    """
    manifest = read_extension_manifest(extension_dir)
    bundle_path = extension_dir / bundle_filename(manifest)

    def exclude(info: tarfile.TarInfo) -> tarfile.TarInfo | None:
        parts = Path(info.name).parts
        if any(part in BUNDLE_EXCLUDES for part in parts):
            return None
        if is_bundle(Path(info.name)):
            return None
        return info

    click.secho(f"⚙️  Creating bundle {bundle_path.name}…", fg="cyan")
    try:
        with tarfile.open(bundle_path, "w:gz") as tar:
            for item in sorted(extension_dir.iterdir()):
                if item == bundle_path:
                    continue
                tar.add(item, arcname=item.name, filter=exclude)
    except OSError as ex:
        bundle_path.unlink(missing_ok=True)
        raise WriteFailedError(f"Failed to create bundle: {ex}") from ex

    click.secho(f"✅ Bundle created: {bundle_path}", fg="green")
    return bundle_path


def find_latest_bundle(directory: Path) -> Path:
    bundles = [path for path in directory.iterdir() if is_bundle(path)]
    if not bundles:
        raise NotFoundError(
            f"No bundle found in {directory}. Run `flb bundle` first."
        )
    return max(bundles, key=lambda path: path.stat().st_mtime)
