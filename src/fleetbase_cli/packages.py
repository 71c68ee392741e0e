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
from typing import Any

import click
from jinja2 import Environment, FileSystemLoader

from fleetbase_cli.exceptions import (
    CommandError,
    InvalidInputError,
    NotFoundError,
    RegistryError,
)
from fleetbase_cli.manifest import read_manifest
from fleetbase_cli.process import run_command
from fleetbase_cli.registry import RegistryClient
from fleetbase_cli.utils import expand_path

TEMPLATES_DIR = Path(__file__).parent / "templates"


def get_package_name(directory: Path) -> str | None:
    """Read the package name from package.json, falling back to composer.json."""
    for filename in ("package.json", "composer.json"):
        manifest = read_manifest(directory / filename)
        if manifest is not None:
            return manifest.get("name")
    return None


def composer_to_npm_name(composer_name: str) -> str:
    """Scope a composer name for npm (e.g., 'acme/x-api' -> '@acme/x-api')."""
    if "/" in composer_name:
        vendor, package = composer_name.split("/", 1)
        return f"@{vendor}/{package}"
    return composer_name


def render_package_json(composer: dict[str, Any]) -> str:
    env = Environment(loader=FileSystemLoader(TEMPLATES_DIR))  # noqa: S701
    return env.get_template("package.json.j2").render(
        name=composer_to_npm_name(composer.get("name", "")),
        version=composer.get("version"),
        description=composer.get("description"),
    )


def create_package_json_from_composer(package_path: Path) -> Path:
    composer = read_manifest(package_path / "composer.json")
    if composer is None:
        raise NotFoundError(f"No composer.json found in {package_path}")
    if not composer.get("name"):
        raise InvalidInputError("composer.json has no package name")

    target = package_path / "package.json"
    target.write_text(render_package_json(composer), encoding="utf-8")
    return target


def ensure_logged_in(registry: str) -> None:
    try:
        run_command(["npm", "whoami", "--registry", registry], capture=True)
    except CommandError as e:
        raise RegistryError(
            f"You must be logged in to publish to {registry}. Run `flb login`."
        ) from e


def publish_package(package_path: Path, registry: str) -> None:
    """
    Publish an extension to the registry.

    Composer-only packages get a temporary package.json for the duration of
    the publish; it is removed afterwards whether or not publishing worked.
    """
    # Prepare
    has_package_json = (package_path / "package.json").is_file()
    has_composer_json = (package_path / "composer.json").is_file()
    if not has_package_json and not has_composer_json:
        raise NotFoundError("No package.json or composer.json found.")

    generated: Path | None = None
    if not has_package_json:
        click.secho("⚙️  Converting composer.json to package.json…", fg="cyan")
        generated = create_package_json_from_composer(package_path)

    # Execute
    try:
        ensure_logged_in(registry)
        run_command(["npm", "publish", str(package_path), "--registry", registry])
    # Cleanup
    finally:
        if generated is not None:
            click.secho("⚙️  Cleaning up generated package.json…", fg="cyan")
            generated.unlink(missing_ok=True)

    click.secho("✅ Extension published", fg="green")


def unpublish_package(package_name: str, registry: str) -> None:
    run_command(
        ["npm", "unpublish", package_name, "--force", f"--registry={registry}"]
    )
    click.secho(f"✅ Unpublished {package_name}", fg="green")


def resolve_instance_path(fleetbase_path: str | Path) -> tuple[Path, Path]:
    """
    Locate the console and api directories of a Fleetbase instance.

    Raises:
        InvalidInputError: If either directory is missing
    """
    instance = expand_path(fleetbase_path)
    console_path = instance / "console"
    api_path = instance / "api"
    if not console_path.is_dir() or not api_path.is_dir():
        raise InvalidInputError(f"Invalid Fleetbase instance path: {instance}")
    return console_path, api_path


def install_package(
    package_name: str, fleetbase_path: str | Path, registry: RegistryClient
) -> None:
    console_path, api_path = resolve_instance_path(fleetbase_path)
    lookup = registry.lookup_package(package_name)

    click.secho(f"⚙️  Installing npm package: {lookup.npm}", fg="cyan")
    run_command(["pnpm", "install", lookup.npm], cwd=console_path)

    click.secho(f"⚙️  Installing composer package: {lookup.composer}", fg="cyan")
    run_command(["composer", "require", lookup.composer], cwd=api_path)

    click.secho("✅ Package installation successful!", fg="green")


def uninstall_package(
    package_name: str, fleetbase_path: str | Path, registry: RegistryClient
) -> None:
    console_path, api_path = resolve_instance_path(fleetbase_path)
    lookup = registry.lookup_package(package_name)

    click.secho(f"⚙️  Uninstalling npm package: {lookup.npm}", fg="cyan")
    run_command(["pnpm", "remove", lookup.npm], cwd=console_path)

    click.secho(f"⚙️  Uninstalling composer package: {lookup.composer}", fg="cyan")
    run_command(["composer", "remove", lookup.composer], cwd=api_path)

    click.secho("✅ Package uninstall successful!", fg="green")

