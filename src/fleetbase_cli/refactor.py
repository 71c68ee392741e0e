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

"""
Rewrites the starter template's placeholder identifiers.

The refactor runs in three ordered phases against a freshly fetched
extension directory:

1. the engine entry file gets the new engine class and menu item;
2. the resource controller and service provider are renamed and then
   patched, and the config and routes files are rekeyed;
3. a namespace patch runs over every PHP file below ``server/``.

Every patch is idempotent and files whose content does not change are not
rewritten, so running the refactor again on a finished tree is a no-op.
Nothing is rolled back if a write fails part way through.
"""

import re
from pathlib import Path
from typing import Callable

import click

from fleetbase_cli.constants import (
    CONFIG_PATH,
    CONTROLLER_PATH,
    ENGINE_JS_PATH,
    PHP_EXTENSION,
    PLACEHOLDER_CONFIG_KEY,
    PLACEHOLDER_CONTROLLER_CLASS,
    PLACEHOLDER_ENGINE_CLASS,
    PLACEHOLDER_NAMESPACE,
    PLACEHOLDER_PROVIDER_CLASS,
    PLACEHOLDER_ROUTES_TITLE,
    ROUTES_PATH,
    SERVER_DIR,
    SERVICE_PROVIDER_PATH,
)
from fleetbase_cli.exceptions import ReadFailedError, WriteFailedError
from fleetbase_cli.types import ExtensionIdentity
from fleetbase_cli.utils import start_case

# Identifier characters that must not follow a matched placeholder
_IDENT_END = r"(?![A-Za-z0-9_])"

ENGINE_CLASS_REGEX = re.compile(rf"class\s+{PLACEHOLDER_ENGINE_CLASS}{_IDENT_END}")
INITIALIZERS_REGEX = re.compile(
    rf"loadInitializers\({PLACEHOLDER_ENGINE_CLASS},\s*modulePrefix\)"
)
MENU_ITEM_REGEX = re.compile(
    r"universe\.registerHeaderMenuItem\('Starter',\s*'console\.starter'"
)

# `public string $namespace = '\Fleetbase\Starter';`, with single or escaped
# backslashes
NAMESPACE_PROPERTY_REGEX = re.compile(
    r"public string \$namespace = '\\{1,2}Fleetbase\\{1,2}Starter';"
)
NAMESPACE_REGEX = re.compile(re.escape(PLACEHOLDER_NAMESPACE) + _IDENT_END)
CONTROLLER_CLASS_REGEX = re.compile(rf"\b{PLACEHOLDER_CONTROLLER_CLASS}{_IDENT_END}")
PROVIDER_CLASS_REGEX = re.compile(rf"\b{PLACEHOLDER_PROVIDER_CLASS}{_IDENT_END}")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as ex:
        raise ReadFailedError(f"{path} is not valid UTF-8: {ex}") from ex
    except OSError as ex:
        raise ReadFailedError(f"Failed to read {path}: {ex}") from ex


def _write_text(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as ex:
        raise WriteFailedError(f"Failed to write {path}: {ex}") from ex


def _rename(source: Path, target: Path) -> None:
    try:
        source.rename(target)
    except OSError as ex:
        raise WriteFailedError(f"Failed to rename {source} to {target}: {ex}") from ex


def _patch_file(path: Path, transform: Callable[[str], str]) -> bool:
    """
    Apply `transform` to the text of `path`.

    Returns:
        True if the file exists (whether or not its content changed)
    """
    if not path.is_file():
        return False

    content = _read_text(path)
    patched = transform(content)
    if patched != content:
        _write_text(path, patched)
    return True


def controller_class_name(identity: ExtensionIdentity) -> str:
    return f"{identity['type_name']}ResourceController"


def provider_class_name(identity: ExtensionIdentity) -> str:
    return f"{identity['type_name']}ServiceProvider"


def patch_engine_source(content: str, identity: ExtensionIdentity) -> str:
    class_name = identity["class_name"]
    label = identity["display_name"].replace("\\", "\\\\").replace("'", "\\'")

    content = ENGINE_CLASS_REGEX.sub(lambda _: f"class {class_name}", content, 1)
    content = INITIALIZERS_REGEX.sub(
        lambda _: f"loadInitializers({class_name}, modulePrefix)", content, 1
    )
    return MENU_ITEM_REGEX.sub(
        lambda _: (
            f"universe.registerHeaderMenuItem('{label}', "
            f"'console.{identity['route']}'"
        ),
        content,
        1,
    )


def patch_php_source(content: str, identity: ExtensionIdentity) -> str:
    """
    Replace the placeholder namespace and class names in PHP source.

    Applying this twice gives the same result as applying it once.
    """
    namespace = identity["namespace"]

    content = NAMESPACE_PROPERTY_REGEX.sub(
        lambda _: f"public string $namespace = '\\{namespace}';", content
    )
    content = NAMESPACE_REGEX.sub(lambda _: namespace, content)
    content = CONTROLLER_CLASS_REGEX.sub(
        lambda _: controller_class_name(identity), content
    )
    return PROVIDER_CLASS_REGEX.sub(lambda _: provider_class_name(identity), content)


def patch_routes_source(content: str, identity: ExtensionIdentity) -> str:
    slug = identity["slug"]
    content = content.replace(
        f"config('{PLACEHOLDER_CONFIG_KEY}.", f"config('{slug}."
    )
    content = content.replace(
        f"'{PLACEHOLDER_NAMESPACE}\\Http\\Controllers'",
        f"'{identity['namespace']}\\Http\\Controllers'",
    )
    return content.replace(PLACEHOLDER_ROUTES_TITLE, f"{start_case(slug)} API Routes")


def modify_engine_js(path: Path, identity: ExtensionIdentity) -> bool:
    """Rename the engine class and its header menu item in addon/engine.js."""
    return _patch_file(path, lambda content: patch_engine_source(content, identity))


def refactor_php_file(path: Path, identity: ExtensionIdentity) -> bool:
    return _patch_file(path, lambda content: patch_php_source(content, identity))


def rename_and_refactor(
    source: Path, target: Path, identity: ExtensionIdentity
) -> Path | None:
    """
    Rename a PHP class file, then patch it under its new name.

    Returns:
        The new path, or None if `source` does not exist
    """
    if not source.is_file():
        return None

    if source != target:
        _rename(source, target)
        click.secho(f"✅ Renamed {source.name} to {target.name}", fg="green")
    refactor_php_file(target, identity)
    return target


def refactor_config_file(path: Path, identity: ExtensionIdentity) -> Path | None:
    """Move server/config/starter.php to server/config/{slug}.php with the new key."""
    if not path.is_file():
        return None

    slug = identity["slug"]
    content = _read_text(path).replace(f"'{PLACEHOLDER_CONFIG_KEY}'", f"'{slug}'")
    target = path.with_name(f"{slug}{PHP_EXTENSION}")
    _write_text(target, content)

    if target != path:
        try:
            path.unlink()
        except OSError as ex:
            raise WriteFailedError(f"Failed to remove {path}: {ex}") from ex
    return target


def rename_and_refactor_files(target_dir: Path, identity: ExtensionIdentity) -> None:
    rename_and_refactor(
        target_dir / CONTROLLER_PATH,
        (target_dir / CONTROLLER_PATH).with_name(
            f"{controller_class_name(identity)}{PHP_EXTENSION}"
        ),
        identity,
    )
    rename_and_refactor(
        target_dir / SERVICE_PROVIDER_PATH,
        (target_dir / SERVICE_PROVIDER_PATH).with_name(
            f"{provider_class_name(identity)}{PHP_EXTENSION}"
        ),
        identity,
    )
    refactor_config_file(target_dir / CONFIG_PATH, identity)
    _patch_file(
        target_dir / ROUTES_PATH,
        lambda content: patch_routes_source(content, identity),
    )


def find_php_files(root: Path) -> list[Path]:
    """
    Collect PHP files below `root`, depth first in name order.

    Symlinked directories are followed, but each real directory is visited
    once.
    """
    if not root.is_dir():
        return []

    files: list[Path] = []
    visited: set[Path] = set()
    stack = [root]
    while stack:
        directory = stack.pop()
        real = directory.resolve()
        if real in visited:
            continue
        visited.add(real)

        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as ex:
            raise ReadFailedError(f"Failed to list {directory}: {ex}") from ex
        for child in children:
            if child.is_file() and child.suffix == PHP_EXTENSION:
                files.append(child)
        # Reversed so the first subdirectory is popped first
        stack.extend(child for child in reversed(children) if child.is_dir())
    return files


def refactor_namespaces(root: Path, identity: ExtensionIdentity) -> list[Path]:
    files = find_php_files(root)
    for file in files:
        refactor_php_file(file, identity)
    return files


def refactor_extension(target_dir: Path, identity: ExtensionIdentity) -> None:
    """Run every refactor phase against a scaffolded extension directory."""
    if modify_engine_js(target_dir / ENGINE_JS_PATH, identity):
        click.secho(f"✅ Updated {ENGINE_JS_PATH}", fg="green")

    rename_and_refactor_files(target_dir, identity)

    patched = refactor_namespaces(target_dir / SERVER_DIR, identity)
    click.secho(f"✅ Refactored namespaces in {len(patched)} PHP files", fg="green")
