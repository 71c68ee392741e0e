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

from fleetbase_cli.exceptions import InvalidInputError
from fleetbase_cli.manifest import update_json_file
from fleetbase_cli.refactor import provider_class_name, refactor_extension
from fleetbase_cli.template import CloneTransport, clone_template, fetch_template
from fleetbase_cli.types import ExtensionIdentity, ScaffoldInputs
from fleetbase_cli.utils import derive_extension_identity


def parse_keywords(keywords: str | None) -> list[str]:
    """Split comma-separated keywords, dropping blanks (e.g., 'a, b,' -> ['a', 'b'])."""
    if not keywords:
        return []
    return [keyword.strip() for keyword in keywords.split(",") if keyword.strip()]


def format_author(author: str | None, email: str | None) -> str | None:
    if author and email:
        return f"{author} <{email}>"
    return author or None


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    """Drop empty values so they do not overwrite template defaults."""
    return {key: value for key, value in values.items() if value not in (None, "")}


def build_manifest_updates(
    identity: ExtensionIdentity, inputs: ScaffoldInputs
) -> dict[str, dict[str, Any]]:
    """
    Build the updates for extension.json, package.json and composer.json.

    Returns:
        Mapping of manifest filename to the keys to merge into it
    """
    namespace = identity["namespace"]
    keywords = parse_keywords(inputs.get("keywords"))
    author = format_author(inputs.get("author"), inputs.get("email"))
    description = inputs.get("description")
    repository = inputs.get("repo")

    composer_authors = None
    if inputs.get("author"):
        composer_authors = [
            _compact({"name": inputs.get("author"), "email": inputs.get("email")})
        ]

    return {
        "extension.json": _compact(
            {
                "name": identity["display_name"],
                "description": description,
                "repository": repository,
                "author": author,
            }
        ),
        "package.json": _compact(
            {
                "name": identity["package_name"],
                "description": description,
                "repository": repository,
                "author": author,
                "keywords": keywords,
                "fleetbase": {"route": identity["slug"]},
            }
        ),
        "composer.json": _compact(
            {
                "name": identity["composer_name"],
                "description": description,
                "authors": composer_authors,
                "keywords": keywords,
                "autoload": {
                    "psr-4": {
                        f"{namespace}\\": "server/src/",
                        f"{namespace}\\Seeds\\": "server/seeds/",
                    }
                },
                "autoload-dev": {
                    "psr-4": {f"{namespace}\\Tests\\": "server/tests/"},
                },
                "extra": {
                    "laravel": {
                        "providers": [
                            f"{namespace}\\Providers\\{provider_class_name(identity)}"
                        ]
                    }
                },
            }
        ),
    }


def scaffold_extension(
    inputs: ScaffoldInputs,
    parent_dir: Path,
    template_source: str,
    clone: CloneTransport = clone_template,
) -> Path:
    """
    Create a new extension from the starter template.

    Steps run in order and the first failure aborts the rest; files created
    by earlier steps are left in place.

    Args:
        inputs: Answers for the extension (name is required)
        parent_dir: Directory the extension directory is created in
        template_source: Git URL or local directory of the starter template
        clone: Transport used to fetch the template

    Returns:
        Path of the new extension directory
    """
    if not inputs.get("name"):
        raise InvalidInputError("Extension name is required")

    identity = derive_extension_identity(
        inputs["name"], inputs.get("author"), inputs.get("namespace")
    )

    target_dir = fetch_template(template_source, parent_dir, identity["slug"], clone)

    for filename, updates in build_manifest_updates(identity, inputs).items():
        if update_json_file(target_dir / filename, updates):
            click.secho(f"✅ Updated {filename}", fg="green")
        else:
            click.secho(f"⚠️  {filename} not found, skipping", fg="yellow")

    refactor_extension(target_dir, identity)
    return target_dir
