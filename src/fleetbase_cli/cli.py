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

import functools
import sys
from importlib.metadata import version as distribution_version
from pathlib import Path
from typing import Any, Callable

import click

from fleetbase_cli.auth import save_login_token, set_auth
from fleetbase_cli.bundle import create_bundle, find_latest_bundle
from fleetbase_cli.config import FlbConfig
from fleetbase_cli.constants import (
    BUNDLE_UPLOAD_API,
    DEFAULT_REGISTRY,
    PACKAGE_LOOKUP_API,
    STARTER_EXTENSION_REPO,
)
from fleetbase_cli.exceptions import FlbError, InvalidInputError, NotFoundError
from fleetbase_cli.packages import (
    get_package_name,
    install_package,
    publish_package,
    uninstall_package,
    unpublish_package,
)
from fleetbase_cli.registry import RegistryClient
from fleetbase_cli.scaffold import scaffold_extension
from fleetbase_cli.types import ScaffoldInputs
from fleetbase_cli.utils import derive_extension_identity, expand_path
from fleetbase_cli.versioning import bump_manifests


def report_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Turn FlbError into a red message and exit status 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except FlbError as e:
            click.secho(f"❌ {e}", err=True, fg="red")
            sys.exit(1)

    return wrapper


def make_registry_client(config: FlbConfig) -> RegistryClient:
    return RegistryClient(config)


def registry_option(func: Callable[..., Any]) -> Callable[..., Any]:
    return click.option(
        "--registry",
        "-r",
        default=None,
        help=f"Registry URL (default: {DEFAULT_REGISTRY})",
    )(func)


@click.group(help="CLI tool for managing Fleetbase Extensions.")
@click.version_option(package_name="fleetbase-cli", message="%(package)s %(version)s")
@click.option(
    "--registry",
    "-r",
    envvar="FLB_REGISTRY",
    default=DEFAULT_REGISTRY,
    show_default=True,
    help="Fleetbase extension registry",
)
@click.option(
    "--lookup-api",
    envvar="FLB_LOOKUP_API",
    default=PACKAGE_LOOKUP_API,
    show_default=True,
    help="Package lookup endpoint",
)
@click.option(
    "--bundle-upload-api",
    envvar="FLB_BUNDLE_UPLOAD_API",
    default=BUNDLE_UPLOAD_API,
    show_default=True,
    help="Bundle upload endpoint",
)
@click.option(
    "--template-repo",
    envvar="FLB_TEMPLATE_REPO",
    default=STARTER_EXTENSION_REPO,
    show_default=True,
    help="Starter template (git URL or local directory)",
)
@click.pass_context
def app(
    ctx: click.Context,
    registry: str,
    lookup_api: str,
    bundle_upload_api: str,
    template_repo: str,
) -> None:
    ctx.obj = FlbConfig(
        registry=registry,
        lookup_api=lookup_api,
        bundle_upload_api=bundle_upload_api,
        template_repo=template_repo,
    )


@app.command("set-auth")
@click.argument("token", required=False)
@click.option(
    "--path", "-p", default=".", help="Path of the Fleetbase instance to set up"
)
@registry_option
@click.pass_obj
@report_errors
def set_auth_command(
    config: FlbConfig, token: str | None, path: str, registry: str | None
) -> None:
    """Set registry auth token."""
    config = config.with_registry(registry)
    click.echo(f"Using registry: {config.registry}")
    click.echo(f"Using path: {path}")
    set_auth(token or "", path, config.registry)


def prompt_for_scaffold_inputs(options: ScaffoldInputs) -> ScaffoldInputs:
    """
    Complete scaffold answers from options, prompting for anything missing.

    The extension name is re-prompted until it yields a usable identifier.
    """
    answers = ScaffoldInputs()

    if name := options.get("name"):
        derive_extension_identity(name)
    else:
        while True:
            name = click.prompt("Extension Name", type=str)
            try:
                derive_extension_identity(name)
                break
            except InvalidInputError as e:
                click.secho(f"❌ {e}", fg="red")
    answers["name"] = name

    questions = [
        ("description", "Extension Description", ""),
        ("author", "Author Name (optional)", ""),
        ("email", "Author Email (optional)", ""),
        ("keywords", "Keywords (comma-separated)", ""),
        (
            "namespace",
            'PHP Namespace (prefixed with "Fleetbase\\", blank to use the name)',
            "",
        ),
        ("repo", "Repository URL", STARTER_EXTENSION_REPO.removesuffix(".git")),
    ]
    for key, label, default in questions:
        if (value := options.get(key)) is not None:
            answers[key] = value
        else:
            answers[key] = click.prompt(
                label, default=default, show_default=bool(default)
            )
    return answers


@app.command()
@click.option(
    "--path", "-p", default=".", help="Path to scaffold the extension into"
)
@click.option("--name", "-n", default=None, help="Name of the extension")
@click.option(
    "--description", "-d", default=None, help="Description of the extension"
)
@click.option("--author", "-a", default=None, help="Name of the extension author")
@click.option("--email", "-e", default=None, help="Email of the extension author")
@click.option(
    "--keywords", "-k", default=None, help="Comma-separated extension keywords"
)
@click.option(
    "--namespace", default=None, help="PHP namespace segment of the extension"
)
@click.option(
    "--repo",
    "-r",
    default=None,
    help="Repository URL of the extension",
)
@click.pass_obj
@report_errors
def scaffold(
    config: FlbConfig,
    path: str,
    name: str | None,
    description: str | None,
    author: str | None,
    email: str | None,
    keywords: str | None,
    namespace: str | None,
    repo: str | None,
) -> None:
    """Scaffold a new Fleetbase extension."""
    options = ScaffoldInputs(
        name=name,
        description=description,
        author=author,
        email=email,
        keywords=keywords,
        namespace=namespace,
        repo=repo,
    )
    inputs = prompt_for_scaffold_inputs(options)

    target_dir = scaffold_extension(
        inputs, expand_path(path), config.template_repo
    )
    click.secho(
        f"🎉 Extension {inputs['name']} scaffolded at {target_dir}", fg="cyan"
    )


@app.command()
@click.argument("package_name", required=False)
@click.option(
    "--path", "-p", default=".", help="Path of the Fleetbase instance to install to"
)
@click.pass_obj
@report_errors
def install(config: FlbConfig, package_name: str | None, path: str) -> None:
    """Install a Fleetbase Extension."""
    if not package_name:
        raise InvalidInputError("Package name is required.")
    click.echo(f"Installing package: {package_name}")
    click.echo(f"Using path: {path}")
    with make_registry_client(config) as registry:
        install_package(package_name, path, registry)


@app.command()
@click.argument("package_name", required=False)
@click.option(
    "--path",
    "-p",
    default=".",
    help="Path of the Fleetbase instance to uninstall from",
)
@click.pass_obj
@report_errors
def uninstall(config: FlbConfig, package_name: str | None, path: str) -> None:
    """Uninstall a Fleetbase Extension."""
    if not package_name:
        raise InvalidInputError("Package name is required.")
    click.echo(f"Uninstalling package: {package_name}")
    click.echo(f"Using path: {path}")
    with make_registry_client(config) as registry:
        uninstall_package(package_name, path, registry)


@app.command()
@click.argument("package_path", default=".", required=False)
@registry_option
@click.pass_obj
@report_errors
def publish(config: FlbConfig, package_path: str, registry: str | None) -> None:
    """Publish a Fleetbase Extension."""
    config = config.with_registry(registry)
    click.echo(f"Using registry: {config.registry}")
    click.secho("⚙️  Publishing Fleetbase Extension…", fg="cyan")
    publish_package(Path(package_path), config.registry)


@app.command()
@click.argument("package_name", required=False)
@registry_option
@click.pass_obj
@report_errors
def unpublish(
    config: FlbConfig, package_name: str | None, registry: str | None
) -> None:
    """Unpublish a Fleetbase Extension."""
    config = config.with_registry(registry)
    click.echo(f"Using registry: {config.registry}")

    if not package_name:
        package_name = get_package_name(Path.cwd())
        if not package_name:
            raise NotFoundError("Package name could not be determined.")

    click.secho(f"⚙️  Unpublishing Fleetbase Extension {package_name}", fg="cyan")
    unpublish_package(package_name, config.registry)


@app.command("version-bump")
@click.option("--major", "release", flag_value="major", help="Bump major version")
@click.option("--minor", "release", flag_value="minor", help="Bump minor version")
@click.option(
    "--patch", "release", flag_value="patch", default=True, help="Bump patch version"
)
@click.option(
    "--pre-release",
    "pre_release",
    is_flag=False,
    flag_value="beta",
    default=None,
    help="Bump to a pre-release with the given identifier (default: beta)",
)
@click.option("--path", "-p", default=".", help="Path of the extension")
@report_errors
def version_bump(release: str, pre_release: str | None, path: str) -> None:
    """Bump the version of an extension."""
    if pre_release is not None:
        release = "pre-release"
    new_version = bump_manifests(
        expand_path(path), release, pre_release or "beta"
    )
    click.secho(f"🎉 Version bumped to {new_version}", fg="cyan")


@app.command()
@click.option("--path", "-p", default=".", help="Path of the extension to bundle")
@click.option("--upload", is_flag=True, help="Upload the bundle after creating it")
@click.option(
    "--auth-token",
    envvar="FLB_AUTH_TOKEN",
    default=None,
    help="Registry auth token used for the upload",
)
@click.pass_context
@report_errors
def bundle(
    ctx: click.Context, path: str, upload: bool, auth_token: str | None
) -> None:
    """Bundle a Fleetbase Extension."""
    bundle_path = create_bundle(expand_path(path))
    if upload:
        ctx.invoke(
            bundle_upload,
            bundle_file=str(bundle_path),
            path=path,
            auth_token=auth_token,
        )


@app.command("bundle-upload")
@click.argument("bundle_file", required=False)
@click.option("--path", "-p", default=".", help="Path of the extension")
@click.option(
    "--auth-token",
    envvar="FLB_AUTH_TOKEN",
    default=None,
    help="Registry auth token used for the upload",
)
@click.pass_obj
@report_errors
def bundle_upload(
    config: FlbConfig, bundle_file: str | None, path: str, auth_token: str | None
) -> None:
    """Upload an extension bundle to the registry."""
    if not auth_token:
        raise InvalidInputError("Auth token is required to upload a bundle.")

    if bundle_file:
        bundle_path = Path(bundle_file)
        if not bundle_path.is_file():
            raise NotFoundError(f"Bundle {bundle_path} not found.")
    else:
        bundle_path = find_latest_bundle(expand_path(path))

    click.secho(f"⚙️  Uploading {bundle_path.name}…", fg="cyan")
    with make_registry_client(config) as registry:
        registry.upload_bundle(bundle_path, auth_token)
    click.secho(f"✅ Bundle uploaded: {bundle_path.name}", fg="green")


@app.command()
@click.option("--username", "-u", prompt="Username", help="Registry username")
@click.option(
    "--password", "-p", prompt="Password", hide_input=True, help="Registry password"
)
@click.option("--email", "-e", prompt="Email", help="Registry account email")
@registry_option
@click.option("--scope", "-s", default=None, help="Scope to map to the registry")
@click.option(
    "--npmrc",
    default="~/.npmrc",
    show_default=True,
    help="npmrc file the auth token is written to",
)
@click.pass_obj
@report_errors
def login(
    config: FlbConfig,
    username: str,
    password: str,
    email: str,
    registry: str | None,
    scope: str | None,
    npmrc: str,
) -> None:
    """Log in to the Fleetbase registry."""
    config = config.with_registry(registry)
    click.echo(f"Using registry: {config.registry}")
    with make_registry_client(config) as client:
        token = client.login(username, password, email)

    npmrc_path = expand_path(npmrc)
    save_login_token(npmrc_path, config.registry, token, scope)
    click.secho(
        f"✅ Logged in as {username}, token saved to {npmrc_path}", fg="green"
    )


@app.command("version")
def version_command() -> None:
    """Output the version number."""
    click.echo(f"fleetbase-cli {distribution_version('fleetbase-cli')}")


if __name__ == "__main__":
    app()
