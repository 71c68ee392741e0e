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

import subprocess
from pathlib import Path

import click

from fleetbase_cli.exceptions import CommandError


def run_command(
    command: list[str],
    cwd: Path | None = None,
    capture: bool = False,
) -> subprocess.CompletedProcess[str]:
    """
    Run an external command, streaming its output unless `capture` is set.

    Raises:
        CommandError: If the executable is missing or exits non-zero
    """
    click.secho(f"⚙️  Running `{' '.join(command)}`…", fg="cyan")
    try:
        result = subprocess.run(  # noqa: S603
            command,
            cwd=cwd,
            stdout=subprocess.PIPE if capture else None,
            stderr=subprocess.PIPE if capture else None,
            text=True,
        )
    except FileNotFoundError as ex:
        raise CommandError(command, 127, f"{command[0]} was not found") from ex

    if result.returncode != 0:
        raise CommandError(command, result.returncode, (result.stderr or "").strip())
    return result
