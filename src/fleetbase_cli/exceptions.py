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

class FlbError(Exception):
    """Base class for errors reported to the user by the CLI."""


class InvalidInputError(FlbError):
    """Raised when a required value is missing or malformed."""


class NotFoundError(FlbError):
    """Raised when an expected file or manifest does not exist."""


class FetchFailedError(FlbError):
    """Raised when the starter template could not be retrieved."""


class ReadFailedError(FlbError):
    """Raised when a file or directory could not be read or decoded."""


class WriteFailedError(FlbError):
    """Raised when a file could not be written, renamed or removed."""


class ResourceExhaustedError(FlbError):
    """Raised when no free target directory could be found."""


class CommandError(FlbError):
    """Raised when an external command exits unsuccessfully."""

    def __init__(self, command: list[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"`{' '.join(command)}` exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)


class RegistryError(FlbError):
    """Raised when a registry or API request fails."""
