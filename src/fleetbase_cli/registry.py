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

from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from fleetbase_cli.config import FlbConfig
from fleetbase_cli.exceptions import RegistryError
from fleetbase_cli.types import PackageLookup


class RegistryClient:
    """HTTP access to the package lookup API, bundle uploads and npm login.

    Example:
        >>> with RegistryClient(FlbConfig()) as registry:
        ...     registry.lookup_package("@fleetbase/storefront-engine")
    """

    def __init__(self, config: FlbConfig, client: httpx.Client | None = None):
        self.config = config
        self._client = client or httpx.Client(timeout=config.http_timeout)

    def __enter__(self) -> "RegistryClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status in (401, 403):
                raise RegistryError(
                    f"Not authorized ({status}). Check your auth token or credentials."
                ) from e
            if status == 404:
                raise RegistryError(f"Not found: {url}") from e
            raise RegistryError(f"Registry error {status}: {e.response.text}") from e
        except httpx.RequestError as e:
            raise RegistryError(f"Connection error: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise RegistryError(f"Invalid response from {url}") from e

    def lookup_package(self, package_name: str) -> PackageLookup:
        """Resolve an extension to its npm and composer package names."""
        data = self._request(
            "GET", self.config.lookup_api, params={"package": package_name}
        )
        try:
            return PackageLookup.model_validate(data)
        except ValidationError as e:
            raise RegistryError("Invalid package data received from registry") from e

    def upload_bundle(self, bundle_path: Path, auth_token: str) -> dict[str, Any]:
        with bundle_path.open("rb") as f:
            files = {"bundle": (bundle_path.name, f, "application/gzip")}
            return self._request(
                "POST",
                self.config.bundle_upload_api,
                files=files,
                headers={"Authorization": f"Bearer {auth_token}"},
            )

    def login(self, username: str, password: str, email: str) -> str:
        """
        Create or authenticate a registry user and return its auth token.

        Uses the npm user endpoint, the same call `npm adduser` makes.
        """
        url = (
            f"{self.config.registry.rstrip('/')}"
            f"/-/user/org.couchdb.user:{quote(username)}"
        )
        data = self._request(
            "PUT",
            url,
            json={
                "_id": f"org.couchdb.user:{username}",
                "name": username,
                "password": password,
                "email": email,
                "type": "user",
                "roles": [],
                "date": datetime.now(timezone.utc).isoformat(),
            },
        )
        if not (token := data.get("token")):
            raise RegistryError("Registry did not return an auth token")
        return token
