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

from pydantic import BaseModel

from fleetbase_cli.constants import (
    BUNDLE_UPLOAD_API,
    DEFAULT_REGISTRY,
    HTTP_TIMEOUT,
    PACKAGE_LOOKUP_API,
    STARTER_EXTENSION_REPO,
)


class FlbConfig(BaseModel):
    """Endpoints and sources shared by every command of one invocation."""

    registry: str = DEFAULT_REGISTRY
    lookup_api: str = PACKAGE_LOOKUP_API
    bundle_upload_api: str = BUNDLE_UPLOAD_API
    template_repo: str = STARTER_EXTENSION_REPO
    http_timeout: float = HTTP_TIMEOUT

    def with_registry(self, registry: str | None) -> "FlbConfig":
        """Return a copy using `registry` when one is given."""
        if not registry:
            return self
        return self.model_copy(update={"registry": registry})
