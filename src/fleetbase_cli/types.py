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

from typing import TypedDict

from pydantic import BaseModel, ConfigDict


class ExtensionIdentity(TypedDict):
    """Naming variants derived from a single extension display name."""

    # Human-readable display name (e.g., "Order Tracker")
    display_name: str

    # Directory and config slug (e.g., "order-tracker")
    slug: str

    # Engine class for the console addon (e.g., "OrderTrackerEngine")
    class_name: str

    # Kebab-case console route (e.g., "order-tracker")
    route: str

    # Namespace segment under the root (e.g., "OrderTracker")
    namespace_segment: str

    # Fully-qualified PHP namespace (e.g., "Fleetbase\\OrderTracker")
    namespace: str

    # Prefix for controller and provider classes (e.g., "OrderTracker")
    type_name: str

    # Author slug with organizational suffixes removed (e.g., "acme")
    author_slug: str

    # npm package name (e.g., "@acme/order-tracker-engine")
    package_name: str

    # composer package name (e.g., "acme/order-tracker-api")
    composer_name: str


class ScaffoldInputs(TypedDict, total=False):
    """Answers collected from options and prompts for `flb scaffold`."""

    name: str
    description: str
    author: str
    email: str
    keywords: str
    namespace: str
    repo: str


class ExtensionManifest(BaseModel):
    """The parts of extension.json the CLI relies on."""

    model_config = ConfigDict(extra="allow")

    name: str
    version: str
    description: str | None = None


class PackageLookup(BaseModel):
    """Registry lookup result pairing the npm and composer package names."""

    npm: str
    composer: str
