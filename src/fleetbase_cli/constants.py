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
Defaults and template placeholders for the Fleetbase extension CLI.
"""

DEFAULT_REGISTRY = "https://registry.fleetbase.io"
PACKAGE_LOOKUP_API = "https://api.fleetbase.io/~registry/v1/lookup"
BUNDLE_UPLOAD_API = "https://api.fleetbase.io/~registry/v1/bundle-upload"
STARTER_EXTENSION_REPO = "https://github.com/fleetbase/starter-extension.git"

# Fallback instance location used by set-auth when the given path is not an
# instance (no console/ and api/ directories)
DEFAULT_FLEETBASE_PATH = "/fleetbase"

DEFAULT_AUTHOR_SLUG = "fleetbase"
NAMESPACE_ROOT = "Fleetbase"
ENGINE_SUFFIX = "Engine"

# Organizational suffixes stripped from author names before slugging
ORG_SUFFIX_PATTERN = r"\b(llc|pte ltd|inc|corp|gmbh|limited|ltd)\b"

# Upper bound for the "-1", "-2", ... directory suffix search
MAX_UNIQUE_PATH_ATTEMPTS = 1000

HTTP_TIMEOUT = 30.0

# Starter template layout, relative to the extension root
ENGINE_JS_PATH = "addon/engine.js"
SERVER_DIR = "server"
CONTROLLER_PATH = "server/src/Http/Controllers/StarterResourceController.php"
SERVICE_PROVIDER_PATH = "server/src/Providers/StarterServiceProvider.php"
CONFIG_PATH = "server/config/starter.php"
ROUTES_PATH = "server/src/routes.php"
PHP_EXTENSION = ".php"

# Placeholder identifiers baked into the starter template
PLACEHOLDER_ENGINE_CLASS = "StarterEngine"
PLACEHOLDER_NAMESPACE = "Fleetbase\\Starter"
PLACEHOLDER_CONTROLLER_CLASS = "StarterResourceController"
PLACEHOLDER_PROVIDER_CLASS = "StarterServiceProvider"
PLACEHOLDER_CONFIG_KEY = "starter"
PLACEHOLDER_ROUTES_TITLE = "Starter API Routes"

MANIFEST_FILES = ("extension.json", "package.json", "composer.json")

BUNDLE_SUFFIX = "-bundle.tar.gz"
BUNDLE_EXCLUDES = {"node_modules", "server_vendor", "vendor", ".git"}
